import uuid
from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vendorconnect.common.enums import ResourceCategory, ResourceUnit, UserRole
from vendorconnect.common.security import create_access_token, get_password_hash
from vendorconnect.db.base import Base
from vendorconnect.db.models import *  # noqa: F401,F403 - ensure all models loaded

# In-memory SQLite shared across the connections of a single test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session):
    from vendorconnect.api.deps import get_db
    from vendorconnect.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db_session, prefix: str, role: UserRole):
    from vendorconnect.db.models.user import User

    user = User(
        id=uuid.uuid4(),
        email=f"{prefix}_{uuid.uuid4().hex[:8]}@test.com",
        hashed_password=get_password_hash("testpass123"),
        full_name=f"Test {prefix.title()}",
        role=role.value,
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def buyer_user(db_session):
    return await _create_user(db_session, "buyer", UserRole.BUYER)


@pytest.fixture
async def vendor_user(db_session):
    return await _create_user(db_session, "vendor", UserRole.VENDOR)


@pytest.fixture
async def other_vendor_user(db_session):
    return await _create_user(db_session, "rival", UserRole.VENDOR)


@pytest.fixture
async def admin_user(db_session):
    return await _create_user(db_session, "admin", UserRole.ADMIN)


async def _create_vendor(db_session, user, name: str):
    from vendorconnect.db.models.vendor import Vendor

    vendor = Vendor(
        id=uuid.uuid4(),
        user_id=user.id,
        name=name,
        description="Construction supplies and rentals for every project size.",
        contact_name=user.full_name,
        contact_email=user.email,
        contact_phone="(555) 123-4567",
        location="Chicago, IL",
        rating=4.5,
    )
    db_session.add(vendor)
    await db_session.flush()
    await db_session.refresh(vendor)
    return vendor


@pytest.fixture
async def vendor(db_session, vendor_user):
    return await _create_vendor(db_session, vendor_user, "Builders Supply Co.")


@pytest.fixture
async def other_vendor(db_session, other_vendor_user):
    return await _create_vendor(db_session, other_vendor_user, "Heavy Equipment Rentals")


@pytest.fixture
def make_resource(db_session):
    from vendorconnect.db.models.resource import Resource

    async def _make(vendor, **overrides):
        values = {
            "title": "Premium Lumber Package",
            "description": "Pressure-treated lumber for framing and structural support.",
            "category": ResourceCategory.MATERIAL.value,
            "price": Decimal("150.00"),
            "unit": ResourceUnit.EACH.value,
            "availability": "In stock",
            "featured": False,
            "specifications": None,
        }
        values.update(overrides)
        resource = Resource(vendor_id=vendor.id, **values)
        db_session.add(resource)
        await db_session.flush()
        await db_session.refresh(resource)
        return resource

    return _make


@pytest.fixture
def buyer_headers(buyer_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': str(buyer_user.id)})}"}


@pytest.fixture
def vendor_headers(vendor_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': str(vendor_user.id)})}"}


@pytest.fixture
def other_vendor_headers(other_vendor_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': str(other_vendor_user.id)})}"}


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token({'sub': str(admin_user.id)})}"}
