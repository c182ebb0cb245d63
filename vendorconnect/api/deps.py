import uuid
from collections.abc import AsyncGenerator

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorconnect.common.exceptions import NotFoundError, PermissionDeniedError
from vendorconnect.common.security import decode_token
from vendorconnect.db.models.user import User
from vendorconnect.db.models.vendor import Vendor
from vendorconnect.db.session import async_session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_user(
    authorization: str = Header(..., description="Bearer <token>"),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not authorization.startswith("Bearer "):
        raise PermissionDeniedError("Invalid authorization header format")

    token = authorization[len("Bearer "):]
    try:
        payload = decode_token(token)
    except ValueError:
        raise PermissionDeniedError("Invalid or expired token")

    if payload.get("type") != "access":
        raise PermissionDeniedError("Invalid token type")

    user_id = payload.get("sub")
    if not user_id:
        raise PermissionDeniedError("Invalid token payload")

    result = await db.execute(
        select(User).where(User.id == uuid.UUID(user_id), User.is_deleted.is_(False))
    )
    user = result.scalar_one_or_none()

    if not user:
        raise NotFoundError("User")
    if not user.is_active:
        raise PermissionDeniedError("User account is inactive")

    return user


async def get_vendor_for_user(user: User, db: AsyncSession) -> Vendor | None:
    result = await db.execute(
        select(Vendor).where(Vendor.user_id == user.id, Vendor.is_deleted.is_(False))
    )
    return result.scalar_one_or_none()


async def get_current_vendor(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Vendor:
    """The acting user's vendor profile; 403 if they have not registered one."""
    vendor = await get_vendor_for_user(current_user, db)
    if not vendor:
        raise PermissionDeniedError("You need to register as a vendor first")
    return vendor

