"""
Seed script for the Vendor Resource Connect marketplace.

Populates the database with demo accounts, four vendors and an eight-item
resource catalog spanning every category.

Usage:
    python -m vendorconnect.scripts.seed
"""

import asyncio
import uuid
from decimal import Decimal

from sqlalchemy import select

from vendorconnect.common.enums import ResourceCategory, ResourceUnit, UserRole
from vendorconnect.common.security import get_password_hash
from vendorconnect.config import settings
from vendorconnect.db.models import Resource, User, Vendor
from vendorconnect.db.session import async_session_factory, create_tables

DEMO_PASSWORD = "testpass123"

VENDORS = [
    {
        "key": "builders",
        "email": "john@builderssupply.com",
        "full_name": "John Smith",
        "name": "Builders Supply Co.",
        "description": "Leading provider of construction materials with over 20 years of industry experience.",
        "contact_phone": "(555) 123-4567",
        "rating": 4.8,
        "location": "Chicago, IL",
    },
    {
        "key": "equipment",
        "email": "lisa@heavyequipment.com",
        "full_name": "Lisa Johnson",
        "name": "Heavy Equipment Rentals",
        "description": "Specialized in high-quality construction equipment rentals for projects of all sizes.",
        "contact_phone": "(555) 234-5678",
        "rating": 4.6,
        "location": "Denver, CO",
    },
    {
        "key": "labor",
        "email": "michael@prolabor.com",
        "full_name": "Michael Chen",
        "name": "Professional Labor Services",
        "description": "Providing skilled labor teams for construction projects.",
        "contact_phone": "(555) 345-6789",
        "rating": 4.5,
        "location": "Atlanta, GA",
    },
    {
        "key": "concrete",
        "email": "sarah@specialtyconcrete.com",
        "full_name": "Sarah Williams",
        "name": "Specialty Concrete Solutions",
        "description": "Experts in concrete products and services for commercial projects.",
        "contact_phone": "(555) 456-7890",
        "rating": 4.9,
        "location": "Austin, TX",
    },
]

RESOURCES = [
    {
        "vendor": "builders",
        "title": "Premium Lumber Package",
        "description": "High-quality pressure-treated lumber perfect for framing and structural support.",
        "category": ResourceCategory.MATERIAL,
        "price": Decimal("2500.00"),
        "unit": ResourceUnit.CUBIC_YARD,
        "availability": "In stock - Ready to ship",
        "featured": True,
        "specifications": {"Lumber": 120, "Plywood": 40, "Nails": 10},
    },
    {
        "vendor": "equipment",
        "title": "Excavator - 15 Ton",
        "description": "Late-model excavator with experienced operator available for site preparation.",
        "category": ResourceCategory.EQUIPMENT,
        "price": Decimal("450.00"),
        "unit": ResourceUnit.DAY,
        "availability": "Available with 3-day notice",
        "featured": True,
        "specifications": None,
    },
    {
        "vendor": "labor",
        "title": "Carpentry Crew",
        "description": "Team of 5 experienced carpenters for framing, finishing, and detail work.",
        "category": ResourceCategory.LABOR,
        "price": Decimal("1200.00"),
        "unit": ResourceUnit.DAY,
        "availability": "Available starting next week",
        "featured": False,
        "specifications": None,
    },
    {
        "vendor": "concrete",
        "title": "High-Performance Concrete Mix",
        "description": "Specially formulated concrete mix for high-stress applications and faster curing times.",
        "category": ResourceCategory.MATERIAL,
        "price": Decimal("195.00"),
        "unit": ResourceUnit.CUBIC_YARD,
        "availability": "3-day lead time",
        "featured": True,
        "specifications": {"Cement": 8, "Sand": 12, "Gravel": 16},
    },
    {
        "vendor": "builders",
        "title": "Steel Beam Package",
        "description": "Commercial-grade steel I-beams for structural support.",
        "category": ResourceCategory.MATERIAL,
        "price": Decimal("4200.00"),
        "unit": ResourceUnit.TON,
        "availability": "2-week lead time",
        "featured": False,
        "specifications": {"Steel Beam": 12, "Rebar": 40},
    },
    {
        "vendor": "equipment",
        "title": "Boom Lift - 60ft",
        "description": "Self-propelled boom lift for elevated work areas.",
        "category": ResourceCategory.EQUIPMENT,
        "price": Decimal("350.00"),
        "unit": ResourceUnit.DAY,
        "availability": "Available now",
        "featured": False,
        "specifications": {"Boom Lift": 1, "Generator": 1},
    },
    {
        "vendor": "labor",
        "title": "Electrical Team",
        "description": "Licensed electricians for commercial building wiring and installation.",
        "category": ResourceCategory.LABOR,
        "price": Decimal("1500.00"),
        "unit": ResourceUnit.DAY,
        "availability": "Available in 1 week",
        "featured": True,
        "specifications": None,
    },
    {
        "vendor": "concrete",
        "title": "Specialty Epoxy Flooring",
        "description": "Industrial epoxy flooring installation for warehouses and factories.",
        "category": ResourceCategory.SUBCONTRACTOR,
        "price": Decimal("12.50"),
        "unit": ResourceUnit.SQUARE_FOOT,
        "availability": "Scheduling for next month",
        "featured": False,
        "specifications": None,
    },
]


async def main() -> None:
    await create_tables()

    async with async_session_factory() as session:
        # Guard: skip if already seeded (check for admin user)
        result = await session.execute(
            select(User).where(User.email == "admin@vendorconnect.io")
        )
        if result.scalar_one_or_none() is not None:
            print("Database already seeded -- skipping.")
            return

        hashed = get_password_hash(DEMO_PASSWORD)

        session.add_all(
            [
                User(
                    id=uuid.uuid4(),
                    email="admin@vendorconnect.io",
                    hashed_password=hashed,
                    full_name="Marketplace Admin",
                    role=UserRole.ADMIN.value,
                ),
                User(
                    id=uuid.uuid4(),
                    email="buyer@example.com",
                    hashed_password=hashed,
                    full_name="Demo Buyer",
                    role=UserRole.BUYER.value,
                ),
            ]
        )

        vendors: dict[str, Vendor] = {}
        for data in VENDORS:
            user = User(
                id=uuid.uuid4(),
                email=data["email"],
                hashed_password=hashed,
                full_name=data["full_name"],
                role=UserRole.VENDOR.value,
            )
            vendor = Vendor(
                id=uuid.uuid4(),
                user_id=user.id,
                name=data["name"],
                description=data["description"],
                contact_name=data["full_name"],
                contact_email=data["email"],
                contact_phone=data["contact_phone"],
                location=data["location"],
                rating=data["rating"],
            )
            session.add_all([user, vendor])
            vendors[data["key"]] = vendor

        await session.flush()

        for data in RESOURCES:
            session.add(
                Resource(
                    vendor_id=vendors[data["vendor"]].id,
                    title=data["title"],
                    description=data["description"],
                    category=data["category"].value,
                    price=data["price"],
                    unit=data["unit"].value,
                    availability=data["availability"],
                    image_url=settings.DEFAULT_IMAGE_URL,
                    featured=data["featured"],
                    specifications=data["specifications"],
                )
            )

        await session.commit()

    print(
        f"Seeded {len(VENDORS)} vendors and {len(RESOURCES)} resources. "
        f"All demo accounts use the password '{DEMO_PASSWORD}'."
    )


if __name__ == "__main__":
    asyncio.run(main())
