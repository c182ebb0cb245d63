import uuid
from decimal import Decimal

from sqlalchemy import JSON, Boolean, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from vendorconnect.common.enums import ResourceCategory, ResourceUnit
from vendorconnect.db.base import BaseModel


class Resource(BaseModel):
    __tablename__ = "resources"

    vendor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("vendors.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[ResourceCategory] = mapped_column(String(20), nullable=False, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    unit: Mapped[ResourceUnit] = mapped_column(String(20), nullable=False)
    availability: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Plain JSON rather than JSONB: item order is significant.
    specifications: Mapped[dict | None] = mapped_column(JSON, nullable=True)
