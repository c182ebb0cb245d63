import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vendorconnect.api.deps import get_current_user, get_current_vendor, get_db
from vendorconnect.common.enums import RequestStatus, UserRole
from vendorconnect.common.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from vendorconnect.common.logging import get_logger
from vendorconnect.db.models.resource import Resource
from vendorconnect.db.models.resource_request import ResourceRequest
from vendorconnect.db.models.user import User
from vendorconnect.db.models.vendor import Vendor

router = APIRouter(prefix="/vendors", tags=["Vendors"])

logger = get_logger("api.vendors")


# ---------- Schemas ----------


class VendorCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    description: str = Field(..., min_length=10)
    contact_name: str = Field(..., min_length=2, max_length=255)
    contact_email: EmailStr
    contact_phone: str = Field(..., min_length=10, max_length=50)
    location: str = Field(..., min_length=2, max_length=255)
    logo_url: str | None = None


# Fields a PATCH may set to null.
_NULLABLE_FIELDS = frozenset({"description", "logo_url"})


class VendorUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=255)
    description: str | None = Field(None, min_length=10)
    contact_name: str | None = Field(None, min_length=2, max_length=255)
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(None, min_length=10, max_length=50)
    location: str | None = Field(None, min_length=2, max_length=255)
    logo_url: str | None = None


class VendorResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    description: str | None
    contact_name: str
    contact_email: str
    contact_phone: str
    location: str
    rating: float
    logo_url: str | None

    model_config = {"from_attributes": True}


class VendorListResponse(BaseModel):
    vendors: list[VendorResponse]
    total: int


class VendorDashboardResponse(BaseModel):
    vendor: VendorResponse
    resource_count: int
    featured_count: int
    request_count: int
    requests_by_status: dict[str, int]
    pending_requests: int


# ---------- Endpoints ----------


@router.post("", response_model=VendorResponse, status_code=201)
async def register_vendor(
    body: VendorCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Vendor).where(Vendor.user_id == current_user.id))
    vendor = result.scalar_one_or_none()
    if vendor and not vendor.is_deleted:
        raise ConflictError("This account already has a vendor profile")

    if vendor:
        # One profile per user: a deleted profile is reactivated in place.
        for field, value in body.model_dump().items():
            setattr(vendor, field, value)
        vendor.is_deleted = False
        vendor.deleted_at = None
    else:
        vendor = Vendor(user_id=current_user.id, **body.model_dump())
        db.add(vendor)

    if current_user.role != UserRole.ADMIN.value:
        current_user.role = UserRole.VENDOR.value

    await db.flush()
    await db.refresh(vendor)

    logger.info("User %s registered vendor %s (%s)", current_user.id, vendor.id, vendor.name)
    return vendor


@router.get("", response_model=VendorListResponse)
async def list_vendors(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Vendor).where(Vendor.is_deleted.is_(False)).order_by(Vendor.name)
    )
    vendors = result.scalars().all()
    return VendorListResponse(
        vendors=[VendorResponse.model_validate(v) for v in vendors],
        total=len(vendors),
    )


@router.get("/me", response_model=VendorResponse)
async def get_my_vendor(vendor: Vendor = Depends(get_current_vendor)):
    return vendor


@router.get("/me/dashboard", response_model=VendorDashboardResponse)
async def get_vendor_dashboard(
    vendor: Vendor = Depends(get_current_vendor),
    db: AsyncSession = Depends(get_db),
):
    resource_count = (
        await db.execute(
            select(func.count(Resource.id)).where(
                Resource.vendor_id == vendor.id, Resource.is_deleted.is_(False)
            )
        )
    ).scalar() or 0

    featured_count = (
        await db.execute(
            select(func.count(Resource.id)).where(
                Resource.vendor_id == vendor.id,
                Resource.is_deleted.is_(False),
                Resource.featured.is_(True),
            )
        )
    ).scalar() or 0

    status_rows = await db.execute(
        select(ResourceRequest.status, func.count(ResourceRequest.id))
        .where(ResourceRequest.vendor_id == vendor.id, ResourceRequest.is_deleted.is_(False))
        .group_by(ResourceRequest.status)
    )
    requests_by_status = {status.value: 0 for status in RequestStatus}
    for status, count in status_rows.all():
        requests_by_status[status] = count

    return VendorDashboardResponse(
        vendor=VendorResponse.model_validate(vendor),
        resource_count=resource_count,
        featured_count=featured_count,
        request_count=sum(requests_by_status.values()),
        requests_by_status=requests_by_status,
        pending_requests=requests_by_status[RequestStatus.PENDING.value],
    )


@router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor(vendor_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _get_vendor_or_404(vendor_id, db)


@router.patch("/{vendor_id}", response_model=VendorResponse)
async def update_vendor(
    vendor_id: uuid.UUID,
    body: VendorUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    vendor = await _verify_vendor_access(vendor_id, current_user, db)

    updates = body.model_dump(exclude_unset=True)
    cleared = sorted(f for f, v in updates.items() if v is None and f not in _NULLABLE_FIELDS)
    if cleared:
        raise BadRequestError(f"Fields cannot be cleared: {', '.join(cleared)}")

    for field, value in updates.items():
        setattr(vendor, field, value)

    await db.flush()
    await db.refresh(vendor)
    return vendor


@router.delete("/{vendor_id}", status_code=204)
async def delete_vendor(
    vendor_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    vendor = await _verify_vendor_access(vendor_id, current_user, db)

    vendor.mark_deleted()
    await db.execute(
        update(Resource)
        .where(Resource.vendor_id == vendor.id, Resource.is_deleted.is_(False))
        .values(is_deleted=True, deleted_at=datetime.now(timezone.utc))
    )
    await db.flush()

    logger.info("Vendor %s deleted by user %s", vendor.id, current_user.id)
    return Response(status_code=204)


async def _get_vendor_or_404(vendor_id: uuid.UUID, db: AsyncSession) -> Vendor:
    result = await db.execute(
        select(Vendor).where(Vendor.id == vendor_id, Vendor.is_deleted.is_(False))
    )
    vendor = result.scalar_one_or_none()
    if not vendor:
        raise NotFoundError("Vendor", str(vendor_id))
    return vendor


async def _verify_vendor_access(vendor_id: uuid.UUID, user: User, db: AsyncSession) -> Vendor:
    vendor = await _get_vendor_or_404(vendor_id, db)
    if user.role != UserRole.ADMIN.value and vendor.user_id != user.id:
        raise PermissionDeniedError("You do not have access to this vendor")
    return vendor
