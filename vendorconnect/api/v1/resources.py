import enum
import uuid
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field, HttpUrl
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorconnect.api.deps import get_current_user, get_current_vendor, get_db, get_vendor_for_user
from vendorconnect.common.enums import ResourceCategory, ResourceUnit, UserRole
from vendorconnect.common.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from vendorconnect.common.logging import get_logger
from vendorconnect.common.pagination import PaginatedResponse, PaginationParams, paginate, total_pages
from vendorconnect.config import settings
from vendorconnect.core.catalog.schemas import ALL_CATEGORIES, FilterCriteria, SpecificationMap
from vendorconnect.core.catalog.service import CatalogService, ResourceRequestService
from vendorconnect.db.models.resource import Resource
from vendorconnect.db.models.user import User
from vendorconnect.db.models.vendor import Vendor

router = APIRouter(prefix="/resources", tags=["Resources"])

logger = get_logger("api.resources")


# ---------- Schemas ----------


class ResourceCreateRequest(BaseModel):
    title: str = Field(..., min_length=2, max_length=255)
    description: str = Field(..., min_length=10)
    category: ResourceCategory = ResourceCategory.MATERIAL
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    unit: ResourceUnit = ResourceUnit.EACH
    availability: str = Field(..., min_length=2, max_length=255)
    image_url: HttpUrl | None = None
    specifications: SpecificationMap = None


# Fields a PATCH may set to null.
_NULLABLE_FIELDS = frozenset({"image_url", "specifications"})


class ResourceUpdateRequest(BaseModel):
    title: str | None = Field(None, min_length=2, max_length=255)
    description: str | None = Field(None, min_length=10)
    category: ResourceCategory | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    unit: ResourceUnit | None = None
    availability: str | None = Field(None, min_length=2, max_length=255)
    image_url: HttpUrl | None = None
    featured: bool | None = None
    specifications: SpecificationMap = None


class VendorSummary(BaseModel):
    id: uuid.UUID
    name: str
    location: str
    rating: float
    contact_name: str
    contact_email: str
    contact_phone: str

    model_config = {"from_attributes": True}


class ResourceResponse(BaseModel):
    id: uuid.UUID
    vendor_id: uuid.UUID
    title: str
    description: str
    category: str
    price: Decimal
    unit: str
    availability: str
    image_url: str | None
    featured: bool
    specifications: dict[str, int] | None
    created_at: datetime
    vendor: VendorSummary | None = None

    model_config = {"from_attributes": True}


class ResourceListResponse(PaginatedResponse[ResourceResponse]):
    categories: dict[str, int]


class ResourceRequestCreate(BaseModel):
    returnable: bool | None = None


class ResourceRequestResponse(BaseModel):
    id: uuid.UUID
    name: str
    type: str | None
    quantity: int
    unit: str | None
    cost: Decimal | None
    status: str
    returnable: bool | None
    resource_id: uuid.UUID | None
    vendor_id: uuid.UUID | None
    user_id: uuid.UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ResourceRequestListResponse(BaseModel):
    requests: list[ResourceRequestResponse]
    total: int


def get_filter_criteria(
    search: str = Query("", description="Case-insensitive text in title or description"),
    category: str = Query(ALL_CATEGORIES, description="Resource category or 'All'"),
    min_price: Decimal | None = Query(None, description="Inclusive lower price bound"),
    max_price: Decimal | None = Query(None, description="Inclusive upper price bound"),
    vendor_id: uuid.UUID | None = Query(None, description="Only this vendor's resources"),
) -> FilterCriteria:
    if category != ALL_CATEGORIES and category not in {c.value for c in ResourceCategory}:
        raise BadRequestError(f"Unknown resource category '{category}'")
    return FilterCriteria(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        vendor_id=vendor_id,
    )


# ---------- Endpoints ----------


@router.get("", response_model=ResourceListResponse)
async def list_resources(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Filtered, paginated catalog.

    ``categories`` counts matches per category with every filter applied
    except the category filter, so each count is what selecting that
    category would return.
    """
    rows, categories = await CatalogService().search(criteria, db)
    page, total = paginate(rows, pagination)

    return ResourceListResponse(
        items=[_resource_response(resource, vendor) for resource, vendor in page],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
        total_pages=total_pages(total, pagination.page_size),
        categories={category.value: count for category, count in categories.items()},
    )


@router.post("", response_model=ResourceResponse, status_code=201)
async def create_resource(
    body: ResourceCreateRequest,
    vendor: Vendor = Depends(get_current_vendor),
    db: AsyncSession = Depends(get_db),
):
    resource = Resource(
        vendor_id=vendor.id,
        title=body.title,
        description=body.description,
        category=body.category.value,
        price=body.price,
        unit=body.unit.value,
        availability=body.availability,
        image_url=str(body.image_url) if body.image_url else settings.DEFAULT_IMAGE_URL,
        featured=False,
        specifications=body.specifications,
    )
    db.add(resource)
    await db.flush()
    await db.refresh(resource)

    logger.info("Vendor %s listed resource %s (%s)", vendor.id, resource.id, resource.title)
    return _resource_response(resource, vendor)


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(resource_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    resource, vendor = await _get_resource_or_404(resource_id, db)
    return _resource_response(resource, vendor)


@router.patch("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: uuid.UUID,
    body: ResourceUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    resource, vendor = await _verify_resource_access(resource_id, current_user, db)

    updates = body.model_dump(exclude_unset=True)
    cleared = sorted(f for f, v in updates.items() if v is None and f not in _NULLABLE_FIELDS)
    if cleared:
        raise BadRequestError(f"Fields cannot be cleared: {', '.join(cleared)}")
    if "featured" in updates and current_user.role != UserRole.ADMIN.value:
        raise PermissionDeniedError("Only administrators can feature resources")

    for field, value in updates.items():
        if isinstance(value, enum.Enum):
            value = value.value
        elif field == "image_url" and value is not None:
            value = str(value)
        setattr(resource, field, value)

    await db.flush()
    await db.refresh(resource)
    return _resource_response(resource, vendor)


@router.delete("/{resource_id}", status_code=204)
async def delete_resource(
    resource_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    resource, _ = await _verify_resource_access(resource_id, current_user, db)
    resource.mark_deleted()
    await db.flush()

    logger.info("Resource %s deleted by user %s", resource.id, current_user.id)
    return Response(status_code=204)


@router.post(
    "/{resource_id}/requests", response_model=ResourceRequestListResponse, status_code=201
)
async def request_resource(
    resource_id: uuid.UUID,
    body: ResourceRequestCreate | None = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    resource, _ = await _get_resource_or_404(resource_id, db)

    requests = await ResourceRequestService().request_resource(
        resource,
        requester=current_user,
        db=db,
        returnable=body.returnable if body else None,
    )

    return ResourceRequestListResponse(
        requests=[ResourceRequestResponse.model_validate(r) for r in requests],
        total=len(requests),
    )


def _resource_response(resource: Resource, vendor: Vendor | None) -> ResourceResponse:
    response = ResourceResponse.model_validate(resource)
    response.vendor = VendorSummary.model_validate(vendor) if vendor else None
    return response


async def _get_resource_or_404(
    resource_id: uuid.UUID, db: AsyncSession
) -> tuple[Resource, Vendor]:
    result = await db.execute(
        select(Resource, Vendor)
        .join(Vendor, Resource.vendor_id == Vendor.id)
        .where(
            Resource.id == resource_id,
            Resource.is_deleted.is_(False),
            Vendor.is_deleted.is_(False),
        )
    )
    row = result.one_or_none()
    if not row:
        raise NotFoundError("Resource", str(resource_id))
    return row[0], row[1]


async def _verify_resource_access(
    resource_id: uuid.UUID, user: User, db: AsyncSession
) -> tuple[Resource, Vendor]:
    resource, vendor = await _get_resource_or_404(resource_id, db)
    if user.role == UserRole.ADMIN.value:
        return resource, vendor

    acting_vendor = await get_vendor_for_user(user, db)
    if not acting_vendor or acting_vendor.id != resource.vendor_id:
        raise PermissionDeniedError("You do not have access to this resource")
    return resource, vendor
