from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vendorconnect.api.deps import get_current_user, get_current_vendor, get_db
from vendorconnect.api.v1.resources import ResourceRequestListResponse, ResourceRequestResponse
from vendorconnect.common.enums import RequestStatus
from vendorconnect.core.catalog.service import ResourceRequestService
from vendorconnect.db.models.user import User
from vendorconnect.db.models.vendor import Vendor

router = APIRouter(prefix="/requests", tags=["Resource Requests"])


@router.get("", response_model=ResourceRequestListResponse)
async def list_my_requests(
    status: RequestStatus | None = Query(None, description="Only requests in this status"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    requests = await ResourceRequestService().list_for_requester(current_user.id, db, status)
    return ResourceRequestListResponse(
        requests=[ResourceRequestResponse.model_validate(r) for r in requests],
        total=len(requests),
    )


@router.get("/incoming", response_model=ResourceRequestListResponse)
async def list_incoming_requests(
    status: RequestStatus | None = Query(None, description="Only requests in this status"),
    vendor: Vendor = Depends(get_current_vendor),
    db: AsyncSession = Depends(get_db),
):
    requests = await ResourceRequestService().list_for_vendor(vendor.id, db, status)
    return ResourceRequestListResponse(
        requests=[ResourceRequestResponse.model_validate(r) for r in requests],
        total=len(requests),
    )
