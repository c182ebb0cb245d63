import uuid
from decimal import ROUND_HALF_UP, Decimal

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorconnect.common.enums import RequestStatus, ResourceCategory
from vendorconnect.common.exceptions import BadRequestError, SpecificationError
from vendorconnect.common.logging import get_logger
from vendorconnect.core.catalog.aggregation import aggregate
from vendorconnect.core.catalog.filtering import category_facets, filter_resources
from vendorconnect.core.catalog.schemas import FilterCriteria, RequestLine, ResourceRecord
from vendorconnect.db.models.resource import Resource
from vendorconnect.db.models.resource_request import ResourceRequest
from vendorconnect.db.models.user import User
from vendorconnect.db.models.vendor import Vendor

logger = get_logger("catalog.service")

COST_PRECISION = Decimal("0.01")


def round_cost(value: Decimal) -> Decimal:
    """Round a cost share to cents, half-up, for storage."""
    return value.quantize(COST_PRECISION, rounding=ROUND_HALF_UP)


class CatalogService:
    async def load_catalog(self, db: AsyncSession) -> list[tuple[Resource, Vendor]]:
        """All live resources with their vendor, newest first.

        Rows inserted together share a timestamp, so ties fall back to ``id``.
        """
        result = await db.execute(
            select(Resource, Vendor)
            .join(Vendor, Resource.vendor_id == Vendor.id)
            .where(Resource.is_deleted.is_(False), Vendor.is_deleted.is_(False))
            .order_by(Resource.created_at.desc(), Resource.id)
        )
        return [(resource, vendor) for resource, vendor in result.all()]

    async def search(
        self, criteria: FilterCriteria, db: AsyncSession
    ) -> tuple[list[tuple[Resource, Vendor]], dict[ResourceCategory, int]]:
        """Matching rows in catalog order, plus the category facet counts."""
        rows = await self.load_catalog(db)
        vendors = {resource.id: vendor for resource, vendor in rows}
        resources = [resource for resource, _ in rows]
        visible = filter_resources(resources, criteria)

        logger.debug(
            "Catalog search kept %d of %d resources (active filters: %s)",
            len(visible),
            len(rows),
            criteria.is_active,
        )
        return (
            [(resource, vendors[resource.id]) for resource in visible],
            category_facets(resources, criteria),
        )


class ResourceRequestService:
    def build_lines(self, resource: Resource) -> list[RequestLine]:
        try:
            record = ResourceRecord.model_validate(resource)
            return aggregate(record)
        except (ValidationError, SpecificationError) as e:
            logger.warning("Resource %s cannot be requested: %s", resource.id, e)
            raise BadRequestError(
                f"Resource '{resource.id}' has an invalid specification and cannot be requested"
            ) from e

    async def request_resource(
        self,
        resource: Resource,
        requester: User,
        db: AsyncSession,
        returnable: bool | None = None,
    ) -> list[ResourceRequest]:
        lines = self.build_lines(resource)

        requests = [
            ResourceRequest(
                name=line.name,
                type=line.category_guess.value,
                quantity=line.quantity,
                unit=line.unit.value,
                cost=round_cost(line.cost_share),
                status=RequestStatus.PENDING.value,
                returnable=returnable,
                resource_id=resource.id,
                vendor_id=resource.vendor_id,
                user_id=requester.id,
            )
            for line in lines
        ]
        db.add_all(requests)
        await db.flush()
        for request in requests:
            await db.refresh(request)

        logger.info(
            "User %s requested resource %s (%d line items)",
            requester.id,
            resource.id,
            len(requests),
        )
        return requests

    async def list_for_requester(
        self, user_id: uuid.UUID, db: AsyncSession, status: RequestStatus | None = None
    ) -> list[ResourceRequest]:
        query = select(ResourceRequest).where(
            ResourceRequest.user_id == user_id, ResourceRequest.is_deleted.is_(False)
        )
        if status is not None:
            query = query.where(ResourceRequest.status == status.value)
        query = query.order_by(ResourceRequest.created_at.desc(), ResourceRequest.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def list_for_vendor(
        self, vendor_id: uuid.UUID, db: AsyncSession, status: RequestStatus | None = None
    ) -> list[ResourceRequest]:
        query = select(ResourceRequest).where(
            ResourceRequest.vendor_id == vendor_id, ResourceRequest.is_deleted.is_(False)
        )
        if status is not None:
            query = query.where(ResourceRequest.status == status.value)
        query = query.order_by(ResourceRequest.created_at.desc(), ResourceRequest.id)
        result = await db.execute(query)
        return list(result.scalars().all())
