from vendorconnect.db.models.resource import Resource
from vendorconnect.db.models.resource_request import ResourceRequest
from vendorconnect.db.models.user import User
from vendorconnect.db.models.vendor import Vendor

__all__ = [
    "Resource",
    "ResourceRequest",
    "User",
    "Vendor",
]
