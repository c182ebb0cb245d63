from fastapi import APIRouter

from vendorconnect.api.v1.auth import router as auth_router
from vendorconnect.api.v1.requests import router as requests_router
from vendorconnect.api.v1.resources import router as resources_router
from vendorconnect.api.v1.vendors import router as vendors_router

v1_router = APIRouter()

v1_router.include_router(auth_router)
v1_router.include_router(vendors_router)
v1_router.include_router(resources_router)
v1_router.include_router(requests_router)
