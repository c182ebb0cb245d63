from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vendorconnect.api.middleware import AuditMiddleware
from vendorconnect.api.v1.router import v1_router
from vendorconnect.common.logging import get_logger, setup_logging
from vendorconnect.config import settings

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.AUTO_CREATE_TABLES:
        from vendorconnect.db.session import create_tables

        await create_tables()
        logger.info("Database tables ensured")
    yield


app = FastAPI(
    title="Vendor Resource Connect API",
    description="Construction resource marketplace for vendors and buyers",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
origins = settings.ALLOWED_ORIGINS.split(",") if settings.ALLOWED_ORIGINS != "*" else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AuditMiddleware)

# API routes
app.include_router(v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "vendorconnect",
        "version": "1.0.0",
        "env": settings.APP_ENV,
    }
