import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorconnect.api.deps import get_current_user, get_db, get_vendor_for_user
from vendorconnect.common.enums import UserRole
from vendorconnect.common.exceptions import BadRequestError, PermissionDeniedError
from vendorconnect.common.logging import get_logger
from vendorconnect.common.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from vendorconnect.db.models.user import User

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = get_logger("api.auth")


# ---------- Schemas ----------


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=2)
    role: UserRole = UserRole.BUYER


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    full_name: str
    role: str
    is_active: bool
    vendor_id: uuid.UUID | None = None

    model_config = {"from_attributes": True}


# ---------- Endpoints ----------


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    if body.role == UserRole.ADMIN:
        raise BadRequestError("Admin accounts cannot be self-registered")

    result = await db.execute(select(User).where(User.email == body.email))
    if result.scalar_one_or_none():
        raise BadRequestError("An account with this email already exists")

    user = User(
        email=body.email,
        hashed_password=get_password_hash(body.password),
        full_name=body.full_name,
        role=body.role.value,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("Registered user %s (%s)", user.id, user.role)
    return user


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(User).where(User.email == body.email, User.is_deleted.is_(False))
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(body.password, user.hashed_password):
        raise PermissionDeniedError("Invalid email or password")

    if not user.is_active:
        raise PermissionDeniedError("Account is inactive")

    access_token = create_access_token({"sub": str(user.id)})
    refresh_token = create_refresh_token({"sub": str(user.id)})

    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    try:
        payload = decode_token(body.refresh_token)
    except ValueError:
        raise PermissionDeniedError("Invalid refresh token")

    if payload.get("type") != "refresh":
        raise PermissionDeniedError("Invalid token type")

    user_id = payload.get("sub")
    result = await db.execute(
        select(User).where(User.id == uuid.UUID(user_id), User.is_deleted.is_(False))
    )
    user = result.scalar_one_or_none()
    if not user:
        raise PermissionDeniedError("User not found")

    access_token = create_access_token({"sub": str(user.id)})
    new_refresh_token = create_refresh_token({"sub": str(user.id)})

    return TokenResponse(access_token=access_token, refresh_token=new_refresh_token)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    vendor = await get_vendor_for_user(current_user, db)
    response = UserResponse.model_validate(current_user)
    response.vendor_id = vendor.id if vendor else None
    return response
