from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db

from .dependencies import get_current_user_id, require_admin
from .models import User
from .schemas import (
    ForgotPasswordRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    ProfileUpdate,
    UserCreate,
    UserLogin,
    UserResponse,
)
from .service import AuthService

router = APIRouter(tags=["Authentication"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "auth", "status": "running"}


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new customer account",
)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    await AuthService.register(db, payload)
    return MessageResponse(message="User Registered Successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate and receive an access token",
)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    return await AuthService.login(db, payload)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(payload: ForgotPasswordRequest, db: AsyncSession = Depends(get_db)):
    await AuthService.reset_password(db, payload)
    return MessageResponse(message="Password Reset Successfully")


@router.get("/test", response_model=MessageResponse)
async def protected_test(admin: User = Depends(require_admin)):
    return MessageResponse(message="Protected Routes")


@router.get("/user-auth")
async def user_auth(user_id: int = Depends(get_current_user_id)):
    return {"ok": True}


@router.get("/admin-auth")
async def admin_auth(admin: User = Depends(require_admin)):
    return {"ok": True}


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    payload: ProfileUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await AuthService.update_profile(db, user_id, payload)
    return ProfileResponse(updated_user=UserResponse.model_validate(user))


@router.get("/all-users", response_model=List[UserResponse])
async def all_users(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await AuthService.list_users(db)
