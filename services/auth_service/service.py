from typing import Sequence

import structlog
from fastapi import HTTPException, status
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from shared.security.jwt_handler import create_access_token

from .models import User
from .repository import UserRepository
from .schemas import (
    ForgotPasswordRequest,
    LoginResponse,
    ProfileUpdate,
    UserCreate,
    UserLogin,
    UserResponse,
)

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6


class AuthService:

    @staticmethod
    def _hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def _verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    async def register(db: AsyncSession, data: UserCreate) -> User:
        existing = await UserRepository.get_by_email(db, data.email)
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Already Registered. Please login",
            )
        user = User(
            name=data.name.strip(),
            email=data.email,
            hashed_password=AuthService._hash_password(data.password),
            phone=data.phone,
            address=data.address,
            answer=data.answer,
        )
        user = await UserRepository.create(db, user)
        logger.info("user_registered", user_id=user.id)
        return user

    @staticmethod
    async def login(db: AsyncSession, data: UserLogin) -> LoginResponse:
        user = await UserRepository.get_by_email(db, data.email)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Email is not registered",
            )
        if not AuthService._verify_password(data.password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid Password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        token = create_access_token(user.id, role=user.role)
        return LoginResponse(user=UserResponse.model_validate(user), token=token)

    @staticmethod
    async def reset_password(db: AsyncSession, data: ForgotPasswordRequest) -> None:
        user = await UserRepository.get_by_email_and_answer(db, data.email, data.answer)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Wrong Email Or Answer",
            )
        user.hashed_password = AuthService._hash_password(data.new_password)
        await UserRepository.save(db, user)
        logger.info("password_reset", user_id=user.id)

    @staticmethod
    async def update_profile(db: AsyncSession, user_id: int, data: ProfileUpdate) -> User:
        user = await AuthService.get_user_by_id(db, user_id)
        if data.password is not None and len(data.password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Password is required to be at least {MIN_PASSWORD_LENGTH} characters long",
            )

        # Fields left out of the request keep their stored values.
        if data.name:
            user.name = data.name.strip()
        if data.phone:
            user.phone = data.phone
        if data.address:
            user.address = data.address
        if data.password:
            user.hashed_password = AuthService._hash_password(data.password)
        return await UserRepository.save(db, user)

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    @staticmethod
    async def list_users(db: AsyncSession) -> Sequence[User]:
        return await UserRepository.list_all(db)
