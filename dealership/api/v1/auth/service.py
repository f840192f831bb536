from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.auth.schemas import LoginRequest, RegisterRequest
from dealership.core.exceptions import AppException
from dealership.core.security import create_access_token, get_password_hash, verify_password
from dealership.models.enums import Role
from dealership.models.user import User


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, data: RegisterRequest) -> User:
        email = data.email.strip().lower()
        existing = await self.db.execute(select(User).where(User.email == email))
        if existing.scalar_one_or_none():
            AppException().raise_400("Email already registered")
        if data.phone:
            existing = await self.db.execute(select(User).where(User.phone == data.phone))
            if existing.scalar_one_or_none():
                AppException().raise_400("Phone number already registered")

        user = User(
            email=email,
            phone=data.phone or None,
            password_hash=get_password_hash(data.password),
            role=Role.user.value,
            is_active=True,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def login(self, data: LoginRequest) -> str:
        result = await self.db.execute(select(User).where(User.email == data.email.strip().lower()))
        user = result.scalar_one_or_none()
        if not user or not verify_password(data.password, user.password_hash):
            AppException().raise_401("Incorrect email or password")
        if not user.is_active:
            AppException().raise_400("Inactive user")
        return create_access_token({"sub": str(user.id), "role": user.role})
