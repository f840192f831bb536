from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.users.schemas import UserUpdate
from dealership.core.exceptions import AppException
from dealership.models.user import User


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_users(self, skip: int = 0, limit: int = 100) -> List[User]:
        result = await self.db.execute(
            select(User).order_by(User.created_at.desc(), User.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def update_user(self, user_id: UUID, user_data: UserUpdate, acting_admin: User) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            AppException().raise_404("User not found")

        update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)
        if user.id == acting_admin.id and update_data:
            AppException().raise_400("You cannot change your own role or status")

        if "role" in update_data:
            user.role = update_data["role"].value
        if "is_active" in update_data:
            user.is_active = update_data["is_active"]

        await self.db.commit()
        await self.db.refresh(user)
        return user
