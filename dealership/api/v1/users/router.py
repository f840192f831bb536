from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.users.schemas import UserResponse, UserUpdate
from dealership.api.v1.users.service import UserService
from dealership.core.deps import get_db, get_current_active_admin_user
from dealership.models.user import User


router = APIRouter()


@router.get(
    "",
    response_model=List[UserResponse],
    summary="Get all users",
)
async def get_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    current_admin: User = Depends(get_current_active_admin_user),
    db: AsyncSession = Depends(get_db),
):
    user_service = UserService(db)
    users = await user_service.get_users(skip=skip, limit=limit)
    return [UserResponse.model_validate(user) for user in users]


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Change a user's role or active flag",
    description="Admin only. Admins cannot change their own account.",
)
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    current_admin: User = Depends(get_current_active_admin_user),
    db: AsyncSession = Depends(get_db),
):
    user_service = UserService(db)
    user = await user_service.update_user(user_id, user_data, acting_admin=current_admin)
    return UserResponse.model_validate(user)
