from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.auth.schemas import LoginRequest, RegisterRequest, TokenResponse
from dealership.api.v1.auth.service import AuthService
from dealership.api.v1.users.schemas import UserResponse
from dealership.core.deps import get_db, get_current_active_user
from dealership.models.user import User

router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await AuthService(db).register(data)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login",
    description="Exchange email and password for a bearer token.",
)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    access_token = await AuthService(db).login(data)
    return TokenResponse(access_token=access_token)


@router.get("/me", response_model=UserResponse, summary="Current user")
async def me(current_user: User = Depends(get_current_active_user)):
    return UserResponse.model_validate(current_user)
