from typing import AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.core.database import async_session_maker
from dealership.core.security import decode_access_token
from dealership.core.exceptions import AppException
from dealership.models.user import User
from dealership.models.enums import Role


bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


async def _user_from_token(db: AsyncSession, token: str) -> Optional[User]:
    payload = decode_access_token(token)
    if payload is None:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    try:
        user_uuid = UUID(user_id)
    except (ValueError, TypeError):
        return None
    return await db.get(User, user_uuid)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer token into the acting User. The role is read from the row, not the token."""
    if credentials is None or not credentials.credentials:
        AppException().raise_401("Not authenticated")
    user = await _user_from_token(db, credentials.credentials)
    if user is None:
        AppException().raise_401("Could not validate credentials")
    return user


async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        AppException().raise_400("Inactive user")
    return current_user


async def get_current_active_admin_user(current_user: User = Depends(get_current_active_user)) -> User:
    if current_user.role != Role.admin.value:
        AppException().raise_403("Not an admin user")
    return current_user
