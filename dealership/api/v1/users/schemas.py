from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, Field

from dealership.models.enums import Role


class UserResponse(BaseModel):
    id: UUID
    email: str
    phone: Optional[str] = None
    role: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Admin-side account changes. Promoting a user to admin goes through here."""
    role: Optional[Role] = Field(None, description="user or admin")
    is_active: Optional[bool] = None
