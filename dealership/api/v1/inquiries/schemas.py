from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, Field

from dealership.models.enums import FuelType, InquiryStatus, Transmission


class InquiryCreate(BaseModel):
    """The public "sell your car" form."""
    owner_name: str = Field(..., min_length=1, max_length=120)
    phone: str = Field(..., min_length=5, max_length=32)
    whatsapp: Optional[str] = Field(None, max_length=32)
    brand: str = Field(..., min_length=1, max_length=80)
    model: str = Field(..., min_length=1, max_length=120)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    km_driven: Optional[int] = Field(None, ge=0)
    fuel_type: Optional[FuelType] = None
    transmission: Optional[Transmission] = None
    expected_price: Optional[int] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=2000)


class InquiryUpdate(BaseModel):
    status: Optional[InquiryStatus] = None
    admin_notes: Optional[str] = None


class InquiryResponse(BaseModel):
    id: UUID
    owner_name: str
    phone: str
    whatsapp: Optional[str]
    brand: str
    model: str
    year: Optional[int]
    km_driven: Optional[int]
    fuel_type: Optional[str]
    transmission: Optional[str]
    expected_price: Optional[int]
    description: Optional[str]
    status: str
    admin_notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
