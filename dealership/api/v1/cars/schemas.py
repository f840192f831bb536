from typing import List, Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dealership.core import s3
from dealership.core.listing_query import order_images
from dealership.models.enums import CarStatus, FuelType


class CarImageResponse(BaseModel):
    id: UUID
    image_url: str
    display_order: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("image_url")
    @classmethod
    def _public_url(cls, v: str) -> str:
        return s3.public_url(v)


class CarCreate(BaseModel):
    brand: str = Field(..., min_length=1, max_length=80)
    model: str = Field(..., min_length=1, max_length=120)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    price: int = Field(..., ge=0, description="Asking price in the smallest currency unit")
    fuel_type: FuelType = FuelType.petrol
    km_driven: int = Field(0, ge=0)
    status: CarStatus = CarStatus.available
    description: Optional[str] = None
    contact_phone: Optional[str] = Field(None, max_length=32)
    contact_whatsapp: Optional[str] = Field(None, max_length=32)


class CarUpdate(BaseModel):
    """Listing details. Status and featured flag have their own endpoints."""
    brand: Optional[str] = Field(None, min_length=1, max_length=80)
    model: Optional[str] = Field(None, min_length=1, max_length=120)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    price: Optional[int] = Field(None, ge=0)
    fuel_type: Optional[FuelType] = None
    km_driven: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    contact_phone: Optional[str] = Field(None, max_length=32)
    contact_whatsapp: Optional[str] = Field(None, max_length=32)


class CarStatusUpdate(BaseModel):
    status: CarStatus


class CarFeaturedUpdate(BaseModel):
    is_featured: bool


class CarResponse(BaseModel):
    id: UUID
    owner_id: UUID
    brand: str
    model: str
    year: Optional[int]
    price: int
    fuel_type: str
    km_driven: int
    status: str
    is_featured: bool
    description: Optional[str]
    contact_phone: Optional[str]
    contact_whatsapp: Optional[str]
    sold_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    images: List[CarImageResponse] = []

    class Config:
        from_attributes = True

    @field_validator("images")
    @classmethod
    def _gallery_order(cls, v: List[CarImageResponse]) -> List[CarImageResponse]:
        return order_images(v)


class EmiResponse(BaseModel):
    car_id: UUID
    price: int
    down_payment: float
    annual_rate_percent: float
    tenure_months: int
    principal: float
    installment: float
    total_payment: float
    total_interest: float
