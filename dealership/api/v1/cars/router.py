from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.cars.schemas import (
    CarCreate,
    CarFeaturedUpdate,
    CarResponse,
    CarStatusUpdate,
    CarUpdate,
    EmiResponse,
)
from dealership.api.v1.cars.service import CarService
from dealership.core import amortization
from dealership.core.deps import get_db, get_current_active_user, get_current_active_admin_user
from dealership.core.listing_query import ListingFilter, SortKey, StatusFilter
from dealership.models.enums import FuelType
from dealership.models.user import User

router = APIRouter()

PAGING_PARAMS = {"skip", "limit"}


async def listing_filter_params(
    request: Request,
    brand: Optional[str] = Query(None, description="Exact brand"),
    fuel_type: Optional[FuelType] = Query(None, description="Petrol/Diesel/Electric/CNG/Hybrid"),
    search: Optional[str] = Query(None, description="Substring of brand or model, case-insensitive"),
    min_price: Optional[int] = Query(None, ge=0),
    max_price: Optional[int] = Query(None, ge=0),
    min_year: Optional[int] = Query(None, ge=0),
    max_year: Optional[int] = Query(None, ge=0),
    status: Optional[StatusFilter] = Query(None, description="available (default), sold, upcoming or all"),
    sort_by: SortKey = Query(SortKey.newest),
) -> ListingFilter:
    """Query string -> ListingFilter. Unrecognised keys fail validation (422)."""
    params = {
        "brand": brand,
        "fuel_type": fuel_type,
        "search": search,
        "min_price": min_price,
        "max_price": max_price,
        "min_year": min_year,
        "max_year": max_year,
        "status": status,
        "sort_by": sort_by,
    }
    unknown = {
        key: value
        for key, value in request.query_params.items()
        if key not in params and key not in PAGING_PARAMS
    }
    return ListingFilter.model_validate({**params, **unknown})


@router.get(
    "",
    response_model=List[CarResponse],
    summary="Browse listings",
    description="Filtered and sorted listings. Without a status filter only available cars are returned.",
)
async def list_cars(
    listing_filter: ListingFilter = Depends(listing_filter_params),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    cars = await CarService(db).list_cars(listing_filter, skip=skip, limit=limit)
    return [CarResponse.model_validate(car) for car in cars]


@router.get("/brands", response_model=List[str], summary="Brands with available listings")
async def get_brands(db: AsyncSession = Depends(get_db)):
    return await CarService(db).get_brands()


@router.get("/featured", response_model=List[CarResponse], summary="Featured listings")
async def get_featured(db: AsyncSession = Depends(get_db)):
    cars = await CarService(db).get_featured()
    return [CarResponse.model_validate(car) for car in cars]


@router.get(
    "/compare",
    response_model=List[CarResponse],
    summary="Compare two cars",
    description="Pass two ids: /cars/compare?ids=<a>&ids=<b>. Any status.",
)
async def compare_cars(
    ids: List[UUID] = Query(..., description="Exactly two car ids"),
    db: AsyncSession = Depends(get_db),
):
    cars = await CarService(db).compare(ids)
    return [CarResponse.model_validate(car) for car in cars]


@router.post(
    "",
    response_model=CarResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a listing",
)
async def create_car(
    car_data: CarCreate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    car = await CarService(db).create_car(car_data, owner=current_user)
    return CarResponse.model_validate(car)


@router.get("/{car_id}", response_model=CarResponse, summary="Get a listing")
async def get_car(
    car_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    car = await CarService(db).get_car(car_id)
    return CarResponse.model_validate(car)


@router.get(
    "/{car_id}/emi",
    response_model=EmiResponse,
    summary="EMI estimate for a listing",
    description="Defaults: 20% down, 9.5% p.a., 36 months. Down payment is clamped to [0, price].",
)
async def get_car_emi(
    car_id: UUID,
    down_payment: Optional[float] = Query(None, allow_inf_nan=False),
    annual_rate_percent: Optional[float] = Query(
        None,
        ge=amortization.MIN_ANNUAL_RATE_PERCENT,
        le=amortization.MAX_ANNUAL_RATE_PERCENT,
    ),
    tenure_months: Optional[int] = Query(
        None,
        ge=amortization.MIN_TENURE_MONTHS,
        le=amortization.MAX_TENURE_MONTHS,
    ),
    db: AsyncSession = Depends(get_db),
):
    result = await CarService(db).estimate_emi(
        car_id,
        down_payment=down_payment,
        annual_rate_percent=annual_rate_percent,
        tenure_months=tenure_months,
    )
    return EmiResponse(**result)


@router.patch(
    "/{car_id}",
    response_model=CarResponse,
    summary="Update a listing",
    description="Owner or admin.",
)
async def update_car(
    car_id: UUID,
    car_data: CarUpdate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    car = await CarService(db).update_car(car_id, car_data, user=current_user)
    return CarResponse.model_validate(car)


@router.patch(
    "/{car_id}/status",
    response_model=CarResponse,
    summary="Change listing status",
    description="Owner or admin. Marking a car sold starts its cleanup clock.",
)
async def update_car_status(
    car_id: UUID,
    data: CarStatusUpdate,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    car = await CarService(db).set_status(car_id, data.status, user=current_user)
    return CarResponse.model_validate(car)


@router.patch(
    "/{car_id}/featured",
    response_model=CarResponse,
    summary="Feature or unfeature a listing",
    dependencies=[Depends(get_current_active_admin_user)],
)
async def update_car_featured(
    car_id: UUID,
    data: CarFeaturedUpdate,
    db: AsyncSession = Depends(get_db),
):
    car = await CarService(db).set_featured(car_id, data.is_featured)
    return CarResponse.model_validate(car)


@router.delete(
    "/{car_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a listing",
    description="Admin only. Stored images are removed too.",
    dependencies=[Depends(get_current_active_admin_user)],
)
async def delete_car(
    car_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    await CarService(db).delete_car(car_id)
    return None


@router.post(
    "/{car_id}/images",
    response_model=CarResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload listing photos",
    description="Owner or admin. JPEG, PNG or WebP. New photos go after the existing ones.",
)
async def upload_car_images(
    car_id: UUID,
    files: List[UploadFile] = File(..., description="One or more image files"),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    car = await CarService(db).add_images(car_id, files, user=current_user)
    return CarResponse.model_validate(car)


@router.delete(
    "/{car_id}/images/{image_id}",
    response_model=CarResponse,
    summary="Remove a listing photo",
)
async def delete_car_image(
    car_id: UUID,
    image_id: UUID,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    car = await CarService(db).delete_image(car_id, image_id, user=current_user)
    return CarResponse.model_validate(car)
