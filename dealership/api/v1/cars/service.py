import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from fastapi import HTTPException, UploadFile
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dealership.api.v1.cars.schemas import CarCreate, CarUpdate
from dealership.core import amortization, s3
from dealership.core.exceptions import AppException
from dealership.core.listing_query import ListingFilter, build_statement, distinct_brands
from dealership.models.car import Car
from dealership.models.car_image import CarImage
from dealership.models.enums import CarStatus
from dealership.models.user import User

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 6


class CarService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # -- reads ---------------------------------------------------------------

    async def get_car(self, car_id: UUID) -> Car:
        result = await self.db.execute(
            select(Car)
            .options(selectinload(Car.images))
            .where(Car.id == car_id)
            .execution_options(populate_existing=True)
        )
        car = result.scalar_one_or_none()
        if not car:
            AppException().raise_404(f"Car with id {car_id} not found")
        return car

    async def list_cars(
        self,
        listing_filter: ListingFilter,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Car]:
        query = build_statement(listing_filter).options(selectinload(Car.images)).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_brands(self) -> List[str]:
        result = await self.db.execute(
            select(Car.brand, Car.status).where(Car.status == CarStatus.available.value).distinct()
        )
        return distinct_brands(result.all())

    async def get_featured(self) -> List[Car]:
        query = (
            build_statement(ListingFilter())
            .where(Car.is_featured.is_(True))
            .options(selectinload(Car.images))
            .limit(FEATURED_LIMIT)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def compare(self, car_ids: Sequence[UUID]) -> List[Car]:
        """Side-by-side pair, any status, in the order requested."""
        if len(car_ids) != 2 or car_ids[0] == car_ids[1]:
            AppException().raise_400("Select exactly two different cars to compare")
        result = await self.db.execute(
            select(Car).options(selectinload(Car.images)).where(Car.id.in_(list(car_ids)))
        )
        by_id = {car.id: car for car in result.scalars().all()}
        missing = [str(i) for i in car_ids if i not in by_id]
        if missing:
            AppException().raise_404(f"Car(s) not found: {', '.join(missing)}")
        return [by_id[i] for i in car_ids]

    async def estimate_emi(
        self,
        car_id: UUID,
        down_payment: Optional[float] = None,
        annual_rate_percent: Optional[float] = None,
        tenure_months: Optional[int] = None,
    ) -> dict:
        car = await self.get_car(car_id)
        terms = amortization.default_terms(car.price)
        if down_payment is not None:
            terms["down_payment"] = down_payment
        if annual_rate_percent is not None:
            terms["annual_rate_percent"] = annual_rate_percent
        if tenure_months is not None:
            terms["tenure_months"] = tenure_months
        terms["down_payment"] = amortization.clamp_down_payment(car.price, terms["down_payment"])

        try:
            breakdown = amortization.compute(car.price, **terms)
        except ValueError as e:
            AppException().raise_400(str(e))
        return {
            "car_id": car.id,
            "price": car.price,
            **terms,
            "principal": breakdown.principal,
            "installment": breakdown.installment,
            "total_payment": breakdown.total_payment,
            "total_interest": breakdown.total_interest,
        }

    # -- writes --------------------------------------------------------------

    @staticmethod
    def _ensure_can_modify(car: Car, user: User) -> None:
        if not user.is_admin and car.owner_id != user.id:
            AppException().raise_403("You can only modify your own listings")

    @staticmethod
    def _apply_status(car: Car, new_status: CarStatus) -> None:
        if new_status == CarStatus.sold:
            if car.status != CarStatus.sold.value or car.sold_at is None:
                car.sold_at = datetime.utcnow()
        else:
            car.sold_at = None
        car.status = new_status.value

    async def create_car(self, car_data: CarCreate, owner: User) -> Car:
        car = Car(
            owner_id=owner.id,
            brand=car_data.brand.strip(),
            model=car_data.model.strip(),
            year=car_data.year,
            price=car_data.price,
            fuel_type=car_data.fuel_type.value,
            km_driven=car_data.km_driven,
            is_featured=False,
            description=car_data.description,
            contact_phone=car_data.contact_phone,
            contact_whatsapp=car_data.contact_whatsapp,
        )
        self._apply_status(car, car_data.status)
        self.db.add(car)
        await self.db.commit()
        logger.info("Car %s created by user %s", car.id, owner.id)
        return await self.get_car(car.id)

    async def update_car(self, car_id: UUID, car_data: CarUpdate, user: User) -> Car:
        car = await self.get_car(car_id)
        self._ensure_can_modify(car, user)

        update_data = car_data.model_dump(exclude_unset=True)
        for field in ("brand", "model", "price", "fuel_type", "km_driven"):
            if field in update_data and update_data[field] is None:
                AppException().raise_400(f"{field} cannot be null")
        if update_data.get("fuel_type") is not None:
            update_data["fuel_type"] = update_data["fuel_type"].value
        for field, value in update_data.items():
            if isinstance(value, str) and field in ("brand", "model"):
                value = value.strip()
            setattr(car, field, value)

        await self.db.commit()
        return await self.get_car(car_id)

    async def set_status(self, car_id: UUID, new_status: CarStatus, user: User) -> Car:
        car = await self.get_car(car_id)
        self._ensure_can_modify(car, user)
        self._apply_status(car, new_status)
        await self.db.commit()
        logger.info("Car %s status set to %s by user %s", car_id, new_status.value, user.id)
        return await self.get_car(car_id)

    async def set_featured(self, car_id: UUID, is_featured: bool) -> Car:
        car = await self.get_car(car_id)
        car.is_featured = is_featured
        await self.db.commit()
        return await self.get_car(car_id)

    async def delete_car(self, car_id: UUID) -> None:
        car = await self.get_car(car_id)
        image_urls = [img.image_url for img in car.images]
        await self.db.delete(car)
        await self.db.commit()
        await asyncio.to_thread(s3.delete_objects, image_urls)
        logger.info("Car %s deleted with %d image(s)", car_id, len(image_urls))

    # -- images --------------------------------------------------------------

    async def add_images(self, car_id: UUID, files: List[UploadFile], user: User) -> Car:
        """Append photos after the car's current highest display_order."""
        car = await self.get_car(car_id)
        self._ensure_can_modify(car, user)
        if not files:
            AppException().raise_400("No files uploaded")

        payloads = []
        for upload in files:
            content = await upload.read()
            s3.validate_car_image(content, upload.content_type)
            payloads.append((content, upload.content_type))

        result = await self.db.execute(
            select(func.max(CarImage.display_order)).where(CarImage.car_id == car.id)
        )
        current_max = result.scalar()
        next_order = 0 if current_max is None else current_max + 1

        uploaded: List[str] = []
        try:
            for content, content_type in payloads:
                url = await asyncio.to_thread(s3.upload_car_image, content, str(car.id), content_type)
                uploaded.append(url)
        except HTTPException:
            # drop what already landed so a failed batch leaves no orphans
            await asyncio.to_thread(s3.delete_objects, uploaded)
            raise

        for offset, url in enumerate(uploaded):
            self.db.add(CarImage(car_id=car.id, image_url=url, display_order=next_order + offset))
        await self.db.commit()
        return await self.get_car(car_id)

    async def delete_image(self, car_id: UUID, image_id: UUID, user: User) -> Car:
        car = await self.get_car(car_id)
        self._ensure_can_modify(car, user)
        image = await self.db.get(CarImage, image_id)
        if not image or image.car_id != car.id:
            AppException().raise_404(f"Image with id {image_id} not found for this car")

        image_url = image.image_url
        await self.db.delete(image)
        await self.db.commit()
        await asyncio.to_thread(s3.delete_objects, [image_url])
        return await self.get_car(car_id)
