"""
Cron job: delete listings that have been sold for longer than SOLD_CAR_RETENTION_DAYS,
together with their photos in storage.
"""
import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from dealership.core import s3
from dealership.core.config import settings
from dealership.core.database import get_async_session_maker_instance
from dealership.models.car import Car
from dealership.models.enums import CarStatus

logger = logging.getLogger(__name__)


def sold_cutoff(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.utcnow()
    return now - timedelta(days=settings.SOLD_CAR_RETENTION_DAYS)


async def cleanup_sold_cars(now: Optional[datetime] = None, session_maker=None) -> int:
    """Delete expired sold listings. Returns the number of cars removed."""
    cutoff = sold_cutoff(now)
    session_maker = session_maker or get_async_session_maker_instance()
    logger.info("Cron: sold car cleanup started (cutoff=%s)", cutoff.isoformat())

    async with session_maker() as session:
        result = await session.execute(
            select(Car)
            .options(selectinload(Car.images))
            .where(
                Car.status == CarStatus.sold.value,
                Car.sold_at.isnot(None),
                Car.sold_at <= cutoff,
            )
        )
        cars = result.scalars().all()
        if not cars:
            logger.info("Cron: sold car cleanup finished, nothing to delete")
            return 0

        image_urls = [img.image_url for car in cars for img in car.images]
        for car in cars:
            await session.delete(car)
        await session.commit()

    removed = await asyncio.to_thread(s3.delete_objects, image_urls)
    logger.info(
        "Cron: sold car cleanup finished, deleted %d car(s) and %d stored image(s)",
        len(cars),
        removed,
    )
    return len(cars)
