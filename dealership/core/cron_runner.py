"""
Run the sold-listing cleanup in the background (non-blocking).
Started on app startup; cancelled on shutdown.
"""
import asyncio
import logging

from dealership.core.config import settings
from dealership.cron.sold_cleanup import cleanup_sold_cars

logger = logging.getLogger(__name__)


async def run_sold_cleanup_cron_loop(initial_delay: float = 10.0) -> None:
    """Loop: run once after a short delay, then every CRON_SOLD_CLEANUP_INTERVAL_HOURS."""
    interval_hours = settings.CRON_SOLD_CLEANUP_INTERVAL_HOURS
    interval_seconds = max(60.0, interval_hours * 3600)  # minimum 1 minute
    logger.info("Sold cleanup cron started (interval=%.2f hours)", interval_hours)
    try:
        await asyncio.sleep(initial_delay)
        while True:
            try:
                await cleanup_sold_cars()
            except Exception as e:
                logger.exception("Sold cleanup cron loop error: %s", e)
            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        logger.info("Sold cleanup cron cancelled")
        raise
