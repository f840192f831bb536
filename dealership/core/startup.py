"""
Startup utilities for the application.
"""
import logging
from sqlalchemy import select
from sqlalchemy.exc import OperationalError, ProgrammingError

from dealership.core.config import settings
from dealership.core.database import get_async_session_maker_instance
from dealership.core.security import get_password_hash
from dealership.models.enums import Role
from dealership.models.user import User

logger = logging.getLogger(__name__)


async def ensure_default_admin(session_maker=None) -> bool:
    """
    Create the bootstrap admin from DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD
    when no user with that email exists. Returns True if an admin was created.
    """
    if not settings.DEFAULT_ADMIN_EMAIL or not settings.DEFAULT_ADMIN_PASSWORD:
        logger.info("DEFAULT_ADMIN_EMAIL/DEFAULT_ADMIN_PASSWORD not set. Skipping default admin creation.")
        return False

    session_maker = session_maker or get_async_session_maker_instance()
    email = settings.DEFAULT_ADMIN_EMAIL.strip().lower()
    try:
        async with session_maker() as session:
            result = await session.execute(select(User).where(User.email == email))
            if result.scalar_one_or_none() is not None:
                logger.info("Default admin %s already exists. Skipping.", email)
                return False

            session.add(
                User(
                    email=email,
                    password_hash=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
                    role=Role.admin.value,
                    is_active=True,
                )
            )
            await session.commit()
            logger.info("Default admin created with email: %s", email)
            return True
    except (OperationalError, ProgrammingError) as e:
        # app still starts; tables come from `alembic upgrade head`
        logger.warning(
            "Database error during default admin creation: %s. "
            "Please ensure database is accessible and migrations are run.",
            e,
        )
        return False
