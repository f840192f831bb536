from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from dealership.core.config import settings


def get_database_url():
    db_url = settings.DATABASE_URL
    if "postgresql" in db_url and "sslmode" not in db_url and settings.ENVIRONMENT != "development":
        return f"{db_url}?sslmode=require"
    return db_url


DATABASE_URL = get_database_url()
engine = create_async_engine(DATABASE_URL, echo=settings.DB_ECHO)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
Base = declarative_base()


def get_async_session_maker_instance():
    """Get the async session maker instance."""
    return async_session_maker
