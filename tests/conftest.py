"""
Shared fixtures for the dealership test suite.

- in-memory SQLite (aiosqlite) with the full schema
- httpx AsyncClient over the FastAPI app with get_db overridden
- user / admin accounts with bearer headers
- a car factory and a mocked S3 client
"""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["S3_BUCKET_NAME"] = "test-bucket"
os.environ["AWS_REGION"] = "ap-south-1"
os.environ["DEFAULT_ADMIN_EMAIL"] = ""
os.environ["DEFAULT_ADMIN_PASSWORD"] = ""
os.environ["INQUIRY_ALERT_EMAIL"] = ""

from datetime import datetime, timedelta  # noqa: E402
from typing import AsyncGenerator  # noqa: E402
from unittest.mock import MagicMock, patch  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from dealership.core.database import Base  # noqa: E402
from dealership.core.deps import get_db  # noqa: E402
from dealership.core.security import create_access_token, get_password_hash  # noqa: E402
from dealership.main import app  # noqa: E402
from dealership.models import Car, User  # noqa: E402
from dealership.models.enums import Role  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpass123"


@pytest.fixture
async def async_engine():
    """Async engine over a single shared in-memory SQLite connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app; every request shares the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _create_user(db_session, email: str, role: Role, is_active: bool = True) -> User:
    user = User(
        email=email,
        password_hash=get_password_hash(TEST_PASSWORD),
        role=role.value,
        is_active=is_active,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _bearer(user: User) -> dict:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_user(db_session) -> User:
    return await _create_user(db_session, "seller@example.com", Role.user)


@pytest.fixture
async def other_user(db_session) -> User:
    return await _create_user(db_session, "other@example.com", Role.user)


@pytest.fixture
async def admin_user(db_session) -> User:
    return await _create_user(db_session, "admin@example.com", Role.admin)


@pytest.fixture
def user_headers(test_user) -> dict:
    return _bearer(test_user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return _bearer(other_user)


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return _bearer(admin_user)


@pytest.fixture
def make_car(db_session, test_user):
    """Factory: insert a car owned by test_user unless owner_id is given."""
    counter = {"n": 0}

    async def _make(**overrides) -> Car:
        counter["n"] += 1
        values = {
            "owner_id": test_user.id,
            "brand": "Maruti",
            "model": "Swift",
            "year": 2020,
            "price": 500000,
            "fuel_type": "Petrol",
            "km_driven": 30000,
            "status": "available",
            "is_featured": False,
            "created_at": datetime(2026, 1, 1) + timedelta(hours=counter["n"]),
        }
        values.update(overrides)
        car = Car(**values)
        db_session.add(car)
        await db_session.commit()
        await db_session.refresh(car)
        return car

    return _make


@pytest.fixture
def mock_s3_client():
    """Replaces the boto3 client; put_object / delete_objects are MagicMocks."""
    client = MagicMock()
    with patch("dealership.core.s3._get_s3_client", return_value=client):
        yield client
