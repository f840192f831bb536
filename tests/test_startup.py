from sqlalchemy import select

from dealership.core import startup
from dealership.core.security import verify_password
from dealership.models import User


async def test_default_admin_created_once(db_session, session_maker, monkeypatch):
    monkeypatch.setattr(startup.settings, "DEFAULT_ADMIN_EMAIL", "Boss@Example.com")
    monkeypatch.setattr(startup.settings, "DEFAULT_ADMIN_PASSWORD", "change-me-now")

    assert await startup.ensure_default_admin(session_maker=session_maker) is True
    assert await startup.ensure_default_admin(session_maker=session_maker) is False

    result = await db_session.execute(select(User).where(User.email == "boss@example.com"))
    admin = result.scalar_one()
    assert admin.role == "admin"
    assert verify_password("change-me-now", admin.password_hash)


async def test_default_admin_skipped_without_config(session_maker, monkeypatch):
    monkeypatch.setattr(startup.settings, "DEFAULT_ADMIN_EMAIL", "")

    assert await startup.ensure_default_admin(session_maker=session_maker) is False
