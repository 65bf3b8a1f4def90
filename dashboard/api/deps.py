from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.db.session import get_session
from dashboard.db.settings import get_settings
from dashboard.errors import ValidationFailed
from dashboard.services.month import parse_month_key
from dashboard.services.store import DashboardStore


async def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    user_id = (x_user_id or "").strip()
    return user_id or get_settings().default_user_id


async def get_store(session: AsyncSession = Depends(get_session)) -> DashboardStore:
    return DashboardStore(session, max_write_attempts=get_settings().bucket_write_attempts)


def require_month_key(value: str) -> str:
    try:
        parse_month_key(value)
    except ValueError as exc:
        raise ValidationFailed("Invalid month format", str(exc)) from exc
    return value
