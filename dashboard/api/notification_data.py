import datetime as dt

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.api.deps import get_user_id
from dashboard.db.session import get_session
from dashboard.db.settings import get_settings
from dashboard.errors import Forbidden
from dashboard.models.notification_record import NotificationRecord
from dashboard.schemas.common import ApiResponse
from dashboard.schemas.derived import NotificationRecordRead

router = APIRouter(prefix="/api/notification-data", tags=["notification-data"])

CREATE_BLOCKED = (
    "Direct creation of notifications is not allowed. "
    "Notifications are automatically created when you add budget items, todos, or recipes."
)
DELETE_BLOCKED = (
    "Direct deletion of notifications is not allowed. "
    "Notifications are automatically deleted when you remove their source items."
)


@router.get("", response_model=ApiResponse[list[NotificationRecordRead]])
async def list_notification_data(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    rows = await session.scalars(
        select(NotificationRecord)
        .where(NotificationRecord.user_id == user_id)
        .order_by(NotificationRecord.due_date.asc(), NotificationRecord.id.asc())
    )
    return ApiResponse(data=[NotificationRecordRead.model_validate(item) for item in rows.all()])


@router.get("/upcoming", response_model=ApiResponse[list[NotificationRecordRead]])
async def list_upcoming_notification_data(
    days: int | None = Query(default=None, ge=1, le=366),
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    today = dt.date.today()
    horizon = today + dt.timedelta(days=days or get_settings().upcoming_window_days)
    rows = await session.scalars(
        select(NotificationRecord)
        .where(
            NotificationRecord.user_id == user_id,
            NotificationRecord.due_date >= today,
            NotificationRecord.due_date <= horizon,
        )
        .order_by(NotificationRecord.due_date.asc(), NotificationRecord.id.asc())
    )
    return ApiResponse(data=[NotificationRecordRead.model_validate(item) for item in rows.all()])


@router.post("")
async def create_notification_data() -> None:
    raise Forbidden(CREATE_BLOCKED)


@router.delete("/{record_id}")
async def delete_notification_data(record_id: str) -> None:
    raise Forbidden(DELETE_BLOCKED)
