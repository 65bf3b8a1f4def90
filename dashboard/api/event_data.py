import datetime as dt

from fastapi import APIRouter, Depends, Path
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.api.deps import get_user_id
from dashboard.db.session import get_session
from dashboard.errors import Forbidden
from dashboard.models.event_record import EventRecord
from dashboard.schemas.common import ApiResponse
from dashboard.schemas.derived import EventRecordRead
from dashboard.services.month import month_key, resolve_month_window

router = APIRouter(prefix="/api/event-data", tags=["event-data"])

CREATE_BLOCKED = (
    "Direct creation of events is not allowed. "
    "Events are automatically created when you add budget items, todos, or recipes."
)
DELETE_BLOCKED = (
    "Direct deletion of events is not allowed. "
    "Events are automatically deleted when you remove their source items."
)


@router.get("", response_model=ApiResponse[list[EventRecordRead]])
async def list_event_data(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    rows = await session.scalars(
        select(EventRecord)
        .where(EventRecord.user_id == user_id)
        .order_by(EventRecord.date.asc(), EventRecord.id.asc())
    )
    return ApiResponse(data=[EventRecordRead.model_validate(item) for item in rows.all()])


@router.get("/month/{year}/{month}", response_model=ApiResponse[list[EventRecordRead]])
async def list_event_data_for_month(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    month_start, month_end, _ = resolve_month_window(month_key(year, month))
    rows = await session.scalars(
        select(EventRecord)
        .where(
            EventRecord.user_id == user_id,
            EventRecord.date >= month_start,
            EventRecord.date < month_end,
        )
        .order_by(EventRecord.date.asc(), EventRecord.id.asc())
    )
    return ApiResponse(data=[EventRecordRead.model_validate(item) for item in rows.all()])


@router.post("")
async def create_event_data() -> None:
    raise Forbidden(CREATE_BLOCKED)


@router.delete("/{record_id}")
async def delete_event_data(record_id: str) -> None:
    raise Forbidden(DELETE_BLOCKED)
