import datetime as dt

from pydantic import Field

from dashboard.models.enums import Priority, RepeatType, SourceType
from dashboard.schemas.common import CamelModel


class NotificationRecordCreate(CamelModel):
    """Internal payload for a derived notification; never accepted from clients."""

    user_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    due_date: dt.date
    priority: Priority
    repeat_type: RepeatType
    source_type: SourceType
    source_id: str = Field(min_length=1)
    month_key: str | None = None


class EventRecordCreate(CamelModel):
    """Internal payload for a derived calendar event; never accepted from clients."""

    user_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    date: dt.date
    priority: Priority
    repeat_type: RepeatType
    source_type: SourceType
    source_id: str = Field(min_length=1)
    month_key: str | None = None
    description: str | None = None


class NotificationRecordRead(CamelModel):
    id: str
    user_id: str
    title: str
    due_date: dt.date
    priority: Priority
    repeat_type: RepeatType
    source_type: SourceType
    source_id: str
    category: SourceType
    month_key: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class EventRecordRead(CamelModel):
    id: str
    user_id: str
    title: str
    date: dt.date
    priority: Priority
    repeat_type: RepeatType
    source_type: SourceType
    source_id: str
    month_key: str | None = None
    description: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
