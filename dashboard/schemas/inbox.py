import datetime as dt

from pydantic import Field

from dashboard.models.enums import InboxMessageType
from dashboard.schemas.common import CamelModel


class InboxNotificationCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    type: InboxMessageType = InboxMessageType.INFO
    link: str | None = Field(default=None, max_length=512)


class InboxNotificationRead(CamelModel):
    id: str
    title: str
    message: str
    type: InboxMessageType
    link: str | None
    is_read: bool
    created_at: dt.datetime | None = None
