import datetime as dt

from pydantic import Field, field_validator

from dashboard.models.enums import Priority
from dashboard.schemas.common import CamelModel


class TodoCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    status: str = Field(default="pending", max_length=32)
    priority: Priority = Priority.MEDIUM
    due_date: dt.date | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Title is required")
        return normalized


class TodoUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: str | None = Field(default=None, max_length=32)
    priority: Priority | None = None
    completed: bool | None = None
    due_date: dt.date | None = None


class TodoRead(CamelModel):
    id: str
    title: str
    description: str
    status: str
    priority: Priority
    completed: bool
    due_date: dt.date | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
