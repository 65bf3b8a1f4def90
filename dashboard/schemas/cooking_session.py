import datetime as dt
from typing import Any

from pydantic import Field

from dashboard.schemas.common import CamelModel


class CookingSessionSave(CamelModel):
    is_playing: bool = False
    is_paused: bool = False
    start_time: dt.datetime | None = None
    pause_time: dt.datetime | None = None
    total_pause_duration: int = Field(default=0, ge=0)
    checked_steps: list[Any] = Field(default_factory=list)


class CookingSessionRead(CookingSessionSave):
    recipe_id: str
    user_id: str
    updated_at: dt.datetime | None = None
