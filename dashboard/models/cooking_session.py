import datetime as dt
from typing import Any

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base


class CookingSession(Base):
    __tablename__ = "cooking_sessions"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    recipe_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    is_playing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_paused: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    start_time: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    pause_time: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_pause_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    checked_steps: Mapped[list[Any]] = mapped_column(JSONB, nullable=False, default=list)
    updated_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
