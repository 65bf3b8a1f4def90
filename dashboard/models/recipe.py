import datetime as dt
from typing import Any

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base, new_document_id


class Recipe(Base):
    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    ingredients: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    directions: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    serving_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    total_time: Mapped[str] = mapped_column(String(32), nullable=False, default="", server_default="")
    total_time_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    total_time_unit: Mapped[str] = mapped_column(
        String(16), nullable=False, default="minutes", server_default="minutes"
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    created_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
