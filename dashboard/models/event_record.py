import datetime as dt

from sqlalchemy import Date, DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base, new_document_id
from dashboard.models.enums import (
    Priority,
    RepeatType,
    SourceType,
    priority_enum,
    repeat_type_enum,
    source_type_enum,
)


class EventRecord(Base):
    __tablename__ = "event_records"
    __table_args__ = (
        Index("ix_event_records_source", "user_id", "source_type", "source_id", "month_key"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    priority: Mapped[Priority] = mapped_column(priority_enum, nullable=False)
    repeat_type: Mapped[RepeatType] = mapped_column(repeat_type_enum, nullable=False)
    source_type: Mapped[SourceType] = mapped_column(source_type_enum, nullable=False)
    source_id: Mapped[str] = mapped_column(String(64), nullable=False)
    month_key: Mapped[str | None] = mapped_column(String(7), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
