import datetime as dt
from typing import Any

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base


class MonthlyBudget(Base):
    """One month bucket per user; instances are stored as a JSON document array."""

    __tablename__ = "monthly_budgets"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    month_key: Mapped[str] = mapped_column(String(7), primary_key=True)
    transactions: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __mapper_args__ = {"version_id_col": version}
