import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base, new_document_id
from dashboard.models.enums import BudgetCategory, budget_category_enum


class BudgetTransaction(Base):
    """Flat budget transaction kept for the legacy /api/budget endpoints."""

    __tablename__ = "budget_transactions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    source: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[BudgetCategory] = mapped_column(budget_category_enum, nullable=False)
    purpose: Mapped[str] = mapped_column(String(255), nullable=False)
    due_day: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    expected_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    target: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    current_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    stepup_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    stepup_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    created_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
