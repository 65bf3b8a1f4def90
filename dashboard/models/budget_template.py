import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base, new_document_id
from dashboard.models.enums import (
    BudgetCategory,
    DateType,
    WeekendRule,
    budget_category_enum,
    date_type_enum,
    weekend_rule_enum,
)


class BudgetTemplate(Base):
    __tablename__ = "budget_templates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    source: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[BudgetCategory] = mapped_column(budget_category_enum, nullable=False)
    purpose: Mapped[str] = mapped_column(String(255), nullable=False)
    due_day: Mapped[int] = mapped_column(Integer, nullable=False)
    date_type: Mapped[DateType] = mapped_column(
        date_type_enum, nullable=False, default=DateType.FIXED, server_default=DateType.FIXED.value
    )
    dynamic_rule: Mapped[WeekendRule] = mapped_column(
        weekend_rule_enum, nullable=False, default=WeekendRule.NEXT, server_default=WeekendRule.NEXT.value
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    expected_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0"), server_default="0"
    )
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
