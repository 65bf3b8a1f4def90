from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from dashboard.models.enums import BudgetCategory


@dataclass(slots=True)
class CategoryAmount:
    category: BudgetCategory
    amount: Decimal | None


@dataclass(slots=True)
class BudgetSummary:
    total_income: Decimal
    total_expense: Decimal
    total_savings: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense - self.total_savings


def summarize_budget(rows: Iterable[CategoryAmount]) -> BudgetSummary:
    total_income = Decimal("0")
    total_expense = Decimal("0")
    total_savings = Decimal("0")

    for row in rows:
        amount = Decimal(str(row.amount)) if row.amount is not None else Decimal("0")
        if row.category == BudgetCategory.INCOME:
            total_income += amount
        elif row.category == BudgetCategory.EXPENSE:
            total_expense += amount
        elif row.category == BudgetCategory.SAVINGS:
            total_savings += amount

    return BudgetSummary(total_income=total_income, total_expense=total_expense, total_savings=total_savings)
