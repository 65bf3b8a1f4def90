from enum import Enum

from sqlalchemy.dialects.postgresql import ENUM


class BudgetCategory(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"
    SAVINGS = "Savings"


class DateType(str, Enum):
    FIXED = "fixed"
    DYNAMIC = "dynamic"


class WeekendRule(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RepeatType(str, Enum):
    NONE = "none"
    MONTHLY = "monthly"


class SourceType(str, Enum):
    BUDGET = "budget"
    TODO = "todo"
    RECIPE = "recipe"


class InboxMessageType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class TimeUnit(str, Enum):
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


def _pg_enum(enum_cls: type[Enum], name: str) -> ENUM:
    return ENUM(
        enum_cls,
        name=name,
        create_type=False,
        values_callable=lambda members: [item.value for item in members],
    )


budget_category_enum = _pg_enum(BudgetCategory, "budget_category")
date_type_enum = _pg_enum(DateType, "date_type")
weekend_rule_enum = _pg_enum(WeekendRule, "weekend_rule")
priority_enum = _pg_enum(Priority, "priority_level")
repeat_type_enum = _pg_enum(RepeatType, "repeat_type")
source_type_enum = _pg_enum(SourceType, "source_type")
