import datetime as dt
from decimal import Decimal

from pydantic import AliasChoices, Field, field_validator

from dashboard.models.enums import BudgetCategory, DateType, WeekendRule
from dashboard.schemas.common import Amount, CamelModel
from dashboard.services.month import parse_month_key

DUE_DAY_ALIASES = AliasChoices("dueDay", "dueDate", "due_day")
DYNAMIC_RULE_ALIASES = AliasChoices("dynamicRule", "dynamicDateRule", "dynamic_rule")


def _strip_required(value: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError("Value cannot be blank")
    return normalized


class TransactionFields(CamelModel):
    source: str = Field(min_length=1, max_length=255)
    category: BudgetCategory
    purpose: str = Field(min_length=1, max_length=255)
    due_day: int = Field(ge=1, le=31, validation_alias=DUE_DAY_ALIASES, serialization_alias="dueDay")
    date_type: DateType = DateType.FIXED
    dynamic_rule: WeekendRule = Field(
        default=WeekendRule.NEXT,
        validation_alias=DYNAMIC_RULE_ALIASES,
        serialization_alias="dynamicRule",
    )
    amount: Amount = Field(ge=0)
    expected_amount: Amount = Field(default=Decimal("0"), ge=0)
    target: Amount | None = Field(default=None, ge=0)
    current_amount: Amount | None = Field(default=None, ge=0)
    stepup_date: dt.date | None = None
    stepup_amount: Amount | None = Field(default=None, ge=0)

    @field_validator("source", "purpose")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return _strip_required(value)


class TemplateCreate(TransactionFields):
    start_month: str | None = None

    @field_validator("start_month")
    @classmethod
    def validate_start_month(cls, value: str | None) -> str | None:
        if value is not None:
            parse_month_key(value)
        return value


class TemplateRead(TransactionFields):
    id: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class MonthTransactionCreate(TransactionFields):
    pass


class MonthTransactionUpdate(CamelModel):
    source: str | None = Field(default=None, min_length=1, max_length=255)
    category: BudgetCategory | None = None
    purpose: str | None = Field(default=None, min_length=1, max_length=255)
    due_day: int | None = Field(
        default=None, ge=1, le=31, validation_alias=DUE_DAY_ALIASES, serialization_alias="dueDay"
    )
    date_type: DateType | None = None
    dynamic_rule: WeekendRule | None = Field(
        default=None,
        validation_alias=DYNAMIC_RULE_ALIASES,
        serialization_alias="dynamicRule",
    )
    amount: Amount | None = Field(default=None, ge=0)
    expected_amount: Amount | None = Field(default=None, ge=0)
    target: Amount | None = Field(default=None, ge=0)
    current_amount: Amount | None = Field(default=None, ge=0)
    stepup_date: dt.date | None = None
    stepup_amount: Amount | None = Field(default=None, ge=0)


class MonthTransaction(TransactionFields):
    """One instance inside a month bucket."""

    id: str
    template_id: str | None = None
    is_customized: bool = False
    updated_at: dt.datetime | None = None

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TemplateDeletionRead(CamelModel):
    template_id: str
    month_key: str
    template_deleted: bool
    instances_removed: int


class LegacyTransactionCreate(CamelModel):
    source: str = Field(min_length=1, max_length=255)
    category: BudgetCategory
    purpose: str = Field(min_length=1, max_length=255)
    due_day: int = Field(ge=1, le=31, validation_alias=DUE_DAY_ALIASES, serialization_alias="dueDay")
    amount: Amount = Field(ge=0)
    expected_amount: Amount | None = Field(default=None, ge=0)
    target: Amount | None = Field(default=None, ge=0)
    current_amount: Amount | None = Field(default=None, ge=0)
    stepup_date: dt.date | None = None
    stepup_amount: Amount | None = Field(default=None, ge=0)


class LegacyTransactionUpdate(CamelModel):
    source: str | None = Field(default=None, min_length=1, max_length=255)
    category: BudgetCategory | None = None
    purpose: str | None = Field(default=None, min_length=1, max_length=255)
    due_day: int | None = Field(
        default=None, ge=1, le=31, validation_alias=DUE_DAY_ALIASES, serialization_alias="dueDay"
    )
    amount: Amount | None = Field(default=None, ge=0)
    expected_amount: Amount | None = Field(default=None, ge=0)
    target: Amount | None = Field(default=None, ge=0)
    current_amount: Amount | None = Field(default=None, ge=0)
    stepup_date: dt.date | None = None
    stepup_amount: Amount | None = Field(default=None, ge=0)


class LegacyTransactionRead(LegacyTransactionCreate):
    id: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class BudgetSummaryRead(CamelModel):
    total_income: Amount
    total_expense: Amount
    total_savings: Amount
    balance: Amount
