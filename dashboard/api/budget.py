from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.api.deps import get_store, get_user_id, require_month_key
from dashboard.db.session import get_session
from dashboard.db.settings import get_settings
from dashboard.errors import NotFound, ValidationFailed
from dashboard.models.budget_transaction import BudgetTransaction
from dashboard.models.enums import BudgetCategory
from dashboard.schemas.budget import (
    BudgetSummaryRead,
    LegacyTransactionCreate,
    LegacyTransactionRead,
    LegacyTransactionUpdate,
    MonthTransaction,
    MonthTransactionCreate,
    MonthTransactionUpdate,
    TemplateCreate,
    TemplateDeletionRead,
    TemplateRead,
)
from dashboard.schemas.common import ApiResponse
from dashboard.services import recurrence
from dashboard.services.budget_summary import BudgetSummary, CategoryAmount, summarize_budget
from dashboard.services.store import DashboardStore

router = APIRouter(prefix="/api/budget", tags=["budget"])

VALID_CATEGORIES = ", ".join(item.value for item in BudgetCategory)
LEGACY_REQUIRED_FIELDS = frozenset({"source", "category", "purpose", "due_day", "amount"})


def _parse_category(value: str) -> BudgetCategory:
    try:
        return BudgetCategory(value)
    except ValueError as exc:
        raise ValidationFailed(
            "Invalid category",
            f"Category must be one of: {VALID_CATEGORIES}. Received: {value}",
        ) from exc


def _summary_read(summary: BudgetSummary) -> BudgetSummaryRead:
    return BudgetSummaryRead(
        total_income=summary.total_income,
        total_expense=summary.total_expense,
        total_savings=summary.total_savings,
        balance=summary.balance,
    )


async def _get_legacy(session: AsyncSession, user_id: str, transaction_id: str) -> BudgetTransaction:
    transaction = await session.get(BudgetTransaction, transaction_id)
    if transaction is None or transaction.user_id != user_id:
        raise NotFound("Transaction not found", f"No transaction found with ID: {transaction_id}")
    return transaction


@router.get("", response_model=ApiResponse[list[LegacyTransactionRead]])
async def list_legacy_transactions(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    rows = await session.scalars(
        select(BudgetTransaction)
        .where(BudgetTransaction.user_id == user_id)
        .order_by(BudgetTransaction.due_day.asc(), BudgetTransaction.id.asc())
    )
    return ApiResponse(data=[LegacyTransactionRead.model_validate(item) for item in rows.all()])


@router.get("/summary", response_model=ApiResponse[BudgetSummaryRead])
async def legacy_summary(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    rows = await session.execute(
        select(BudgetTransaction.category, BudgetTransaction.amount).where(BudgetTransaction.user_id == user_id)
    )
    summary = summarize_budget(CategoryAmount(category=category, amount=amount) for category, amount in rows.all())
    return ApiResponse(data=_summary_read(summary))


@router.get("/category/{category}", response_model=ApiResponse[list[LegacyTransactionRead]])
async def list_legacy_by_category(
    category: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    parsed = _parse_category(category)
    rows = await session.scalars(
        select(BudgetTransaction)
        .where(BudgetTransaction.user_id == user_id, BudgetTransaction.category == parsed)
        .order_by(BudgetTransaction.due_day.asc(), BudgetTransaction.id.asc())
    )
    return ApiResponse(data=[LegacyTransactionRead.model_validate(item) for item in rows.all()])


@router.get("/month/{month_key}", response_model=ApiResponse[list[MonthTransaction]])
async def get_month_transactions(
    month_key: str,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    require_month_key(month_key)
    transactions = await recurrence.get_month_transactions(store, user_id, month_key)
    return ApiResponse(data=transactions)


@router.get("/month/{month_key}/summary", response_model=ApiResponse[BudgetSummaryRead])
async def get_month_summary(
    month_key: str,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    require_month_key(month_key)
    transactions = await recurrence.get_month_transactions(store, user_id, month_key)
    summary = summarize_budget(CategoryAmount(category=item.category, amount=item.amount) for item in transactions)
    return ApiResponse(data=_summary_read(summary))


@router.post(
    "/month/{month_key}/transaction",
    response_model=ApiResponse[MonthTransaction],
    status_code=status.HTTP_201_CREATED,
)
async def create_month_transaction(
    month_key: str,
    payload: MonthTransactionCreate,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    require_month_key(month_key)
    instance = await recurrence.create_month_transaction(store, user_id, month_key, payload)
    return ApiResponse(data=instance)


@router.put("/month/{month_key}/transaction/{transaction_id}", response_model=ApiResponse[MonthTransaction])
async def update_month_transaction(
    month_key: str,
    transaction_id: str,
    payload: MonthTransactionUpdate,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    require_month_key(month_key)
    instance = await recurrence.update_month_transaction(store, user_id, month_key, transaction_id, payload)
    return ApiResponse(data=instance, message="Transaction updated successfully")


@router.delete("/month/{month_key}/transaction/{transaction_id}", response_model=ApiResponse[None])
async def delete_month_transaction(
    month_key: str,
    transaction_id: str,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    require_month_key(month_key)
    await recurrence.delete_month_transaction(store, user_id, month_key, transaction_id)
    return ApiResponse(message="Transaction deleted successfully")


@router.post("/template", response_model=ApiResponse[TemplateRead], status_code=status.HTTP_201_CREATED)
async def create_template(
    payload: TemplateCreate,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    template = await recurrence.create_template(
        store,
        user_id,
        payload,
        fanout_months=get_settings().fanout_months,
    )
    return ApiResponse(data=template)


@router.delete("/template/{template_id}/from/{month_key}", response_model=ApiResponse[TemplateDeletionRead])
async def delete_template_from_month(
    template_id: str,
    month_key: str,
    user_id: str = Depends(get_user_id),
    store: DashboardStore = Depends(get_store),
) -> ApiResponse:
    require_month_key(month_key)
    deletion = await recurrence.delete_template_from_month(store, user_id, template_id, month_key)
    return ApiResponse(
        data=TemplateDeletionRead(
            template_id=deletion.template_id,
            month_key=deletion.month_key,
            template_deleted=deletion.template_deleted,
            instances_removed=deletion.instances_removed,
        ),
        message=deletion.message,
    )


@router.get("/{transaction_id}", response_model=ApiResponse[LegacyTransactionRead])
async def get_legacy_transaction(
    transaction_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    transaction = await _get_legacy(session, user_id, transaction_id)
    return ApiResponse(data=LegacyTransactionRead.model_validate(transaction))


@router.post("", response_model=ApiResponse[LegacyTransactionRead], status_code=status.HTTP_201_CREATED)
async def create_legacy_transaction(
    payload: LegacyTransactionCreate,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    transaction = BudgetTransaction(user_id=user_id, **payload.model_dump())
    session.add(transaction)
    await session.commit()
    await session.refresh(transaction)
    return ApiResponse(data=LegacyTransactionRead.model_validate(transaction))


@router.put("/{transaction_id}", response_model=ApiResponse[LegacyTransactionRead])
async def update_legacy_transaction(
    transaction_id: str,
    payload: LegacyTransactionUpdate,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    transaction = await _get_legacy(session, user_id, transaction_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in LEGACY_REQUIRED_FIELDS:
            continue
        setattr(transaction, field, value)

    await session.commit()
    await session.refresh(transaction)
    return ApiResponse(data=LegacyTransactionRead.model_validate(transaction))


@router.delete("/{transaction_id}", response_model=ApiResponse[None])
async def delete_legacy_transaction(
    transaction_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    transaction = await _get_legacy(session, user_id, transaction_id)
    await session.delete(transaction)
    await session.commit()
    return ApiResponse(message="Transaction deleted successfully")
