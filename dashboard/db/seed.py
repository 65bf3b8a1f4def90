import logging
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.models.enums import BudgetCategory
from dashboard.models.recipe_category import RecipeCategory
from dashboard.schemas.budget import TemplateCreate
from dashboard.services.recipes import FALLBACK_CATEGORY, get_category_by_name
from dashboard.services.recurrence import create_template
from dashboard.services.store import DashboardStore

logger = logging.getLogger(__name__)

DEMO_TEMPLATES: Sequence[tuple[str, BudgetCategory, str, int, int, int]] = (
    ("Monthly Salary", BudgetCategory.INCOME, "Primary income source", 1, 75000, 75000),
    ("Freelance Work", BudgetCategory.INCOME, "Side projects and consulting", 5, 25000, 20000),
    ("House Rent", BudgetCategory.EXPENSE, "Monthly rent payment", 5, 18000, 18000),
    ("Groceries & Food", BudgetCategory.EXPENSE, "Monthly food expenses", 15, 8000, 7000),
    ("Utilities", BudgetCategory.EXPENSE, "Electricity, water, internet", 10, 3500, 3500),
    ("SIP - Equity Fund", BudgetCategory.SAVINGS, "Long-term wealth creation", 10, 5000, 5000),
)


async def _ensure_fallback_category(session: AsyncSession, user_id: str) -> None:
    category = await get_category_by_name(session, user_id, FALLBACK_CATEGORY)
    if category is None:
        session.add(RecipeCategory(user_id=user_id, name=FALLBACK_CATEGORY, description="", count=0))
        await session.commit()


async def _seed_demo_templates(store: DashboardStore, user_id: str, fanout_months: int) -> None:
    if await store.list_templates(user_id):
        return

    for source, category, purpose, due_day, amount, expected_amount in DEMO_TEMPLATES:
        await create_template(
            store,
            user_id,
            TemplateCreate(
                source=source,
                category=category,
                purpose=purpose,
                due_day=due_day,
                amount=Decimal(amount),
                expected_amount=Decimal(expected_amount),
            ),
            fanout_months=fanout_months,
        )
    logger.info("Seeded %d demo budget templates for %s", len(DEMO_TEMPLATES), user_id)


async def seed_initial_data(
    session: AsyncSession,
    user_id: str,
    seed_demo: bool = False,
    fanout_months: int = 13,
) -> None:
    await _ensure_fallback_category(session, user_id)
    if seed_demo:
        await _seed_demo_templates(DashboardStore(session), user_id, fanout_months)
