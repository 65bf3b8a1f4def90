from dashboard.models.budget_template import BudgetTemplate
from dashboard.models.budget_transaction import BudgetTransaction
from dashboard.models.cooking_session import CookingSession
from dashboard.models.enums import (
    BudgetCategory,
    DateType,
    InboxMessageType,
    Priority,
    RepeatType,
    SourceType,
    TimeUnit,
    WeekendRule,
)
from dashboard.models.event_record import EventRecord
from dashboard.models.inbox_notification import InboxNotification
from dashboard.models.monthly_budget import MonthlyBudget
from dashboard.models.notification_record import NotificationRecord
from dashboard.models.recipe import Recipe
from dashboard.models.recipe_category import RecipeCategory
from dashboard.models.todo import Todo

__all__ = [
    "BudgetTemplate",
    "BudgetTransaction",
    "CookingSession",
    "EventRecord",
    "InboxNotification",
    "MonthlyBudget",
    "NotificationRecord",
    "Recipe",
    "RecipeCategory",
    "Todo",
    "BudgetCategory",
    "DateType",
    "InboxMessageType",
    "Priority",
    "RepeatType",
    "SourceType",
    "TimeUnit",
    "WeekendRule",
]
