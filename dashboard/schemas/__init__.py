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
from dashboard.schemas.common import ApiResponse, CamelModel, CountRead
from dashboard.schemas.cooking_session import CookingSessionRead, CookingSessionSave
from dashboard.schemas.derived import (
    EventRecordCreate,
    EventRecordRead,
    NotificationRecordCreate,
    NotificationRecordRead,
)
from dashboard.schemas.inbox import InboxNotificationCreate, InboxNotificationRead
from dashboard.schemas.recipe import (
    Direction,
    Ingredient,
    RecipeCategoryCreate,
    RecipeCategoryRead,
    RecipeCreate,
    RecipeRead,
    RecipeUpdate,
)
from dashboard.schemas.todo import TodoCreate, TodoRead, TodoUpdate

__all__ = [
    "ApiResponse",
    "CamelModel",
    "CountRead",
    "BudgetSummaryRead",
    "LegacyTransactionCreate",
    "LegacyTransactionRead",
    "LegacyTransactionUpdate",
    "MonthTransaction",
    "MonthTransactionCreate",
    "MonthTransactionUpdate",
    "TemplateCreate",
    "TemplateDeletionRead",
    "TemplateRead",
    "CookingSessionRead",
    "CookingSessionSave",
    "EventRecordCreate",
    "EventRecordRead",
    "NotificationRecordCreate",
    "NotificationRecordRead",
    "InboxNotificationCreate",
    "InboxNotificationRead",
    "Direction",
    "Ingredient",
    "RecipeCategoryCreate",
    "RecipeCategoryRead",
    "RecipeCreate",
    "RecipeRead",
    "RecipeUpdate",
    "TodoCreate",
    "TodoRead",
    "TodoUpdate",
]
