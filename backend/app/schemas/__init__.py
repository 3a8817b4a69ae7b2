"""
Pydantic schemas package.
"""

from app.schemas.recurring import (
    Frequency,
    Weekday,
    RecurringAnchor,
    RecurringSpec,
    RecurringTemplateResponse,
    MaterializationResponse,
)
from app.schemas.transaction import (
    TransactionBase,
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    TransactionTemplate,
    CreateResult,
)
from app.schemas.budget import (
    BudgetBase,
    BudgetUpdate,
    BudgetResponse,
    BudgetProgress,
    BudgetProgressResponse,
)
from app.schemas.goal import (
    SavingsGoal,
    IncomeGoal,
    Goals,
)

__all__ = [
    "Frequency",
    "Weekday",
    "RecurringAnchor",
    "RecurringSpec",
    "RecurringTemplateResponse",
    "MaterializationResponse",
    "TransactionBase",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "TransactionTemplate",
    "CreateResult",
    "BudgetBase",
    "BudgetUpdate",
    "BudgetResponse",
    "BudgetProgress",
    "BudgetProgressResponse",
    "SavingsGoal",
    "IncomeGoal",
    "Goals",
]
