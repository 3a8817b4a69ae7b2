"""
Database models package.
"""

from app.models.transaction import (
    Transaction,
    TransactionType,
    TransactionCategory,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    CATEGORIES_BY_TYPE,
)
from app.models.budget import Budget
from app.models.app_state import AppState

__all__ = [
    "Transaction",
    "TransactionType",
    "TransactionCategory",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "CATEGORIES_BY_TYPE",
    "Budget",
    "AppState",
]
