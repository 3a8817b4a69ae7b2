"""
Budget schemas.
"""

from pydantic import BaseModel, Field, field_validator
from decimal import Decimal
from typing import List

from app.models.transaction import EXPENSE_CATEGORIES, TransactionCategory


class BudgetBase(BaseModel):
    year: int = Field(..., ge=1000, le=9999)
    month: int = Field(..., ge=1, le=12)
    category: TransactionCategory

    @field_validator("category")
    @classmethod
    def expense_category_only(cls, value):
        if value not in EXPENSE_CATEGORIES:
            raise ValueError(f"Budgets are only kept for expense categories, not {value.value}")
        return value


class BudgetUpdate(BudgetBase):
    amount: Decimal = Field(..., gt=0)


class BudgetResponse(BudgetBase):
    amount: Decimal

    class Config:
        from_attributes = True


class BudgetProgress(BaseModel):
    category: TransactionCategory
    budget: Decimal
    spent: Decimal
    percent: float


class BudgetProgressResponse(BaseModel):
    year: int
    month: int
    items: List[BudgetProgress]
    total_budget: Decimal
    total_spent: Decimal
