"""
Dashboard schemas.
"""

from pydantic import BaseModel
from typing import List


class CategoryTotal(BaseModel):
    category: str
    amount: float
    percent: float


class VsLastMonth(BaseModel):
    income_change_pct: float
    expense_change_pct: float


class DashboardSummary(BaseModel):
    month: str
    total_income: float
    total_expenses: float
    net: float
    expenses_by_category: List[CategoryTotal]
    income_by_category: List[CategoryTotal]
    vs_last_month: VsLastMonth


class MonthTrend(BaseModel):
    month: str
    income: float
    expenses: float
    net: float


class RecentTransaction(BaseModel):
    id: str
    date: str
    description: str
    category: str
    type: str
    amount: float
