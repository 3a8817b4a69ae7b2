"""
Budget API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import date
from decimal import Decimal
from typing import List, Optional

from app.dependencies import get_db
from app.models import Budget, Transaction, TransactionType, EXPENSE_CATEGORIES
from app.schemas.budget import (
    BudgetUpdate,
    BudgetResponse,
    BudgetProgress,
    BudgetProgressResponse,
)

router = APIRouter(prefix="/budgets", tags=["budgets"])


def month_bounds(year: int, month: int):
    """Return [start, end) dates for a calendar month."""
    start_date = date(year, month, 1)
    if month == 12:
        end_date = date(year + 1, 1, 1)
    else:
        end_date = date(year, month + 1, 1)
    return start_date, end_date


@router.get("", response_model=List[BudgetResponse])
def list_budgets(
    year: Optional[int] = Query(None, ge=1000, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db)
):
    """List budgets, optionally for one year and/or month."""
    query = db.query(Budget)
    if year is not None:
        query = query.filter(Budget.year == year)
    if month is not None:
        query = query.filter(Budget.month == month)

    budgets = query.order_by(Budget.year, Budget.month, Budget.category).all()
    return [BudgetResponse.model_validate(b) for b in budgets]


@router.put("", response_model=BudgetResponse)
def upsert_budget(
    data: BudgetUpdate,
    db: Session = Depends(get_db)
):
    """Set the budget amount for a (year, month, category)."""
    budget = db.query(Budget).filter(
        Budget.year == data.year,
        Budget.month == data.month,
        Budget.category == data.category
    ).first()

    if budget:
        budget.amount = data.amount
    else:
        budget = Budget(year=data.year, month=data.month, category=data.category, amount=data.amount)
        db.add(budget)

    db.commit()
    db.refresh(budget)
    return BudgetResponse.model_validate(budget)


@router.get("/progress", response_model=BudgetProgressResponse)
def get_budget_progress(
    year: Optional[int] = Query(None, ge=1000, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db)
):
    """
    Spending against budget for each expense category in a month.
    Defaults to the current month.
    """
    today = date.today()
    year = year or today.year
    month = month or today.month
    start_date, end_date = month_bounds(year, month)

    budgets = {
        b.category: b.amount
        for b in db.query(Budget).filter(Budget.year == year, Budget.month == month).all()
    }

    spent_rows = db.query(Transaction.category, func.sum(Transaction.amount)).filter(
        Transaction.type == TransactionType.expense,
        Transaction.is_recurring == False,
        Transaction.date >= start_date,
        Transaction.date < end_date
    ).group_by(Transaction.category).all()
    spent = {category: Decimal(str(total or 0)) for category, total in spent_rows}

    items = []
    for category in EXPENSE_CATEGORIES:
        budget = Decimal(budgets.get(category) or 0)
        category_spent = spent.get(category, Decimal("0"))
        # Progress against a zero budget is measured against 1, as the app's progress bars do
        percent = float(category_spent / (budget or Decimal("1")) * 100)
        items.append(BudgetProgress(
            category=category,
            budget=budget,
            spent=category_spent,
            percent=round(percent, 1)
        ))

    return BudgetProgressResponse(
        year=year,
        month=month,
        items=items,
        total_budget=sum((i.budget for i in items), Decimal("0")),
        total_spent=sum((i.spent for i in items), Decimal("0"))
    )
