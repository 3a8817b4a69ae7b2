"""
Dashboard API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
from decimal import Decimal

from app.api.budgets import month_bounds
from app.dependencies import get_db
from app.models.transaction import Transaction, TransactionType
from app.schemas.dashboard import DashboardSummary, CategoryTotal, VsLastMonth, MonthTrend, RecentTransaction

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _dated_transactions(db: Session, start_date: date, end_date: date) -> List[Transaction]:
    """Concrete transactions in [start_date, end_date); recurring templates have no date."""
    return db.query(Transaction).filter(
        Transaction.is_recurring == False,
        Transaction.date >= start_date,
        Transaction.date < end_date
    ).all()


def _totals(transactions: List[Transaction]):
    income = sum((t.amount for t in transactions if t.type == TransactionType.income), Decimal("0"))
    expenses = sum((t.amount for t in transactions if t.type == TransactionType.expense), Decimal("0"))
    return income, expenses


def _by_category(transactions: List[Transaction], type_: TransactionType) -> List[CategoryTotal]:
    totals = {}
    for t in transactions:
        if t.type == type_:
            totals[t.category.value] = totals.get(t.category.value, Decimal("0")) + t.amount

    grand_total = sum(totals.values(), Decimal("0"))
    return [
        CategoryTotal(
            category=category,
            amount=float(amount),
            percent=float(amount / grand_total * 100) if grand_total > 0 else 0
        )
        for category, amount in sorted(totals.items(), key=lambda x: x[1], reverse=True)
    ]


@router.get("/summary", response_model=DashboardSummary)
def get_dashboard_summary(
    month: Optional[str] = Query(None, description="YYYY-MM format"),
    db: Session = Depends(get_db)
):
    """
    Get dashboard summary for a month.
    Returns: total_income, total_expenses, net, per-category totals, vs_last_month
    """
    if month:
        try:
            year, m = map(int, month.split('-'))
            start_date, end_date = month_bounds(year, m)
        except ValueError:
            raise HTTPException(status_code=422, detail="month must be in YYYY-MM format")
    else:
        today = date.today()
        start_date, end_date = month_bounds(today.year, today.month)

    transactions = _dated_transactions(db, start_date, end_date)
    total_income, total_expenses = _totals(transactions)

    prev_month = start_date.month - 1 if start_date.month > 1 else 12
    prev_year = start_date.year if start_date.month > 1 else start_date.year - 1
    prev_start = date(prev_year, prev_month, 1)

    prev_income, prev_expenses = _totals(_dated_transactions(db, prev_start, start_date))

    income_change_pct = ((total_income - prev_income) / prev_income * 100) if prev_income > 0 else 0
    expense_change_pct = ((total_expenses - prev_expenses) / prev_expenses * 100) if prev_expenses > 0 else 0

    return DashboardSummary(
        month=start_date.strftime("%Y-%m"),
        total_income=float(total_income),
        total_expenses=float(total_expenses),
        net=float(total_income - total_expenses),
        expenses_by_category=_by_category(transactions, TransactionType.expense),
        income_by_category=_by_category(transactions, TransactionType.income),
        vs_last_month=VsLastMonth(
            income_change_pct=round(float(income_change_pct), 1),
            expense_change_pct=round(float(expense_change_pct), 1)
        )
    )


@router.get("/yearly", response_model=list[MonthTrend])
def get_yearly_trends(
    year: Optional[int] = Query(None, ge=1000, le=9999),
    db: Session = Depends(get_db)
):
    """
    Income and expenses for each month of a year, for the yearly chart.
    Returns: [{month, income, expenses, net}, ...] January first
    """
    year = year or date.today().year
    trends = []

    for m in range(1, 13):
        start_date, end_date = month_bounds(year, m)
        income, expenses = _totals(_dated_transactions(db, start_date, end_date))

        trends.append(MonthTrend(
            month=start_date.strftime("%Y-%m"),
            income=float(income),
            expenses=float(expenses),
            net=float(income - expenses)
        ))

    return trends


@router.get("/recent-transactions", response_model=list[RecentTransaction])
def get_recent_transactions(
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db)
):
    """Get most recent transactions for dashboard widget"""
    transactions = db.query(Transaction).filter(
        Transaction.is_recurring == False
    ).order_by(
        Transaction.date.desc()
    ).limit(limit).all()

    return [
        RecentTransaction(
            id=str(t.id),
            date=t.date.isoformat(),
            description=t.description or "",
            category=t.category.value,
            type=t.type.value,
            amount=float(t.amount)
        )
        for t in transactions
    ]
