"""Savings and income goals, kept as scalars in the app state store."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from app.schemas.goal import Goals, IncomeGoal, SavingsGoal
from app.services.app_state import AppStateStore

logger = logging.getLogger(__name__)

SAVINGS_DATE_KEY = "savingsGoalDate"
SAVINGS_AMOUNT_KEY = "savingsGoalAmount"
INCOME_PER_DAY_KEY = "incomeGoalPerDay"
INCOME_PER_MONTH_KEY = "incomeGoalPerMonth"
INCOME_PER_YEAR_KEY = "incomeGoalPerYear"


def _to_decimal(raw: Optional[str]) -> Optional[Decimal]:
    if raw is None or raw == "":
        return None
    try:
        return Decimal(raw)
    except InvalidOperation:
        logger.warning(f"Ignoring unreadable goal amount {raw!r}")
        return None


def _to_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        logger.warning(f"Ignoring unreadable goal date {raw!r}")
        return None


def _to_text(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def get_goals(store: AppStateStore) -> Goals:
    """Read both goals; missing or unreadable values come back as None."""
    savings_date = _to_date(store.get(SAVINGS_DATE_KEY))
    savings_amount = _to_decimal(store.get(SAVINGS_AMOUNT_KEY))
    if (savings_date is None) != (savings_amount is None):
        # Half a savings goal isn't a goal
        savings_date = savings_amount = None

    return Goals(
        savings=SavingsGoal(date=savings_date, amount=savings_amount),
        income=IncomeGoal(
            per_day=_to_decimal(store.get(INCOME_PER_DAY_KEY)),
            per_month=_to_decimal(store.get(INCOME_PER_MONTH_KEY)),
            per_year=_to_decimal(store.get(INCOME_PER_YEAR_KEY)),
        ),
    )


def set_goals(store: AppStateStore, goals: Goals) -> Goals:
    """Overwrite both goals."""
    store.set(SAVINGS_DATE_KEY, _to_text(goals.savings.date))
    store.set(SAVINGS_AMOUNT_KEY, _to_text(goals.savings.amount))
    store.set(INCOME_PER_DAY_KEY, _to_text(goals.income.per_day))
    store.set(INCOME_PER_MONTH_KEY, _to_text(goals.income.per_month))
    store.set(INCOME_PER_YEAR_KEY, _to_text(goals.income.per_year))
    return get_goals(store)
