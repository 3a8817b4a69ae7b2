"""
Seed script for default budgets.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from app.database import SessionLocal, init_db
from app.models import Budget, EXPENSE_CATEGORIES

logger = logging.getLogger(__name__)


def seed_budgets(db: Session, today: Optional[date] = None) -> int:
    """
    Give every expense category a zero budget for the current month.
    Existing budgets are left alone. Returns the number of rows added.
    """
    today = today or date.today()

    existing = {
        b.category
        for b in db.query(Budget).filter(Budget.year == today.year, Budget.month == today.month).all()
    }

    added = 0
    for category in EXPENSE_CATEGORIES:
        if category in existing:
            continue
        db.add(Budget(year=today.year, month=today.month, category=category, amount=Decimal("0")))
        added += 1

    if added:
        db.commit()
        logger.info(f"Seeded {added} budgets for {today.year}-{today.month:02d}")
    return added


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        count = seed_budgets(session)
        print(f"Successfully seeded {count} budgets")
    finally:
        session.close()
