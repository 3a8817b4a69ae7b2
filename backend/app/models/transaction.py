"""
Transaction database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Date, Numeric, Text, JSON, Enum, Index
import enum
from app.database import Base


class TransactionType(str, enum.Enum):
    """Transaction type enumeration."""
    expense = "expense"
    income = "income"


class TransactionCategory(str, enum.Enum):
    """Transaction category enumeration."""
    food = "Food"
    entertainment = "Entertainment"
    utilities = "Utilities"
    groceries = "Groceries"
    rent = "Rent"
    transportation = "Transportation"
    dining = "Dining"
    subscriptions = "Subscriptions"
    salary = "Salary"
    freelance = "Freelance"
    investment = "Investment"
    gift = "Gift"
    other = "Other"


EXPENSE_CATEGORIES = [
    TransactionCategory.food,
    TransactionCategory.entertainment,
    TransactionCategory.utilities,
    TransactionCategory.groceries,
    TransactionCategory.rent,
    TransactionCategory.transportation,
    TransactionCategory.dining,
    TransactionCategory.subscriptions,
    TransactionCategory.other,
]

INCOME_CATEGORIES = [
    TransactionCategory.salary,
    TransactionCategory.freelance,
    TransactionCategory.investment,
    TransactionCategory.gift,
    TransactionCategory.other,
]

CATEGORIES_BY_TYPE = {
    TransactionType.expense: EXPENSE_CATEGORIES,
    TransactionType.income: INCOME_CATEGORIES,
}


class Transaction(Base):
    """
    Transaction model.

    A row is either a concrete transaction (date set, no recurring spec) or a
    recurring template (is_recurring set, date null, recurring_frequency set).
    """

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=True, index=True)  # Null for recurring templates
    type = Column(Enum(TransactionType), nullable=False)
    category = Column(Enum(TransactionCategory), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # Always positive, sign comes from type
    description = Column(Text, nullable=True)
    is_recurring = Column(Boolean, default=False, nullable=False, index=True)
    recurring_frequency = Column(JSON(none_as_null=True), nullable=True)  # {"frequency", "time": {"month", "day", "date"}}
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_transaction_type_category", "type", "category"),
    )
