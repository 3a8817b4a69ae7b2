"""
Budget database model.
"""

from sqlalchemy import Column, Integer, Numeric, Enum
from app.database import Base
from app.models.transaction import TransactionCategory


class Budget(Base):
    """Monthly spending budget for one expense category."""

    __tablename__ = "budgets"

    year = Column(Integer, primary_key=True)
    month = Column(Integer, primary_key=True)
    category = Column(Enum(TransactionCategory), primary_key=True)
    amount = Column(Numeric(12, 2), default=0, nullable=False)
