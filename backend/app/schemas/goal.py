"""
Goal schemas.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class SavingsGoal(BaseModel):
    date: Optional[dt.date] = None
    amount: Optional[Decimal] = Field(None, ge=0)

    @model_validator(mode="after")
    def date_and_amount_together(self):
        if self.amount is not None and self.date is None:
            raise ValueError("Date is required for savings goal")
        if self.date is not None and self.amount is None:
            raise ValueError("Amount is required for savings goal")
        return self


class IncomeGoal(BaseModel):
    per_day: Optional[Decimal] = Field(None, ge=0)
    per_month: Optional[Decimal] = Field(None, ge=0)
    per_year: Optional[Decimal] = Field(None, ge=0)


class Goals(BaseModel):
    savings: SavingsGoal = Field(default_factory=SavingsGoal)
    income: IncomeGoal = Field(default_factory=IncomeGoal)
