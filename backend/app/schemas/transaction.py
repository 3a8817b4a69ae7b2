"""
Transaction schemas.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.exceptions import InvalidSpec
from app.models.transaction import CATEGORIES_BY_TYPE, TransactionCategory, TransactionType
from app.schemas.recurring import RecurringSpec


class TransactionBase(BaseModel):
    date: Optional[dt.date] = None
    type: TransactionType
    category: TransactionCategory
    amount: Decimal = Field(..., gt=0)
    description: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringSpec] = None

    @model_validator(mode="after")
    def check_consistency(self):
        if self.category not in CATEGORIES_BY_TYPE[self.type]:
            raise ValueError(f"Category {self.category.value} is not valid for {self.type.value} transactions")
        if self.is_recurring:
            if self.date is not None:
                raise ValueError("Recurring transactions carry no date")
            if self.recurring_frequency is None:
                raise ValueError("Recurring transactions require recurring_frequency")
        else:
            if self.date is None:
                raise ValueError("Date is required")
            if self.recurring_frequency is not None:
                raise ValueError("Only recurring transactions may carry recurring_frequency")
        return self


class TransactionCreate(TransactionBase):
    pass


class TransactionUpdate(BaseModel):
    date: Optional[dt.date] = None
    type: Optional[TransactionType] = None
    category: Optional[TransactionCategory] = None
    amount: Optional[Decimal] = Field(None, gt=0)
    description: Optional[str] = None
    is_recurring: Optional[bool] = None
    recurring_frequency: Optional[RecurringSpec] = None


class TransactionResponse(BaseModel):
    id: str
    date: Optional[dt.date]
    type: TransactionType
    category: TransactionCategory
    amount: Decimal
    description: Optional[str]
    is_recurring: bool
    recurring_frequency: Optional[RecurringSpec]
    created_at: dt.datetime
    updated_at: dt.datetime

    @field_validator("recurring_frequency", mode="before")
    @classmethod
    def parse_stored_spec(cls, value):
        # A malformed stored spec is shown as absent rather than failing the listing
        if value is None or isinstance(value, RecurringSpec):
            return value
        try:
            return RecurringSpec.from_storage(value)
        except InvalidSpec:
            return None

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    pages: int


class TransactionTemplate(BaseModel):
    """A recurring transaction as read from the store, spec already validated."""
    id: str
    type: TransactionType
    category: TransactionCategory
    amount: Decimal
    description: Optional[str] = None
    spec: Optional[RecurringSpec] = None
    spec_error: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "TransactionTemplate":
        spec, error = None, None
        try:
            spec = RecurringSpec.from_storage(row.recurring_frequency)
        except InvalidSpec as e:
            error = str(e)
        return cls(
            id=row.id,
            type=row.type,
            category=row.category,
            amount=row.amount,
            description=row.description,
            spec=spec,
            spec_error=error,
        )

    def instantiate(self, on: dt.date) -> TransactionCreate:
        """Build the concrete, non-recurring transaction for one occurrence."""
        return TransactionCreate(
            date=on,
            type=self.type,
            category=self.category,
            amount=self.amount,
            description=self.description,
            is_recurring=False,
            recurring_frequency=None,
        )


class CreateResult(BaseModel):
    success: bool
    id: Optional[str] = None
