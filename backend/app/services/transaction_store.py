"""
Transaction store: SQLAlchemy-backed reads and writes of transaction rows.

The store is constructed around an explicit Session so callers (API
dependencies, the startup hook, tests) decide which database it talks to.
Recurring specs are validated when read and serialized when written.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import PersistFailure, StoreUnavailable
from app.models.transaction import Transaction, TransactionCategory, TransactionType
from app.schemas.recurring import Frequency
from app.schemas.transaction import (
    CreateResult,
    TransactionBase,
    TransactionCreate,
    TransactionTemplate,
    TransactionUpdate,
)

CONNECTIVITY_ERRORS = (OperationalError, InterfaceError)


class TransactionStore:
    """Create/read/update/delete access to the transactions table."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except CONNECTIVITY_ERRORS as e:
            self.db.rollback()
            raise StoreUnavailable(f"Transaction store unavailable while trying to {action}: {e}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistFailure(f"Failed to {action}: {e}") from e

    def list_recurring_templates(self) -> List[TransactionTemplate]:
        """All recurring templates, each with a validated spec or the reason it is unusable."""
        try:
            rows = self.db.query(Transaction).filter(
                Transaction.is_recurring == True
            ).order_by(Transaction.created_at).all()
        except CONNECTIVITY_ERRORS as e:
            raise StoreUnavailable(f"Transaction store unavailable: {e}") from e

        return [TransactionTemplate.from_row(row) for row in rows]

    def add(self, data: TransactionCreate) -> Transaction:
        """Insert a transaction row and return it."""
        transaction = Transaction(
            id=str(uuid.uuid4()),
            date=data.date,
            type=data.type,
            category=data.category,
            amount=data.amount,
            description=data.description,
            is_recurring=data.is_recurring,
            recurring_frequency=data.recurring_frequency.to_storage() if data.recurring_frequency else None,
        )
        self.db.add(transaction)
        self._commit("create transaction")
        return transaction

    def create(self, data: TransactionCreate) -> CreateResult:
        """Insert a transaction; raises PersistFailure or StoreUnavailable on error."""
        transaction = self.add(data)
        return CreateResult(success=True, id=transaction.id)

    def get(self, transaction_id: str) -> Optional[Transaction]:
        try:
            return self.db.query(Transaction).filter(Transaction.id == transaction_id).first()
        except CONNECTIVITY_ERRORS as e:
            raise StoreUnavailable(f"Transaction store unavailable: {e}") from e

    def list_transactions(
        self,
        page: int = 1,
        per_page: int = 50,
        type: Optional[TransactionType] = None,
        category: Optional[TransactionCategory] = None,
        is_recurring: Optional[bool] = None,
        frequency: Optional[Frequency] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Transaction], int]:
        """Filtered, paginated listing. Returns (rows, total)."""
        query = self.db.query(Transaction)

        if type:
            query = query.filter(Transaction.type == type)
        if category:
            query = query.filter(Transaction.category == category)
        if is_recurring is not None:
            query = query.filter(Transaction.is_recurring == is_recurring)
        if frequency:
            query = query.filter(
                Transaction.recurring_frequency["frequency"].as_string() == frequency.value
            )
        if start_date:
            query = query.filter(Transaction.date >= start_date)
        if end_date:
            query = query.filter(Transaction.date <= end_date)
        if amount is not None:
            query = query.filter(Transaction.amount == amount)
        if search:
            query = query.filter(Transaction.description.ilike(f"%{search}%"))

        try:
            total = query.count()
            # Templates (no date) sort after dated rows
            rows = query.order_by(
                Transaction.date.is_(None), Transaction.date.desc(), Transaction.created_at.desc()
            ).offset((page - 1) * per_page).limit(per_page).all()
        except CONNECTIVITY_ERRORS as e:
            raise StoreUnavailable(f"Transaction store unavailable: {e}") from e

        return rows, total

    def update(self, transaction: Transaction, update: TransactionUpdate) -> Transaction:
        """
        Apply a partial update and re-validate the whole row.

        Turning a template into a one-off transaction discards its spec;
        turning a transaction into a template discards its date.
        Raises ValueError (pydantic ValidationError) when the result is invalid.
        """
        current = {
            "date": transaction.date,
            "type": transaction.type,
            "category": transaction.category,
            "amount": transaction.amount,
            "description": transaction.description,
            "is_recurring": transaction.is_recurring,
            "recurring_frequency": transaction.recurring_frequency,
        }
        current.update(update.model_dump(exclude_unset=True))

        if current["is_recurring"]:
            current["date"] = None
        else:
            current["recurring_frequency"] = None

        validated = TransactionBase.model_validate(current)

        transaction.date = validated.date
        transaction.type = validated.type
        transaction.category = validated.category
        transaction.amount = validated.amount
        transaction.description = validated.description
        transaction.is_recurring = validated.is_recurring
        transaction.recurring_frequency = (
            validated.recurring_frequency.to_storage() if validated.recurring_frequency else None
        )
        self._commit("update transaction")
        self.db.refresh(transaction)
        return transaction

    def delete(self, transaction: Transaction) -> None:
        self.db.delete(transaction)
        self._commit("delete transaction")
