"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from datetime import date
from decimal import Decimal

from app.dependencies import get_transaction_store
from app.models.transaction import TransactionCategory, TransactionType
from app.schemas.recurring import Frequency
from app.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse
)
from app.services.transaction_store import TransactionStore

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    type: Optional[TransactionType] = None,
    category: Optional[TransactionCategory] = None,
    is_recurring: Optional[bool] = None,
    frequency: Optional[Frequency] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    amount: Optional[Decimal] = None,
    search: Optional[str] = None,
    store: TransactionStore = Depends(get_transaction_store)
):
    """List transactions with filtering and pagination"""
    transactions, total = store.list_transactions(
        page=page,
        per_page=per_page,
        type=type,
        category=category,
        is_recurring=is_recurring,
        frequency=frequency,
        start_date=start_date,
        end_date=end_date,
        amount=amount,
        search=search,
    )
    pages = (total + per_page - 1) // per_page

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in transactions],
        total=total,
        page=page,
        pages=pages
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreate,
    store: TransactionStore = Depends(get_transaction_store)
):
    """Create a transaction or a recurring template"""
    transaction = store.add(data)
    return TransactionResponse.model_validate(transaction)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    store: TransactionStore = Depends(get_transaction_store)
):
    """Get a single transaction"""
    transaction = store.get(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return TransactionResponse.model_validate(transaction)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    store: TransactionStore = Depends(get_transaction_store)
):
    """Update a transaction; switching recurring off discards the recurring spec"""
    transaction = store.get(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")

    try:
        transaction = store.update(transaction, update)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return TransactionResponse.model_validate(transaction)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    store: TransactionStore = Depends(get_transaction_store)
):
    """Delete a transaction"""
    transaction = store.get(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    store.delete(transaction)
