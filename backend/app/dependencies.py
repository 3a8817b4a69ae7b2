"""
FastAPI dependencies.
"""

from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session
from app.database import SessionLocal
from app.services.app_state import AppStateStore
from app.services.transaction_store import TransactionStore


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_transaction_store(db: Session = Depends(get_db)) -> TransactionStore:
    return TransactionStore(db)


def get_app_state_store(db: Session = Depends(get_db)) -> AppStateStore:
    return AppStateStore(db)
