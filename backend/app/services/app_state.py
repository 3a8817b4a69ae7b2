"""App state store - scalar values kept across launches."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import StoreUnavailable
from app.models.app_state import AppState
from app.services.transaction_store import CONNECTIVITY_ERRORS

logger = logging.getLogger(__name__)

LAST_OPEN_KEY = "lastOpenDate"
DB_INITIALIZED_KEY = "dbInitialized"


class AppStateStore:
    """Get/set access to the app_state key/value table."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        try:
            row = self.db.query(AppState).filter(AppState.key == key).first()
        except CONNECTIVITY_ERRORS as e:
            raise StoreUnavailable(f"App state store unavailable: {e}") from e
        return row.value if row else None

    def set(self, key: str, value: Optional[str]) -> None:
        try:
            row = self.db.query(AppState).filter(AppState.key == key).first()
            if row:
                row.value = value
            else:
                self.db.add(AppState(key=key, value=value))
            self.db.commit()
        except CONNECTIVITY_ERRORS as e:
            self.db.rollback()
            raise StoreUnavailable(f"App state store unavailable: {e}") from e
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def delete(self, key: str) -> None:
        try:
            self.db.query(AppState).filter(AppState.key == key).delete()
            self.db.commit()
        except CONNECTIVITY_ERRORS as e:
            self.db.rollback()
            raise StoreUnavailable(f"App state store unavailable: {e}") from e

    def get_last_open(self) -> Optional[datetime]:
        """When materialization last completed, or None on first launch."""
        raw = self.get(LAST_OPEN_KEY)
        if not raw:
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            logger.warning(f"Ignoring unreadable {LAST_OPEN_KEY} value {raw!r}")
            return None

    def set_last_open(self, when: datetime) -> None:
        self.set(LAST_OPEN_KEY, when.isoformat())

    def get_database_initialized(self) -> bool:
        return self.get(DB_INITIALIZED_KEY) == "true"

    def set_database_initialized(self, initialized: bool) -> None:
        self.set(DB_INITIALIZED_KEY, "true" if initialized else "false")
