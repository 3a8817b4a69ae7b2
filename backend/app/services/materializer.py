"""
Recurring transaction materialization.

On each launch, turns every recurring template's occurrences since the last
launch into concrete transactions. The last-open marker is the only record
of coverage: a pass runs at most once per calendar day, and the marker only
advances once a pass has finished without losing the store.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Protocol, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import InvalidSpec, PersistFailure, StoreUnavailable
from app.schemas.transaction import TransactionTemplate
from app.services.app_state import AppStateStore
from app.services.recurrence_rules import occurrences
from app.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()


@dataclass
class MaterializationResult:
    """What a single pass did."""
    first_launch: bool = False
    already_ran_today: bool = False
    window_start: Optional[date] = None
    window_end: Optional[date] = None
    created_ids: List[str] = field(default_factory=list)
    skipped_templates: List[str] = field(default_factory=list)
    failed_occurrences: List[Tuple[str, date]] = field(default_factory=list)
    last_open: Optional[datetime] = None

    @property
    def created(self) -> int:
        return len(self.created_ids)


class RecurringMaterializer:
    """Generates the transactions recurring templates owe since the last launch."""

    def __init__(
        self,
        transactions: TransactionStore,
        app_state: AppStateStore,
        clock: Optional[Clock] = None,
    ):
        self.transactions = transactions
        self.app_state = app_state
        self.clock = clock or SystemClock()

    def materialize(self, now: Optional[datetime] = None) -> MaterializationResult:
        """
        Run one pass for the window (last open date, now].

        Raises StoreUnavailable if either store can't be reached; the marker
        is left untouched so the next launch retries the same window.
        """
        now = now or self.clock.now()
        result = MaterializationResult()

        last_open = self.app_state.get_last_open()
        if last_open is None:
            logger.info(f"First launch, recording {now.isoformat()} as last open date")
            self.app_state.set_last_open(now)
            result.first_launch = True
            result.last_open = now
            return result

        if last_open.date() == now.date():
            logger.debug(f"Recurring transactions already materialized today ({now.date()})")
            result.already_ran_today = True
            result.last_open = last_open
            return result

        window_start = last_open.date() + timedelta(days=1)
        window_end = now.date()
        result.window_start = window_start
        result.window_end = window_end

        if window_start > window_end:
            logger.warning(
                f"Last open date {last_open.date()} is after today {window_end}, nothing to materialize"
            )
        else:
            for template in self.transactions.list_recurring_templates():
                self._materialize_template(template, window_start, window_end, result)

        self.app_state.set_last_open(now)
        result.last_open = now

        logger.info(
            f"Materialized {result.created} recurring transaction(s) for {window_start}..{window_end}"
            f" ({len(result.skipped_templates)} template(s) skipped,"
            f" {len(result.failed_occurrences)} occurrence(s) failed)"
        )
        return result

    def _materialize_template(
        self,
        template: TransactionTemplate,
        window_start: date,
        window_end: date,
        result: MaterializationResult,
    ) -> None:
        if template.spec is None:
            logger.warning(f"Skipping recurring template {template.id}: {template.spec_error}")
            result.skipped_templates.append(template.id)
            return

        try:
            dates = occurrences(template.spec, window_start, window_end)
        except InvalidSpec as e:
            logger.warning(f"Skipping recurring template {template.id}: {e}")
            result.skipped_templates.append(template.id)
            return

        for day in dates:
            try:
                created = self.transactions.create(template.instantiate(day))
            except (PersistFailure, ValidationError) as e:
                logger.error(f"Failed to materialize template {template.id} on {day}: {e}")
                result.failed_occurrences.append((template.id, day))
                continue
            result.created_ids.append(created.id)


def run_startup_materialization(db: Session, clock: Optional[Clock] = None) -> Optional[MaterializationResult]:
    """
    Launch hook: run one pass and never let it take the app down.

    Returns None when the pass was abandoned because the store was unreachable
    or raised any other database error.
    """
    materializer = RecurringMaterializer(TransactionStore(db), AppStateStore(db), clock)
    try:
        return materializer.materialize()
    except StoreUnavailable as e:
        logger.error(f"Recurring materialization failed, will retry on next launch: {e}")
        return None
    except SQLAlchemyError as e:
        logger.exception(f"Recurring materialization aborted by a database error, will retry on next launch: {e}")
        return None
