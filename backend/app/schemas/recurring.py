"""Pydantic schemas for recurring transaction specs."""

import calendar
import enum
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from app.exceptions import InvalidSpec


class Frequency(str, enum.Enum):
    """Recurring frequency enumeration."""
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


class Weekday(str, enum.Enum):
    """Day of week, in date.weekday() order."""
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"

    @property
    def index(self) -> int:
        return list(Weekday).index(self)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    return value


class RecurringAnchor(BaseModel):
    """Calendar alignment of a recurring spec."""

    model_config = ConfigDict(frozen=True)

    month: Optional[int] = Field(None, ge=1, le=12)
    day_of_month: Optional[int] = Field(None, ge=1, le=31)
    day_of_week: Optional[Weekday] = None

    @field_validator("month", "day_of_month", mode="before")
    @classmethod
    def blank_numbers(cls, value):
        return _blank_to_none(value)

    @field_validator("day_of_week", mode="before")
    @classmethod
    def normalize_weekday(cls, value):
        value = _blank_to_none(value)
        if isinstance(value, str):
            return value.lower()
        return value


class RecurringSpec(BaseModel):
    """
    How often, and on which calendar alignment, a transaction recurs.

    Accepts the API shape ``{"frequency", "anchor": {...}}`` and the stored
    shape ``{"frequency", "time": {"month", "day", "date"}}`` where ``day`` is
    a weekday name and ``date`` a day of month.
    """

    model_config = ConfigDict(frozen=True)

    frequency: Frequency
    anchor: RecurringAnchor = Field(default_factory=RecurringAnchor)

    @model_validator(mode="before")
    @classmethod
    def from_stored_shape(cls, data):
        if isinstance(data, dict) and "time" in data and "anchor" not in data:
            time = data.get("time") or {}
            if not isinstance(time, dict):
                raise ValueError("time must be an object")
            data = {
                "frequency": data.get("frequency"),
                "anchor": {
                    "month": time.get("month"),
                    "day_of_month": time.get("date"),
                    "day_of_week": time.get("day"),
                },
            }
        return data

    @field_validator("frequency", mode="before")
    @classmethod
    def normalize_frequency(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def anchors_present(self):
        problem = self.missing_anchor()
        if problem:
            raise ValueError(problem)
        return self

    def missing_anchor(self) -> Optional[str]:
        """Describe what the spec lacks for its frequency, or None if usable."""
        anchor = self.anchor
        if self.frequency == Frequency.daily:
            return None
        if self.frequency == Frequency.weekly:
            if anchor.day_of_week is None:
                return "weekly spec requires day_of_week"
            return None
        if self.frequency == Frequency.monthly:
            if anchor.day_of_month is None and anchor.day_of_week is None:
                return "monthly spec requires day_of_month or day_of_week"
            return None
        if self.frequency == Frequency.yearly:
            if anchor.month is None:
                return "yearly spec requires month"
            # Checked against a leap year so Feb 29 stays valid
            if anchor.day_of_month is not None and anchor.day_of_month > calendar.monthrange(2000, anchor.month)[1]:
                return f"yearly spec day {anchor.day_of_month} never occurs in month {anchor.month}"
            return None
        return f"unknown frequency {self.frequency!r}"

    def validate_anchors(self) -> None:
        """Raise InvalidSpec if this spec can't be evaluated."""
        try:
            Frequency(self.frequency)
        except ValueError:
            raise InvalidSpec(f"Unknown frequency {self.frequency!r}")
        problem = self.missing_anchor()
        if problem:
            raise InvalidSpec(problem)

    @classmethod
    def from_storage(cls, raw: Any) -> "RecurringSpec":
        """Deserialize and validate a stored spec (dict or JSON text)."""
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError as e:
                raise InvalidSpec(f"Recurring spec is not valid JSON: {e}") from e
        if raw is None:
            raise InvalidSpec("Recurring spec is missing")
        if not isinstance(raw, dict):
            raise InvalidSpec(f"Recurring spec must be an object, got {type(raw).__name__}")
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise InvalidSpec(f"Invalid recurring spec: {e}") from e

    def to_storage(self) -> dict:
        """Serialize to the stored shape."""
        return {
            "frequency": self.frequency.value,
            "time": {
                "month": self.anchor.month,
                "day": self.anchor.day_of_week.value if self.anchor.day_of_week else None,
                "date": self.anchor.day_of_month,
            },
        }


class RecurringTemplateResponse(BaseModel):
    """A recurring template as shown by the API."""
    id: str
    type: str
    category: str
    amount: Decimal
    description: Optional[str] = None
    recurring_frequency: Optional[RecurringSpec] = None
    spec_error: Optional[str] = None
    next_occurrence: Optional[date] = None


class MaterializationResponse(BaseModel):
    """Outcome of one materialization pass."""
    first_launch: bool
    already_ran_today: bool
    window_start: Optional[date] = None
    window_end: Optional[date] = None
    created: int
    created_ids: List[str] = []
    skipped_templates: List[str] = []
    failed_occurrences: int = 0
    last_open: Optional[datetime] = None
