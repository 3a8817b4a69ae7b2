"""
Recurrence rule evaluation.

Maps a RecurringSpec and an inclusive date window to the ascending list of
dates the spec falls on. Month-end handling is explicit: a monthly spec
anchored on a day a month doesn't have skips that month, it never clamps
to the last day.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, List, Optional, Union

from app.schemas.recurring import Frequency, RecurringSpec

DateLike = Union[date, datetime]

# How far ahead next_occurrence looks before giving up (covers Feb 29 yearly specs)
NEXT_OCCURRENCE_HORIZON = timedelta(days=366 * 8)


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _months_between(start: date, end: date) -> Iterator[tuple]:
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1


def _day_in_month(year: int, month: int, day: int) -> Optional[date]:
    """Return the date, or None when the month is too short."""
    if day > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day)


def _daily(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def _weekly(start: date, end: date, weekday: int) -> Iterator[date]:
    current = start + timedelta(days=(weekday - start.weekday()) % 7)
    while current <= end:
        yield current
        current += timedelta(days=7)


def _monthly(start: date, end: date, day: int) -> Iterator[date]:
    for year, month in _months_between(start, end):
        candidate = _day_in_month(year, month, day)
        if candidate is not None and start <= candidate <= end:
            yield candidate


def _yearly(start: date, end: date, month: int, day: int) -> Iterator[date]:
    for year in range(start.year, end.year + 1):
        candidate = _day_in_month(year, month, day)
        if candidate is not None and start <= candidate <= end:
            yield candidate


def iter_occurrences(spec: RecurringSpec, window_start: DateLike, window_end: DateLike) -> Iterator[date]:
    """
    Lazily yield the dates in [window_start, window_end] on which spec occurs.

    Raises InvalidSpec immediately (not on first iteration) if the spec has an
    unknown frequency or lacks the anchors its frequency needs.
    """
    spec.validate_anchors()
    start = _as_date(window_start)
    end = _as_date(window_end)
    if start > end:
        return iter(())

    anchor = spec.anchor
    frequency = Frequency(spec.frequency)

    if frequency == Frequency.daily:
        return _daily(start, end)
    if frequency == Frequency.weekly:
        return _weekly(start, end, anchor.day_of_week.index)
    if frequency == Frequency.monthly:
        if anchor.day_of_month is None:
            # Weekday-anchored monthly specs fall on every such weekday
            return _weekly(start, end, anchor.day_of_week.index)
        return _monthly(start, end, anchor.day_of_month)
    # Yearly without a day anchor lands on the first of the anchor month
    return _yearly(start, end, anchor.month, anchor.day_of_month or 1)


def occurrences(spec: RecurringSpec, window_start: DateLike, window_end: DateLike) -> List[date]:
    """Return the ascending list of occurrence dates within the inclusive window."""
    return list(iter_occurrences(spec, window_start, window_end))


def next_occurrence(spec: RecurringSpec, after: DateLike) -> Optional[date]:
    """First occurrence strictly after the given date, or None if none within the horizon."""
    start = _as_date(after) + timedelta(days=1)
    return next(iter_occurrences(spec, start, start + NEXT_OCCURRENCE_HORIZON), None)
