"""Whole-day differences between due dates and report times."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

_ONE_DAY = timedelta(days=1)

Instant = datetime | date


def as_datetime(value: Instant, like: Instant | None = None) -> datetime:
    """
    Promote a date to midnight of that day.

    When ``like`` is an aware datetime, the result is aware too: a bare
    date takes ``like``'s tzinfo, and a naive datetime is read as UTC, so
    either can be compared with an aware ``now``.
    """
    aware_like = isinstance(like, datetime) and like.tzinfo is not None
    if isinstance(value, datetime):
        if aware_like and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, date):
        tzinfo = like.tzinfo if isinstance(like, datetime) else None
        return datetime.combine(value, time.min, tzinfo=tzinfo)
    raise TypeError(f"expected date or datetime, got {type(value).__name__}")


def _aligned(first: Instant, second: Instant) -> tuple[datetime, datetime]:
    # Aware pairs are compared in UTC: subtracting two datetimes that share a
    # tzinfo would otherwise use wall-clock time across DST changes.
    a = as_datetime(first, second)
    b = as_datetime(second, first)
    if a.tzinfo is not None and b.tzinfo is not None:
        return a.astimezone(timezone.utc), b.astimezone(timezone.utc)
    return a, b


def elapsed_days(start: Instant, end: Instant) -> int:
    """
    floor((end - start) / 1 day).

    Negative when ``start`` is after ``end``: a due date 12 hours in the
    future is -1, one 12 hours in the past is 0.
    """
    if type(start) is date and type(end) is date:
        return (end - start).days
    start_dt, end_dt = _aligned(start, end)
    return (end_dt - start_dt) // _ONE_DAY


def is_after(moment: Instant, reference: Instant) -> bool:
    """True when ``moment`` is strictly later than ``reference``."""
    moment_dt, reference_dt = _aligned(moment, reference)
    return moment_dt > reference_dt
