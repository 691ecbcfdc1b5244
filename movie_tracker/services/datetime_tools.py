"""Stateless date helpers exposed to the agent as tools.

Every function reads the current UTC date unless ``today`` is passed in, which
keeps them deterministic for callers that already know the reference date.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Callable

from movie_tracker.services.errors import ValidationError

OFFSET_UNITS = {"d": "days", "m": "months", "y": "years"}


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_iso_date(raw: str) -> date:
    """Parse ``YYYY-MM-DD`` (a full ISO timestamp is accepted and truncated)."""

    try:
        return datetime.fromisoformat(raw.strip()).date()
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"'{raw}' is not an ISO date (YYYY-MM-DD)") from exc


def add_months(value: date, months: int) -> date:
    """Shift by calendar months, clamping to the last day of the target month."""

    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def today(*, today: date | None = None) -> str:
    return (today or utc_today()).isoformat()


def this_month(*, today: date | None = None) -> str:
    return (today or utc_today()).strftime("%Y-%m")


def this_year(*, today: date | None = None) -> str:
    return str((today or utc_today()).year)


def _interval(start: date, end: date) -> str:
    return f"{start.isoformat()}/{end.isoformat()}"


def _range_back(end: date, shift: Callable[[date], date], label: str) -> str:
    try:
        start = shift(end)
    except (OverflowError, ValueError) as exc:
        raise ValidationError(f"cannot look back {label} from {end.isoformat()}") from exc
    return _interval(start, end)


def past_years_range(years: int, *, today: date | None = None) -> str:
    """ISO-8601 interval covering the past ``years`` years up to today."""

    end = today or utc_today()
    return _range_back(end, lambda value: add_months(value, -12 * years), f"{years} years")


def past_months_range(months: int, *, today: date | None = None) -> str:
    end = today or utc_today()
    return _range_back(end, lambda value: add_months(value, -months), f"{months} months")


def past_days_range(days: int, *, today: date | None = None) -> str:
    end = today or utc_today()
    return _range_back(end, lambda value: value - timedelta(days=days), f"{days} days")


def offset_date(iso_date: str, amount: int, unit: str) -> str:
    """Shift ``iso_date`` by ``amount`` days (d), months (m) or years (y)."""

    if unit not in OFFSET_UNITS:
        raise ValidationError("unit must be d, m, or y")
    start = parse_iso_date(iso_date)
    try:
        if unit == "d":
            shifted = start + timedelta(days=amount)
        elif unit == "m":
            shifted = add_months(start, amount)
        else:
            shifted = add_months(start, 12 * amount)
    except (OverflowError, ValueError) as exc:
        raise ValidationError(f"cannot offset {iso_date} by {amount}{unit}") from exc
    return shifted.isoformat()
