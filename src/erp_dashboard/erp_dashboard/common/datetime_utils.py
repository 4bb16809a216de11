from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Iterator, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date_arg(value: Optional[str], default: date) -> date:
    """Parse a query-string date, falling back to ``default`` when blank or malformed."""
    if not value:
        return default
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return default


def parse_form_date(value: str, field_name: str) -> date:
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_form_time(value: str, field_name: str) -> time:
    v = value.strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be a time (HH:MM)")


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def month_bounds(on: date) -> tuple[date, date]:
    first = on.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)


def format_display_date(value: Any) -> str:
    """dd/MM/yyyy for dates, '-' for empty values."""
    if value is None or value == "":
        return "-"
    if isinstance(value, str):
        try:
            value = parse_iso_date(value[:10])
        except ValueError:
            return value
    return value.strftime("%d/%m/%Y")


def format_display_time(value: Any) -> str:
    """HH:MM for TIME columns.

    mysql-connector returns TIME as ``timedelta``; forms and fakes use ``time``.
    """
    if value is None or value == "":
        return "-"
    if isinstance(value, timedelta):
        total = int(value.total_seconds()) % 86400
        return f"{total // 3600:02d}:{(total % 3600) // 60:02d}"
    if isinstance(value, (time, datetime)):
        return value.strftime("%H:%M")
    return str(value)[:5]


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
