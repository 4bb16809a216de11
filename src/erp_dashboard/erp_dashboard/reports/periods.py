"""Date range defaults and presets for report filters."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import month_bounds, parse_date_arg
from ..core.constants import DEFAULT_REPORT_DAYS
from .model import DateRange

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
PRESETS = (DAILY, WEEKLY, MONTHLY)


def last_days(today: date, days: int = DEFAULT_REPORT_DAYS) -> DateRange:
    return DateRange(start=today - timedelta(days=days), end=today)


def preset_range(preset: str, today: date) -> DateRange:
    if preset == DAILY:
        return last_days(today, 7)
    if preset == WEEKLY:
        return last_days(today, 30)
    start, end = month_bounds(today)
    return DateRange(start=start, end=end)


def resolve_range(start: Optional[str], end: Optional[str], default: DateRange) -> DateRange:
    """Query-string dates override the default; a reversed range is swapped."""
    rng = DateRange(start=parse_date_arg(start, default.start), end=parse_date_arg(end, default.end))
    if rng.start > rng.end:
        return DateRange(start=rng.end, end=rng.start)
    return rng
