"""Human readable document numbers such as ``PR-20240101-003``.

The running number is the count of existing numbers sharing the same
prefix and period, plus one. Generation is not concurrency safe.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

DAILY = "day"
MONTHLY = "month"


@dataclass(frozen=True)
class NumberSpec:
    column: str
    prefix: str
    period: str = DAILY
    width: int = 3


def period_token(on: date, period: str = DAILY) -> str:
    if period == MONTHLY:
        return on.strftime("%Y%m")
    if period == DAILY:
        return on.strftime("%Y%m%d")
    raise ValueError(f"Unsupported sequence period: {period!r}")


def sequence_prefix(prefix: str, on: date, period: str = DAILY) -> str:
    return f"{prefix}-{period_token(on, period)}"


def next_sequence_number(prefix: str, on: date, existing_count: int, *, period: str = DAILY, width: int = 3) -> str:
    return f"{sequence_prefix(prefix, on, period)}-{int(existing_count or 0) + 1:0{width}d}"
