"""Generic searchable/paginated data table.

Every list page renders through these helpers: rows are plain dicts,
``Column`` descriptors pick and format what is shown.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from .datetime_utils import format_display_date, format_display_time


@dataclass(frozen=True)
class Column:
    key: str
    header: str
    kind: str = "text"
    css_class: str = ""


@dataclass(frozen=True)
class Page:
    items: list
    page: int
    pages: int
    total: int
    page_size: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def first_index(self) -> int:
        return 0 if self.total == 0 else (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        return min(self.page * self.page_size, self.total)


def filter_rows(rows: Iterable[Mapping[str, Any]], search: Optional[str], fields: Sequence[str]) -> list:
    needle = (search or "").strip().lower()
    if not needle:
        return list(rows)

    out = []
    for row in rows:
        for field in fields:
            value = row.get(field)
            if value is not None and needle in str(value).lower():
                out.append(row)
                break
    return out


def paginate(rows: Sequence[Any], page: int, page_size: int) -> Page:
    page_size = max(1, int(page_size))
    total = len(rows)
    pages = max(1, math.ceil(total / page_size))
    page = min(max(1, int(page or 1)), pages)
    start = (page - 1) * page_size
    return Page(items=list(rows[start:start + page_size]), page=page, pages=pages, total=total, page_size=page_size)


def format_cell(row: Mapping[str, Any], column: Column) -> str:
    value = row.get(column.key)
    if column.kind == "date":
        return format_display_date(value)
    if column.kind == "time":
        return format_display_time(value)
    if column.kind == "bool":
        return "Yes" if value else "No"
    if value is None or value == "":
        return "-"
    if column.kind == "money":
        return f"₹{float(value):,.2f}"
    if column.kind == "number":
        number = float(value)
        return f"{number:,.0f}" if number.is_integer() else f"{number:,.2f}"
    if column.kind == "badge":
        return str(value).replace("_", " ")
    return str(value)


def export_value(row: Mapping[str, Any], column: Column) -> Any:
    """Raw-ish value for file exports: numbers stay numbers, the rest is text."""
    value = row.get(column.key)
    if value is None:
        return ""
    if column.kind in {"money", "number"}:
        return float(value)
    return format_cell(row, column)


_BADGE_CLASSES = {
    "success": {"present", "completed", "active", "paid", "approved", "received", "delivered", "confirmed", "income"},
    "danger": {"absent", "cancelled", "rejected", "out of stock", "low stock", "expense"},
    "warning": {"half_day", "in_progress", "pending", "partial", "warning", "maintenance", "on_leave", "dispatched"},
    "secondary": {"leave", "inactive"},
}


def badge_class(value: Any) -> str:
    """Bootstrap contextual colour for a status badge."""
    key = str(value or "").strip().lower()
    for css, values in _BADGE_CLASSES.items():
        if key in values:
            return css
    return "info"
