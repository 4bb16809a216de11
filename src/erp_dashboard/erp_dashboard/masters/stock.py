from __future__ import annotations

from typing import Any, Optional

from ..core.constants import WARNING_STOCK_FACTOR
from ..database.mysql_base import to_float

OUT_OF_STOCK = "Out of Stock"
LOW_STOCK = "Low Stock"
WARNING = "Warning"


def stock_status(current: Any, minimum: Any) -> Optional[str]:
    """Badge for a stock level; ``None`` when no minimum is set or stock is healthy."""
    stock = to_float(current)
    min_level = to_float(minimum)
    if min_level == 0:
        return None
    if stock == 0:
        return OUT_OF_STOCK
    if stock <= min_level:
        return LOW_STOCK
    if stock <= min_level * WARNING_STOCK_FACTOR:
        return WARNING
    return None


def is_low(current: Any, minimum: Any) -> bool:
    return stock_status(current, minimum) in {OUT_OF_STOCK, LOW_STOCK}


def below_minimum(current: Any, minimum: Any) -> bool:
    """Stock report rule: at or under the minimum, including a minimum of 0."""
    return to_float(current) <= to_float(minimum)


def is_out_of_stock(current: Any) -> bool:
    return to_float(current) <= 0


def with_stock_status(row: dict) -> dict:
    row["stock_status"] = stock_status(row.get("current_stock"), row.get("min_stock_level"))
    return row
