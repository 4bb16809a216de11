"""Line items entered together with a header row (invoice and order lines)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.validators import parse_amount, parse_optional_id


@dataclass(frozen=True)
class LineItemInput:
    product_id: Optional[int]
    quantity: float
    rate: float

    @property
    def amount(self) -> float:
        return round(self.quantity * self.rate, 2)


def keep_items(items: Iterable[LineItemInput]) -> list[LineItemInput]:
    """Lines without a product or with a non-positive quantity are dropped."""
    return [it for it in items if it.product_id and it.quantity > 0]


def parse_items(items: Iterable[Mapping[str, Any]]) -> list[LineItemInput]:
    return keep_items(
        LineItemInput(
            product_id=parse_optional_id(it.get("product_id")),
            quantity=parse_amount(it.get("quantity")),
            rate=parse_amount(it.get("rate")),
        )
        for it in items
    )


def items_total(items: Sequence[LineItemInput]) -> float:
    return round(sum(it.amount for it in items), 2)


def items_from_form(form) -> list[dict]:
    """Zip the parallel ``item_product[]``/``item_quantity[]``/``item_rate[]`` inputs."""
    products = form.getlist("item_product")
    quantities = form.getlist("item_quantity")
    rates = form.getlist("item_rate")
    return [
        {"product_id": p, "quantity": q, "rate": r}
        for p, q, r in zip(products, quantities, rates)
    ]
