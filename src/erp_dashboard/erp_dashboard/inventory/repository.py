from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Purchase, PurchaseItem, PurchaseItemInput


class PurchaseRepository(Protocol):
    def list_rows(self) -> Sequence[dict]:
        """Return UI rows (joined with supplier), newest first."""

        raise NotImplementedError

    def get_by_id(self, purchase_id: int) -> Optional[Purchase]:
        raise NotImplementedError

    def list_items(self, purchase_id: int) -> Sequence[PurchaseItem]:
        raise NotImplementedError

    def count_numbers_like(self, prefix: str) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        purchase_number: str,
        supplier_id: Optional[int],
        purchase_date: date,
        invoice_number: Optional[str],
        total_amount: float,
        status: str,
        notes: Optional[str],
        items: Sequence[PurchaseItemInput],
    ) -> int:
        raise NotImplementedError

    def delete(self, purchase_id: int) -> bool:
        raise NotImplementedError

    def list_supplier_options(self) -> Sequence[dict]:
        raise NotImplementedError

    def list_material_options(self) -> Sequence[dict]:
        """id, label, rate and unit of every raw material."""

        raise NotImplementedError


class StockRepository(Protocol):
    def list_raw_materials(self) -> Sequence[dict]:
        raise NotImplementedError

    def list_finished_goods(self) -> Sequence[dict]:
        raise NotImplementedError
