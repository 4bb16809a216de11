from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_form_date
from ..common.sequence import next_sequence_number, sequence_prefix
from ..common.table import filter_rows
from ..common.validators import optional_text, parse_amount, parse_optional_id, require_non_empty
from ..core.enums import PurchaseStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import require_editor
from ..database.mysql_base import to_float
from ..masters.stock import below_minimum, is_out_of_stock, stock_status
from .model import Purchase, PurchaseItemInput, StatusBreakdown, StockAnalytics, StockLine, StockSummary
from .repository import PurchaseRepository, StockRepository

PURCHASE_PREFIX = "GRN"
PURCHASE_SEARCH_FIELDS = ("purchase_number", "invoice_number", "supplier_name")
RAW_MATERIAL = "Raw Material"
FINISHED_GOOD = "Finished Good"


def keep_items(items: Iterable[PurchaseItemInput]) -> list[PurchaseItemInput]:
    """Lines without a material or with a non-positive quantity are dropped."""
    return [it for it in items if it.raw_material_id and it.quantity > 0]


class PurchaseService:
    """Use case: goods receipt notes with line items."""

    def __init__(self, repo: PurchaseRepository, *, clock: Callable[[], date] = date.today):
        self._repo = repo
        self._clock = clock

    def list_rows(self, search: Optional[str] = None) -> list[dict]:
        return filter_rows(self._repo.list_rows(), search, PURCHASE_SEARCH_FIELDS)

    def get_with_items(self, purchase_id: int) -> Purchase:
        purchase = self._repo.get_by_id(purchase_id)
        if not purchase:
            raise NotFoundError("Purchase not found")
        items = tuple(self._repo.list_items(purchase_id))
        return replace(purchase, items=items)

    def options(self) -> dict[str, Sequence[dict]]:
        return {
            "suppliers": self._repo.list_supplier_options(),
            "raw_materials": self._repo.list_material_options(),
        }

    def create(
        self,
        *,
        current_role,
        form: Mapping[str, Any],
        items: Sequence[Mapping[str, Any]],
    ) -> int:
        require_editor(current_role)

        purchase_date = parse_form_date(require_non_empty(form.get("purchase_date"), "Purchase Date"), "Purchase Date")
        status = (form.get("status") or PurchaseStatus.COMPLETED.value).strip()
        if status not in {s.value for s in PurchaseStatus}:
            raise ValidationError("Status has an invalid value")

        kept = keep_items(
            PurchaseItemInput(
                raw_material_id=parse_optional_id(it.get("raw_material_id")),
                quantity=parse_amount(it.get("quantity")),
                rate=parse_amount(it.get("rate")),
            )
            for it in items
        )
        total_amount = sum(it.amount for it in kept)

        today = self._clock()
        existing = self._repo.count_numbers_like(sequence_prefix(PURCHASE_PREFIX, today))
        purchase_number = next_sequence_number(PURCHASE_PREFIX, today, existing)

        return self._repo.create(
            purchase_number=purchase_number,
            supplier_id=parse_optional_id(form.get("supplier_id")),
            purchase_date=purchase_date,
            invoice_number=optional_text(form.get("invoice_number")),
            total_amount=total_amount,
            status=status,
            notes=optional_text(form.get("notes")),
            items=kept,
        )

    def delete(self, *, current_role, purchase_id: int) -> None:
        require_editor(current_role)
        if not self._repo.delete(purchase_id):
            raise NotFoundError("Purchase not found")


def _stock_line(row: Mapping[str, Any]) -> StockLine:
    return StockLine(
        item_id=int(row["id"]),
        code=row["code"],
        name=row["name"],
        unit=row.get("unit"),
        current_stock=to_float(row.get("current_stock")),
        min_stock_level=to_float(row.get("min_stock_level")),
        rate=to_float(row.get("rate")),
        status=stock_status(row.get("current_stock"), row.get("min_stock_level")),
    )


class StockReportService:
    def __init__(self, repo: StockRepository):
        self._repo = repo

    def summary(self, search: Optional[str] = None) -> StockSummary:
        raw = [_stock_line(r) for r in self._repo.list_raw_materials()]
        finished = [_stock_line(r) for r in self._repo.list_finished_goods()]
        everything = raw + finished

        # Counts and values cover all items; only the tables are filtered.
        needle = (search or "").strip().lower()

        def _match(line: StockLine) -> bool:
            return not needle or needle in line.code.lower() or needle in line.name.lower()

        return StockSummary(
            raw_materials=tuple(l for l in raw if _match(l)),
            finished_goods=tuple(l for l in finished if _match(l)),
            low_stock_count=sum(1 for l in everything if below_minimum(l.current_stock, l.min_stock_level)),
            out_of_stock_count=sum(1 for l in everything if is_out_of_stock(l.current_stock)),
            raw_material_value=sum(l.value for l in raw),
            finished_goods_value=sum(l.value for l in finished),
        )

    def analytics(self) -> StockAnalytics:
        """Health, status breakdown and ranking over every item."""
        summary = self.summary()
        raw, finished = summary.raw_materials, summary.finished_goods
        typed = [(RAW_MATERIAL, l) for l in raw] + [(FINISHED_GOOD, l) for l in finished]

        def _counts(lines) -> tuple[int, int]:
            low = sum(1 for l in lines if below_minimum(l.current_stock, l.min_stock_level))
            out = sum(1 for l in lines if is_out_of_stock(l.current_stock))
            return low, out

        raw_low, raw_out = _counts(raw)
        fg_low, fg_out = _counts(finished)
        total = len(typed)
        healthy = total - summary.low_stock_count

        return StockAnalytics(
            summary=summary,
            health_score=round(healthy / total * 100) if total else 100,
            status_breakdown=(
                StatusBreakdown("In Stock", len(raw) - raw_low, len(finished) - fg_low),
                # out-of-stock items also count as low; report them once
                StatusBreakdown("Low Stock", raw_low - raw_out, fg_low - fg_out),
                StatusBreakdown("Out of Stock", raw_out, fg_out),
            ),
            top_by_value=tuple(sorted(typed, key=lambda t: t[1].value, reverse=True)[:8]),
            level_comparison=tuple(l for _, l in typed if l.min_stock_level > 0)[:10],
            critical=tuple(
                sorted(
                    ((kind, l) for kind, l in typed if below_minimum(l.current_stock, l.min_stock_level)),
                    key=lambda t: t[1].gap,
                    reverse=True,
                )
            ),
        )
