from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class PurchaseItemInput:
    raw_material_id: Optional[int]
    quantity: float
    rate: float

    @property
    def amount(self) -> float:
        return self.quantity * self.rate


@dataclass(frozen=True)
class PurchaseItem:
    item_id: int
    purchase_id: int
    raw_material_id: int
    material_name: Optional[str]
    material_code: Optional[str]
    unit: Optional[str]
    quantity: float
    rate: float
    amount: float


@dataclass(frozen=True)
class Purchase:
    purchase_id: int
    purchase_number: str
    supplier_id: Optional[int]
    supplier_name: Optional[str]
    purchase_date: date
    invoice_number: Optional[str]
    total_amount: float
    status: str
    notes: Optional[str]
    created_at: Optional[datetime] = None
    items: tuple[PurchaseItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StockLine:
    item_id: int
    code: str
    name: str
    unit: Optional[str]
    current_stock: float
    min_stock_level: float
    rate: float
    status: Optional[str]

    @property
    def value(self) -> float:
        return self.current_stock * self.rate

    @property
    def gap(self) -> float:
        return self.min_stock_level - self.current_stock


@dataclass(frozen=True)
class StockSummary:
    raw_materials: tuple[StockLine, ...]
    finished_goods: tuple[StockLine, ...]
    low_stock_count: int
    out_of_stock_count: int
    raw_material_value: float
    finished_goods_value: float

    @property
    def total_value(self) -> float:
        return self.raw_material_value + self.finished_goods_value


@dataclass(frozen=True)
class StatusBreakdown:
    label: str
    raw_materials: int
    finished_goods: int


@dataclass(frozen=True)
class StockAnalytics:
    summary: StockSummary
    health_score: int
    status_breakdown: tuple[StatusBreakdown, ...]
    top_by_value: tuple[tuple[str, StockLine], ...]
    level_comparison: tuple[StockLine, ...]
    critical: tuple[tuple[str, StockLine], ...]

    @property
    def item_count(self) -> int:
        return len(self.summary.raw_materials) + len(self.summary.finished_goods)

    @property
    def comparison_labels(self) -> list[str]:
        return [line.name[:15] for line in self.level_comparison]
