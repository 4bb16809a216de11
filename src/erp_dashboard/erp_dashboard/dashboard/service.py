from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from ..common.datetime_utils import month_bounds
from ..inventory.repository import StockRepository
from ..masters.stock import is_low
from .repository import DashboardRepository


@dataclass(frozen=True)
class DashboardKpis:
    active_employees: int
    present_today: int
    low_stock_items: int
    pending_returns: int
    month_production: float
    month_outstanding: float


class DashboardService:
    def __init__(
        self,
        repo: DashboardRepository,
        stock: StockRepository,
        *,
        clock: Callable[[], date] = date.today,
    ):
        self._repo = repo
        self._stock = stock
        self._clock = clock

    def kpis(self) -> DashboardKpis:
        today = self._clock()
        start, end = month_bounds(today)
        items = list(self._stock.list_raw_materials()) + list(self._stock.list_finished_goods())
        return DashboardKpis(
            active_employees=self._repo.count_active_employees(),
            present_today=self._repo.count_present(today),
            low_stock_items=sum(1 for r in items if is_low(r.get("current_stock"), r.get("min_stock_level"))),
            pending_returns=self._repo.count_pending_returns(),
            month_production=self._repo.production_quantity(start, end),
            month_outstanding=self._repo.outstanding_receivables(start, end),
        )
