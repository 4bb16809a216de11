from __future__ import annotations

from datetime import date
from typing import Protocol


class DashboardRepository(Protocol):
    def count_active_employees(self) -> int:
        raise NotImplementedError

    def count_present(self, on: date) -> int:
        raise NotImplementedError

    def count_pending_returns(self) -> int:
        raise NotImplementedError

    def production_quantity(self, start: date, end: date) -> float:
        raise NotImplementedError

    def outstanding_receivables(self, start: date, end: date) -> float:
        """Unpaid balance of invoices dated within the range."""

        raise NotImplementedError
