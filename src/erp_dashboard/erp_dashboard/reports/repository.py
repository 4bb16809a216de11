from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence


class ReportRepository(Protocol):
    """Date-bounded (inclusive) reads feeding the report pages."""

    def attendance_rows(self, start: date, end: date) -> Sequence[dict]:
        """attendance_date, status, shift, in_time, out_time, employee_name, employee_code, department."""

        raise NotImplementedError

    def production_rows(self, start: date, end: date) -> Sequence[dict]:
        """batch_number, production_date, shift, status, quantity_produced, employee_id, product_name, operator_name."""

        raise NotImplementedError

    def purchase_rows(self, start: date, end: date) -> Sequence[dict]:
        """purchase_number, purchase_date, supplier_id, supplier_name, invoice_number, total_amount, status."""

        raise NotImplementedError

    def sales_rows(self, start: date, end: date) -> Sequence[dict]:
        """invoice_number, invoice_date, customer_id, customer_name, total_amount, paid_amount, status."""

        raise NotImplementedError

    def collection_rows(self, start: date, end: date) -> Sequence[dict]:
        """payment_date, amount."""

        raise NotImplementedError

    def outstanding_invoices(self) -> Sequence[dict]:
        """Every invoice not marked paid, oldest first, with customer_name, customer_code, credit_period."""

        raise NotImplementedError

    def keil_collection_rows(self, start: date, end: date, route_id: Optional[int] = None) -> Sequence[dict]:
        """collection_date, collection_number, route_id, route_name, vehicle_number, driver_name, helper_name,
        total_weight, total_bags, start_km, end_km, status; newest first."""

        raise NotImplementedError

    def active_routes(self) -> Sequence[dict]:
        """id, route_code, route_name for routes with status active."""

        raise NotImplementedError
