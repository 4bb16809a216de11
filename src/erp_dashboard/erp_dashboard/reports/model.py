from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


@dataclass(frozen=True)
class ChartPoint:
    name: str
    value: float


@dataclass(frozen=True)
class DepartmentAttendance:
    name: str
    present: int
    absent: int


@dataclass(frozen=True)
class TrendPoint:
    label: str
    sales: float
    collections: float


@dataclass(frozen=True)
class AttendanceReport:
    period: DateRange
    rows: list
    total_records: int
    present: int
    absent: int
    half_day: int
    leave: int
    status_chart: list
    departments: list


@dataclass(frozen=True)
class ProductionReport:
    period: DateRange
    rows: list
    total_quantity: float
    batch_count: int
    completed_batches: int
    average_batch_size: float
    operator_count: int
    by_shift: list
    top_products: list


@dataclass(frozen=True)
class PurchaseReport:
    period: DateRange
    rows: list
    total_amount: float
    purchase_count: int
    average_amount: float
    supplier_count: int
    top_suppliers: list


@dataclass(frozen=True)
class Scorecard:
    period: DateRange
    preset: str
    total_sales: float
    total_collections: float
    collection_rate: float
    outstanding: float
    production_quantity: float
    batch_count: int
    completed_batches: int
    completion_rate: float
    total_purchases: float
    gross_margin: float
    margin_percent: float
    trend: list


@dataclass(frozen=True)
class SalesReport:
    period: DateRange
    rows: list
    total_sales: float
    total_collections: float
    outstanding: float
    invoice_count: int
    receipt_count: int
    customer_count: int
    daily_sales: list
    top_customers: list


@dataclass(frozen=True)
class AgingBucket:
    label: str
    amount: float
    percent: float


@dataclass(frozen=True)
class CustomerOutstanding:
    name: str
    code: Optional[str]
    outstanding: float
    invoice_count: int
    oldest_days: int


@dataclass(frozen=True)
class CollectionReport:
    """Unpaid invoices aged against ``as_of``; not bounded by a date range."""

    as_of: date
    rows: list
    total_outstanding: float
    open_invoices: int
    aging: list
    customers: list
    overdue: list

    @property
    def current(self) -> float:
        return self.aging[0].amount if self.aging else 0.0

    @property
    def overdue_amount(self) -> float:
        return sum(b.amount for b in self.aging[1:-1])

    @property
    def critical(self) -> float:
        return self.aging[-1].amount if self.aging else 0.0


@dataclass(frozen=True)
class RouteCollection:
    route: str
    weight: float
    bags: int
    trips: int

    @property
    def average_weight(self) -> float:
        return self.weight / self.trips if self.trips else 0.0


@dataclass(frozen=True)
class KeilCollectionReport:
    period: DateRange
    route_id: Optional[int]
    rows: list
    total_weight: float
    total_bags: int
    total_trips: int
    average_weight: float
    by_route: list
    by_date: list


@dataclass(frozen=True)
class DayCollection:
    day: date
    weight: float
    bags: int
