from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import iter_days
from ..core.constants import AGING_BUCKETS, AGING_OVERFLOW, DEFAULT_CREDIT_DAYS
from ..core.enums import AttendanceStatus, BatchStatus
from ..database.mysql_base import to_float
from .model import (
    AgingBucket,
    AttendanceReport,
    ChartPoint,
    CollectionReport,
    CustomerOutstanding,
    DateRange,
    DayCollection,
    DepartmentAttendance,
    KeilCollectionReport,
    ProductionReport,
    PurchaseReport,
    RouteCollection,
    SalesReport,
    Scorecard,
    TrendPoint,
)
from .periods import MONTHLY, PRESETS, last_days, preset_range, resolve_range
from .repository import ReportRepository

UNKNOWN = "Unknown"

_PRESENT_STATUSES = {AttendanceStatus.PRESENT.value, AttendanceStatus.HALF_DAY.value}


def _percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def top_totals(pairs: Iterable[tuple[str, float]], *, limit: int, label_width: int) -> list[ChartPoint]:
    """Sum values per label, largest first.

    Names are cut to ``label_width`` before summing, so two names that only
    differ past the cut share one bar.
    """
    totals: dict[str, float] = defaultdict(float)
    for name, value in pairs:
        totals[name[:label_width]] += value
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    return [ChartPoint(name=label, value=value) for label, value in ranked]


class _RangeReport:
    def __init__(self, repo: ReportRepository, *, clock: Callable[[], date] = date.today):
        self._repo = repo
        self._clock = clock

    def default_range(self) -> DateRange:
        return last_days(self._clock())

    def resolve(self, start: Optional[str] = None, end: Optional[str] = None) -> DateRange:
        return resolve_range(start, end, self.default_range())


class AttendanceReportService(_RangeReport):
    def build(self, period: DateRange) -> AttendanceReport:
        rows = list(self._repo.attendance_rows(period.start, period.end))
        counts = {s.value: 0 for s in AttendanceStatus}
        departments: dict[str, list[int]] = {}

        for r in rows:
            status = r.get("status")
            if status in counts:
                counts[status] += 1
            dept = departments.setdefault((r.get("department") or UNKNOWN)[:15], [0, 0])
            if status in _PRESENT_STATUSES:
                dept[0] += 1
            else:
                dept[1] += 1

        status_chart = [
            ChartPoint(value.replace("_", " ").title(), n)
            for value, n in counts.items()
            if n > 0
        ]
        return AttendanceReport(
            period=period,
            rows=rows,
            total_records=len(rows),
            present=counts[AttendanceStatus.PRESENT.value],
            absent=counts[AttendanceStatus.ABSENT.value],
            half_day=counts[AttendanceStatus.HALF_DAY.value],
            leave=counts[AttendanceStatus.LEAVE.value],
            status_chart=status_chart,
            departments=[DepartmentAttendance(name, p, a) for name, (p, a) in departments.items()],
        )


class ProductionReportService(_RangeReport):
    def build(self, period: DateRange) -> ProductionReport:
        rows = list(self._repo.production_rows(period.start, period.end))
        total = sum(to_float(r.get("quantity_produced")) for r in rows)

        by_shift: dict[str, float] = {}
        for r in rows:
            shift = r.get("shift") or UNKNOWN
            by_shift[shift] = by_shift.get(shift, 0.0) + to_float(r.get("quantity_produced"))

        return ProductionReport(
            period=period,
            rows=rows,
            total_quantity=total,
            batch_count=len(rows),
            completed_batches=sum(1 for r in rows if r.get("status") == BatchStatus.COMPLETED.value),
            average_batch_size=total / len(rows) if rows else 0.0,
            operator_count=len({r["employee_id"] for r in rows if r.get("employee_id") is not None}),
            by_shift=[ChartPoint(name, value) for name, value in by_shift.items()],
            top_products=top_totals(
                ((r.get("product_name") or UNKNOWN, to_float(r.get("quantity_produced"))) for r in rows),
                limit=6,
                label_width=20,
            ),
        )


class PurchaseReportService(_RangeReport):
    def build(self, period: DateRange) -> PurchaseReport:
        rows = list(self._repo.purchase_rows(period.start, period.end))
        total = sum(to_float(r.get("total_amount")) for r in rows)
        return PurchaseReport(
            period=period,
            rows=rows,
            total_amount=total,
            purchase_count=len(rows),
            average_amount=total / len(rows) if rows else 0.0,
            supplier_count=len({r["supplier_id"] for r in rows if r.get("supplier_id") is not None}),
            top_suppliers=top_totals(
                ((r.get("supplier_name") or UNKNOWN, to_float(r.get("total_amount"))) for r in rows),
                limit=10,
                label_width=15,
            ),
        )


class ScorecardService(_RangeReport):
    """Consolidated sales, collections, production and purchase KPIs."""

    def default_range(self) -> DateRange:
        return preset_range(MONTHLY, self._clock())

    def preset(self, name: str) -> DateRange:
        return preset_range(name if name in PRESETS else MONTHLY, self._clock())

    def build(self, period: DateRange, *, preset: str = MONTHLY) -> Scorecard:
        sales = list(self._repo.sales_rows(period.start, period.end))
        collections = list(self._repo.collection_rows(period.start, period.end))
        batches = list(self._repo.production_rows(period.start, period.end))
        purchases = list(self._repo.purchase_rows(period.start, period.end))

        total_sales = sum(to_float(s.get("total_amount")) for s in sales)
        total_collections = sum(to_float(c.get("amount")) for c in collections)
        total_purchases = sum(to_float(p.get("total_amount")) for p in purchases)
        completed = sum(1 for b in batches if b.get("status") == BatchStatus.COMPLETED.value)
        gross_margin = total_sales - total_purchases

        sales_by_day: dict[date, float] = defaultdict(float)
        for s in sales:
            sales_by_day[s["invoice_date"]] += to_float(s.get("total_amount"))
        collections_by_day: dict[date, float] = defaultdict(float)
        for c in collections:
            collections_by_day[c["payment_date"]] += to_float(c.get("amount"))

        trend = [
            TrendPoint(day.strftime("%d/%m"), sales_by_day.get(day, 0.0), collections_by_day.get(day, 0.0))
            for day in iter_days(period.start, period.end)
        ]

        return Scorecard(
            period=period,
            preset=preset,
            total_sales=total_sales,
            total_collections=total_collections,
            collection_rate=_percent(total_collections, total_sales),
            outstanding=total_sales - total_collections,
            production_quantity=sum(to_float(b.get("quantity_produced")) for b in batches),
            batch_count=len(batches),
            completed_batches=completed,
            completion_rate=_percent(completed, len(batches)),
            total_purchases=total_purchases,
            gross_margin=gross_margin,
            margin_percent=_percent(gross_margin, total_sales),
            trend=trend,
        )


class _MonthReport(_RangeReport):
    def default_range(self) -> DateRange:
        return preset_range(MONTHLY, self._clock())


class SalesReportService(_MonthReport):
    def build(self, period: DateRange) -> SalesReport:
        rows = list(self._repo.sales_rows(period.start, period.end))
        receipts = list(self._repo.collection_rows(period.start, period.end))
        total_sales = sum(to_float(r.get("total_amount")) for r in rows)
        total_collections = sum(to_float(c.get("amount")) for c in receipts)

        by_day: dict[date, float] = defaultdict(float)
        for r in rows:
            by_day[r["invoice_date"]] += to_float(r.get("total_amount"))

        return SalesReport(
            period=period,
            rows=rows,
            total_sales=total_sales,
            total_collections=total_collections,
            outstanding=total_sales - total_collections,
            invoice_count=len(rows),
            receipt_count=len(receipts),
            customer_count=len({r.get("customer_id") for r in rows}),
            daily_sales=[ChartPoint(day.strftime("%d %b"), value) for day, value in sorted(by_day.items())],
            top_customers=top_totals(
                ((r.get("customer_name") or UNKNOWN, to_float(r.get("total_amount"))) for r in rows),
                limit=5,
                label_width=40,
            ),
        )


def aging_label(days_old: int) -> str:
    for limit, label in AGING_BUCKETS:
        if days_old <= limit:
            return label
    return AGING_OVERFLOW


class CollectionReportService:
    """Outstanding receivables aged from the invoice date."""

    def __init__(self, repo: ReportRepository, *, clock: Callable[[], date] = date.today):
        self._repo = repo
        self._clock = clock

    def build(self) -> CollectionReport:
        as_of = self._clock()
        rows = []
        for inv in self._repo.outstanding_invoices():
            days_old = (as_of - inv["invoice_date"]).days
            rows.append(
                dict(
                    inv,
                    outstanding=to_float(inv.get("total_amount")) - to_float(inv.get("paid_amount")),
                    days_old=days_old,
                    aging=aging_label(days_old),
                )
            )

        total = sum(r["outstanding"] for r in rows)
        bucket_totals = {label: 0.0 for _, label in AGING_BUCKETS}
        bucket_totals[AGING_OVERFLOW] = 0.0
        for r in rows:
            bucket_totals[r["aging"]] += r["outstanding"]

        per_customer: dict = {}
        for r in rows:
            entry = per_customer.setdefault(
                r.get("customer_id"),
                {"name": r.get("customer_name") or UNKNOWN, "code": r.get("customer_code"),
                 "outstanding": 0.0, "count": 0, "oldest": 0},
            )
            entry["outstanding"] += r["outstanding"]
            entry["count"] += 1
            entry["oldest"] = max(entry["oldest"], r["days_old"])
        customers = sorted(
            (
                CustomerOutstanding(e["name"], e["code"], e["outstanding"], e["count"], e["oldest"])
                for e in per_customer.values()
                if e["outstanding"] > 0
            ),
            key=lambda c: c.outstanding,
            reverse=True,
        )

        # A blank or zero credit period falls back to the default terms.
        overdue = [
            r for r in rows
            if r["outstanding"] > 0 and r["days_old"] > (int(r.get("credit_period") or 0) or DEFAULT_CREDIT_DAYS)
        ]

        return CollectionReport(
            as_of=as_of,
            rows=rows,
            total_outstanding=total,
            open_invoices=sum(1 for r in rows if r["outstanding"] > 0),
            aging=[AgingBucket(label, amount, _percent(amount, total)) for label, amount in bucket_totals.items()],
            customers=customers,
            overdue=overdue,
        )


class KeilCollectionReportService(_MonthReport):
    def routes(self) -> list[dict]:
        return list(self._repo.active_routes())

    def build(self, period: DateRange, route_id: Optional[int] = None) -> KeilCollectionReport:
        rows = list(self._repo.keil_collection_rows(period.start, period.end, route_id))
        total_weight = sum(to_float(r.get("total_weight")) for r in rows)

        by_route: dict[str, list] = {}
        by_day: dict[date, list] = {}
        for r in rows:
            weight = to_float(r.get("total_weight"))
            bags = int(to_float(r.get("total_bags")))
            route = by_route.setdefault(r.get("route_name") or UNKNOWN, [0.0, 0, 0])
            route[0] += weight
            route[1] += bags
            route[2] += 1
            day = by_day.setdefault(r["collection_date"], [0.0, 0])
            day[0] += weight
            day[1] += bags

        return KeilCollectionReport(
            period=period,
            route_id=route_id,
            rows=rows,
            total_weight=total_weight,
            total_bags=sum(int(to_float(r.get("total_bags"))) for r in rows),
            total_trips=len(rows),
            average_weight=round(total_weight / len(rows), 2) if rows else 0.0,
            by_route=[RouteCollection(name, w, b, t) for name, (w, b, t) in by_route.items()],
            by_date=[DayCollection(day, w, b) for day, (w, b) in sorted(by_day.items())],
        )
