from __future__ import annotations

from datetime import date

import pytest

from fakes import FakeDashboardRepo, FakeReportRepo, FakeStockRepo, TODAY
from src.erp_dashboard.erp_dashboard.dashboard.service import DashboardService
from src.erp_dashboard.erp_dashboard.reports.model import (
    AgingBucket,
    ChartPoint,
    CustomerOutstanding,
    DateRange,
    DayCollection,
    RouteCollection,
)
from src.erp_dashboard.erp_dashboard.reports.periods import last_days, preset_range, resolve_range
from src.erp_dashboard.erp_dashboard.reports.service import (
    AttendanceReportService,
    CollectionReportService,
    KeilCollectionReportService,
    ProductionReportService,
    PurchaseReportService,
    SalesReportService,
    ScorecardService,
    aging_label,
    top_totals,
)

MARCH = DateRange(date(2024, 3, 1), date(2024, 3, 31))


def _clock():
    return TODAY


def test_last_days_default_is_thirty_days():
    assert last_days(TODAY) == DateRange(date(2024, 2, 14), TODAY)


@pytest.mark.parametrize(
    "preset, expected",
    [
        ("daily", DateRange(date(2024, 3, 8), TODAY)),
        ("weekly", DateRange(date(2024, 2, 14), TODAY)),
        ("monthly", MARCH),
    ],
)
def test_preset_ranges(preset, expected):
    assert preset_range(preset, TODAY) == expected


def test_resolve_range_swaps_reversed_dates_and_ignores_garbage():
    default = last_days(TODAY)
    assert resolve_range("2024-03-10", "2024-03-01", default) == DateRange(date(2024, 3, 1), date(2024, 3, 10))
    assert resolve_range("garbage", None, default) == default


def test_top_totals_sums_sorts_and_truncates():
    points = top_totals([("Alpha Plastics Ltd", 10), ("Beta", 30), ("Alpha Plastics Ltd", 25)], limit=1, label_width=5)
    assert points == [ChartPoint("Alpha", 35)]


def test_attendance_report_counts_and_departments():
    repo = FakeReportRepo(
        attendance=[
            {"status": "present", "department": "Production"},
            {"status": "half_day", "department": "Production"},
            {"status": "absent", "department": "Production"},
            {"status": "leave", "department": None},
        ]
    )
    report = AttendanceReportService(repo, clock=_clock).build(MARCH)

    assert (report.present, report.absent, report.half_day, report.leave) == (1, 1, 1, 1)
    assert report.total_records == 4
    assert [p.name for p in report.status_chart] == ["Present", "Absent", "Half Day", "Leave"]
    by_dept = {d.name: (d.present, d.absent) for d in report.departments}
    assert by_dept == {"Production": (2, 1), "Unknown": (0, 1)}


def test_top_totals_merges_names_that_share_a_label():
    points = top_totals([("Polymer Traders North", 10), ("Polymer Traders South", 5)], limit=5, label_width=15)
    assert points == [ChartPoint("Polymer Traders", 15)]


def test_department_labels_are_unique_after_truncation():
    repo = FakeReportRepo(
        attendance=[
            {"status": "present", "department": "Quality Assurance Lab"},
            {"status": "absent", "department": "Quality Assurance Office"},
        ]
    )
    report = AttendanceReportService(repo, clock=_clock).build(MARCH)

    assert [(d.name, d.present, d.absent) for d in report.departments] == [("Quality Assuran", 1, 1)]


def test_attendance_service_default_range_uses_clock():
    repo = FakeReportRepo()
    svc = AttendanceReportService(repo, clock=_clock)
    period = svc.resolve()
    svc.build(period)
    assert repo.calls == [("attendance", date(2024, 2, 14), TODAY)]


def test_production_report():
    repo = FakeReportRepo(
        production=[
            {"quantity_produced": 100, "shift": "morning", "status": "completed", "employee_id": 1, "product_name": "Bag"},
            {"quantity_produced": 50, "shift": "night", "status": "in_progress", "employee_id": 1, "product_name": "Film"},
            {"quantity_produced": 30, "shift": None, "status": "completed", "employee_id": None, "product_name": "Bag"},
        ]
    )
    report = ProductionReportService(repo, clock=_clock).build(MARCH)

    assert report.total_quantity == 180
    assert report.batch_count == 3
    assert report.completed_batches == 2
    assert report.average_batch_size == 60
    assert report.operator_count == 1
    assert {p.name: p.value for p in report.by_shift} == {"morning": 100, "night": 50, "Unknown": 30}
    assert report.top_products[0] == ChartPoint("Bag", 130)


def test_purchase_report_on_empty_period():
    report = PurchaseReportService(FakeReportRepo(), clock=_clock).build(MARCH)
    assert report.total_amount == 0
    assert report.average_amount == 0.0
    assert report.supplier_count == 0
    assert report.top_suppliers == []


def test_purchase_report_counts_distinct_suppliers():
    repo = FakeReportRepo(
        purchases=[
            {"total_amount": 1000, "supplier_id": 1, "supplier_name": "Acme"},
            {"total_amount": 500, "supplier_id": 1, "supplier_name": "Acme"},
            {"total_amount": 300, "supplier_id": 2, "supplier_name": "Zenith"},
        ]
    )
    report = PurchaseReportService(repo, clock=_clock).build(MARCH)
    assert report.purchase_count == 3
    assert report.supplier_count == 2
    assert report.average_amount == 600
    assert report.top_suppliers[0] == ChartPoint("Acme", 1500)


def test_scorecard_kpis_and_daily_trend():
    period = DateRange(date(2024, 3, 1), date(2024, 3, 3))
    repo = FakeReportRepo(
        sales=[
            {"invoice_date": date(2024, 3, 1), "total_amount": 1000},
            {"invoice_date": date(2024, 3, 3), "total_amount": 1000},
        ],
        collections=[{"payment_date": date(2024, 3, 2), "amount": 500}],
        production=[{"quantity_produced": 10, "status": "completed"}, {"quantity_produced": 5, "status": "cancelled"}],
        purchases=[{"total_amount": 1500}],
    )
    card = ScorecardService(repo, clock=_clock).build(period, preset="daily")

    assert card.total_sales == 2000
    assert card.collection_rate == 25.0
    assert card.outstanding == 1500
    assert card.completion_rate == 50.0
    assert card.gross_margin == 500
    assert card.margin_percent == 25.0
    assert [(t.label, t.sales, t.collections) for t in card.trend] == [
        ("01/03", 1000, 0.0),
        ("02/03", 0.0, 500),
        ("03/03", 1000, 0.0),
    ]


def test_scorecard_without_sales_has_zero_rates():
    card = ScorecardService(FakeReportRepo(), clock=_clock).build(MARCH)
    assert card.collection_rate == 0.0
    assert card.margin_percent == 0.0
    assert len(card.trend) == 31


def test_scorecard_unknown_preset_falls_back_to_month():
    assert ScorecardService(FakeReportRepo(), clock=_clock).preset("yearly") == MARCH


def test_dashboard_kpis():
    stock = FakeStockRepo(
        raw=[{"current_stock": 0, "min_stock_level": 5}, {"current_stock": 50, "min_stock_level": 5}],
        finished=[{"current_stock": 4, "min_stock_level": 5}],
    )
    repo = FakeDashboardRepo(active_employees=12, present=9, pending_returns=2, production=1500.0, outstanding=2500.0)

    kpis = DashboardService(repo, stock, clock=_clock).kpis()

    assert kpis.active_employees == 12
    assert kpis.present_today == 9
    assert kpis.low_stock_items == 2
    assert kpis.pending_returns == 2
    assert kpis.month_production == 1500.0
    assert kpis.month_outstanding == 2500.0
    assert ("present", TODAY) in repo.calls
    assert ("outstanding", date(2024, 3, 1), date(2024, 3, 31)) in repo.calls


def test_sales_report_defaults_to_current_month():
    assert SalesReportService(FakeReportRepo(), clock=_clock).default_range() == MARCH


def test_sales_report_totals_trend_and_top_customers():
    repo = FakeReportRepo(
        sales=[
            {"invoice_date": date(2024, 3, 2), "customer_id": 1, "customer_name": "Sharma Traders", "total_amount": 1180},
            {"invoice_date": date(2024, 3, 2), "customer_id": 2, "customer_name": "Gupta & Co", "total_amount": 590},
            {"invoice_date": date(2024, 3, 5), "customer_id": 1, "customer_name": "Sharma Traders", "total_amount": 2360},
        ],
        collections=[{"payment_date": date(2024, 3, 6), "amount": 1000}],
    )
    report = SalesReportService(repo, clock=_clock).build(MARCH)

    assert report.total_sales == 4130.0
    assert report.total_collections == 1000.0
    assert report.outstanding == 3130.0
    assert (report.invoice_count, report.receipt_count, report.customer_count) == (3, 1, 2)
    assert report.daily_sales == [ChartPoint("02 Mar", 1770.0), ChartPoint("05 Mar", 2360.0)]
    assert report.top_customers[0] == ChartPoint("Sharma Traders", 3540.0)


@pytest.mark.parametrize("days, label", [(0, "0-30 Days"), (30, "0-30 Days"), (31, "31-60 Days"),
                                         (90, "61-90 Days"), (91, "90+ Days")])
def test_aging_label_edges(days, label):
    assert aging_label(days) == label


def test_collection_report_aging_customers_and_overdue():
    repo = FakeReportRepo(
        outstanding=[
            {"invoice_number": "INV-A", "invoice_date": date(2024, 3, 1), "customer_id": 1,
             "customer_name": "Sharma Traders", "customer_code": "CUS-001", "credit_period": 10,
             "total_amount": 1000, "paid_amount": 200, "status": "partial"},
            {"invoice_number": "INV-B", "invoice_date": date(2024, 1, 20), "customer_id": 1,
             "customer_name": "Sharma Traders", "customer_code": "CUS-001", "credit_period": None,
             "total_amount": 500, "paid_amount": 0, "status": "pending"},
            {"invoice_number": "INV-C", "invoice_date": date(2023, 11, 1), "customer_id": 2,
             "customer_name": "Gupta & Co", "customer_code": "CUS-002", "credit_period": 0,
             "total_amount": 300, "paid_amount": 0, "status": "pending"},
            {"invoice_number": "INV-D", "invoice_date": date(2024, 3, 10), "customer_id": 2,
             "customer_name": "Gupta & Co", "customer_code": "CUS-002", "credit_period": 0,
             "total_amount": 200, "paid_amount": 200, "status": "partial"},
        ]
    )
    report = CollectionReportService(repo, clock=_clock).build()

    assert report.as_of == TODAY
    assert [r["days_old"] for r in report.rows] == [14, 55, 135, 5]
    assert report.total_outstanding == 1600.0
    assert report.open_invoices == 3
    assert report.aging == [
        AgingBucket("0-30 Days", 800.0, 50.0),
        AgingBucket("31-60 Days", 500.0, 31.25),
        AgingBucket("61-90 Days", 0.0, 0.0),
        AgingBucket("90+ Days", 300.0, 18.75),
    ]
    assert (report.current, report.overdue_amount, report.critical) == (800.0, 500.0, 300.0)
    assert report.customers == [
        CustomerOutstanding("Sharma Traders", "CUS-001", 1300.0, 2, 55),
        CustomerOutstanding("Gupta & Co", "CUS-002", 300.0, 2, 135),
    ]
    assert [r["invoice_number"] for r in report.overdue] == ["INV-A", "INV-B", "INV-C"]


def test_collection_report_with_nothing_outstanding():
    report = CollectionReportService(FakeReportRepo(), clock=_clock).build()
    assert report.total_outstanding == 0
    assert all(b.percent == 0.0 for b in report.aging)
    assert report.customers == [] and report.overdue == []


def test_keil_collection_report_aggregates_by_route_and_day():
    repo = FakeReportRepo(
        keil=[
            {"collection_date": date(2024, 3, 3), "route_id": 1, "route_name": "North", "total_weight": 120.5, "total_bags": 10},
            {"collection_date": date(2024, 3, 2), "route_id": 2, "route_name": "South", "total_weight": 80, "total_bags": 6},
            {"collection_date": date(2024, 3, 2), "route_id": 1, "route_name": "North", "total_weight": 99.5, "total_bags": 9},
        ]
    )
    svc = KeilCollectionReportService(repo, clock=_clock)
    report = svc.build(svc.default_range())

    assert report.period == MARCH
    assert (report.total_weight, report.total_bags, report.total_trips) == (300.0, 25, 3)
    assert report.average_weight == 100.0
    assert report.by_route == [RouteCollection("North", 220.0, 19, 2), RouteCollection("South", 80.0, 6, 1)]
    assert report.by_route[0].average_weight == 110.0
    assert report.by_date == [DayCollection(date(2024, 3, 2), 179.5, 15), DayCollection(date(2024, 3, 3), 120.5, 10)]


def test_keil_collection_report_filters_by_route():
    repo = FakeReportRepo(
        keil=[
            {"collection_date": date(2024, 3, 3), "route_id": 1, "route_name": "North", "total_weight": 10, "total_bags": 1},
            {"collection_date": date(2024, 3, 3), "route_id": 2, "route_name": "South", "total_weight": 20, "total_bags": 2},
        ]
    )
    report = KeilCollectionReportService(repo, clock=_clock).build(MARCH, 2)
    assert report.route_id == 2
    assert report.total_weight == 20.0
    assert repo.calls[-1] == ("keil", MARCH.start, MARCH.end, 2)


def test_keil_collection_report_empty_period():
    report = KeilCollectionReportService(FakeReportRepo(), clock=_clock).build(MARCH)
    assert report.average_weight == 0.0
    assert report.by_route == [] and report.by_date == []
