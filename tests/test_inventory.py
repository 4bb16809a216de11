from __future__ import annotations

from datetime import date

import pytest
from werkzeug.datastructures import MultiDict

from fakes import FakePurchaseRepo, FakeStockRepo, TODAY
from src.erp_dashboard.erp_dashboard.core.enums import AppRole
from src.erp_dashboard.erp_dashboard.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.erp_dashboard.erp_dashboard.inventory.controller import items_from_form
from src.erp_dashboard.erp_dashboard.inventory.model import PurchaseItemInput, StatusBreakdown
from src.erp_dashboard.erp_dashboard.inventory.service import PurchaseService, StockReportService, keep_items


def _service():
    repo = FakePurchaseRepo()
    return PurchaseService(repo, clock=lambda: TODAY), repo


def test_create_purchase_totals_kept_items_only():
    svc, repo = _service()
    pid = svc.create(
        current_role=AppRole.DATA_ENTRY,
        form={"supplier_id": "1", "purchase_date": "2024-03-14", "invoice_number": "INV-77"},
        items=[
            {"raw_material_id": "1", "quantity": "100", "rate": "95"},
            {"raw_material_id": "", "quantity": "50", "rate": "10"},
            {"raw_material_id": "2", "quantity": "0", "rate": "80"},
            {"raw_material_id": "3", "quantity": "2.5", "rate": "200"},
        ],
    )

    purchase = svc.get_with_items(pid)
    assert purchase.purchase_number == "GRN-20240315-001"
    assert purchase.purchase_date == date(2024, 3, 14)
    assert purchase.total_amount == 10000.0
    assert purchase.status == "completed"
    assert [it.raw_material_id for it in purchase.items] == [1, 3]


def test_purchase_numbers_continue_for_the_day():
    svc, _ = _service()
    form = {"purchase_date": "2024-03-15"}
    svc.create(current_role=AppRole.MANAGER, form=form, items=[])
    second = svc.create(current_role=AppRole.MANAGER, form=form, items=[])
    assert svc.get_with_items(second).purchase_number == "GRN-20240315-002"


def test_create_purchase_validation_and_permissions():
    svc, _ = _service()
    with pytest.raises(AuthorizationError):
        svc.create(current_role=AppRole.VIEWER, form={"purchase_date": "2024-03-15"}, items=[])
    with pytest.raises(ValidationError):
        svc.create(current_role=AppRole.MANAGER, form={}, items=[])
    with pytest.raises(ValidationError):
        svc.create(current_role=AppRole.MANAGER, form={"purchase_date": "2024-03-15", "status": "lost"}, items=[])


def test_delete_purchase():
    svc, repo = _service()
    pid = svc.create(current_role=AppRole.MANAGER, form={"purchase_date": "2024-03-15"}, items=[])
    svc.delete(current_role=AppRole.MANAGER, purchase_id=pid)
    assert repo.purchases == {}
    with pytest.raises(NotFoundError):
        svc.delete(current_role=AppRole.MANAGER, purchase_id=pid)
    with pytest.raises(NotFoundError):
        svc.get_with_items(pid)


def test_keep_items():
    items = [PurchaseItemInput(None, 5, 1), PurchaseItemInput(2, -1, 1), PurchaseItemInput(3, 1, 0)]
    assert keep_items(items) == [items[2]]


def test_items_from_form_zips_parallel_lists():
    form = MultiDict(
        [
            ("item_material", "1"), ("item_quantity", "10"), ("item_rate", "5"),
            ("item_material", "2"), ("item_quantity", "3"), ("item_rate", "7"),
        ]
    )
    assert items_from_form(form) == [
        {"raw_material_id": "1", "quantity": "10", "rate": "5"},
        {"raw_material_id": "2", "quantity": "3", "rate": "7"},
    ]


def test_stock_summary_counts_all_items_and_filters_tables():
    repo = FakeStockRepo(
        raw=[
            {"id": 1, "code": "RM-001", "name": "LDPE", "unit": "Kg", "current_stock": 0, "min_stock_level": 10, "rate": 90},
            {"id": 2, "code": "RM-002", "name": "HDPE", "unit": "Kg", "current_stock": 100, "min_stock_level": 10, "rate": 80},
        ],
        finished=[
            {"id": 1, "code": "FG-001", "name": "Carry Bag", "unit": "Pcs", "current_stock": 5, "min_stock_level": 10, "rate": 2},
        ],
    )

    summary = StockReportService(repo).summary("hdpe")

    assert [l.code for l in summary.raw_materials] == ["RM-002"]
    assert summary.finished_goods == ()
    assert summary.low_stock_count == 2
    assert summary.out_of_stock_count == 1
    assert summary.raw_material_value == 8000.0
    assert summary.finished_goods_value == 10.0
    assert summary.total_value == 8010.0


def test_stock_summary_counts_items_without_a_minimum_when_empty():
    repo = FakeStockRepo(
        raw=[
            {"id": 1, "code": "RM-001", "name": "LDPE", "current_stock": 0, "min_stock_level": 0, "rate": 90},
            {"id": 2, "code": "RM-002", "name": "HDPE", "current_stock": 4, "min_stock_level": 0, "rate": 80},
        ],
    )

    summary = StockReportService(repo).summary()

    assert summary.raw_materials[0].status is None
    assert summary.low_stock_count == 1
    assert summary.out_of_stock_count == 1


def test_stock_analytics_health_breakdown_and_rankings():
    repo = FakeStockRepo(
        raw=[
            {"id": 1, "code": "RM-001", "name": "LDPE", "current_stock": 0, "min_stock_level": 10, "rate": 90},
            {"id": 2, "code": "RM-002", "name": "HDPE", "current_stock": 100, "min_stock_level": 10, "rate": 80},
            {"id": 3, "code": "RM-003", "name": "Masterbatch Black Extra", "current_stock": 8, "min_stock_level": 10,
             "rate": 150},
        ],
        finished=[
            {"id": 1, "code": "FG-001", "name": "Carry Bag", "current_stock": 5, "min_stock_level": 10, "rate": 2},
            {"id": 2, "code": "FG-002", "name": "Garbage Bag", "current_stock": 50, "min_stock_level": 0, "rate": 3},
        ],
    )

    analytics = StockReportService(repo).analytics()

    assert analytics.item_count == 5
    assert analytics.health_score == 40
    assert analytics.status_breakdown == (
        StatusBreakdown("In Stock", 1, 1),
        StatusBreakdown("Low Stock", 1, 1),
        StatusBreakdown("Out of Stock", 1, 0),
    )
    assert [line.code for _, line in analytics.top_by_value] == ["RM-002", "RM-003", "FG-002", "FG-001", "RM-001"]
    assert analytics.comparison_labels == ["LDPE", "HDPE", "Masterbatch Bla", "Carry Bag"]
    assert [(kind, line.code, line.gap) for kind, line in analytics.critical] == [
        ("Raw Material", "RM-001", 10.0),
        ("Finished Good", "FG-001", 5.0),
        ("Raw Material", "RM-003", 2.0),
    ]


def test_stock_analytics_without_items_is_fully_healthy():
    analytics = StockReportService(FakeStockRepo()).analytics()
    assert analytics.health_score == 100
    assert analytics.critical == ()
