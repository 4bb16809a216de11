from __future__ import annotations

from datetime import date, time

import pytest

from fakes import FakeCrudRepo, TODAY
from src.erp_dashboard.erp_dashboard.core.enums import AppRole
from src.erp_dashboard.erp_dashboard.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.erp_dashboard.erp_dashboard.crud.service import CrudService
from src.erp_dashboard.erp_dashboard.hr.resources import ATTENDANCE, MARKETING_VISITS
from src.erp_dashboard.erp_dashboard.finance.resources import PETTY_CASH, SUPPLIER_PAYMENTS
from src.erp_dashboard.erp_dashboard.inventory.resources import FUEL_CONSUMPTION, PURCHASE_RETURNS
from src.erp_dashboard.erp_dashboard.masters.resources import RAW_MATERIALS, VEHICLES
from src.erp_dashboard.erp_dashboard.masters.stock import LOW_STOCK, OUT_OF_STOCK, WARNING, is_low, stock_status
from src.erp_dashboard.erp_dashboard.production.resources import PRODUCTION_BATCHES
from src.erp_dashboard.erp_dashboard.sales.resources import CUSTOMER_ORDERS, SALES_INVOICES


def _service(resource, rows=None):
    repo = FakeCrudRepo(rows)
    return CrudService(repo, resource, clock=lambda: TODAY), repo


def test_create_generates_daily_number_from_existing_count():
    svc, repo = _service(PRODUCTION_BATCHES, [{"batch_number": "PB-20240315-001"}, {"batch_number": "PB-20240314-004"}])

    rid = svc.create(
        current_role=AppRole.DATA_ENTRY,
        form={"production_date": "2024-03-15", "quantity_produced": "1,500", "status": "completed"},
    )

    row = repo.rows[rid]
    assert row["batch_number"] == "PB-20240315-002"
    assert row["quantity_produced"] == 1500.0
    assert row["production_date"] == date(2024, 3, 15)
    assert row["shift"] is None
    assert row["employee_id"] is None


def test_purchase_return_number_format():
    svc, repo = _service(PURCHASE_RETURNS)
    rid = svc.create(current_role=AppRole.MANAGER, form={"return_date": "2024-03-15"})
    assert repo.rows[rid]["return_number"] == "PR-20240315-001"


def test_invoice_number_is_monthly_and_gst_is_derived():
    svc, repo = _service(SALES_INVOICES, [{"invoice_number": "INV-202403-0001"}])

    rid = svc.create(
        current_role=AppRole.MANAGER,
        form={"customer_id": "3", "invoice_date": "2024-03-10", "gst_percentage": "18"},
        items=[{"product_id": "1", "quantity": "2", "rate": "500"}],
    )

    row = repo.rows[rid]
    assert row["invoice_number"] == "INV-202403-0002"
    assert row["customer_id"] == 3
    assert row["subtotal"] == 1000.0
    assert row["gst_amount"] == 180.0
    assert row["total_amount"] == 1180.0
    assert row["paid_amount"] == 0.0


def test_invoice_subtotal_is_the_sum_of_its_items():
    svc, repo = _service(SALES_INVOICES)
    rid = svc.create(
        current_role=AppRole.MANAGER,
        form={"customer_id": "1", "invoice_date": "2024-03-10", "gst_percentage": "12", "subtotal": "99999"},
        items=[
            {"product_id": "1", "quantity": "10", "rate": "12.5"},
            {"product_id": "2", "quantity": "4", "rate": "100"},
            {"product_id": "", "quantity": "3", "rate": "50"},
            {"product_id": "3", "quantity": "0", "rate": "80"},
        ],
    )
    row = repo.rows[rid]
    assert row["subtotal"] == 525.0
    assert row["gst_amount"] == 63.0
    assert row["total_amount"] == 588.0
    assert [it["product_id"] for it in repo.items[rid]] == [1, 2]


def test_invoice_needs_at_least_one_item():
    svc, repo = _service(SALES_INVOICES)
    with pytest.raises(ValidationError, match="Please add at least one line item"):
        svc.create(
            current_role=AppRole.MANAGER,
            form={"customer_id": "1", "invoice_date": "2024-03-10"},
            items=[{"product_id": "", "quantity": "1", "rate": "10"}],
        )
    assert repo.rows == {}


def test_invoice_update_keeps_total_from_stored_items():
    svc, repo = _service(SALES_INVOICES)
    rid = svc.create(
        current_role=AppRole.MANAGER,
        form={"customer_id": "1", "invoice_date": "2024-03-10", "gst_percentage": "18"},
        items=[{"product_id": "4", "quantity": "5", "rate": "200"}],
    )
    svc.update(
        current_role=AppRole.MANAGER,
        row_id=rid,
        form={"customer_id": "1", "invoice_date": "2024-03-10", "gst_percentage": "5", "paid_amount": "500"},
    )
    row = repo.rows[rid]
    assert row["subtotal"] == 1000.0
    assert row["gst_amount"] == 50.0
    assert row["total_amount"] == 1050.0
    assert row["paid_amount"] == 500.0


def test_detail_returns_row_with_items():
    svc, _ = _service(SALES_INVOICES)
    rid = svc.create(
        current_role=AppRole.MANAGER,
        form={"customer_id": "1", "invoice_date": "2024-03-10"},
        items=[{"product_id": "7", "quantity": "3", "rate": "40"}],
    )
    row, items = svc.detail(rid)
    assert row["invoice_number"] == "INV-202403-0001"
    assert items[0]["product_code"] == "FG-007"
    assert items[0]["amount"] == 120.0
    with pytest.raises(NotFoundError):
        svc.detail(99)


def test_nan_gst_percentage_is_treated_as_zero():
    svc, repo = _service(SALES_INVOICES)
    rid = svc.create(
        current_role=AppRole.MANAGER,
        form={"customer_id": "1", "invoice_date": "2024-03-10", "gst_percentage": "nan"},
        items=[{"product_id": "1", "quantity": "1", "rate": "100"}],
    )
    assert repo.rows[rid]["total_amount"] == 100.0


def test_customer_order_items_are_optional_and_total_follows_them():
    svc, repo = _service(CUSTOMER_ORDERS)
    empty = svc.create(current_role=AppRole.MANAGER, form={"customer_id": "2", "order_date": "2024-03-15"})
    rid = svc.create(
        current_role=AppRole.MANAGER,
        form={"customer_id": "2", "order_date": "2024-03-15"},
        items=[{"product_id": "1", "quantity": "100", "rate": "2.5"}],
    )
    assert repo.rows[empty]["total_amount"] == 0.0
    assert repo.rows[empty]["order_number"] == "SO-20240315-001"
    assert repo.rows[rid]["total_amount"] == 250.0
    assert repo.rows[rid]["order_number"] == "SO-20240315-002"


def test_fuel_total_and_blank_odometer():
    svc, repo = _service(FUEL_CONSUMPTION)
    rid = svc.create(
        current_role=AppRole.DATA_ENTRY,
        form={"vehicle_id": "2", "fuel_date": "2024-03-15", "quantity_liters": "40", "price_per_liter": "94.25",
              "odometer_reading": ""},
    )
    row = repo.rows[rid]
    assert row["total_amount"] == 3770.0
    assert row["odometer_reading"] is None


def test_fuel_summary_averages_the_rate():
    svc, _ = _service(FUEL_CONSUMPTION, [
        {"quantity_liters": 10, "price_per_liter": 90, "total_amount": 900},
        {"quantity_liters": 20, "price_per_liter": 100, "total_amount": 2000},
    ])
    stats = {s.title: s.value for s in svc.summary(svc.list_rows())}
    assert stats == {"Total Fuel (L)": 30.0, "Total Cost": 2900.0, "Avg Rate/L": 95.0}
    assert svc.summary([])[2].value == 0.0


def test_petty_cash_balance():
    svc, _ = _service(PETTY_CASH, [
        {"transaction_type": "income", "amount": 5000},
        {"transaction_type": "expense", "amount": 1200},
        {"transaction_type": "expense", "amount": 300.5},
    ])
    income, expense, balance = svc.summary(svc.list_rows())
    assert (income.value, expense.value, balance.value) == (5000.0, 1500.5, 3499.5)
    assert balance.display == "₹3,499.50"
    assert balance.css == "text-success"


def test_required_amount_on_supplier_payment():
    svc, _ = _service(SUPPLIER_PAYMENTS)
    with pytest.raises(ValidationError, match=r"Amount \(₹\) is required"):
        svc.create(current_role=AppRole.MANAGER, form={"supplier_id": "1", "payment_date": "2024-03-15"})


def test_list_rows_adds_invoice_balance():
    svc, _ = _service(SALES_INVOICES, [{"invoice_number": "INV-1", "total_amount": 1180, "paid_amount": 500}])
    assert svc.list_rows()[0]["balance_amount"] == 680.0


def test_required_fields_are_enforced():
    svc, repo = _service(RAW_MATERIALS)
    with pytest.raises(ValidationError, match="Code is required"):
        svc.create(current_role=AppRole.MANAGER, form={"name": "LDPE"})
    assert repo.rows == {}


def test_select_rejects_unknown_choice():
    svc, _ = _service(ATTENDANCE)
    with pytest.raises(ValidationError, match="Status has an invalid value"):
        svc.create(
            current_role=AppRole.DATA_ENTRY,
            form={"employee_id": "1", "attendance_date": "2024-03-15", "status": "sleeping"},
        )


def test_attendance_times_and_dates_are_parsed():
    svc, repo = _service(ATTENDANCE)
    rid = svc.create(
        current_role=AppRole.DATA_ENTRY,
        form={"employee_id": "7", "attendance_date": "2024-03-15", "status": "present",
              "in_time": "09:00", "out_time": "18:30"},
    )
    row = repo.rows[rid]
    assert row["in_time"] == time(9, 0)
    assert row["out_time"] == time(18, 30)
    assert row["employee_id"] == 7


def test_bad_date_raises_validation_error():
    svc, _ = _service(MARKETING_VISITS)
    with pytest.raises(ValidationError):
        svc.create(current_role=AppRole.MANAGER, form={"visit_date": "15/03/2024", "customer_name": "Sharma"})


def test_viewer_cannot_create_update_or_delete():
    svc, repo = _service(RAW_MATERIALS, [{"code": "RM-001", "name": "LDPE"}])
    with pytest.raises(AuthorizationError):
        svc.create(current_role=AppRole.VIEWER, form={"code": "X", "name": "Y"})
    with pytest.raises(AuthorizationError):
        svc.update(current_role="viewer", row_id=1, form={"code": "X", "name": "Y"})
    with pytest.raises(AuthorizationError):
        svc.delete(current_role=None, row_id=1)
    assert len(repo.rows) == 1


def test_update_and_delete_missing_row_raise_not_found():
    svc, _ = _service(RAW_MATERIALS)
    with pytest.raises(NotFoundError, match="Raw material not found"):
        svc.update(current_role=AppRole.MANAGER, row_id=99, form={"code": "X", "name": "Y"})
    with pytest.raises(NotFoundError):
        svc.delete(current_role=AppRole.MANAGER, row_id=99)


def test_update_replaces_form_fields():
    svc, repo = _service(RAW_MATERIALS, [{"code": "RM-001", "name": "LDPE", "unit": "Kg", "rate": 90}])
    svc.update(current_role=AppRole.MANAGER, row_id=1, form={"code": "RM-001", "name": "LDPE Natural", "unit": "Bag", "rate": "97.5"})
    assert repo.rows[1]["name"] == "LDPE Natural"
    assert repo.rows[1]["unit"] == "Bag"
    assert repo.rows[1]["rate"] == 97.5


def test_checkbox_fields_parse_falsy_strings():
    svc, repo = _service(VEHICLES)
    on = svc.create(current_role=AppRole.MANAGER, form={"registration_number": "KA-01-1234", "gps_enabled": "on"})
    off = svc.create(current_role=AppRole.MANAGER, form={"registration_number": "KA-01-5678", "gps_enabled": "0"})
    missing = svc.create(current_role=AppRole.MANAGER, form={"registration_number": "KA-01-9999"})
    assert repo.rows[on]["gps_enabled"] is True
    assert repo.rows[off]["gps_enabled"] is False
    assert repo.rows[missing]["gps_enabled"] is False


def test_form_values_round_trip_display_strings():
    svc, _ = _service(SALES_INVOICES)
    values = svc.form_values({"invoice_date": date(2024, 3, 1), "gst_percentage": 18.0, "notes": None})
    assert values["invoice_date"] == "2024-03-01"
    assert values["gst_percentage"] == "18"
    assert "subtotal" not in values
    assert values["notes"] == ""


def test_blank_form_uses_defaults():
    svc, _ = _service(SALES_INVOICES)
    blank = svc.blank_form()
    assert blank["status"] == "pending"
    assert blank["gst_percentage"] == "18"
    assert blank["invoice_date"] == date.today().isoformat()


def test_raw_material_rows_carry_stock_status():
    svc, _ = _service(RAW_MATERIALS, [{"code": "RM-1", "name": "A", "current_stock": 0, "min_stock_level": 10}])
    assert svc.list_rows()[0]["stock_status"] == OUT_OF_STOCK


def test_search_filters_rows():
    svc, _ = _service(RAW_MATERIALS, [{"code": "RM-1", "name": "LDPE"}, {"code": "RM-2", "name": "HDPE"}])
    assert [r["code"] for r in svc.list_rows("hdpe")] == ["RM-2"]


def test_get_missing_row_raises():
    svc, _ = _service(RAW_MATERIALS)
    with pytest.raises(NotFoundError):
        svc.get(5)


@pytest.mark.parametrize(
    "current, minimum, expected",
    [
        (0, 10, OUT_OF_STOCK),
        (10, 10, LOW_STOCK),
        (12, 10, WARNING),
        (16, 10, None),
        (5, 0, None),
    ],
)
def test_stock_status(current, minimum, expected):
    assert stock_status(current, minimum) == expected


def test_is_low_only_counts_low_and_out_of_stock():
    assert is_low(0, 10)
    assert is_low(8, 10)
    assert not is_low(12, 10)
