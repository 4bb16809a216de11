from __future__ import annotations

from datetime import date

from ..common.sequence import NumberSpec
from ..common.table import Column
from ..core.enums import FuelType, ReturnMethod, ReturnStatus
from ..crud import lookups
from ..crud.resource import Field, Resource, Stat, choices_of, today
from ..database.mysql_base import to_float

FUEL_TYPE_CHOICES = (
    (FuelType.DIESEL.value, "Diesel"),
    (FuelType.PETROL.value, "Petrol"),
    (FuelType.CNG.value, "CNG"),
    (FuelType.ELECTRIC.value, "Electric"),
)


def with_fuel_total(payload: dict) -> dict:
    quantity = payload.get("quantity_liters") or 0.0
    payload["total_amount"] = round(quantity * (payload.get("price_per_liter") or 0.0), 2)
    return payload


def fuel_summary(rows: list[dict], _today: date, _options: dict) -> list[Stat]:
    liters = sum(to_float(r.get("quantity_liters")) for r in rows)
    cost = sum(to_float(r.get("total_amount")) for r in rows)
    avg_rate = sum(to_float(r.get("price_per_liter")) for r in rows) / len(rows) if rows else 0.0
    return [
        Stat("Total Fuel (L)", liters, "number", "bi-fuel-pump"),
        Stat("Total Cost", cost, "money", "bi-currency-rupee"),
        Stat("Avg Rate/L", avg_rate, "money", "bi-speedometer"),
    ]


PURCHASE_RETURNS = Resource(
    name="purchase_returns",
    table="purchase_returns",
    section="inventory",
    slug="purchase-returns",
    title="Purchase Returns",
    singular="Purchase return",
    fields=(
        Field("return_date", "Return Date", kind="date", required=True, default=today),
        Field("purchase_id", "Purchase (GRN)", kind="lookup", lookup="purchases"),
        Field("return_method", "Return Method", kind="select", choices=choices_of(ReturnMethod),
              default=ReturnMethod.DIRECT.value),
        Field("total_amount", "Total Amount (₹)", kind="number", default=0),
        Field("status", "Status", kind="select", choices=choices_of(ReturnStatus),
              default=ReturnStatus.PENDING.value, width=12),
        Field("reason", "Reason", kind="textarea", width=12),
    ),
    columns=(
        Column("return_number", "Return No.", css_class="fw-semibold"),
        Column("return_date", "Date", "date"),
        Column("purchase_number", "GRN"),
        Column("supplier_name", "Supplier"),
        Column("return_method", "Method", "badge"),
        Column("total_amount", "Amount", "money", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("return_number", "purchase_number", "supplier_name"),
    select_extra=", p.purchase_number AS purchase_number, s.name AS supplier_name",
    joins=(
        "LEFT JOIN purchases p ON p.id = t.purchase_id "
        "LEFT JOIN suppliers s ON s.id = p.supplier_id"
    ),
    lookups=(lookups.PURCHASES,),
    number=NumberSpec("return_number", "PR"),
    add_label="New Return",
    empty_message="No purchase returns found",
    search_placeholder="Search by return, GRN or supplier...",
)

FUEL_CONSUMPTION = Resource(
    name="fuel_consumption",
    table="fuel_consumption",
    section="inventory",
    slug="fuel",
    title="Fuel Consumption",
    singular="Fuel entry",
    fields=(
        Field("vehicle_id", "Vehicle", kind="lookup", lookup="vehicles", required=True),
        Field("fuel_date", "Date", kind="date", required=True, default=today),
        Field("fuel_type", "Fuel Type", kind="select", choices=FUEL_TYPE_CHOICES, default=FuelType.DIESEL.value, width=4),
        Field("quantity_liters", "Quantity (L)", kind="number", required=True, width=4),
        Field("price_per_liter", "Rate/L (₹)", kind="number", required=True, width=4),
        Field("odometer_reading", "Odometer Reading", kind="number", nullable=True, width=4),
        Field("fuel_station", "Fuel Station", width=4),
        Field("receipt_number", "Receipt No.", width=4),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("fuel_date", "Date", "date"),
        Column("vehicle_number", "Vehicle", css_class="fw-semibold"),
        Column("fuel_type", "Fuel Type", "badge"),
        Column("quantity_liters", "Quantity (L)", "number", "text-end"),
        Column("price_per_liter", "Rate/L (₹)", "money", "text-end"),
        Column("total_amount", "Total (₹)", "money", "text-end"),
        Column("odometer_reading", "Odometer", "number", "text-end"),
        Column("fuel_station", "Station"),
    ),
    search_fields=("vehicle_number", "fuel_station", "receipt_number"),
    order_by="t.fuel_date DESC, t.created_at DESC",
    select_extra=", v.registration_number AS vehicle_number",
    joins="LEFT JOIN vehicles v ON v.id = t.vehicle_id",
    lookups=(lookups.VEHICLES,),
    compute=with_fuel_total,
    summary=fuel_summary,
    add_label="Add Fuel Entry",
    empty_message="No fuel entries found",
    search_placeholder="Search by vehicle, station...",
)

RESOURCES = (PURCHASE_RETURNS, FUEL_CONSUMPTION)
