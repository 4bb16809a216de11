from __future__ import annotations

from ..common.table import Column
from ..core.constants import EMPLOYEE_DEPARTMENTS, FINISHED_GOOD_UNITS, RAW_MATERIAL_UNITS, VEHICLE_TYPES
from ..core.enums import EmployeeStatus, VehicleStatus
from ..crud.resource import Field, Resource, choices_of, plain_choices
from .stock import with_stock_status


RAW_MATERIALS = Resource(
    name="raw_materials",
    table="raw_materials",
    section="masters",
    slug="raw-materials",
    title="Raw Materials",
    singular="Raw material",
    fields=(
        Field("code", "Code", required=True),
        Field("name", "Name", required=True),
        Field("grade", "Grade"),
        Field("unit", "Unit", kind="select", choices=plain_choices(RAW_MATERIAL_UNITS), default="Kg"),
        Field("current_stock", "Current Stock", kind="number", default=0, width=4),
        Field("min_stock_level", "Min Stock Level", kind="number", default=0, width=4),
        Field("rate", "Rate (₹)", kind="number", default=0, width=4),
    ),
    columns=(
        Column("code", "Code", css_class="fw-semibold"),
        Column("name", "Name"),
        Column("grade", "Grade"),
        Column("unit", "Unit"),
        Column("current_stock", "Current Stock", "number", "text-end"),
        Column("stock_status", "Stock Status", "badge"),
        Column("min_stock_level", "Min Level", "number", "text-end"),
        Column("rate", "Rate", "money", "text-end"),
    ),
    search_fields=("code", "name", "grade"),
    order_by="t.name",
    decorate=with_stock_status,
    add_label="Add Material",
    empty_message="No raw materials found",
    search_placeholder="Search by code, name or grade...",
)

FINISHED_GOODS = Resource(
    name="finished_goods",
    table="finished_goods",
    section="masters",
    slug="finished-goods",
    title="Finished Goods",
    singular="Finished good",
    fields=(
        Field("code", "Code", required=True),
        Field("name", "Name", required=True),
        Field("size", "Size", width=4),
        Field("color", "Color", width=4),
        Field("thickness", "Thickness (mm)", kind="number", width=4),
        Field("unit", "Unit", kind="select", choices=plain_choices(FINISHED_GOOD_UNITS), default="Kg"),
        Field("no_per_kg", "No. per Kg", kind="number"),
        Field("current_stock", "Current Stock", kind="number", default=0, width=4),
        Field("min_stock_level", "Min Stock Level", kind="number", default=0, width=4),
        Field("rate", "Rate (₹)", kind="number", default=0, width=4),
    ),
    columns=(
        Column("code", "Code", css_class="fw-semibold"),
        Column("name", "Name"),
        Column("size", "Size"),
        Column("color", "Color"),
        Column("thickness", "Thickness", "number"),
        Column("current_stock", "Current Stock", "number", "text-end"),
        Column("stock_status", "Stock Status", "badge"),
        Column("rate", "Rate", "money", "text-end"),
    ),
    search_fields=("code", "name", "size", "color"),
    order_by="t.name",
    decorate=with_stock_status,
    add_label="Add Product",
    empty_message="No finished goods found",
    search_placeholder="Search by code, name, size or color...",
)


def _party_fields() -> tuple[Field, ...]:
    return (
        Field("code", "Code", required=True),
        Field("name", "Name", required=True),
        Field("contact_person", "Contact Person"),
        Field("phone", "Phone"),
        Field("email", "Email", kind="email"),
        Field("gst_number", "GST Number"),
        Field("address", "Address", kind="textarea", width=12),
        Field("credit_period", "Credit Period (days)", kind="number", default=0, width=4),
        Field("credit_limit", "Credit Limit (₹)", kind="number", default=0, width=4),
        Field("opening_balance", "Opening Balance (₹)", kind="number", default=0, width=4),
    )


def _party_columns() -> tuple[Column, ...]:
    return (
        Column("code", "Code", css_class="fw-semibold"),
        Column("name", "Name"),
        Column("contact_person", "Contact Person"),
        Column("phone", "Phone"),
        Column("gst_number", "GST Number"),
        Column("credit_limit", "Credit Limit", "money", "text-end"),
        Column("current_balance", "Balance", "money", "text-end"),
    )


SUPPLIERS = Resource(
    name="suppliers",
    table="suppliers",
    section="masters",
    slug="suppliers",
    title="Suppliers",
    singular="Supplier",
    fields=_party_fields(),
    columns=_party_columns(),
    search_fields=("code", "name", "contact_person"),
    order_by="t.name",
    add_label="Add Supplier",
    empty_message="No suppliers found",
    search_placeholder="Search by code, name or contact...",
)

CUSTOMERS = Resource(
    name="customers",
    table="customers",
    section="masters",
    slug="customers",
    title="Customers",
    singular="Customer",
    fields=_party_fields(),
    columns=_party_columns(),
    search_fields=("code", "name", "contact_person"),
    order_by="t.name",
    add_label="Add Customer",
    empty_message="No customers found",
    search_placeholder="Search by code, name or contact...",
)

EMPLOYEES = Resource(
    name="employees",
    table="employees",
    section="masters",
    slug="employees",
    title="Employees",
    singular="Employee",
    fields=(
        Field("code", "Employee Code", required=True),
        Field("name", "Full Name", required=True),
        Field("department", "Department", kind="select", choices=plain_choices(EMPLOYEE_DEPARTMENTS)),
        Field("designation", "Designation"),
        Field("phone", "Phone"),
        Field("email", "Email", kind="email"),
        Field("address", "Address", kind="textarea", width=12),
        Field("joining_date", "Joining Date", kind="date", width=4),
        Field("salary", "Salary (₹)", kind="number", default=0, width=4),
        Field("status", "Status", kind="select", choices=choices_of(EmployeeStatus),
              default=EmployeeStatus.ACTIVE.value, width=4),
        Field("loan_balance", "Loan Balance (₹)", kind="number", default=0),
        Field("suspense_balance", "Suspense Balance (₹)", kind="number", default=0),
    ),
    columns=(
        Column("code", "Code", css_class="fw-semibold"),
        Column("name", "Name"),
        Column("department", "Department"),
        Column("designation", "Designation"),
        Column("phone", "Phone"),
        Column("salary", "Salary", "money", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("code", "name", "department", "designation"),
    order_by="t.name",
    add_label="Add Employee",
    empty_message="No employees found",
    search_placeholder="Search by code, name, department...",
)

VEHICLES = Resource(
    name="vehicles",
    table="vehicles",
    section="masters",
    slug="vehicles",
    title="Vehicles",
    singular="Vehicle",
    fields=(
        Field("registration_number", "Registration No.", required=True),
        Field("vehicle_type", "Vehicle Type", kind="select", choices=plain_choices(VEHICLE_TYPES), default="Truck"),
        Field("make", "Make"),
        Field("model", "Model"),
        Field("purpose", "Purpose", width=12),
        Field("fitness_expiry", "Fitness Expiry", kind="date"),
        Field("insurance_expiry", "Insurance Expiry", kind="date"),
        Field("gps_enabled", "GPS Enabled", kind="checkbox"),
        Field("status", "Status", kind="select", choices=choices_of(VehicleStatus),
              default=VehicleStatus.ACTIVE.value),
    ),
    columns=(
        Column("registration_number", "Registration No.", css_class="fw-semibold"),
        Column("vehicle_type", "Type"),
        Column("make", "Make"),
        Column("model", "Model"),
        Column("purpose", "Purpose"),
        Column("fitness_expiry", "Fitness Expiry", "date"),
        Column("insurance_expiry", "Insurance Expiry", "date"),
        Column("gps_enabled", "GPS", "bool"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("registration_number", "make", "model", "vehicle_type"),
    order_by="t.registration_number",
    add_label="Add Vehicle",
    empty_message="No vehicles found",
    search_placeholder="Search by registration, make, model...",
)

RESOURCES = (RAW_MATERIALS, FINISHED_GOODS, SUPPLIERS, CUSTOMERS, EMPLOYEES, VEHICLES)
