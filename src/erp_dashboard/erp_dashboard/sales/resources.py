from __future__ import annotations

from ..common.sequence import MONTHLY, NumberSpec
from ..common.table import Column
from ..core.constants import DEFAULT_GST_PERCENTAGE
from ..core.enums import DeliveryStatus, InvoiceStatus, OrderStatus, ReturnMethod, ReturnStatus
from ..crud import lookups
from ..crud.resource import Field, LineItems, Resource, choices_of, today


def with_gst(payload: dict) -> dict:
    """Derive GST and total from subtotal and GST percentage."""
    subtotal = payload.get("subtotal") or 0.0
    gst_percentage = payload.get("gst_percentage") or 0.0
    gst_amount = round(subtotal * gst_percentage / 100, 2)
    payload["gst_amount"] = gst_amount
    payload["total_amount"] = round(subtotal + gst_amount, 2)
    return payload


def with_balance(row: dict) -> dict:
    total = float(row.get("total_amount") or 0)
    paid = float(row.get("paid_amount") or 0)
    row["balance_amount"] = total - paid
    return row


CUSTOMER_ORDERS = Resource(
    name="customer_orders",
    table="customer_orders",
    section="sales",
    slug="orders",
    title="Customer Orders",
    singular="Order",
    fields=(
        Field("customer_id", "Customer", kind="lookup", lookup="customers", required=True, width=12),
        Field("order_date", "Order Date", kind="date", required=True, default=today, width=4),
        Field("expected_delivery", "Expected Delivery", kind="date", width=4),
        Field("status", "Status", kind="select", choices=choices_of(OrderStatus),
              default=OrderStatus.PENDING.value, width=4),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("order_number", "Order No.", css_class="fw-semibold"),
        Column("order_date", "Date", "date"),
        Column("customer_name", "Customer"),
        Column("expected_delivery", "Expected", "date"),
        Column("total_amount", "Amount", "money", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("order_number", "customer_name"),
    order_by="t.order_date DESC, t.created_at DESC",
    select_extra=", c.name AS customer_name",
    joins="LEFT JOIN customers c ON c.id = t.customer_id",
    lookups=(lookups.CUSTOMERS,),
    number=NumberSpec("order_number", "SO"),
    items=LineItems(
        table="customer_order_items",
        parent_column="order_id",
        product_column="finished_good_id",
        product_table="finished_goods",
        lookup=lookups.PRICED_FINISHED_GOODS,
    ),
    add_label="New Order",
    empty_message="No customer orders found",
    search_placeholder="Search orders...",
)

SALES_INVOICES = Resource(
    name="sales_invoices",
    table="sales_invoices",
    section="sales",
    slug="invoices",
    title="Sales Invoices",
    singular="Invoice",
    fields=(
        Field("customer_id", "Customer", kind="lookup", lookup="customers", required=True, width=12),
        Field("invoice_date", "Invoice Date", kind="date", required=True, default=today),
        Field("status", "Status", kind="select", choices=choices_of(InvoiceStatus),
              default=InvoiceStatus.PENDING.value),
        Field("gst_percentage", "GST %", kind="number", default=DEFAULT_GST_PERCENTAGE),
        Field("paid_amount", "Paid Amount (₹)", kind="number", default=0),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("invoice_number", "Invoice No.", css_class="fw-semibold"),
        Column("invoice_date", "Date", "date"),
        Column("customer_name", "Customer"),
        Column("subtotal", "Subtotal", "money", "text-end"),
        Column("gst_amount", "GST", "money", "text-end"),
        Column("total_amount", "Total", "money", "text-end"),
        Column("paid_amount", "Paid", "money", "text-end"),
        Column("balance_amount", "Balance", "money", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("invoice_number", "customer_name"),
    order_by="t.invoice_date DESC, t.created_at DESC",
    select_extra=", c.name AS customer_name",
    joins="LEFT JOIN customers c ON c.id = t.customer_id",
    lookups=(lookups.CUSTOMERS,),
    number=NumberSpec("invoice_number", "INV", period=MONTHLY, width=4),
    items=LineItems(
        table="sales_invoice_items",
        parent_column="invoice_id",
        product_column="finished_good_id",
        product_table="finished_goods",
        lookup=lookups.PRICED_FINISHED_GOODS,
        total_column="subtotal",
        min_items=1,
    ),
    compute=with_gst,
    decorate=with_balance,
    add_label="New Invoice",
    empty_message="No invoices found",
    search_placeholder="Search by invoice number or customer...",
)

DELIVERIES = Resource(
    name="deliveries",
    table="deliveries",
    section="sales",
    slug="deliveries",
    title="Deliveries",
    singular="Delivery",
    fields=(
        Field("delivery_date", "Delivery Date", kind="date", required=True, default=today),
        Field("customer_id", "Customer", kind="lookup", lookup="customers", required=True),
        Field("invoice_id", "Invoice", kind="lookup", lookup="invoices"),
        Field("vehicle_id", "Vehicle", kind="lookup", lookup="vehicles"),
        Field("driver_name", "Driver Name"),
        Field("status", "Status", kind="select", choices=choices_of(DeliveryStatus),
              default=DeliveryStatus.PENDING.value),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("delivery_number", "Delivery No.", css_class="fw-semibold"),
        Column("delivery_date", "Date", "date"),
        Column("invoice_number", "Invoice"),
        Column("customer_name", "Customer"),
        Column("vehicle_number", "Vehicle"),
        Column("driver_name", "Driver"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("delivery_number", "customer_name", "driver_name"),
    order_by="t.delivery_date DESC, t.created_at DESC",
    select_extra=(
        ", c.name AS customer_name, i.invoice_number AS invoice_number, "
        "v.registration_number AS vehicle_number"
    ),
    joins=(
        "LEFT JOIN customers c ON c.id = t.customer_id "
        "LEFT JOIN sales_invoices i ON i.id = t.invoice_id "
        "LEFT JOIN vehicles v ON v.id = t.vehicle_id"
    ),
    lookups=(lookups.CUSTOMERS, lookups.INVOICES, lookups.VEHICLES),
    number=NumberSpec("delivery_number", "DN"),
    add_label="New Delivery",
    empty_message="No deliveries found",
    search_placeholder="Search deliveries...",
)

SALES_RETURNS = Resource(
    name="sales_returns",
    table="sales_returns",
    section="sales",
    slug="returns",
    title="Sales Returns",
    singular="Sales return",
    fields=(
        Field("return_date", "Return Date", kind="date", required=True, default=today),
        Field("invoice_id", "Invoice", kind="lookup", lookup="invoices"),
        Field("return_method", "Return Method", kind="select", choices=choices_of(ReturnMethod),
              default=ReturnMethod.DIRECT.value),
        Field("handled_by", "Handled By", kind="lookup", lookup="employees"),
        Field("total_amount", "Total Amount (₹)", kind="number", default=0),
        Field("status", "Status", kind="select", choices=choices_of(ReturnStatus),
              default=ReturnStatus.PENDING.value),
        Field("reason", "Reason", kind="textarea", width=12),
    ),
    columns=(
        Column("return_number", "Return No.", css_class="fw-semibold"),
        Column("return_date", "Date", "date"),
        Column("invoice_number", "Invoice No."),
        Column("customer_name", "Customer"),
        Column("return_method", "Method", "badge"),
        Column("total_amount", "Amount", "money", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("return_number", "invoice_number", "customer_name"),
    order_by="t.return_date DESC, t.created_at DESC",
    select_extra=", i.invoice_number AS invoice_number, c.name AS customer_name, e.name AS handled_by_name",
    joins=(
        "LEFT JOIN sales_invoices i ON i.id = t.invoice_id "
        "LEFT JOIN customers c ON c.id = i.customer_id "
        "LEFT JOIN employees e ON e.id = t.handled_by"
    ),
    lookups=(lookups.INVOICES, lookups.ACTIVE_EMPLOYEES),
    number=NumberSpec("return_number", "SR"),
    add_label="New Return",
    empty_message="No sales returns found",
    search_placeholder="Search returns...",
)

RESOURCES = (CUSTOMER_ORDERS, SALES_INVOICES, DELIVERIES, SALES_RETURNS)
