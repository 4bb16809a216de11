from __future__ import annotations

from datetime import date

from ..common.sequence import NumberSpec
from ..common.table import Column
from ..core.constants import PETTY_CASH_CATEGORIES
from ..core.enums import PaymentMode, TransactionType
from ..crud import lookups
from ..crud.resource import Field, Resource, Stat, choices_of, plain_choices, today
from ..database.mysql_base import to_float

PAYMENT_MODE_CHOICES = (
    (PaymentMode.CASH.value, "Cash"),
    (PaymentMode.BANK.value, "Bank Transfer"),
    (PaymentMode.CHEQUE.value, "Cheque"),
    (PaymentMode.UPI.value, "UPI"),
)


def petty_cash_summary(rows: list[dict], _today: date, _options: dict) -> list[Stat]:
    income = sum(to_float(r.get("amount")) for r in rows if r.get("transaction_type") == TransactionType.INCOME.value)
    expense = sum(to_float(r.get("amount")) for r in rows if r.get("transaction_type") == TransactionType.EXPENSE.value)
    balance = income - expense
    return [
        Stat("Total Income", income, "money", "bi-arrow-down-circle", "text-success"),
        Stat("Total Expense", expense, "money", "bi-arrow-up-circle", "text-danger"),
        Stat("Balance", balance, "money", "bi-wallet2", "text-success" if balance >= 0 else "text-danger"),
    ]


COLLECTIONS = Resource(
    name="collections",
    table="customer_payments",
    section="finance",
    slug="collections",
    title="Collections",
    singular="Payment",
    fields=(
        Field("payment_date", "Payment Date", kind="date", required=True, default=today),
        Field("customer_id", "Customer", kind="lookup", lookup="customers"),
        Field("invoice_id", "Invoice", kind="lookup", lookup="invoices"),
        Field("amount", "Amount (₹)", kind="number", default=0),
        Field("payment_mode", "Payment Mode", kind="select", choices=PAYMENT_MODE_CHOICES,
              default=PaymentMode.CASH.value),
        Field("reference_number", "Reference No."),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("payment_number", "Receipt No.", css_class="fw-semibold"),
        Column("payment_date", "Date", "date"),
        Column("customer_name", "Customer"),
        Column("invoice_number", "Invoice"),
        Column("amount", "Amount", "money", "text-end"),
        Column("payment_mode", "Mode", "badge"),
        Column("reference_number", "Reference"),
    ),
    search_fields=("payment_number", "customer_name", "reference_number"),
    order_by="t.payment_date DESC, t.created_at DESC",
    select_extra=", c.name AS customer_name, i.invoice_number AS invoice_number",
    joins=(
        "LEFT JOIN customers c ON c.id = t.customer_id "
        "LEFT JOIN sales_invoices i ON i.id = t.invoice_id"
    ),
    lookups=(lookups.CUSTOMERS, lookups.INVOICES),
    number=NumberSpec("payment_number", "REC"),
    add_label="Record Payment",
    empty_message="No payments found",
    search_placeholder="Search by receipt, customer or reference...",
)

SUPPLIER_PAYMENTS = Resource(
    name="supplier_payments",
    table="supplier_payments",
    section="finance",
    slug="payments",
    title="Supplier Payments",
    singular="Payment",
    fields=(
        Field("supplier_id", "Supplier", kind="lookup", lookup="suppliers", required=True),
        Field("purchase_id", "Purchase (GRN)", kind="lookup", lookup="purchases"),
        Field("payment_date", "Payment Date", kind="date", required=True, default=today),
        Field("amount", "Amount (₹)", kind="number", required=True),
        Field("payment_mode", "Payment Mode", kind="select", choices=PAYMENT_MODE_CHOICES,
              default=PaymentMode.BANK.value),
        Field("reference_number", "Reference No."),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("payment_number", "Payment No.", css_class="fw-semibold"),
        Column("payment_date", "Date", "date"),
        Column("supplier_name", "Supplier"),
        Column("purchase_number", "Purchase"),
        Column("amount", "Amount", "money", "text-end"),
        Column("payment_mode", "Mode", "badge"),
        Column("reference_number", "Reference"),
    ),
    search_fields=("payment_number", "supplier_name", "reference_number"),
    order_by="t.payment_date DESC, t.created_at DESC",
    select_extra=", s.name AS supplier_name, p.purchase_number AS purchase_number",
    joins=(
        "LEFT JOIN suppliers s ON s.id = t.supplier_id "
        "LEFT JOIN purchases p ON p.id = t.purchase_id"
    ),
    lookups=(lookups.SUPPLIERS, lookups.PURCHASES),
    number=NumberSpec("payment_number", "PAY"),
    add_label="Record Payment",
    empty_message="No payments found",
    search_placeholder="Search payments...",
)

PETTY_CASH = Resource(
    name="petty_cash",
    table="petty_cash",
    section="finance",
    slug="petty-cash",
    title="Petty Cash",
    singular="Transaction",
    fields=(
        Field("transaction_date", "Date", kind="date", required=True, default=today),
        Field("transaction_type", "Type", kind="select", choices=choices_of(TransactionType),
              default=TransactionType.EXPENSE.value),
        Field("category", "Category", kind="select", choices=plain_choices(PETTY_CASH_CATEGORIES)),
        Field("amount", "Amount (₹)", kind="number", required=True),
        Field("description", "Description", required=True, width=12),
        Field("reference", "Reference", width=12),
    ),
    columns=(
        Column("transaction_date", "Date", "date"),
        Column("transaction_type", "Type", "badge"),
        Column("category", "Category"),
        Column("description", "Description"),
        Column("amount", "Amount", "money", "text-end"),
        Column("reference", "Reference"),
    ),
    search_fields=("description", "category", "reference"),
    order_by="t.transaction_date DESC, t.created_at DESC",
    summary=petty_cash_summary,
    add_label="Add Transaction",
    empty_message="No transactions found",
    search_placeholder="Search transactions...",
)

RESOURCES = (COLLECTIONS, SUPPLIER_PAYMENTS, PETTY_CASH)
