"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 25
DEFAULT_REPORT_DAYS = 30
DEFAULT_SESSION_DAYS = 7

MIN_PASSWORD_LENGTH = 6

DEFAULT_PRIMARY_COLOR = "#3b82f6"
DEFAULT_SECONDARY_COLOR = "#6366f1"
DEFAULT_COMPANY_NAME = "ERP Dashboard"

DEFAULT_GST_PERCENTAGE = 18.0

# Stock at or below min * WARNING_STOCK_FACTOR shows a warning badge
WARNING_STOCK_FACTOR = 1.5

EMPLOYEE_DEPARTMENTS = ("Production", "Sales", "Accounts", "Logistics", "Admin", "Maintenance", "HR")
RAW_MATERIAL_UNITS = ("Kg", "Ton", "Ltr", "Pcs", "Bag")
FINISHED_GOOD_UNITS = ("Kg", "Pcs", "Box", "Pack")
VEHICLE_TYPES = ("Truck", "Van", "Car", "Bike", "Tempo")

PETTY_CASH_CATEGORIES = (
    "Office Supplies",
    "Travel",
    "Food & Beverages",
    "Utilities",
    "Maintenance",
    "Postage",
    "Miscellaneous",
    "Refund",
    "Cash Deposit",
)

# Receivables older than this many days count as overdue when the customer has no credit period
DEFAULT_CREDIT_DAYS = 30
AGING_BUCKETS = ((30, "0-30 Days"), (60, "31-60 Days"), (90, "61-90 Days"))
AGING_OVERFLOW = "90+ Days"
