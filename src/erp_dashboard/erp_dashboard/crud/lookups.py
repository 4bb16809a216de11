"""Shared option lists for foreign-key selects."""
from __future__ import annotations

from .resource import Lookup

ACTIVE_EMPLOYEES = Lookup(
    "employees",
    "SELECT id, CONCAT(name, ' (', code, ')') AS label FROM employees WHERE status='active' ORDER BY name",
)
SUPPLIERS = Lookup("suppliers", "SELECT id, name AS label FROM suppliers ORDER BY name")
CUSTOMERS = Lookup("customers", "SELECT id, name AS label FROM customers ORDER BY name")
FINISHED_GOODS = Lookup(
    "finished_goods",
    "SELECT id, CONCAT(name, ' (', code, ')') AS label FROM finished_goods ORDER BY name",
)
RAW_MATERIALS = Lookup(
    "raw_materials",
    "SELECT id, CONCAT(name, ' (', code, ')') AS label FROM raw_materials ORDER BY name",
)
PURCHASES = Lookup(
    "purchases",
    "SELECT p.id, CONCAT(p.purchase_number, ' - ', COALESCE(s.name, '-')) AS label "
    "FROM purchases p LEFT JOIN suppliers s ON s.id = p.supplier_id ORDER BY p.purchase_date DESC",
)
COMPLETED_BATCHES = Lookup(
    "batches",
    "SELECT id, batch_number AS label FROM production_batches WHERE status='completed' "
    "ORDER BY production_date DESC",
)
COMPLETED_CUTTING_JOBS = Lookup(
    "cutting_jobs",
    "SELECT id, cutting_number AS label FROM cutting_sealing_entries WHERE status='completed' "
    "ORDER BY job_date DESC",
)
INVOICES = Lookup(
    "invoices",
    "SELECT id, invoice_number AS label FROM sales_invoices ORDER BY invoice_date DESC",
)
PRICED_FINISHED_GOODS = Lookup(
    "products",
    "SELECT id, CONCAT(name, ' (', code, ')') AS label, rate, unit FROM finished_goods ORDER BY name",
)
ALL_BATCHES = Lookup(
    "all_batches",
    "SELECT id, batch_number AS label FROM production_batches ORDER BY production_date DESC",
)
VEHICLES = Lookup(
    "vehicles",
    "SELECT id, registration_number AS label FROM vehicles ORDER BY registration_number",
)
ACTIVE_VEHICLES = Lookup(
    "active_vehicles",
    "SELECT id, registration_number AS label FROM vehicles WHERE status='active' ORDER BY registration_number",
)
ACTIVE_ROUTES = Lookup(
    "routes",
    "SELECT id, CONCAT(route_code, ' - ', route_name) AS label FROM keil_routes WHERE status='active' "
    "ORDER BY route_code",
)
