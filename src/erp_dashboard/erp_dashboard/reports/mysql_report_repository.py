from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import ReportRepository


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, sql: str, start: date, end: date) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (start, end))
            return fetchall(cur)

    def attendance_rows(self, start: date, end: date) -> Sequence[dict]:
        return self._query(
            """
            SELECT a.attendance_date, a.status, a.shift, a.in_time, a.out_time,
                   e.name AS employee_name, e.code AS employee_code, e.department
            FROM attendance a
            LEFT JOIN employees e ON e.id = a.employee_id
            WHERE a.attendance_date BETWEEN %s AND %s
            ORDER BY a.attendance_date DESC
            """,
            start,
            end,
        )

    def production_rows(self, start: date, end: date) -> Sequence[dict]:
        return self._query(
            """
            SELECT b.batch_number, b.production_date, b.shift, b.status, b.quantity_produced, b.employee_id,
                   fg.name AS product_name, e.name AS operator_name
            FROM production_batches b
            LEFT JOIN finished_goods fg ON fg.id = b.finished_good_id
            LEFT JOIN employees e ON e.id = b.employee_id
            WHERE b.production_date BETWEEN %s AND %s
            ORDER BY b.production_date DESC
            """,
            start,
            end,
        )

    def purchase_rows(self, start: date, end: date) -> Sequence[dict]:
        return self._query(
            """
            SELECT p.purchase_number, p.purchase_date, p.supplier_id, s.name AS supplier_name,
                   p.invoice_number, p.total_amount, p.status
            FROM purchases p
            LEFT JOIN suppliers s ON s.id = p.supplier_id
            WHERE p.purchase_date BETWEEN %s AND %s
            ORDER BY p.purchase_date DESC
            """,
            start,
            end,
        )

    def sales_rows(self, start: date, end: date) -> Sequence[dict]:
        return self._query(
            """
            SELECT si.invoice_number, si.invoice_date, si.customer_id, c.name AS customer_name,
                   si.total_amount, si.paid_amount, si.status
            FROM sales_invoices si
            LEFT JOIN customers c ON c.id = si.customer_id
            WHERE si.invoice_date BETWEEN %s AND %s
            ORDER BY si.invoice_date, si.id
            """,
            start,
            end,
        )

    def collection_rows(self, start: date, end: date) -> Sequence[dict]:
        return self._query(
            """
            SELECT payment_date, amount
            FROM customer_payments
            WHERE payment_date BETWEEN %s AND %s
            """,
            start,
            end,
        )

    def outstanding_invoices(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT si.id, si.invoice_number, si.invoice_date, si.customer_id, si.total_amount,
                       si.paid_amount, si.status, c.name AS customer_name, c.code AS customer_code,
                       c.credit_period
                FROM sales_invoices si
                LEFT JOIN customers c ON c.id = si.customer_id
                WHERE si.status <> 'paid'
                ORDER BY si.invoice_date
                """
            )
            return fetchall(cur)

    def keil_collection_rows(self, start: date, end: date, route_id: Optional[int] = None) -> Sequence[dict]:
        sql = """
            SELECT k.collection_date, k.collection_number, k.route_id, r.route_name, r.route_code,
                   v.registration_number AS vehicle_number, d.name AS driver_name, h.name AS helper_name,
                   k.total_weight, k.total_bags, k.start_km, k.end_km, k.status
            FROM keil_collections k
            LEFT JOIN keil_routes r ON r.id = k.route_id
            LEFT JOIN vehicles v ON v.id = k.vehicle_id
            LEFT JOIN employees d ON d.id = k.driver_id
            LEFT JOIN employees h ON h.id = k.helper_id
            WHERE k.collection_date BETWEEN %s AND %s
        """
        params: list = [start, end]
        if route_id is not None:
            sql += " AND k.route_id = %s"
            params.append(route_id)
        sql += " ORDER BY k.collection_date DESC, k.id DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return fetchall(cur)

    def active_routes(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, route_code, route_name FROM keil_routes WHERE status = 'active' ORDER BY route_name")
            return fetchall(cur)
