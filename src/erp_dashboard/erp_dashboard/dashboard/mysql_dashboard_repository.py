from __future__ import annotations

from datetime import date

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_float
from .repository import DashboardRepository


class MySQLDashboardRepository(DashboardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _scalar(self, sql: str, params: tuple = ()) -> object:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            row = fetchone(cur)
            return row["v"] if row else None

    def count_active_employees(self) -> int:
        return int(self._scalar("SELECT COUNT(*) AS v FROM employees WHERE status='active'") or 0)

    def count_present(self, on: date) -> int:
        return int(
            self._scalar(
                "SELECT COUNT(*) AS v FROM attendance WHERE attendance_date=%s AND status='present'",
                (on,),
            )
            or 0
        )

    def count_pending_returns(self) -> int:
        return int(self._scalar("SELECT COUNT(*) AS v FROM purchase_returns WHERE status='pending'") or 0)

    def production_quantity(self, start: date, end: date) -> float:
        return to_float(
            self._scalar(
                "SELECT SUM(quantity_produced) AS v FROM production_batches WHERE production_date BETWEEN %s AND %s",
                (start, end),
            )
        )

    def outstanding_receivables(self, start: date, end: date) -> float:
        return to_float(
            self._scalar(
                """
                SELECT SUM(total_amount - paid_amount) AS v
                FROM sales_invoices
                WHERE invoice_date BETWEEN %s AND %s
                """,
                (start, end),
            )
        )
