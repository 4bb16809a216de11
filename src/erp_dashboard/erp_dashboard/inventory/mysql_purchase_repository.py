from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import Purchase, PurchaseItem, PurchaseItemInput
from .repository import PurchaseRepository, StockRepository


class MySQLPurchaseRepository(PurchaseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_rows(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.id, p.purchase_number, p.supplier_id, s.name AS supplier_name, s.code AS supplier_code,
                       p.purchase_date, p.invoice_number, p.total_amount, p.status, p.notes, p.created_at
                FROM purchases p
                LEFT JOIN suppliers s ON s.id = p.supplier_id
                ORDER BY p.created_at DESC
                """
            )
            return fetchall(cur)

    def get_by_id(self, purchase_id: int) -> Optional[Purchase]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.id, p.purchase_number, p.supplier_id, s.name AS supplier_name,
                       p.purchase_date, p.invoice_number, p.total_amount, p.status, p.notes, p.created_at
                FROM purchases p
                LEFT JOIN suppliers s ON s.id = p.supplier_id
                WHERE p.id=%s
                """,
                (int(purchase_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Purchase(
                purchase_id=int(r["id"]),
                purchase_number=r["purchase_number"],
                supplier_id=r.get("supplier_id"),
                supplier_name=r.get("supplier_name"),
                purchase_date=r["purchase_date"],
                invoice_number=r.get("invoice_number"),
                total_amount=to_float(r.get("total_amount")),
                status=r["status"],
                notes=r.get("notes"),
                created_at=r.get("created_at"),
            )

    def list_items(self, purchase_id: int) -> Sequence[PurchaseItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT i.id, i.purchase_id, i.raw_material_id, m.name AS material_name, m.code AS material_code,
                       m.unit, i.quantity, i.rate, i.amount
                FROM purchase_items i
                LEFT JOIN raw_materials m ON m.id = i.raw_material_id
                WHERE i.purchase_id=%s
                ORDER BY i.id
                """,
                (int(purchase_id),),
            )
            return [
                PurchaseItem(
                    item_id=int(r["id"]),
                    purchase_id=int(r["purchase_id"]),
                    raw_material_id=int(r["raw_material_id"]),
                    material_name=r.get("material_name"),
                    material_code=r.get("material_code"),
                    unit=r.get("unit"),
                    quantity=to_float(r.get("quantity")),
                    rate=to_float(r.get("rate")),
                    amount=to_float(r.get("amount")),
                )
                for r in fetchall(cur)
            ]

    def count_numbers_like(self, prefix: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM purchases WHERE purchase_number LIKE %s", (f"{prefix}%",))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def create(
        self,
        *,
        purchase_number: str,
        supplier_id: Optional[int],
        purchase_date: date,
        invoice_number: Optional[str],
        total_amount: float,
        status: str,
        notes: Optional[str],
        items: Sequence[PurchaseItemInput],
    ) -> int:
        # Header and items share one transaction.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO purchases(purchase_number, supplier_id, purchase_date, invoice_number,
                                      total_amount, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (purchase_number, supplier_id, purchase_date, invoice_number, total_amount, status, notes),
            )
            purchase_id = int(cur.lastrowid)
            if items:
                cur.executemany(
                    """
                    INSERT INTO purchase_items(purchase_id, raw_material_id, quantity, rate, amount)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    [(purchase_id, it.raw_material_id, it.quantity, it.rate, it.amount) for it in items],
                )
            return purchase_id

    def delete(self, purchase_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM purchase_items WHERE purchase_id=%s", (int(purchase_id),))
            cur.execute("DELETE FROM purchases WHERE id=%s", (int(purchase_id),))
            return cur.rowcount > 0

    def list_supplier_options(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, CONCAT(name, ' (', code, ')') AS label FROM suppliers ORDER BY name")
            return fetchall(cur)

    def list_material_options(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, CONCAT(name, ' (', code, ')') AS label, rate, unit FROM raw_materials ORDER BY name"
            )
            return [
                {"id": int(r["id"]), "label": r["label"], "rate": to_float(r.get("rate")), "unit": r.get("unit")}
                for r in fetchall(cur)
            ]


class MySQLStockRepository(StockRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _list(self, table: str) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, code, name, unit, current_stock, min_stock_level, rate FROM {table} ORDER BY name"
            )
            return fetchall(cur)

    def list_raw_materials(self) -> Sequence[dict]:
        return self._list("raw_materials")

    def list_finished_goods(self) -> Sequence[dict]:
        return self._list("finished_goods")
