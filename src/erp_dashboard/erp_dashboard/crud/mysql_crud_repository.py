from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .items import LineItemInput
from .repository import CrudRepository
from .resource import Lookup, Resource


class MySQLCrudRepository(CrudRepository):
    # Table and column names come from Resource definitions, never from user input.

    def __init__(self, conn_factory: DatabaseConnection, resource: Resource):
        self._conn_factory = conn_factory
        self._resource = resource

    def _select(self) -> str:
        r = self._resource
        return f"SELECT t.*{r.select_extra} FROM {r.table} t {r.joins}"

    def list_rows(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select()} ORDER BY {self._resource.order_by}")
            return fetchall(cur)

    def get_by_id(self, row_id: int) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{self._select()} WHERE t.id=%s", (int(row_id),))
            return fetchone(cur)

    def insert(self, payload: dict[str, Any], items: Sequence[LineItemInput] = ()) -> int:
        cols = list(payload.keys())
        placeholders = ",".join(["%s"] * len(cols))
        spec = self._resource.items
        # Header and items share one transaction.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self._resource.table}({', '.join(cols)}) VALUES({placeholders})",
                tuple(payload[c] for c in cols),
            )
            row_id = int(cur.lastrowid)
            if spec and items:
                cur.executemany(
                    f"""
                    INSERT INTO {spec.table}({spec.parent_column}, {spec.product_column}, quantity, rate, amount)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    [(row_id, it.product_id, it.quantity, it.rate, it.amount) for it in items],
                )
            return row_id

    def update(self, row_id: int, payload: dict[str, Any]) -> bool:
        cols = list(payload.keys())
        assignments = ", ".join(f"{c}=%s" for c in cols)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self._resource.table} SET {assignments} WHERE id=%s",
                tuple(payload[c] for c in cols) + (int(row_id),),
            )
            return cur.rowcount > 0

    def delete(self, row_id: int) -> bool:
        spec = self._resource.items
        with db_cursor(self._conn_factory) as (_, cur):
            if spec:
                cur.execute(f"DELETE FROM {spec.table} WHERE {spec.parent_column}=%s", (int(row_id),))
            cur.execute(f"DELETE FROM {self._resource.table} WHERE id=%s", (int(row_id),))
            return cur.rowcount > 0

    def list_items(self, row_id: int) -> Sequence[dict]:
        spec = self._resource.items
        if not spec:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT i.id, i.{spec.product_column} AS product_id, p.name AS product_name,
                       p.code AS product_code, p.unit, i.quantity, i.rate, i.amount
                FROM {spec.table} i
                LEFT JOIN {spec.product_table} p ON p.id = i.{spec.product_column}
                WHERE i.{spec.parent_column}=%s
                ORDER BY i.id
                """,
                (int(row_id),),
            )
            return fetchall(cur)

    def count_numbers_like(self, column: str, prefix: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS n FROM {self._resource.table} WHERE {column} LIKE %s",
                (f"{prefix}%",),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def list_options(self, lookup: Lookup) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(lookup.sql)
            out = []
            for r in fetchall(cur):
                option = {"id": int(r["id"]), "label": r["label"]}
                if "rate" in r:
                    option["rate"] = to_float(r.get("rate"))
                    option["unit"] = r.get("unit")
                out.append(option)
            return out
