from __future__ import annotations

from typing import Any, Optional

from ..core.constants import DEFAULT_PRIMARY_COLOR, DEFAULT_SECONDARY_COLOR
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SystemSettings
from .repository import SettingsRepository

SETTINGS_COLUMNS = (
    "company_name",
    "logo_url",
    "primary_color",
    "secondary_color",
    "address",
    "phone",
    "email",
    "gst_number",
    "license_number",
)


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_first(self) -> Optional[SystemSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT id, {', '.join(SETTINGS_COLUMNS)} FROM system_settings ORDER BY id LIMIT 1")
            r = fetchone(cur)
            if not r:
                return None
            return SystemSettings(
                settings_id=int(r["id"]),
                company_name=r["company_name"],
                logo_url=r.get("logo_url"),
                primary_color=r.get("primary_color") or DEFAULT_PRIMARY_COLOR,
                secondary_color=r.get("secondary_color") or DEFAULT_SECONDARY_COLOR,
                address=r.get("address"),
                phone=r.get("phone"),
                email=r.get("email"),
                gst_number=r.get("gst_number"),
                license_number=r.get("license_number"),
            )

    def insert(self, values: dict[str, Any]) -> int:
        cols = [c for c in SETTINGS_COLUMNS if c in values]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO system_settings({', '.join(cols)}) VALUES({','.join(['%s'] * len(cols))})",
                tuple(values[c] for c in cols),
            )
            return int(cur.lastrowid)

    def update(self, settings_id: int, values: dict[str, Any]) -> None:
        cols = [c for c in SETTINGS_COLUMNS if c in values]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE system_settings SET {', '.join(f'{c}=%s' for c in cols)} WHERE id=%s",
                tuple(values[c] for c in cols) + (int(settings_id),),
            )
