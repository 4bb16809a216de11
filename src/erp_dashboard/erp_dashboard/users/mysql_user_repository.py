from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AppRole
from ..core.permissions import as_role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_SELECT = """
    SELECT u.id, u.email, u.password_hash, u.is_active, u.created_at, p.full_name, r.role
    FROM users u
    LEFT JOIN profiles p ON p.user_id = u.id
    LEFT JOIN user_roles r ON r.user_id = u.id
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        is_active=bool(row.get("is_active", True)),
        full_name=row.get("full_name"),
        role=as_role(row.get("role")),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_USER_SELECT} WHERE u.id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_USER_SELECT} WHERE u.email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, email: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(email, password_hash, is_active) VALUES(%s,%s,1)",
                (email, password_hash),
            )
            return int(cur.lastrowid)

    def create_account(self, *, email: str, password_hash: str, role: AppRole, full_name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(email, password_hash, is_active) VALUES(%s,%s,1)",
                (email, password_hash),
            )
            user_id = int(cur.lastrowid)
            cur.execute("INSERT INTO user_roles(user_id, role) VALUES(%s,%s)", (user_id, role.value))
            cur.execute("INSERT INTO profiles(user_id, full_name) VALUES(%s,%s)", (user_id, full_name))
            return user_id

    def get_role(self, user_id: int) -> Optional[AppRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM user_roles WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return as_role(row["role"]) if row else None

    def set_role(self, user_id: int, role: AppRole) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_roles(user_id, role) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE role=VALUES(role)
                """,
                (int(user_id), role.value),
            )

    def has_profile(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS ok FROM profiles WHERE user_id=%s", (int(user_id),))
            return fetchone(cur) is not None

    def create_profile(self, user_id: int, full_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO profiles(user_id, full_name) VALUES(%s,%s)", (int(user_id), full_name))

    def list_with_roles(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.email, p.full_name, r.role, u.created_at
                FROM users u
                LEFT JOIN profiles p ON p.user_id = u.id
                LEFT JOIN user_roles r ON r.user_id = u.id
                ORDER BY u.created_at DESC
                """
            )
            return fetchall(cur)
