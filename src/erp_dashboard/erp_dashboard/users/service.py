from __future__ import annotations

from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.table import filter_rows
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import AppRole
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..core.permissions import as_role, require_admin
from .model import SessionUser
from .repository import UserRepository

USER_SEARCH_FIELDS = ("full_name", "email", "role")


class AuthService:
    """Use case: sign in and self sign-up."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name or user.email,
            # Accounts without a role row can only look around.
            role=user.role or AppRole.VIEWER,
        )

    def sign_up(self, *, full_name: str, email: str, password: str) -> int:
        full_name = require_non_empty(full_name, "Full Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        return self._users.create_account(
            email=email,
            password_hash=generate_password_hash(password),
            role=AppRole.VIEWER,
            full_name=full_name,
        )


class UserService:
    """Use case: manage users and their roles (super admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, search: Optional[str] = None) -> list[dict]:
        rows = []
        for r in self._users.list_with_roles():
            row = dict(r)
            role = as_role(row.get("role"))
            row["role_label"] = role.label if role else "No role"
            rows.append(row)
        return filter_rows(rows, search, USER_SEARCH_FIELDS)

    def change_role(self, *, current_role, user_id: int, role: str) -> None:
        require_admin(current_role)
        new_role = as_role(role)
        if new_role is None:
            raise ValidationError("Invalid role")
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        self._users.set_role(user_id, new_role)
