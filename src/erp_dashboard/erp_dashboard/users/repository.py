from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AppRole
from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, email: str, password_hash: str) -> int:
        raise NotImplementedError

    def create_account(self, *, email: str, password_hash: str, role: AppRole, full_name: str) -> int:
        """Insert the user, its role row and its profile as one unit."""

        raise NotImplementedError

    def get_role(self, user_id: int) -> Optional[AppRole]:
        raise NotImplementedError

    def set_role(self, user_id: int, role: AppRole) -> None:
        """Insert or replace the user's single role row."""

        raise NotImplementedError

    def has_profile(self, user_id: int) -> bool:
        raise NotImplementedError

    def create_profile(self, user_id: int, full_name: str) -> None:
        raise NotImplementedError

    def list_with_roles(self) -> Sequence[dict]:
        """Return UI rows: id, email, full_name, role, created_at."""

        raise NotImplementedError
