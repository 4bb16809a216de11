from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AppRole


@dataclass(frozen=True)
class User:
    """An account joined with its role and profile.

    ``role`` and ``full_name`` live in separate tables and may be missing.
    """

    user_id: int
    email: str
    password_hash: str
    is_active: bool = True
    full_name: Optional[str] = None
    role: Optional[AppRole] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    email: str
    full_name: str
    role: AppRole
