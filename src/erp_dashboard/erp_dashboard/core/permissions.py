from __future__ import annotations

from typing import Optional, Union

from .enums import AppRole
from .exceptions import AuthorizationError

EDITOR_ROLES = frozenset({AppRole.SUPER_ADMIN, AppRole.MANAGER, AppRole.DATA_ENTRY})
ADMIN_ROLES = frozenset({AppRole.SUPER_ADMIN})


def as_role(value: Union[AppRole, str, None]) -> Optional[AppRole]:
    if value is None or isinstance(value, AppRole):
        return value
    try:
        return AppRole(value)
    except ValueError:
        return None


def can_edit(role: Union[AppRole, str, None]) -> bool:
    return as_role(role) in EDITOR_ROLES


def can_administer(role: Union[AppRole, str, None]) -> bool:
    return as_role(role) in ADMIN_ROLES


def require_editor(role: Union[AppRole, str, None]) -> None:
    if not can_edit(role):
        raise AuthorizationError("You do not have permission to change this data")


def require_admin(role: Union[AppRole, str, None]) -> None:
    if not can_administer(role):
        raise AuthorizationError("Only a super admin can perform this action")
