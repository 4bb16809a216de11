"""Demo accounts for the quick sign-in buttons on the login page."""
from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import generate_password_hash

from ..core.enums import AppRole
from ..logging_config import get_logger
from .repository import UserRepository

logger = get_logger(__name__)

DEMO_PASSWORD = "demo123456"


@dataclass(frozen=True)
class DemoAccount:
    email: str
    password: str
    role: AppRole
    full_name: str


DEMO_ACCOUNTS = (
    DemoAccount("super@demo.com", DEMO_PASSWORD, AppRole.SUPER_ADMIN, "Super Admin Demo"),
    DemoAccount("manager@demo.com", DEMO_PASSWORD, AppRole.MANAGER, "Manager Demo"),
    DemoAccount("operator@demo.com", DEMO_PASSWORD, AppRole.DATA_ENTRY, "Data Entry Demo"),
    DemoAccount("viewer@demo.com", DEMO_PASSWORD, AppRole.VIEWER, "Viewer Demo"),
)


def find_demo_account(email: str):
    for account in DEMO_ACCOUNTS:
        if account.email == (email or "").strip().lower():
            return account
    return None


def seed_demo_accounts(users: UserRepository, accounts=DEMO_ACCOUNTS) -> list[dict]:
    """Create missing demo users, then give each a role and profile if absent.

    Returns one ``{"email", "status"[, "error"]}`` entry per account with
    status ``created``, ``exists`` or ``error``. A failing account does not
    stop the others.
    """
    results: list[dict] = []
    for account in accounts:
        try:
            existing = users.get_by_email(account.email)
            if existing:
                user_id = existing.user_id
                status = "exists"
            else:
                user_id = users.create_user(
                    email=account.email,
                    password_hash=generate_password_hash(account.password),
                )
                status = "created"
        except Exception as e:
            logger.exception("Demo account %s could not be provisioned", account.email)
            results.append({"email": account.email, "status": "error", "error": str(e)})
            continue

        # The account exists at this point; role and profile gaps are only logged.
        try:
            if users.get_role(user_id) is None:
                users.set_role(user_id, account.role)
            if not users.has_profile(user_id):
                users.create_profile(user_id, account.full_name)
        except Exception:
            logger.exception("Role or profile for demo account %s could not be saved", account.email)

        results.append({"email": account.email, "status": status})
    return results
