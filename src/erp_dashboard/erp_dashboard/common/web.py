"""Flask helpers shared by every controller: session guards and flash helpers."""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, flash, redirect, render_template, request, session, url_for

from ..core.enums import AppRole
from ..core.permissions import as_role, can_administer
from ..logging_config import get_logger

logger = get_logger(__name__)


def current_role() -> Optional[AppRole]:
    return as_role(session.get("role"))


def current_user() -> dict:
    return {
        "id": session.get("user_id"),
        "full_name": session.get("name"),
        "email": session.get("email"),
        "role": session.get("role"),
    }


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            flash("Please sign in to continue", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return redirect(url_for("login"))
        if not can_administer(current_role()):
            return render_template("403.html", current_user=current_user()), 403
        return view(*args, **kwargs)

    return wrapper


def page_arg() -> int:
    try:
        return max(1, int(request.args.get("page", 1)))
    except (TypeError, ValueError):
        return 1


def flash_system_error(action: str, exc: Exception) -> None:
    logger.exception("Unexpected error while %s", action)
    if current_app.config.get("DEBUG", False):
        flash(f"System error while {action}: {exc}", "danger")
    else:
        flash(f"System error while {action}", "danger")
