from __future__ import annotations

from datetime import timedelta

from flask import Flask, flash, jsonify, redirect, render_template, request, session, url_for

from ..common.table import paginate
from ..common.web import current_role, flash_system_error, login_required, page_arg
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import AppRole
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..core.permissions import can_administer
from ..logging_config import get_logger
from .demo_accounts import DEMO_ACCOUNTS, find_demo_account, seed_demo_accounts
from .model import SessionUser

logger = get_logger(__name__)


def _start_session(app: Flask, s_user: SessionUser, *, remember: bool) -> None:
    session.clear()
    session.permanent = remember
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
    session["user_id"] = s_user.user_id
    session["email"] = s_user.email
    session["name"] = s_user.full_name
    session["role"] = s_user.role.value


def register(app: Flask, container) -> None:
    def _login_page():
        return render_template("login.html", demo_accounts=DEMO_ACCOUNTS)

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    @app.route("/auth", methods=["GET", "POST"], endpoint="auth")
    def login():
        if "user_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            try:
                s_user = container.auth_service.authenticate(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                )
                _start_session(app, s_user, remember=bool(request.form.get("remember_me")))
                logger.info("User %s signed in", s_user.email)
                flash("Welcome back! You have been logged in successfully.", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                flash_system_error("signing in", e)

        return _login_page()

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        try:
            container.auth_service.sign_up(
                full_name=request.form.get("full_name", ""),
                email=request.form.get("email", ""),
                password=request.form.get("password", ""),
            )
            logger.info("Account created for %s", request.form.get("email", ""))
            flash("Account created. Please contact admin for role assignment.", "success")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_system_error("creating account", e)
        return redirect(url_for("login"))

    @app.route("/auth/demo", methods=["POST"], endpoint="demo_login")
    def demo_login():
        account = find_demo_account(request.form.get("email", ""))
        if account is None:
            flash("Unknown demo account", "danger")
            return redirect(url_for("login"))
        try:
            s_user = container.auth_service.authenticate(account.email, account.password)
            _start_session(app, s_user, remember=False)
            logger.info("Demo sign-in as %s", account.email)
            return redirect(url_for("dashboard"))
        except AuthenticationError:
            flash("Demo accounts may not be set up yet. Please contact admin.", "danger")
        except Exception as e:
            flash_system_error("signing in", e)
        return redirect(url_for("login"))

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/settings/users", endpoint="user_management")
    @login_required
    def user_management():
        search = request.args.get("q", "")
        page = paginate(container.user_service.list_users(search), page_arg(), int(app.config.get("PAGE_SIZE", 25)))
        return render_template(
            "settings/users.html",
            page=page,
            search=search,
            roles=list(AppRole),
            can_edit=can_administer(current_role()),
            active_path="/settings/users",
        )

    @app.route("/settings/users/<int:user_id>/role", methods=["POST"], endpoint="user_role_update")
    @login_required
    def user_role_update(user_id: int):
        try:
            container.user_service.change_role(
                current_role=current_role(),
                user_id=user_id,
                role=request.form.get("role", ""),
            )
            logger.info("Role of user %s changed to %s", user_id, request.form.get("role"))
            flash("User role updated successfully", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_system_error("updating role", e)
        return redirect(url_for("user_management", q=request.form.get("q") or None))

    @app.route("/api/seed-demo-accounts", methods=["POST"], endpoint="seed_demo_accounts_api")
    def seed_demo_accounts_api():
        if not can_administer(current_role()):
            return jsonify({"success": False, "error": "Only a super admin can perform this action"}), 403
        try:
            results = seed_demo_accounts(container.users_repo)
        except Exception as e:
            logger.exception("Seeding demo accounts failed")
            return jsonify({"success": False, "error": str(e)}), 500
        return jsonify({"success": True, "results": results})
