from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, render_template, request

from config import get_settings_module

from .common.navigation import navigation_for
from .common.table import badge_class, format_cell
from .common.web import current_role, current_user
from .core.constants import DEFAULT_COMPANY_NAME
from .container import Container, build_container
from .core.permissions import can_administer, can_edit
from .crud.controller import register as register_crud
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .inventory.controller import register as register_inventory
from .logging_config import get_logger, init_logging
from .modules.controller import register as register_modules
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .users.controller import register as register_users
from .users.demo_accounts import seed_demo_accounts
from .users.mysql_user_repository import MySQLUserRepository

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"

logger = get_logger(__name__)


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        users_repo = MySQLUserRepository(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
        for result in seed_demo_accounts(users_repo):
            logger.info("Demo account %s: %s", result["email"], result["status"])


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    A prebuilt ``container`` skips database bootstrap; tests pass one wired
    with in-memory repositories.
    """
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PAGE_SIZE"] = int(getattr(settings, "PAGE_SIZE", 25))

    init_logging(getattr(settings, "LOG_LEVEL", None))
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        _bootstrap_database(settings, db_config)
        container = build_container(db_config=db_config)

    app.jinja_env.filters["cell"] = format_cell
    app.jinja_env.filters["badge_class"] = badge_class

    @app.context_processor
    def inject_globals():
        role = current_role()
        settings = container.settings_service.get_settings()
        return {
            "system_settings": settings,
            "company_name": settings.company_name if settings else DEFAULT_COMPANY_NAME,
            "navigation": navigation_for(role),
            "current_user": current_user(),
            "current_role": role,
            "can_edit_data": can_edit(role),
            "is_super_admin": can_administer(role),
            "request_path": request.path,
        }

    @app.errorhandler(404)
    def not_found(_e):
        return render_template("404.html"), 404

    register_users(app, container)
    register_dashboard(app, container)
    register_crud(app, container)
    register_inventory(app, container)
    register_reports(app, container)
    register_settings(app, container)
    register_modules(app, container)

    return app
