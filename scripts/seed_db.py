"""Load sample master data and provision the four demo accounts."""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.erp_dashboard.erp_dashboard.database.bootstrap import apply_seed_sql
from src.erp_dashboard.erp_dashboard.database.connection import DBConfig, DatabaseConnection
from src.erp_dashboard.erp_dashboard.logging_config import get_logger, init_logging
from src.erp_dashboard.erp_dashboard.users.demo_accounts import seed_demo_accounts
from src.erp_dashboard.erp_dashboard.users.mysql_user_repository import MySQLUserRepository

logger = get_logger("scripts.seed_db")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--accounts-only", action="store_true", help="skip seed.sql, only create demo accounts")
    args = parser.parse_args()

    init_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    if not args.accounts_only:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    users_repo = MySQLUserRepository(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    results = seed_demo_accounts(users_repo)
    for r in results:
        logger.info("%-20s %s %s", r["email"], r["status"], r.get("error", ""))

    logger.info("Seeded database -> %s", DBConfig.from_dict(db_config).describe())
    if any(r["status"] == "error" for r in results):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
