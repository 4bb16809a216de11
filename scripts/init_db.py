from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.erp_dashboard.erp_dashboard.database.bootstrap import apply_schema, list_tables
from src.erp_dashboard.erp_dashboard.database.connection import DBConfig
from src.erp_dashboard.erp_dashboard.logging_config import get_logger, init_logging

logger = get_logger("scripts.init_db")


def main() -> None:
    init_logging()
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    logger.info("Applied schema.sql -> %s (tables=%s)", DBConfig.from_dict(db_config).describe(), len(tables))


if __name__ == "__main__":
    main()
