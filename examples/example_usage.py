"""Example: use the service layer without Flask.

Controllers are thin; the reports below come straight from services.
"""

import importlib

from config import get_settings_module

from src.erp_dashboard.erp_dashboard.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    kpis = container.dashboard_service.kpis()
    print(f"Active employees: {kpis.active_employees}, low stock items: {kpis.low_stock_items}")

    scorecard = container.scorecard_service.build(container.scorecard_service.default_range())
    print(f"Sales this month: {scorecard.total_sales:,.2f} (collection rate {scorecard.collection_rate:.1f}%)")

    for row in container.crud_services["raw_materials"].list_rows()[:5]:
        print(row["code"], row["name"], row.get("stock_status") or "OK")


if __name__ == "__main__":
    main()
