from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .crud.mysql_crud_repository import MySQLCrudRepository
from .crud.service import CrudService
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .finance.resources import RESOURCES as FINANCE_RESOURCES
from .hr.resources import RESOURCES as HR_RESOURCES
from .inventory.mysql_purchase_repository import MySQLPurchaseRepository, MySQLStockRepository
from .inventory.resources import RESOURCES as INVENTORY_RESOURCES
from .inventory.service import PurchaseService, StockReportService
from .keil.resources import RESOURCES as KEIL_RESOURCES
from .masters.resources import RESOURCES as MASTER_RESOURCES
from .production.resources import RESOURCES as PRODUCTION_RESOURCES
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.service import (
    AttendanceReportService,
    CollectionReportService,
    KeilCollectionReportService,
    ProductionReportService,
    PurchaseReportService,
    SalesReportService,
    ScorecardService,
)
from .sales.resources import RESOURCES as SALES_RESOURCES
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.service import SettingsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService

CRUD_RESOURCES = (
    MASTER_RESOURCES
    + HR_RESOURCES
    + PRODUCTION_RESOURCES
    + INVENTORY_RESOURCES
    + SALES_RESOURCES
    + FINANCE_RESOURCES
    + KEIL_RESOURCES
)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: object
    crud_services: dict

    auth_service: AuthService
    user_service: UserService
    settings_service: SettingsService
    purchase_service: PurchaseService
    stock_report_service: StockReportService
    attendance_report_service: AttendanceReportService
    production_report_service: ProductionReportService
    purchase_report_service: PurchaseReportService
    scorecard_service: ScorecardService
    sales_report_service: SalesReportService
    collection_report_service: CollectionReportService
    keil_collection_report_service: KeilCollectionReportService
    dashboard_service: DashboardService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    stock_repo = MySQLStockRepository(conn)
    report_repo = MySQLReportRepository(conn)

    crud_services = {
        resource.name: CrudService(MySQLCrudRepository(conn, resource), resource)
        for resource in CRUD_RESOURCES
    }

    return Container(
        conn=conn,
        users_repo=users_repo,
        crud_services=crud_services,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        settings_service=SettingsService(MySQLSettingsRepository(conn)),
        purchase_service=PurchaseService(MySQLPurchaseRepository(conn)),
        stock_report_service=StockReportService(stock_repo),
        attendance_report_service=AttendanceReportService(report_repo),
        production_report_service=ProductionReportService(report_repo),
        purchase_report_service=PurchaseReportService(report_repo),
        scorecard_service=ScorecardService(report_repo),
        sales_report_service=SalesReportService(report_repo),
        collection_report_service=CollectionReportService(report_repo),
        keil_collection_report_service=KeilCollectionReportService(report_repo),
        dashboard_service=DashboardService(MySQLDashboardRepository(conn), stock_repo),
    )
