from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..core.enums import AppRole
from ..core.permissions import ADMIN_ROLES, as_role


@dataclass(frozen=True)
class NavItem:
    title: str
    href: Optional[str] = None
    icon: str = "bi-circle"
    children: tuple["NavItem", ...] = ()
    view_only: bool = False
    roles: frozenset = field(default_factory=frozenset)

    def visible_to(self, role: Union[AppRole, str, None]) -> bool:
        return not self.roles or as_role(role) in self.roles

    def is_active(self, path: str) -> bool:
        if self.href and path == self.href:
            return True
        return any(child.is_active(path) for child in self.children)


NAVIGATION: tuple[NavItem, ...] = (
    NavItem("Dashboard", "/dashboard", icon="bi-speedometer2"),
    NavItem(
        "Masters",
        icon="bi-database",
        children=(
            NavItem("Raw Materials", "/masters/raw-materials"),
            NavItem("Finished Goods", "/masters/finished-goods"),
            NavItem("Suppliers", "/masters/suppliers"),
            NavItem("Customers", "/masters/customers"),
            NavItem("Employees", "/masters/employees"),
            NavItem("Vehicles", "/masters/vehicles"),
        ),
    ),
    NavItem(
        "Production",
        icon="bi-gear-wide-connected",
        children=(
            NavItem("Production Entry", "/production/entry"),
            NavItem("Cutting & Sealing", "/production/cutting-sealing"),
            NavItem("Packing", "/production/packing"),
            NavItem("Material Consumption", "/production/consumption"),
            NavItem("Wastage & Damages", "/production/wastage"),
        ),
    ),
    NavItem(
        "Inventory",
        icon="bi-box-seam",
        children=(
            NavItem("Purchase Orders", "/modules/purchase-orders", view_only=True),
            NavItem("Purchases", "/inventory/purchases"),
            NavItem("Purchase Returns", "/inventory/purchase-returns"),
            NavItem("Stock Report", "/inventory/stock"),
            NavItem("Fuel Consumption", "/inventory/fuel"),
        ),
    ),
    NavItem(
        "Sales",
        icon="bi-cart",
        children=(
            NavItem("Customer Orders", "/sales/orders"),
            NavItem("Invoices", "/sales/invoices"),
            NavItem("Deliveries", "/sales/deliveries"),
            NavItem("Sales Returns", "/sales/returns"),
        ),
    ),
    NavItem(
        "Finance",
        icon="bi-cash-coin",
        children=(
            NavItem("Collections", "/finance/collections"),
            NavItem("Payments", "/finance/payments"),
            NavItem("Petty Cash", "/finance/petty-cash"),
        ),
    ),
    NavItem(
        "HR",
        icon="bi-people",
        children=(
            NavItem("Attendance", "/hr/attendance"),
            NavItem("Marketing Visits", "/hr/marketing-visits"),
        ),
    ),
    NavItem(
        "Reports",
        icon="bi-bar-chart",
        children=(
            NavItem("Sales Report", "/reports/sales"),
            NavItem("Purchase Report", "/reports/purchase"),
            NavItem("Production Report", "/reports/production"),
            NavItem("Stock Report", "/reports/stock"),
            NavItem("Attendance Report", "/reports/attendance"),
            NavItem("Collection Report", "/reports/collection"),
            NavItem("Scorecard", "/reports/scorecard"),
        ),
    ),
    NavItem(
        "KEIL Operations",
        icon="bi-truck",
        children=(
            NavItem("Overview", "/modules/keil-operations", view_only=True),
            NavItem("Route Management", "/keil/routes"),
            NavItem("HCE Details", "/keil/hce"),
            NavItem("Daily Collection", "/keil/collection"),
            NavItem("Collection Report", "/reports/keil-collection"),
        ),
    ),
    NavItem("SMS Contracts", "/modules/sms-contracts", icon="bi-file-text", view_only=True),
    NavItem(
        "Settings",
        icon="bi-sliders",
        roles=ADMIN_ROLES,
        children=(
            NavItem("System Settings", "/settings/system"),
            NavItem("User Management", "/settings/users"),
        ),
    ),
)


def navigation_for(role: Union[AppRole, str, None]) -> list[NavItem]:
    return [item for item in NAVIGATION if item.visible_to(role)]
