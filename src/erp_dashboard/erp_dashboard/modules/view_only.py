"""Modules shown as a read-only banner until they are built out."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VIEW_ONLY_NOTICE = "This module is available in View Only mode for this demo"


@dataclass(frozen=True)
class ViewOnlyModule:
    slug: str
    name: str
    description: str
    features: tuple[str, ...]

    @property
    def url_path(self) -> str:
        return f"/modules/{self.slug}"


VIEW_ONLY_MODULES = (
    ViewOnlyModule(
        "sms-contracts",
        "SMS Contracts",
        "Comprehensive contract management for SMS operations with employee allocation and attendance tracking.",
        (
            "Branch & Location Management",
            "Employee Allocation & Scheduling",
            "Contract-wise Attendance Tracking",
            "Payroll Integration",
            "Performance Monitoring",
            "Contract Renewal Alerts",
        ),
    ),
    ViewOnlyModule(
        "keil-operations",
        "KEIL Operations",
        "Complete KEIL waste collection and management module for efficient route optimization and daily operations.",
        (
            "Route Management & Optimization",
            "HCE (Healthcare Establishment) Details",
            "Daily Collection Tracking",
            "Vehicle & Driver Assignment",
            "Real-time GPS Tracking",
            "Collection Reports & Analytics",
        ),
    ),
    ViewOnlyModule(
        "purchase-orders",
        "Purchase Orders",
        "Raise purchase orders to suppliers and receive goods against them.",
        ("Order Entry with Line Items", "Supplier Confirmation", "Pending Order Tracking", "Receive against GRN"),
    ),
)

_BY_SLUG = {m.slug: m for m in VIEW_ONLY_MODULES}


def find_module(slug: str) -> Optional[ViewOnlyModule]:
    return _BY_SLUG.get(slug)
