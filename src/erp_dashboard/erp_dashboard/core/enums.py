from __future__ import annotations

from enum import Enum


class AppRole(str, Enum):
    """Roles used for permission checks on every page."""

    SUPER_ADMIN = "super_admin"
    MANAGER = "manager"
    DATA_ENTRY = "data_entry"
    VIEWER = "viewer"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    LEAVE = "leave"


class WorkShift(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"
    GENERAL = "general"


class JobStatus(str, Enum):
    """Status of cutting & sealing and packing jobs and of KEIL collections."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class BatchStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ReturnStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    COMPLETED = "completed"
    REJECTED = "rejected"


class ReturnMethod(str, Enum):
    DIRECT = "direct"
    COURIER = "courier"


class PurchaseStatus(str, Enum):
    PENDING = "pending"
    RECEIVED = "received"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class PaymentMode(str, Enum):
    CASH = "cash"
    BANK = "bank"
    CHEQUE = "cheque"
    UPI = "upi"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class VehicleStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    DISPATCHED = "dispatched"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class TransactionType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


class FuelType(str, Enum):
    DIESEL = "diesel"
    PETROL = "petrol"
    CNG = "cng"
    ELECTRIC = "electric"


class RecordStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class RouteType(str, Enum):
    REGULAR = "regular"
    EXPRESS = "express"
    SPECIAL = "special"


class HceType(str, Enum):
    """Kinds of healthcare establishment served by KEIL routes."""

    HOSPITAL = "hospital"
    CLINIC = "clinic"
    LAB = "lab"
    PHARMACY = "pharmacy"
    NURSING_HOME = "nursing_home"


class CollectionFrequency(str, Enum):
    DAILY = "daily"
    ALTERNATE = "alternate"
    WEEKLY = "weekly"
