from __future__ import annotations

from ..common.table import Column
from ..core.enums import AttendanceStatus, WorkShift
from ..crud import lookups
from ..crud.resource import Field, Resource, choices_of, today

ATTENDANCE = Resource(
    name="attendance",
    table="attendance",
    section="hr",
    slug="attendance",
    title="Attendance",
    singular="Attendance",
    fields=(
        Field("employee_id", "Employee", kind="lookup", lookup="employees", required=True, width=12),
        Field("attendance_date", "Date", kind="date", required=True, default=today),
        Field("shift", "Shift", kind="select", choices=choices_of(WorkShift), default=WorkShift.GENERAL.value),
        Field("status", "Status", kind="select", choices=choices_of(AttendanceStatus),
              default=AttendanceStatus.PRESENT.value, width=12),
        Field("in_time", "In Time", kind="time"),
        Field("out_time", "Out Time", kind="time"),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("attendance_date", "Date", "date"),
        Column("employee_code", "Code"),
        Column("employee_name", "Employee", css_class="fw-semibold"),
        Column("shift", "Shift", "badge"),
        Column("status", "Status", "badge"),
        Column("in_time", "In Time", "time"),
        Column("out_time", "Out Time", "time"),
    ),
    search_fields=("employee_name", "employee_code"),
    order_by="t.attendance_date DESC, t.created_at DESC",
    select_extra=", e.name AS employee_name, e.code AS employee_code",
    joins="LEFT JOIN employees e ON e.id = t.employee_id",
    lookups=(lookups.ACTIVE_EMPLOYEES,),
    add_label="Mark Attendance",
    empty_message="No attendance records found",
    search_placeholder="Search by employee name or code...",
)

MARKETING_VISITS = Resource(
    name="marketing_visits",
    table="marketing_visits",
    section="hr",
    slug="marketing-visits",
    title="Marketing Visits",
    singular="Visit",
    fields=(
        Field("visit_date", "Visit Date", kind="date", required=True, default=today),
        Field("employee_id", "Employee", kind="lookup", lookup="employees"),
        Field("customer_name", "Customer Name", required=True),
        Field("customer_place", "Customer Place"),
        Field("entry_time", "Entry Time", kind="time"),
        Field("exit_time", "Exit Time", kind="time"),
        Field("person_met", "Person Met"),
        Field("contact_number", "Contact Number"),
        Field("remarks", "Remarks", kind="textarea", width=12),
    ),
    columns=(
        Column("visit_date", "Date", "date"),
        Column("employee_name", "Employee"),
        Column("customer_name", "Customer", css_class="fw-semibold"),
        Column("customer_place", "Place"),
        Column("entry_time", "Entry", "time"),
        Column("exit_time", "Exit", "time"),
        Column("person_met", "Person Met"),
        Column("contact_number", "Contact"),
    ),
    search_fields=("customer_name", "customer_place", "employee_name", "person_met"),
    order_by="t.visit_date DESC",
    select_extra=", e.name AS employee_name",
    joins="LEFT JOIN employees e ON e.id = t.employee_id",
    lookups=(lookups.ACTIVE_EMPLOYEES,),
    add_label="Log Visit",
    empty_message="No marketing visits found",
    search_placeholder="Search by customer, place, employee...",
)

RESOURCES = (ATTENDANCE, MARKETING_VISITS)
