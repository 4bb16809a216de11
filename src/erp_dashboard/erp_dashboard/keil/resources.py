"""KEIL biomedical waste collection: routes, healthcare establishments, daily trips."""
from __future__ import annotations

from datetime import date

from ..common.sequence import NumberSpec
from ..common.table import Column
from ..core.enums import CollectionFrequency, HceType, JobStatus, RecordStatus, RouteType
from ..crud import lookups
from ..crud.resource import Field, Resource, Stat, choices_of, today
from ..database.mysql_base import to_float

SECTION = "keil"
SECTION_NAME = "KEIL Operations"

HCE_TYPE_CHOICES = (
    (HceType.HOSPITAL.value, "Hospital"),
    (HceType.CLINIC.value, "Clinic"),
    (HceType.LAB.value, "Laboratory"),
    (HceType.PHARMACY.value, "Pharmacy"),
    (HceType.NURSING_HOME.value, "Nursing Home"),
)

FREQUENCY_CHOICES = (
    (CollectionFrequency.DAILY.value, "Daily"),
    (CollectionFrequency.ALTERNATE.value, "Alternate Days"),
    (CollectionFrequency.WEEKLY.value, "Weekly"),
)


def with_km_run(row: dict) -> dict:
    row["km_run"] = to_float(row.get("end_km")) - to_float(row.get("start_km"))
    return row


def collection_summary(rows: list[dict], today_: date, options: dict) -> list[Stat]:
    todays = [r for r in rows if r.get("collection_date") == today_]
    return [
        Stat("Today's Collections", len(todays), "number", "bi-truck"),
        Stat("Total Weight (kg)", sum(to_float(r.get("total_weight")) for r in todays), "number", "bi-box"),
        Stat("Total Bags", sum(to_float(r.get("total_bags")) for r in todays), "number", "bi-bag"),
        Stat("Active Routes", len(options.get("routes", [])), "number", "bi-signpost-split"),
    ]


KEIL_ROUTES = Resource(
    name="keil_routes",
    table="keil_routes",
    section=SECTION,
    section_name=SECTION_NAME,
    slug="routes",
    title="Route Management",
    singular="Route",
    fields=(
        Field("route_code", "Route Code", required=True),
        Field("route_name", "Route Name", required=True),
        Field("route_type", "Route Type", kind="select", choices=choices_of(RouteType),
              default=RouteType.REGULAR.value),
        Field("status", "Status", kind="select", choices=choices_of(RecordStatus), default=RecordStatus.ACTIVE.value),
        Field("branch", "Branch"),
        Field("area", "Area"),
        Field("description", "Description", kind="textarea", width=12),
    ),
    columns=(
        Column("route_code", "Route Code", css_class="fw-semibold"),
        Column("route_name", "Route Name"),
        Column("route_type", "Type", "badge"),
        Column("branch", "Branch"),
        Column("area", "Area"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("route_code", "route_name", "branch", "area"),
    order_by="t.route_code",
    add_label="Add Route",
    empty_message="No routes found",
    search_placeholder="Search routes...",
)

KEIL_HCE = Resource(
    name="keil_hce",
    table="keil_hce",
    section=SECTION,
    section_name=SECTION_NAME,
    slug="hce",
    title="HCE Details",
    singular="HCE",
    fields=(
        Field("hce_code", "HCE Code", required=True),
        Field("hce_name", "HCE Name", required=True),
        Field("hce_type", "Type", kind="select", choices=HCE_TYPE_CHOICES, default=HceType.HOSPITAL.value),
        Field("route_id", "Route", kind="lookup", lookup="routes"),
        Field("contact_person", "Contact Person"),
        Field("phone", "Phone"),
        Field("email", "Email", kind="email"),
        Field("license_number", "License No."),
        Field("beds_count", "Beds", kind="number", default=0, width=4),
        Field("waste_category", "Waste Category", width=4),
        Field("collection_frequency", "Collection Frequency", kind="select", choices=FREQUENCY_CHOICES,
              default=CollectionFrequency.DAILY.value, width=4),
        Field("status", "Status", kind="select", choices=choices_of(RecordStatus), default=RecordStatus.ACTIVE.value),
        Field("address", "Address", kind="textarea", width=12),
    ),
    columns=(
        Column("hce_code", "HCE Code", css_class="fw-semibold"),
        Column("hce_name", "HCE Name"),
        Column("hce_type", "Type", "badge"),
        Column("route_name", "Route"),
        Column("contact_person", "Contact"),
        Column("phone", "Phone"),
        Column("beds_count", "Beds", "number", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("hce_code", "hce_name", "contact_person", "route_name"),
    order_by="t.hce_name",
    select_extra=", r.route_name AS route_name",
    joins="LEFT JOIN keil_routes r ON r.id = t.route_id",
    lookups=(lookups.ACTIVE_ROUTES,),
    add_label="Add HCE",
    empty_message="No healthcare establishments found",
    search_placeholder="Search HCEs...",
)

KEIL_COLLECTIONS = Resource(
    name="keil_collections",
    table="keil_collections",
    section=SECTION,
    section_name=SECTION_NAME,
    slug="collection",
    title="Daily Collection",
    singular="Collection",
    fields=(
        Field("collection_date", "Date", kind="date", required=True, default=today, width=4),
        Field("route_id", "Route", kind="lookup", lookup="routes", width=4),
        Field("vehicle_id", "Vehicle", kind="lookup", lookup="active_vehicles", width=4),
        Field("driver_id", "Driver", kind="lookup", lookup="employees"),
        Field("helper_id", "Helper", kind="lookup", lookup="employees"),
        Field("start_time", "Start Time", kind="time", width=3),
        Field("end_time", "End Time", kind="time", width=3),
        Field("start_km", "Start KM", kind="number", default=0, width=3),
        Field("end_km", "End KM", kind="number", default=0, width=3),
        Field("total_weight", "Total Weight (kg)", kind="number", default=0, width=4),
        Field("total_bags", "Total Bags", kind="number", default=0, width=4),
        Field("status", "Status", kind="select", choices=choices_of(JobStatus),
              default=JobStatus.PENDING.value, width=4),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("collection_number", "Collection #", css_class="fw-semibold"),
        Column("collection_date", "Date", "date"),
        Column("route_name", "Route"),
        Column("vehicle_number", "Vehicle"),
        Column("total_weight", "Weight (kg)", "number", "text-end"),
        Column("total_bags", "Bags", "number", "text-end"),
        Column("km_run", "KM Run", "number", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("collection_number", "route_name", "vehicle_number", "driver_name"),
    order_by="t.collection_date DESC, t.created_at DESC",
    select_extra=(
        ", r.route_name AS route_name, v.registration_number AS vehicle_number, "
        "d.name AS driver_name, h.name AS helper_name"
    ),
    joins=(
        "LEFT JOIN keil_routes r ON r.id = t.route_id "
        "LEFT JOIN vehicles v ON v.id = t.vehicle_id "
        "LEFT JOIN employees d ON d.id = t.driver_id "
        "LEFT JOIN employees h ON h.id = t.helper_id"
    ),
    lookups=(lookups.ACTIVE_ROUTES, lookups.ACTIVE_VEHICLES, lookups.ACTIVE_EMPLOYEES),
    number=NumberSpec("collection_number", "COL"),
    decorate=with_km_run,
    summary=collection_summary,
    add_label="New Collection",
    empty_message="No collections found",
    search_placeholder="Search collections...",
)

RESOURCES = (KEIL_ROUTES, KEIL_HCE, KEIL_COLLECTIONS)
