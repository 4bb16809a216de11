from __future__ import annotations

from ..common.sequence import NumberSpec
from ..common.table import Column
from ..core.enums import BatchStatus, JobStatus, WorkShift
from ..crud import lookups
from ..crud.resource import Field, Resource, choices_of, today

PRODUCTION_BATCHES = Resource(
    name="production_batches",
    table="production_batches",
    section="production",
    slug="entry",
    title="Production Entry",
    singular="Production batch",
    fields=(
        Field("production_date", "Production Date", kind="date", required=True, default=today),
        Field("shift", "Shift", kind="select", choices=choices_of(WorkShift)),
        Field("finished_good_id", "Product", kind="lookup", lookup="finished_goods"),
        Field("employee_id", "Operator", kind="lookup", lookup="employees"),
        Field("quantity_produced", "Quantity Produced", kind="number", default=0),
        Field("status", "Status", kind="select", choices=choices_of(BatchStatus),
              default=BatchStatus.IN_PROGRESS.value),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("batch_number", "Batch No.", css_class="fw-semibold"),
        Column("production_date", "Date", "date"),
        Column("shift", "Shift", "badge"),
        Column("product_name", "Product"),
        Column("operator_name", "Operator"),
        Column("quantity_produced", "Quantity", "number", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("batch_number", "product_name", "operator_name"),
    select_extra=", fg.name AS product_name, e.name AS operator_name",
    joins=(
        "LEFT JOIN finished_goods fg ON fg.id = t.finished_good_id "
        "LEFT JOIN employees e ON e.id = t.employee_id"
    ),
    lookups=(lookups.FINISHED_GOODS, lookups.ACTIVE_EMPLOYEES),
    number=NumberSpec("batch_number", "PB"),
    add_label="New Batch",
    empty_message="No production batches found",
    search_placeholder="Search by batch, product or operator...",
)

CUTTING_SEALING = Resource(
    name="cutting_sealing",
    table="cutting_sealing_entries",
    section="production",
    slug="cutting-sealing",
    title="Cutting & Sealing",
    singular="Cutting & Sealing entry",
    fields=(
        Field("job_date", "Job Date", kind="date", required=True, default=today),
        Field("shift", "Shift", kind="select", choices=choices_of(WorkShift)),
        Field("batch_id", "Production Batch", kind="lookup", lookup="batches"),
        Field("quantity_processed", "Quantity Processed", kind="number", default=0),
        Field("status", "Status", kind="select", choices=choices_of(JobStatus), default=JobStatus.PENDING.value),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("cutting_number", "Job No.", css_class="fw-semibold"),
        Column("job_date", "Date", "date"),
        Column("shift", "Shift", "badge"),
        Column("batch_number", "Batch"),
        Column("quantity_processed", "Quantity", "number", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("cutting_number", "batch_number"),
    select_extra=", b.batch_number AS batch_number",
    joins="LEFT JOIN production_batches b ON b.id = t.batch_id",
    lookups=(lookups.COMPLETED_BATCHES,),
    number=NumberSpec("cutting_number", "CS"),
    add_label="New Job",
    empty_message="No cutting & sealing entries found",
    search_placeholder="Search by job or batch number...",
)

PACKING = Resource(
    name="packing",
    table="packing_entries",
    section="production",
    slug="packing",
    title="Packing",
    singular="Packing entry",
    fields=(
        Field("job_date", "Job Date", kind="date", required=True, default=today),
        Field("shift", "Shift", kind="select", choices=choices_of(WorkShift)),
        Field("cutting_sealing_id", "Cutting & Sealing Job", kind="lookup", lookup="cutting_jobs"),
        Field("quantity_packed", "Quantity Packed", kind="number", default=0),
        Field("status", "Status", kind="select", choices=choices_of(JobStatus), default=JobStatus.PENDING.value),
        Field("notes", "Notes", kind="textarea", width=12),
    ),
    columns=(
        Column("packing_number", "Packing No.", css_class="fw-semibold"),
        Column("job_date", "Date", "date"),
        Column("shift", "Shift", "badge"),
        Column("cutting_number", "Cutting Job"),
        Column("quantity_packed", "Quantity", "number", "text-end"),
        Column("status", "Status", "badge"),
    ),
    search_fields=("packing_number", "cutting_number"),
    select_extra=", cs.cutting_number AS cutting_number",
    joins="LEFT JOIN cutting_sealing_entries cs ON cs.id = t.cutting_sealing_id",
    lookups=(lookups.COMPLETED_CUTTING_JOBS,),
    number=NumberSpec("packing_number", "PK"),
    add_label="New Packing",
    empty_message="No packing entries found",
    search_placeholder="Search by packing or cutting number...",
)

MATERIAL_CONSUMPTION = Resource(
    name="material_consumption",
    table="material_consumption",
    section="production",
    slug="consumption",
    title="Material Consumption",
    singular="Consumption record",
    fields=(
        Field("consumption_date", "Date", kind="date", required=True, default=today),
        Field("batch_id", "Production Batch", kind="lookup", lookup="all_batches"),
        Field("raw_material_id", "Raw Material", kind="lookup", lookup="raw_materials", required=True),
        Field("quantity", "Quantity", kind="number", required=True),
    ),
    columns=(
        Column("consumption_date", "Date", "date"),
        Column("batch_number", "Batch No.", css_class="fw-semibold"),
        Column("material_label", "Raw Material"),
        Column("quantity", "Quantity", "number", "text-end"),
        Column("unit", "Unit"),
    ),
    search_fields=("batch_number", "material_name"),
    order_by="t.consumption_date DESC, t.created_at DESC",
    select_extra=(
        ", b.batch_number AS batch_number, m.name AS material_name, "
        "CONCAT(m.code, ' - ', m.name) AS material_label, m.unit AS unit"
    ),
    joins=(
        "LEFT JOIN production_batches b ON b.id = t.batch_id "
        "LEFT JOIN raw_materials m ON m.id = t.raw_material_id"
    ),
    lookups=(lookups.ALL_BATCHES, lookups.RAW_MATERIALS),
    add_label="Record Consumption",
    empty_message="No consumption records found",
    search_placeholder="Search consumption records...",
)

WASTAGE = Resource(
    name="wastage",
    table="wastage",
    section="production",
    slug="wastage",
    title="Wastage & Damages",
    singular="Wastage record",
    fields=(
        Field("wastage_date", "Date", kind="date", required=True, default=today),
        Field("batch_id", "Production Batch", kind="lookup", lookup="all_batches"),
        Field("finished_good_id", "Product", kind="lookup", lookup="finished_goods", required=True),
        Field("quantity", "Quantity", kind="number", required=True),
        Field("reason", "Reason", kind="textarea", width=12),
    ),
    columns=(
        Column("wastage_date", "Date", "date"),
        Column("batch_number", "Batch No.", css_class="fw-semibold"),
        Column("product_label", "Product"),
        Column("quantity", "Quantity", "number", "text-end"),
        Column("unit", "Unit"),
        Column("reason", "Reason"),
    ),
    search_fields=("batch_number", "product_name", "reason"),
    order_by="t.wastage_date DESC, t.created_at DESC",
    select_extra=(
        ", b.batch_number AS batch_number, fg.name AS product_name, "
        "CONCAT(fg.code, ' - ', fg.name) AS product_label, fg.unit AS unit"
    ),
    joins=(
        "LEFT JOIN production_batches b ON b.id = t.batch_id "
        "LEFT JOIN finished_goods fg ON fg.id = t.finished_good_id"
    ),
    lookups=(lookups.ALL_BATCHES, lookups.FINISHED_GOODS),
    add_label="Record Wastage",
    empty_message="No wastage records found",
    search_placeholder="Search wastage records...",
)

RESOURCES = (PRODUCTION_BATCHES, CUTTING_SEALING, PACKING, MATERIAL_CONSUMPTION, WASTAGE)
