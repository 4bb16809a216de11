from __future__ import annotations

from flask import Flask, Response, render_template, request

from ..common.export import export_csv
from ..common.table import Column
from ..common.web import login_required
from ..common.validators import parse_optional_id
from ..core.exceptions import ValidationError
from .periods import PRESETS

ATTENDANCE_COLUMNS = (
    Column("attendance_date", "Date", "date"),
    Column("employee_code", "Code"),
    Column("employee_name", "Employee"),
    Column("department", "Department"),
    Column("shift", "Shift", "badge"),
    Column("status", "Status", "badge"),
    Column("in_time", "In Time", "time"),
    Column("out_time", "Out Time", "time"),
)

PRODUCTION_COLUMNS = (
    Column("batch_number", "Batch No."),
    Column("production_date", "Date", "date"),
    Column("product_name", "Product"),
    Column("operator_name", "Operator"),
    Column("shift", "Shift", "badge"),
    Column("quantity_produced", "Quantity", "number", "text-end"),
    Column("status", "Status", "badge"),
)

PURCHASE_COLUMNS = (
    Column("purchase_number", "GRN No."),
    Column("purchase_date", "Date", "date"),
    Column("supplier_name", "Supplier"),
    Column("invoice_number", "Invoice No."),
    Column("total_amount", "Amount", "money", "text-end"),
    Column("status", "Status", "badge"),
)

SALES_COLUMNS = (
    Column("invoice_number", "Invoice No.", css_class="fw-semibold"),
    Column("invoice_date", "Date", "date"),
    Column("customer_name", "Customer"),
    Column("total_amount", "Amount", "money", "text-end"),
    Column("paid_amount", "Paid", "money", "text-end"),
    Column("status", "Status", "badge"),
)

OUTSTANDING_COLUMNS = (
    Column("invoice_number", "Invoice No.", css_class="fw-semibold"),
    Column("invoice_date", "Date", "date"),
    Column("customer_name", "Customer"),
    Column("total_amount", "Amount", "money", "text-end"),
    Column("paid_amount", "Paid", "money", "text-end"),
    Column("outstanding", "Outstanding", "money", "text-end"),
    Column("days_old", "Days", "number", "text-end"),
    Column("aging", "Aging", "badge"),
)

KEIL_COLLECTION_COLUMNS = (
    Column("collection_date", "Date", "date"),
    Column("collection_number", "Collection No"),
    Column("route_name", "Route"),
    Column("vehicle_number", "Vehicle"),
    Column("driver_name", "Driver"),
    Column("helper_name", "Helper"),
    Column("total_weight", "Total Weight (kg)", "number", "text-end"),
    Column("total_bags", "Total Bags", "number", "text-end"),
    Column("start_km", "Start KM", "number", "text-end"),
    Column("end_km", "End KM", "number", "text-end"),
    Column("status", "Status", "badge"),
)

CRITICAL_STOCK_COLUMNS = (
    Column("code", "Code"),
    Column("name", "Name"),
    Column("type", "Type"),
    Column("current_stock", "Current", "number", "text-end"),
    Column("min_stock_level", "Min Level", "number", "text-end"),
    Column("gap", "Gap", "number", "text-end"),
    Column("value", "Value", "money", "text-end"),
)

TREND_COLUMNS = (
    Column("label", "Date"),
    Column("sales", "Sales", "money"),
    Column("collections", "Collections", "money"),
)


def _csv_response(rows, columns, name: str, period) -> Response:
    filename = f"{name}_{period.start.isoformat()}_{period.end.isoformat()}.csv"
    return Response(
        export_csv(rows, columns),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def register(app: Flask, container) -> None:
    def _range(service):
        return service.resolve(request.args.get("start"), request.args.get("end"))

    @app.route("/reports/attendance", endpoint="attendance_report")
    @login_required
    def attendance_report():
        report = container.attendance_report_service.build(_range(container.attendance_report_service))
        return render_template(
            "reports/attendance.html",
            report=report,
            columns=ATTENDANCE_COLUMNS,
            active_path="/reports/attendance",
        )

    @app.route("/reports/attendance/export.csv", endpoint="attendance_report_export")
    @login_required
    def attendance_report_export():
        report = container.attendance_report_service.build(_range(container.attendance_report_service))
        return _csv_response(report.rows, ATTENDANCE_COLUMNS, "attendance_report", report.period)

    @app.route("/reports/production", endpoint="production_report")
    @login_required
    def production_report():
        report = container.production_report_service.build(_range(container.production_report_service))
        return render_template(
            "reports/production.html",
            report=report,
            columns=PRODUCTION_COLUMNS,
            active_path="/reports/production",
        )

    @app.route("/reports/production/export.csv", endpoint="production_report_export")
    @login_required
    def production_report_export():
        report = container.production_report_service.build(_range(container.production_report_service))
        return _csv_response(report.rows, PRODUCTION_COLUMNS, "production_report", report.period)

    @app.route("/reports/purchase", endpoint="purchase_report")
    @login_required
    def purchase_report():
        report = container.purchase_report_service.build(_range(container.purchase_report_service))
        return render_template(
            "reports/purchase.html",
            report=report,
            columns=PURCHASE_COLUMNS,
            active_path="/reports/purchase",
        )

    @app.route("/reports/purchase/export.csv", endpoint="purchase_report_export")
    @login_required
    def purchase_report_export():
        report = container.purchase_report_service.build(_range(container.purchase_report_service))
        return _csv_response(report.rows, PURCHASE_COLUMNS, "purchase_report", report.period)

    def _scorecard():
        svc = container.scorecard_service
        preset = request.args.get("period", "monthly")
        if preset not in PRESETS:
            preset = "monthly"
        # An explicit start/end wins over the preset.
        if request.args.get("start") or request.args.get("end"):
            period = svc.resolve(request.args.get("start"), request.args.get("end"))
        else:
            period = svc.preset(preset)
        return svc.build(period, preset=preset)

    @app.route("/reports/scorecard", endpoint="scorecard")
    @login_required
    def scorecard():
        return render_template(
            "reports/scorecard.html",
            report=_scorecard(),
            presets=PRESETS,
            active_path="/reports/scorecard",
        )

    @app.route("/reports/scorecard/export.csv", endpoint="scorecard_export")
    @login_required
    def scorecard_export():
        report = _scorecard()
        rows = [t.__dict__ for t in report.trend]
        return _csv_response(rows, TREND_COLUMNS, "scorecard", report.period)

    @app.route("/reports/sales", endpoint="sales_report")
    @login_required
    def sales_report():
        report = container.sales_report_service.build(_range(container.sales_report_service))
        return render_template(
            "reports/sales.html",
            report=report,
            columns=SALES_COLUMNS,
            active_path="/reports/sales",
        )

    @app.route("/reports/sales/export.csv", endpoint="sales_report_export")
    @login_required
    def sales_report_export():
        report = container.sales_report_service.build(_range(container.sales_report_service))
        return _csv_response(report.rows, SALES_COLUMNS, "sales_report", report.period)

    @app.route("/reports/collection", endpoint="collection_report")
    @login_required
    def collection_report():
        return render_template(
            "reports/collection.html",
            report=container.collection_report_service.build(),
            columns=OUTSTANDING_COLUMNS,
            active_path="/reports/collection",
        )

    @app.route("/reports/collection/export.csv", endpoint="collection_report_export")
    @login_required
    def collection_report_export():
        report = container.collection_report_service.build()
        return Response(
            export_csv(report.rows, OUTSTANDING_COLUMNS),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=collection_report_{report.as_of.isoformat()}.csv"},
        )

    def _keil_report():
        svc = container.keil_collection_report_service
        try:
            route_id = parse_optional_id(request.args.get("route_id"))
        except ValidationError:
            # "all" and anything unparseable show every route
            route_id = None
        return svc.build(_range(svc), route_id)

    @app.route("/reports/keil-collection", endpoint="keil_collection_report")
    @login_required
    def keil_collection_report():
        return render_template(
            "reports/keil_collection.html",
            report=_keil_report(),
            routes=container.keil_collection_report_service.routes(),
            columns=KEIL_COLLECTION_COLUMNS,
            active_path="/reports/keil-collection",
        )

    @app.route("/reports/keil-collection/export.csv", endpoint="keil_collection_report_export")
    @login_required
    def keil_collection_report_export():
        report = _keil_report()
        return _csv_response(report.rows, KEIL_COLLECTION_COLUMNS, "keil_collection_report", report.period)

    def _critical_rows(analytics) -> list[dict]:
        return [{**line.__dict__, "type": kind, "gap": line.gap, "value": line.value} for kind, line in analytics.critical]

    @app.route("/reports/stock", endpoint="stock_analytics")
    @login_required
    def stock_analytics():
        analytics = container.stock_report_service.analytics()
        return render_template(
            "reports/stock.html",
            analytics=analytics,
            summary=analytics.summary,
            critical_rows=_critical_rows(analytics),
            columns=CRITICAL_STOCK_COLUMNS,
            active_path="/reports/stock",
        )

    @app.route("/reports/stock/export.csv", endpoint="stock_analytics_export")
    @login_required
    def stock_analytics_export():
        rows = _critical_rows(container.stock_report_service.analytics())
        return Response(
            export_csv(rows, CRITICAL_STOCK_COLUMNS),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=critical_stock.csv"},
        )
