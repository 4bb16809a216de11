from __future__ import annotations

from datetime import date

from flask import Flask, abort, flash, redirect, render_template, request, send_file, url_for

from ..common.export import XLSX_MIMETYPE, export_xlsx
from ..common.table import Column, paginate
from ..common.web import current_role, flash_system_error, login_required, page_arg
from ..core.enums import PurchaseStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.permissions import can_edit
from ..crud.resource import choices_of
from ..logging_config import get_logger

logger = get_logger(__name__)

PURCHASE_COLUMNS = (
    Column("purchase_number", "GRN No.", css_class="fw-semibold"),
    Column("purchase_date", "Date", "date"),
    Column("supplier_name", "Supplier"),
    Column("invoice_number", "Invoice No."),
    Column("total_amount", "Amount", "money", "text-end"),
    Column("status", "Status", "badge"),
)

STOCK_COLUMNS = (
    Column("code", "Code"),
    Column("name", "Name"),
    Column("unit", "Unit"),
    Column("current_stock", "Current Stock", "number"),
    Column("min_stock_level", "Min Level", "number"),
    Column("rate", "Rate", "money"),
    Column("value", "Value", "money"),
    Column("status", "Status", "badge"),
)


def items_from_form(form) -> list[dict]:
    """Line items arrive as parallel ``item_*`` lists, one entry per row."""
    materials = form.getlist("item_material")
    quantities = form.getlist("item_quantity")
    rates = form.getlist("item_rate")
    return [
        {"raw_material_id": m, "quantity": q, "rate": r}
        for m, q, r in zip(materials, quantities, rates)
    ]


def _stock_rows(lines) -> list[dict]:
    return [{**line.__dict__, "value": line.value} for line in lines]


def register(app: Flask, container) -> None:
    page_size = int(app.config.get("PAGE_SIZE", 25))

    @app.route("/inventory/purchases", endpoint="purchases")
    @login_required
    def purchases():
        search = request.args.get("q", "")
        page = paginate(container.purchase_service.list_rows(search), page_arg(), page_size)
        return render_template(
            "inventory/purchases.html",
            page=page,
            columns=PURCHASE_COLUMNS,
            search=search,
            options=container.purchase_service.options(),
            statuses=choices_of(PurchaseStatus),
            today=date.today().isoformat(),
            can_edit=can_edit(current_role()),
            active_path="/inventory/purchases",
        )

    @app.route("/inventory/purchases/new", methods=["POST"], endpoint="purchase_create")
    @login_required
    def purchase_create():
        try:
            purchase_id = container.purchase_service.create(
                current_role=current_role(),
                form=request.form,
                items=items_from_form(request.form),
            )
            logger.info("Created purchase id=%s", purchase_id)
            flash("Purchase recorded successfully", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_system_error("recording purchase", e)
        return redirect(url_for("purchases"))

    @app.route("/inventory/purchases/<int:purchase_id>", endpoint="purchase_detail")
    @login_required
    def purchase_detail(purchase_id: int):
        try:
            purchase = container.purchase_service.get_with_items(purchase_id)
        except NotFoundError:
            abort(404)
        return render_template(
            "inventory/purchase_detail.html",
            purchase=purchase,
            active_path="/inventory/purchases",
        )

    @app.route("/inventory/purchases/<int:purchase_id>/delete", methods=["POST"], endpoint="purchase_delete")
    @login_required
    def purchase_delete(purchase_id: int):
        try:
            container.purchase_service.delete(current_role=current_role(), purchase_id=purchase_id)
            logger.info("Deleted purchase id=%s", purchase_id)
            flash("Purchase deleted", "success")
        except (AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_system_error("deleting purchase", e)
        return redirect(url_for("purchases"))

    @app.route("/inventory/purchases/export.xlsx", endpoint="purchases_export")
    @login_required
    def purchases_export():
        rows = container.purchase_service.list_rows(request.args.get("q", ""))
        out = export_xlsx(rows, PURCHASE_COLUMNS, sheet_name="Purchases")
        return send_file(
            out,
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"purchases_{date.today().isoformat()}.xlsx",
        )

    @app.route("/inventory/stock", endpoint="stock_report")
    @login_required
    def stock_report():
        search = request.args.get("q", "")
        summary = container.stock_report_service.summary(search)
        return render_template(
            "inventory/stock.html",
            summary=summary,
            raw_rows=_stock_rows(summary.raw_materials),
            finished_rows=_stock_rows(summary.finished_goods),
            columns=STOCK_COLUMNS,
            search=search,
            active_path="/inventory/stock",
        )
