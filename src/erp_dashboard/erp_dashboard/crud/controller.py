from __future__ import annotations

from datetime import date

from flask import Flask, abort, flash, redirect, render_template, request, send_file, url_for

from ..common.export import XLSX_MIMETYPE, export_xlsx
from ..common.table import paginate
from ..common.web import current_role, flash_system_error, login_required, page_arg
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.permissions import can_edit
from ..logging_config import get_logger
from .items import items_from_form
from .service import CrudService

logger = get_logger(__name__)


def register_resource(app: Flask, service: CrudService, *, page_size: int) -> None:
    resource = service.resource
    base = resource.url_path
    name = resource.name

    def _back():
        q = request.values.get("q") or None
        return redirect(url_for(f"{name}_list", q=q))

    @login_required
    def list_view():
        search = request.args.get("q", "")
        rows = service.list_rows(search)
        page = paginate(rows, page_arg(), page_size)
        options = service.options()
        return render_template(
            "crud/list.html",
            resource=resource,
            page=page,
            search=search,
            options=options,
            blank_form=service.blank_form(),
            stats=service.summary(service.list_rows(), options) if resource.summary else [],
            row_forms={r["id"]: service.form_values(r) for r in page.items},
            can_edit=can_edit(current_role()),
            active_path=base,
        )

    @login_required
    def create_view():
        try:
            items = items_from_form(request.form) if resource.items else ()
            row_id = service.create(current_role=current_role(), form=request.form, items=items)
            logger.info("Created %s id=%s", resource.table, row_id)
            flash(f"{resource.singular} created successfully", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_system_error(f"saving {resource.singular.lower()}", e)
        return _back()

    @login_required
    def update_view(row_id: int):
        try:
            service.update(current_role=current_role(), row_id=row_id, form=request.form)
            logger.info("Updated %s id=%s", resource.table, row_id)
            flash(f"{resource.singular} updated successfully", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_system_error(f"saving {resource.singular.lower()}", e)
        return _back()

    @login_required
    def delete_view(row_id: int):
        try:
            service.delete(current_role=current_role(), row_id=row_id)
            logger.info("Deleted %s id=%s", resource.table, row_id)
            flash(f"{resource.singular} deleted successfully", "success")
        except (AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception as e:
            flash_system_error(f"deleting {resource.singular.lower()}", e)
        return _back()

    @login_required
    def detail_view(row_id: int):
        try:
            row, items = service.detail(row_id)
        except NotFoundError:
            abort(404)
        return render_template(
            "crud/detail.html",
            resource=resource,
            row=row,
            items=items,
            heading=row.get(resource.number.column) if resource.number else f"{resource.singular} #{row_id}",
            can_edit=can_edit(current_role()),
            active_path=base,
        )

    @login_required
    def export_view():
        rows = service.list_rows(request.args.get("q", ""))
        out = export_xlsx(rows, resource.columns, sheet_name=resource.title)
        filename = f"{resource.slug}_{date.today().isoformat()}.xlsx"
        return send_file(out, mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)

    app.add_url_rule(base, endpoint=f"{name}_list", view_func=list_view)
    app.add_url_rule(f"{base}/<int:row_id>", endpoint=f"{name}_detail", view_func=detail_view)
    app.add_url_rule(f"{base}/new", endpoint=f"{name}_create", view_func=create_view, methods=["POST"])
    app.add_url_rule(f"{base}/<int:row_id>/edit", endpoint=f"{name}_update", view_func=update_view, methods=["POST"])
    app.add_url_rule(f"{base}/<int:row_id>/delete", endpoint=f"{name}_delete", view_func=delete_view, methods=["POST"])
    app.add_url_rule(f"{base}/export.xlsx", endpoint=f"{name}_export", view_func=export_view)


def register(app: Flask, container) -> None:
    page_size = int(app.config.get("PAGE_SIZE", 25))
    for service in container.crud_services.values():
        register_resource(app, service, page_size=page_size)
