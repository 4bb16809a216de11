from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import admin_required, current_role, flash_system_error
from ..core.exceptions import AuthorizationError, ValidationError
from ..logging_config import get_logger

logger = get_logger(__name__)


def register(app: Flask, container) -> None:
    @app.route("/settings/system", methods=["GET", "POST"], endpoint="system_settings")
    @admin_required
    def system_settings():
        if request.method == "POST":
            upload = request.files.get("logo")
            content = upload.read() if upload and upload.filename else None
            try:
                container.settings_service.save(
                    current_role=current_role(),
                    form=request.form,
                    logo=content,
                    logo_mimetype=upload.mimetype if content else None,
                )
                logger.info("System settings saved")
                flash("Settings saved successfully", "success")
                return redirect(url_for("system_settings"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception as e:
                flash_system_error("saving settings", e)

        return render_template(
            "settings/system.html",
            current=container.settings_service.get_settings(),
            active_path="/settings/system",
        )
