from __future__ import annotations

from flask import Flask, render_template

from ..common.web import login_required


def register(app: Flask, container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        return render_template(
            "dashboard.html",
            kpis=container.dashboard_service.kpis(),
            active_path="/dashboard",
        )
