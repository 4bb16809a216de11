from __future__ import annotations

from flask import Flask, abort, render_template

from ..common.web import login_required
from .view_only import VIEW_ONLY_NOTICE, find_module


def register(app: Flask, container) -> None:
    @app.route("/modules/<slug>", endpoint="view_only_module")
    @login_required
    def view_only_module(slug: str):
        module = find_module(slug)
        if module is None:
            abort(404)
        return render_template(
            "view_only.html",
            module=module,
            notice=VIEW_ONLY_NOTICE,
            active_path=module.url_path,
        )
