from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.query import reference_day
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    def api_dashboard():
        today = reference_day(request.args)
        data = container.dashboard_service.build(today)
        return jsonify(data.as_dict())
