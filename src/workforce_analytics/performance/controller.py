from __future__ import annotations

from typing import Mapping

from flask import Flask, jsonify, request

from ..analytics.filters import TaskFilters
from ..common.query import reference_day, view_state_from_args
from ..container import Container


def _task_filters(args: Mapping[str, str]) -> TaskFilters:
    return TaskFilters(
        department=args.get("department"),
        member_id=args.get("member_id"),
        status=args.get("status"),
        start=args.get("start"),
        end=args.get("end"),
        search=args.get("search"),
        date_field=args.get("date_field") or "deadline",
    )


def register(app: Flask, container: Container) -> None:
    service = container.performance_service

    @app.route("/api/performance/tasks", methods=["GET"], endpoint="api_performance_tasks")
    def api_performance_tasks():
        today = reference_day(request.args)
        state = view_state_from_args(request.args, filters_from=_task_filters, per_page=container.per_page)
        return jsonify(service.task_table(today, state).as_dict())

    @app.route("/api/performance/summary", methods=["GET"], endpoint="api_performance_summary")
    def api_performance_summary():
        today = reference_day(request.args)
        return jsonify(service.charts(today).as_dict())
