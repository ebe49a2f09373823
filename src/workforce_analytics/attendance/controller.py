from __future__ import annotations

from typing import Mapping

from flask import Flask, jsonify, request

from ..analytics.filters import AttendanceFilters
from ..common.query import date_arg, reference_day, view_state_from_args
from ..container import Container


def _attendance_filters(args: Mapping[str, str]) -> AttendanceFilters:
    # Date range is fixed by ?date=, only the row filters are exposed.
    return AttendanceFilters(
        department=args.get("department"),
        member_id=args.get("member_id"),
        status=args.get("status"),
        search=args.get("search"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    def api_attendance():
        day = date_arg(request.args, "date") or reference_day(request.args)
        state = view_state_from_args(request.args, filters_from=_attendance_filters, per_page=container.per_page)
        sheet = container.attendance_service.day_sheet(day, state)
        return jsonify(sheet.as_dict())
