from __future__ import annotations

from typing import Mapping

from flask import Flask, jsonify, request

from ..analytics.filters import RatingFilters
from ..common.query import reference_day, view_state_from_args
from ..container import Container


def _rating_filters(args: Mapping[str, str]) -> RatingFilters:
    return RatingFilters(
        department=args.get("department"),
        member_id=args.get("member_id"),
        score_band=args.get("band"),
        search=args.get("search"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/ratings", methods=["GET"], endpoint="api_ratings")
    def api_ratings():
        today = reference_day(request.args)
        state = view_state_from_args(request.args, filters_from=_rating_filters, per_page=container.per_page)
        overview = container.rating_service.overview(
            today,
            state,
            trend_member_id=request.args.get("trend_member") or None,
        )
        return jsonify(overview.as_dict())
