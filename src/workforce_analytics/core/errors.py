from __future__ import annotations

import logging

from flask import Flask, jsonify

from .exceptions import DataSourceError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Map domain exceptions onto JSON error responses."""

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        logger.info("Rejected request: %s", exc)
        return jsonify({"error": "validation_error", "message": str(exc)}), 400

    @app.errorhandler(DataSourceError)
    def _data_source_error(exc: DataSourceError):
        logger.error("Data source unavailable: %s", exc)
        return jsonify({"error": "data_source_unavailable", "message": str(exc)}), 503
