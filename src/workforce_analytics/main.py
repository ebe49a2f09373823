from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.errors import register_error_handlers
from .dashboard.controller import register as register_dashboard
from .performance.controller import register as register_performance
from .ratings.controller import register as register_ratings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), format=LOG_FORMAT)

    if container is None:
        data_file = getattr(settings, "DATA_FILE")
        container = build_container(
            data_file=data_file,
            score_scale=float(getattr(settings, "QUALITY_SCORE_SCALE", 100)),
            per_page=int(getattr(settings, "DEFAULT_PER_PAGE", 10)),
            trend_days=int(getattr(settings, "ATTENDANCE_TREND_DAYS", 14)),
            trend_months=int(getattr(settings, "TASK_TREND_MONTHS", 6)),
            upcoming_limit=int(getattr(settings, "UPCOMING_TASKS_LIMIT", 5)),
        )
        logger.info("settings=%s data_file=%s", settings_module, data_file)

    register_error_handlers(app)
    register_dashboard(app, container)
    register_performance(app, container)
    register_attendance(app, container)
    register_ratings(app, container)

    return app
