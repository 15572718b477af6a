from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .adjustments.controller import register as register_adjustments
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .jobs.controller import register as register_jobs
from .payroll.controller import register as register_payroll
from .punches.controller import register as register_punches
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)


def create_app(*, container: Container | None = None, start_scheduler: bool | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG", None)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if db_config:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

    if container is None:
        if db_config and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            timezone=getattr(settings, "TIMEZONE", None),
            auto_close_hour=int(getattr(settings, "AUTO_CLOSE_HOUR", 22)),
        )
    app.extensions["container"] = container

    register_employees(app, container)
    register_punches(app, container)
    register_shifts(app, container)
    register_adjustments(app, container)
    register_payroll(app, container)
    register_jobs(app, container)

    if start_scheduler is None:
        start_scheduler = bool(getattr(settings, "SCHEDULER_ENABLED", False))
    if start_scheduler:
        container.scheduler.start()

    return app
