from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_utils import configure_logging
from .common.responses import fail
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def register_routes(app: Flask, container: Container) -> None:
    register_users(app, container)
    register_employees(app, container)
    register_leaves(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    @app.errorhandler(404)
    def not_found(_error):
        return fail("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return fail("Method not allowed", 405)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a prebuilt ``container`` skips all database setup (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(db_config)

        container = build_container(db_config=db_config, settings=settings)

    register_routes(app, container)
    return app
