from __future__ import annotations

import importlib
import logging
from typing import Optional

import mysql.connector
from dotenv import load_dotenv
from flask import Flask

from .api.json_provider import HRMSJSONProvider
from .api.system import register as register_system
from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .logging_config import configure_logging
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

_CORS_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
_CORS_HEADERS = "Content-Type, Authorization"


def _prepare_database(db_config: dict, *, seed: bool) -> None:
    # The API still starts without a database; /test-db reports the failure.
    try:
        apply_schema(db_config)
        if seed:
            apply_seed_sql(db_config)
        logger.info("Database ready (tables=%d)", len(list_tables(db_config)))
    except mysql.connector.Error:
        logger.exception("Database initialisation failed for %s", DBConfig.from_dict(db_config).describe())


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)
    app.json = HRMSJSONProvider(app)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["FRONTEND_URL"] = getattr(settings, "FRONTEND_URL", "")

    configure_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_format=bool(getattr(settings, "LOG_JSON", False)),
    )
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        if getattr(settings, "AUTO_INIT_DB", False):
            _prepare_database(db_config, seed=bool(getattr(settings, "AUTO_SEED_DB", False)))
        container = build_container(db_config=db_config)

    register_system(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_dashboard(app, container)

    @app.after_request
    def add_cors_headers(response):
        origin = app.config["FRONTEND_URL"]
        if origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Access-Control-Allow-Methods"] = _CORS_METHODS
            response.headers["Access-Control-Allow-Headers"] = _CORS_HEADERS
        return response

    return app
