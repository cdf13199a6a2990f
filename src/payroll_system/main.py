from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.clock import Clock
from .common.logging_config import configure_logging
from .common.web import register_error_handlers
from .config import RuleSettings, get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .overtime.controller import register as register_overtime
from .payroll.controller import register as register_payroll
from .reimbursements.controller import register as register_reimbursements
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, clock: Optional[Clock] = None) -> Flask:
    """Build the Flask app.

    Passing a ``container`` skips every database step; tests use this with
    in-memory repositories.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

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
            apply_schema(db_config)
            ensure_admin_user(
                db_config,
                username=getattr(settings, "ADMIN_USERNAME"),
                password=getattr(settings, "ADMIN_PASSWORD"),
            )
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            rules=RuleSettings.from_settings(settings),
            clock=clock,
        )

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_overtime(app, container)
    register_reimbursements(app, container)
    register_payroll(app, container)

    return app
