from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import ConflictError, StorageError, ValidationError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .leaves.controller import register as register_leaves
from .policy.model import WorkplacePolicy
from .reminders.controller import register as register_reminders
from .reminders.model import ReminderSettings
from .user_settings.controller import register as register_user_settings

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(exc: ValidationError):
        return jsonify({"error": "invalid_request", "detail": str(exc)}), 400

    @app.errorhandler(ConflictError)
    def handle_conflict(exc: ConflictError):
        return jsonify({"error": "conflict", "detail": str(exc)}), 409

    @app.errorhandler(StorageError)
    def handle_storage(exc: StorageError):
        logger.error("storage failure: %s", exc)
        return jsonify({"error": "storage_unavailable", "retryable": True}), 503


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CRON_SECRET"] = getattr(settings, "CRON_SECRET", "")

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("holiday seed ready")

        container = build_container(
            db_config=db_config,
            timezone=getattr(settings, "TIMEZONE"),
            workplace_policy=WorkplacePolicy(workday_total_hours=getattr(settings, "WORKDAY_TOTAL_HOURS")),
            reminder_settings=ReminderSettings(
                pre_completion_offset_minutes=getattr(settings, "PRE_COMPLETION_OFFSET_MINUTES"),
                tolerance_minutes=getattr(settings, "REMINDER_TOLERANCE_MINUTES"),
                poll_interval_minutes=getattr(settings, "REMINDER_POLL_INTERVAL_MINUTES"),
            ),
            max_workers=getattr(settings, "REMINDER_MAX_WORKERS", 1),
        )

    app.extensions["shift_tracker"] = container

    _register_error_handlers(app)
    register_attendance(app, container)
    register_reminders(app, container)
    register_leaves(app, container)
    register_user_settings(app, container)

    return app
