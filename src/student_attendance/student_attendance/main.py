from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import load_settings

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.logging import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_profiles, list_tables
from .database.connection import DBConfig
from .directory.controller import register as register_directory
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger("student_attendance")

REPO_ROOT = Path(__file__).resolve().parents[3]


def _prepare_database(settings, db_config: dict) -> None:
    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_profiles(db_config)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    Pass `container` to run against already-wired services (tests use in-memory
    repositories); otherwise MySQL repositories are built from DB_CONFIG.
    """

    load_dotenv(override=False)
    settings = load_settings(settings_module)

    app = Flask(__name__, template_folder="../../../templates")
    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), log_dir=getattr(settings, "LOG_DIR", None))

    if container is None:
        db_config = dict(settings.DB_CONFIG)
        logger.info("settings=%s db=%s", settings.__name__, DBConfig.from_dict(db_config).describe())
        _prepare_database(settings, db_config)
        container = build_container(db_config=db_config)

    app.extensions["container"] = container

    register_users(app, container)
    register_directory(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
