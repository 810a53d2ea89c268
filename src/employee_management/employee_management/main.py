from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_time_of_day
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_LATE_CUTOFF, DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

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
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_accounts(db_config)
            logger.info("demo seed ready")

        late_cutoff_s = getattr(settings, "LATE_CUTOFF", None)
        container = build_container(
            db_config=db_config,
            late_cutoff=parse_time_of_day(late_cutoff_s) if late_cutoff_s else DEFAULT_LATE_CUTOFF,
            timezone=getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE),
        )

    register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
