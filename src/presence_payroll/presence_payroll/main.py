from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.debug(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    register_payroll(app, container)
    register_leaves(app, container)

    return app
