from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from .common.log import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .database.connection import DBConfig
from .settings import build_holiday_table, build_labor_rules, get_settings_module

log = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_container() -> Container:
    """Boot the engine: environment, logging, optional schema, wiring."""
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(getattr(settings, "DB_CONFIG"))
    log.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(DBConfig.from_mapping(db_config), schema_path=SCHEMA_PATH)

    return build_container(
        db_config=db_config,
        rules=build_labor_rules(settings),
        holiday_table=build_holiday_table(settings),
    )
