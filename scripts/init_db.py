from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from labor_engine.common.log import configure_logging
from labor_engine.database.bootstrap import apply_schema, list_tables
from labor_engine.database.connection import DBConfig
from labor_engine.settings import get_settings_module


def main() -> None:
    load_dotenv(override=False)
    logger = configure_logging("INFO")

    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(dict(settings.DB_CONFIG))

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(config, schema_path=schema_path)
    tables = list_tables(config)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        config.user,
        config.host,
        config.port,
        config.database,
        len(tables),
    )


if __name__ == "__main__":
    main()
