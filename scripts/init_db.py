from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from hrms.config import get_settings_module
from hrms.database.bootstrap import apply_schema, list_tables
from hrms.database.connection import DBConfig
from hrms.logging_config import configure_logging


def main() -> None:
    load_dotenv(override=False)
    configure_logging(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {DBConfig.from_dict(db_config).describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
