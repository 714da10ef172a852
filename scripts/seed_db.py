from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from hrms.config import get_settings_module
from hrms.database.bootstrap import apply_schema, apply_seed_sql
from hrms.database.connection import DBConfig
from hrms.logging_config import configure_logging


def main() -> None:
    load_dotenv(override=False)
    configure_logging(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    apply_seed_sql(db_config)
    print(f"OK: Seeded database -> {DBConfig.from_dict(db_config).describe()}")


if __name__ == "__main__":
    main()
