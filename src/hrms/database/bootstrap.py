from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector

from ..core.constants import EMPLOYEE_ID_PREFIX, EMPLOYEE_ID_SEQUENCE
from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"
SEED_PATH = Path(__file__).resolve().parent / "seed.sql"

# Runs of quoted literals or non-separator characters; a ";" inside quotes does not split.
_STATEMENT_RE = re.compile(r"""(?:'(?:\\.|[^'\\])*'|"(?:\\.|[^"\\])*"|[^;'"])+""")


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    for match in _STATEMENT_RE.finditer(sql):
        stmt = match.group(0).strip()
        if stmt:
            yield stmt


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(_strip_line_comments(sql)):
        cur.execute(stmt)


def _run_script(db_config: dict, path: Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def sync_employee_sequence(db_config: dict) -> None:
    """Move the employee id counter up to the highest id present in ``employees``.

    Needed after loading rows with explicit ids (seed data, imports); the
    counter never moves down, so ids freed by deletes are not reissued.
    """
    target = DBConfig.from_dict(db_config)
    suffix = f"CAST(SUBSTRING(employee_id, {len(EMPLOYEE_ID_PREFIX) + 1}) AS UNSIGNED)"

    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute(
            "INSERT IGNORE INTO id_sequences (name, last_issued) VALUES (%s, NULL)",
            (EMPLOYEE_ID_SEQUENCE,),
        )
        cur.execute(
            f"""
            SELECT employee_id FROM employees
            WHERE employee_id REGEXP %s
            ORDER BY {suffix} DESC
            LIMIT 1
            """,
            (f"^{EMPLOYEE_ID_PREFIX}[0-9]+$",),
        )
        row = cur.fetchone()
        if row:
            cur.execute(
                f"""
                UPDATE id_sequences
                SET last_issued = %s
                WHERE name = %s
                  AND (last_issued IS NULL
                       OR CAST(SUBSTRING(last_issued, {len(EMPLOYEE_ID_PREFIX) + 1}) AS UNSIGNED) < %s)
                """,
                (row[0], EMPLOYEE_ID_SEQUENCE, int(row[0][len(EMPLOYEE_ID_PREFIX):])),
            )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Optional[str | Path] = None) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, Path(schema_path or SCHEMA_PATH))
    sync_employee_sequence(db_config)
    logger.info("Schema applied to %s", DBConfig.from_dict(db_config).describe())


def apply_seed_sql(db_config: dict, *, seed_path: Optional[str | Path] = None) -> None:
    _run_script(db_config, Path(seed_path or SEED_PATH))
    sync_employee_sequence(db_config)
    logger.info("Seed data loaded into %s", DBConfig.from_dict(db_config).describe())


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
