from __future__ import annotations

from datetime import time, timedelta

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from hrms.database.bootstrap import (
    SCHEMA_PATH,
    SEED_PATH,
    _iter_sql_statements,
    _strip_create_db_and_use,
    _strip_line_comments,
)
from hrms.database.mysql_base import is_duplicate_key, normalize_mysql_time


def _statements(path):
    return list(_iter_sql_statements(_strip_line_comments(_strip_create_db_and_use(path.read_text(encoding="utf-8")))))


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"
    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_create_database_and_use_are_dropped():
    sql = "CREATE DATABASE IF NOT EXISTS hrms_db;\nUSE hrms_db;\nSELECT 1;"
    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["SELECT 1"]


def test_schema_creates_every_table():
    created = [s for s in _statements(SCHEMA_PATH) if s.upper().startswith("CREATE TABLE")]
    names = {s.split("EXISTS", 1)[1].split("(", 1)[0].strip() for s in created}
    assert names == {"employees", "id_sequences", "attendance", "leave_requests", "payroll"}


def test_seed_file_parses():
    assert _statements(SEED_PATH)


def test_mysql_time_values_become_time_of_day():
    assert normalize_mysql_time(timedelta(hours=9, minutes=30)) == time(9, 30)
    assert normalize_mysql_time(None) is None


def test_duplicate_key_matches_only_the_named_key():
    exc = IntegrityError(
        msg="Duplicate entry 'a@b.co' for key 'employees.uq_employees_email'",
        errno=errorcode.ER_DUP_ENTRY,
    )
    assert is_duplicate_key(exc)
    assert is_duplicate_key(exc, key="email")
    assert not is_duplicate_key(exc, key="employee_id")
    assert not is_duplicate_key(IntegrityError(msg="Cannot add row", errno=errorcode.ER_NO_REFERENCED_ROW_2))
