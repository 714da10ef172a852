"""Helpers shared by the MySQL repositories."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Tuple

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """One connection per unit of work: commit when the block exits cleanly, else roll back."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def is_duplicate_key(exc: Exception, *, key: Optional[str] = None) -> bool:
    """True for ER_DUP_ENTRY, optionally only when the message names ``key``."""
    if not isinstance(exc, IntegrityError) or exc.errno != errorcode.ER_DUP_ENTRY:
        return False
    # "Duplicate entry '...' for key 'table.key_name'": only the key part is matched.
    return key is None or key in str(exc.msg).rsplit("for key", 1)[-1]


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as ``timedelta`` from the C extension, ``time`` or str otherwise."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + timedelta(seconds=int(value.total_seconds()) % 86400)).time()
    if isinstance(value, str):
        fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
        return datetime.strptime(value.strip(), fmt).time()
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
