from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        work_date=r["date"],
        check_in=normalize_mysql_time(r.get("check_in")),
        check_out=normalize_mysql_time(r.get("check_out")),
        total_hours=Decimal(r.get("total_hours") or 0),
        status=AttendanceStatus(r["status"]),
        employee_name=r.get("employee_name"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: AttendanceRecord) -> None:
        # uq_attendance_employee_date makes this a single keyed insert-or-replace.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, check_in, check_out, total_hours, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in = VALUES(check_in),
                    check_out = VALUES(check_out),
                    total_hours = VALUES(total_hours),
                    status = VALUES(status)
                """,
                (
                    record.employee_id,
                    record.work_date,
                    record.check_in,
                    record.check_out,
                    record.total_hours,
                    record.status.value,
                ),
            )

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.*, e.name AS employee_name
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE a.employee_id=%s AND a.date=%s
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if work_date is not None:
            clauses.append("a.date=%s")
            params.append(work_date)
        if employee_id:
            clauses.append("a.employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.*, e.name AS employee_name
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE {where}
                ORDER BY a.date DESC, e.name ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
