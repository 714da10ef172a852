from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRequestRepository


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days_requested=int(r["days_requested"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        applied_date=r["applied_date"],
        approved_by=r.get("approved_by"),
        approved_date=r.get("approved_date"),
        employee_name=r.get("employee_name"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days_requested: int,
        reason: str,
        applied_date: date,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, start_date, end_date,
                    days_requested, reason, status, applied_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    leave_type.value,
                    start_date,
                    end_date,
                    int(days_requested),
                    reason,
                    LeaveStatus.PENDING.value,
                    applied_date,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lr.*, e.name AS employee_name
                FROM leave_requests lr
                JOIN employees e ON e.employee_id = lr.employee_id
                WHERE lr.id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approved_by: Optional[str],
        approved_date: date,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_date=%s
                WHERE id=%s AND status=%s
                """,
                (
                    status.value,
                    approved_by,
                    approved_date,
                    int(request_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[str] = None,
        applied_from: Optional[date] = None,
        applied_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)
        if employee_id:
            clauses.append("lr.employee_id=%s")
            params.append(employee_id)
        if applied_from is not None:
            clauses.append("lr.applied_date>=%s")
            params.append(applied_from)
        if applied_to is not None:
            clauses.append("lr.applied_date<=%s")
            params.append(applied_to)

        where = " AND ".join(clauses)
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT lr.*, e.name AS employee_name
                FROM leave_requests lr
                JOIN employees e ON e.employee_id = lr.employee_id
                WHERE {where}
                ORDER BY lr.applied_date DESC, lr.created_at DESC, lr.id DESC
                {limit_sql}
                """,
                tuple(params),
            )
            return [_row_to_request(r) for r in fetchall(cur)]
