from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import PayrollStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import PayrollRecord
from .repository import PayrollRepository

_SELECT = """
    SELECT p.*, e.name AS employee_name, e.department, e.position
    FROM payroll p
    JOIN employees e ON e.employee_id = p.employee_id
"""


def _row_to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        pay_period_start=r["pay_period_start"],
        pay_period_end=r["pay_period_end"],
        base_salary=Decimal(r["base_salary"]),
        allowances=Decimal(r.get("allowances") or 0),
        overtime_hours=Decimal(r.get("overtime_hours") or 0),
        overtime_rate=Decimal(r.get("overtime_rate") or 0),
        deductions=Decimal(r.get("deductions") or 0),
        gross_pay=Decimal(r["gross_pay"]),
        net_pay=Decimal(r["net_pay"]),
        status=PayrollStatus(r["status"]),
        processed_date=r.get("processed_date"),
        employee_name=r.get("employee_name"),
        department=r.get("department"),
        position=r.get("position"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_batch(self, records: Sequence[PayrollRecord]) -> int:
        if not records:
            return 0
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.executemany(
                    """
                    INSERT INTO payroll(
                        employee_id, pay_period_start, pay_period_end,
                        base_salary, allowances, overtime_hours, overtime_rate, deductions,
                        gross_pay, net_pay, status, processed_date
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            r.employee_id,
                            r.pay_period_start,
                            r.pay_period_end,
                            r.base_salary,
                            r.allowances,
                            r.overtime_hours,
                            r.overtime_rate,
                            r.deductions,
                            r.gross_pay,
                            r.net_pay,
                            r.status.value,
                            r.processed_date,
                        )
                        for r in records
                    ],
                )
                return len(records)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise ConflictError("Payroll already processed for this period") from exc
            raise

    def employee_ids_for_period(self, *, pay_period_start: date, pay_period_end: date) -> set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id FROM payroll
                WHERE pay_period_start=%s AND pay_period_end=%s
                """,
                (pay_period_start, pay_period_end),
            )
            return {r["employee_id"] for r in fetchall(cur)}

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE p.id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def update_status(self, *, payroll_id: int, from_status: PayrollStatus, to_status: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll SET status=%s WHERE id=%s AND status=%s",
                (to_status.value, int(payroll_id), from_status.value),
            )
            return cur.rowcount > 0

    def list_recent(self, *, status: Optional[PayrollStatus] = None, limit: int) -> Sequence[PayrollRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("p.status=%s")
            params.append(status.value)
        params.append(int(limit))
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE {where}
                ORDER BY p.created_at DESC, p.id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayrollStatus] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id:
            clauses.append("p.employee_id=%s")
            params.append(employee_id)
        if status is not None:
            clauses.append("p.status=%s")
            params.append(status.value)
        if month is not None and year is not None:
            clauses.append("MONTH(p.pay_period_start)=%s AND YEAR(p.pay_period_start)=%s")
            params.extend([int(month), int(year)])

        where = " AND ".join(clauses)
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE {where}
                ORDER BY p.pay_period_start DESC, p.created_at DESC, p.id DESC
                {limit_sql}
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
