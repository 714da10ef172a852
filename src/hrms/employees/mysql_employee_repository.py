from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..accounting import next_employee_id
from ..core.constants import EMPLOYEE_ID_SEQUENCE
from ..core.enums import EmployeeStatus
from ..core.exceptions import DuplicateEmailError, DuplicateEmployeeIdError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee, EmployeeProfile
from .repository import EmployeeRepository

_COLUMNS = """
    id, employee_id, name, email, department, position,
    base_salary, allowances, deductions, status, hire_date,
    created_at, updated_at
"""


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        name=r["name"],
        email=r["email"],
        department=r["department"],
        position=r["position"],
        base_salary=Decimal(r["base_salary"] or 0),
        allowances=Decimal(r["allowances"] or 0),
        deductions=Decimal(r["deductions"] or 0),
        status=EmployeeStatus(r["status"]),
        hire_date=r["hire_date"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _raise_duplicate(exc: IntegrityError) -> None:
    if is_duplicate_key(exc, key="email"):
        raise DuplicateEmailError() from exc
    if is_duplicate_key(exc, key="employee_id"):
        raise DuplicateEmployeeIdError(str(exc.msg)) from exc


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY created_at DESC, id DESC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE status=%s ORDER BY employee_id",
                (EmployeeStatus.ACTIVE.value,),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def issue_employee_id(self) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO id_sequences (name, last_issued) VALUES (%s, NULL)",
                (EMPLOYEE_ID_SEQUENCE,),
            )
            # Row lock serializes concurrent issuers until this transaction commits.
            cur.execute(
                "SELECT last_issued FROM id_sequences WHERE name=%s FOR UPDATE",
                (EMPLOYEE_ID_SEQUENCE,),
            )
            row = fetchone(cur)
            issued = next_employee_id(row["last_issued"] if row else None)
            cur.execute(
                "UPDATE id_sequences SET last_issued=%s WHERE name=%s",
                (issued, EMPLOYEE_ID_SEQUENCE),
            )
            return issued

    def create(self, *, employee_id: str, profile: EmployeeProfile, hire_date: date) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(
                        employee_id, name, email, department, position,
                        base_salary, allowances, deductions, status, hire_date
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee_id,
                        profile.name,
                        profile.email,
                        profile.department,
                        profile.position,
                        profile.base_salary,
                        profile.allowances,
                        profile.deductions,
                        profile.status.value,
                        hire_date,
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            _raise_duplicate(exc)
            raise

    def update(self, employee_id: str, profile: EmployeeProfile) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE employees
                    SET name=%s, email=%s, department=%s, position=%s,
                        base_salary=%s, allowances=%s, deductions=%s, status=%s
                    WHERE employee_id=%s
                    """,
                    (
                        profile.name,
                        profile.email,
                        profile.department,
                        profile.position,
                        profile.base_salary,
                        profile.allowances,
                        profile.deductions,
                        profile.status.value,
                        employee_id,
                    ),
                )
                return cur.rowcount > 0
        except IntegrityError as exc:
            _raise_duplicate(exc)
            raise

    def delete(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0
