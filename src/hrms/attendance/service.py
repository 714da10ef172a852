from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..accounting import compute_attendance_hours, round_hours
from ..common.datetime_utils import today_local
from ..common.validators import PayloadValidator
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceMark:
    employee_id: str
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    status: AttendanceStatus


def parse_attendance_mark(payload: Optional[Mapping[str, Any]]) -> AttendanceMark:
    v = PayloadValidator(payload)
    employee_id = v.text("employee_id", "Employee ID is required")
    work_date = v.iso_date("date", "Valid date is required")
    check_in = v.clock_time("check_in", "Valid check-in time required")
    check_out = v.clock_time("check_out", "Valid check-out time required")
    status = v.choice(
        "status",
        AttendanceStatus,
        "Status must be one of: " + ", ".join(s.value for s in AttendanceStatus),
        default=AttendanceStatus.PRESENT,
    )
    v.raise_if_invalid()
    return AttendanceMark(
        employee_id=employee_id,
        work_date=work_date,
        check_in=check_in,
        check_out=check_out,
        status=status,
    )


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def mark_attendance(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in: Optional[time] = None,
        check_out: Optional[time] = None,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
    ) -> AttendanceRecord:
        """Record the day for one employee; a second call for the same day overwrites the first."""
        employee = self._employees.get_by_employee_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        record = AttendanceRecord(
            employee_id=employee.employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            total_hours=round_hours(compute_attendance_hours(check_in, check_out, work_date)),
            status=status,
            employee_name=employee.name,
        )
        self._attendance.upsert(record)
        logger.info("Attendance %s on %s marked %s", employee.employee_id, work_date, status.value)
        return self._attendance.get_for_employee_and_date(employee.employee_id, work_date) or record

    def list_attendance(
        self,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        return self._attendance.list_records(work_date=work_date, employee_id=employee_id)

    def attendance_stats(self, *, work_date: Optional[date] = None) -> AttendanceStats:
        work_date = work_date or today_local()
        records = self._attendance.list_records(work_date=work_date)

        def count(status: AttendanceStatus) -> int:
            return sum(1 for r in records if r.status == status)

        average: Optional[Decimal] = None
        if records:
            average = round_hours(sum((r.total_hours for r in records), Decimal(0)) / len(records))

        return AttendanceStats(
            date=work_date,
            total_employees=len(records),
            present_count=count(AttendanceStatus.PRESENT),
            absent_count=count(AttendanceStatus.ABSENT),
            late_count=count(AttendanceStatus.LATE),
            half_day_count=count(AttendanceStatus.HALF_DAY),
            average_hours=average,
        )
