from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ..common.records import record_to_dict
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day."""

    employee_id: str
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    total_hours: Decimal
    status: AttendanceStatus
    id: Optional[int] = None
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return record_to_dict(self, rename={"work_date": "date"}, skip_none=("id", "employee_name"))


@dataclass(frozen=True)
class AttendanceStats:
    """Read-model for ``GET /api/attendance/stats``."""

    date: date
    total_employees: int
    present_count: int
    absent_count: int
    late_count: int
    half_day_count: int
    average_hours: Optional[Decimal]

    def to_dict(self) -> dict:
        return record_to_dict(self)
