from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert(self, record: AttendanceRecord) -> None:
        """Insert, or overwrite times/hours/status of the row for (employee_id, work_date)."""

        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest day first, then by employee name; rows carry ``employee_name``."""

        raise NotImplementedError
