from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRecord


class PayrollRepository(Protocol):
    def create_batch(self, records: Sequence[PayrollRecord]) -> int:
        """Insert all records in one transaction; nothing is written if any insert fails.

        Raises ConflictError when a record for the same (employee, period) already exists.
        """

        raise NotImplementedError

    def employee_ids_for_period(self, *, pay_period_start: date, pay_period_end: date) -> set[str]:
        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def update_status(self, *, payroll_id: int, from_status: PayrollStatus, to_status: PayrollStatus) -> bool:
        """Conditional transition; False when the row is missing or not in ``from_status``."""

        raise NotImplementedError

    def list_recent(self, *, status: Optional[PayrollStatus] = None, limit: int) -> Sequence[PayrollRecord]:
        """Most recently created rows first, whatever their period."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayrollStatus] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        """Latest period first, newest row first within a period.

        ``month``/``year`` filter on the period start and only apply together.
        Rows carry ``employee_name``, ``department`` and ``position``.
        """

        raise NotImplementedError
