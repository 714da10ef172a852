from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.records import record_to_dict
from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollRecord:
    """One employee's pay for one period. Amounts are already rounded to cents."""

    employee_id: str
    pay_period_start: date
    pay_period_end: date
    base_salary: Decimal
    allowances: Decimal
    overtime_hours: Decimal
    overtime_rate: Decimal
    deductions: Decimal
    gross_pay: Decimal
    net_pay: Decimal
    status: PayrollStatus
    processed_date: Optional[date] = None
    id: Optional[int] = None
    employee_name: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return record_to_dict(self, skip_none=("id", "employee_name", "department", "position"))


@dataclass(frozen=True)
class PayrollRunResult:
    pay_period_start: date
    pay_period_end: date
    employees_processed: int
    employees_skipped: int
    total_gross_pay: Decimal
    total_net_pay: Decimal

    def to_dict(self) -> dict:
        return record_to_dict(self)


@dataclass(frozen=True)
class PayrollStats:
    month: int
    year: int
    total_employees: int
    total_gross_pay: Decimal
    total_net_pay: Decimal
    average_salary: Optional[Decimal]
    processed_count: int
    pending_count: int
    paid_count: int

    def to_dict(self) -> dict:
        return record_to_dict(self)
