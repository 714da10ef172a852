from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.records import record_to_dict
from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class EmployeeProfile:
    """Editable employee fields, already validated."""

    name: str
    email: str
    department: str
    position: str
    base_salary: Decimal
    allowances: Decimal = Decimal(0)
    deductions: Decimal = Decimal(0)
    status: EmployeeStatus = EmployeeStatus.ACTIVE


@dataclass(frozen=True)
class Employee:
    """Aggregate root. ``employee_id`` is the business key other tables reference."""

    id: int
    employee_id: str
    name: str
    email: str
    department: str
    position: str
    base_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    status: EmployeeStatus
    hire_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def to_dict(self) -> dict:
        return record_to_dict(self)
