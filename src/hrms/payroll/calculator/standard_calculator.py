from __future__ import annotations

from decimal import Decimal

from ...accounting import PayrollAmounts, compute_payroll
from ...employees.model import Employee
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base + allowances + overtime, minus deductions."""

    def calculate(
        self,
        employee: Employee,
        *,
        overtime_hours: Decimal = Decimal(0),
        overtime_rate: Decimal = Decimal(0),
    ) -> PayrollAmounts:
        return compute_payroll(
            employee.base_salary,
            employee.allowances,
            employee.deductions,
            overtime_hours,
            overtime_rate,
        )
