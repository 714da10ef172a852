from __future__ import annotations

from datetime import date
from decimal import Decimal

from hrms.core.enums import EmployeeStatus
from hrms.employees.model import Employee
from hrms.payroll.calculator.standard_calculator import StandardPayrollCalculator


def _employee(**overrides) -> Employee:
    values = dict(
        id=1,
        employee_id="EMP001",
        name="John Doe",
        email="john.doe@company.com",
        department="Engineering",
        position="Senior Developer",
        base_salary=Decimal("85000.00"),
        allowances=Decimal("5000.00"),
        deductions=Decimal("3200.00"),
        status=EmployeeStatus.ACTIVE,
        hire_date=date(2024, 1, 15),
    )
    values.update(overrides)
    return Employee(**values)


def test_standard_calculator_without_overtime():
    amounts = StandardPayrollCalculator().calculate(_employee())
    assert amounts.gross_pay == Decimal("90000.00")
    assert amounts.net_pay == Decimal("86800.00")


def test_standard_calculator_with_overtime():
    amounts = StandardPayrollCalculator().calculate(
        _employee(allowances=Decimal(0), deductions=Decimal(0)),
        overtime_hours=Decimal("4"),
        overtime_rate=Decimal("50"),
    )
    assert amounts.overtime_pay == Decimal("200")
    assert amounts.gross_pay == Decimal("85200.00")
