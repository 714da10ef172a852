"""Pure accounting rules: attendance hours, leave span, payroll, employee ids."""

from .engine import (
    PayrollAmounts,
    compute_attendance_hours,
    compute_leave_days,
    compute_payroll,
    format_employee_id,
    next_employee_id,
    parse_employee_number,
    round_hours,
    round_money,
)

__all__ = [
    "PayrollAmounts",
    "compute_attendance_hours",
    "compute_leave_days",
    "compute_payroll",
    "format_employee_id",
    "next_employee_id",
    "parse_employee_number",
    "round_hours",
    "round_money",
]
