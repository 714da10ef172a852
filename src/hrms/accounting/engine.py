"""Accounting engine.

Plain functions over scalars. Nothing here touches the database or the
clock; services pass every input explicitly.

Rounding: amounts stay unrounded through the arithmetic and are quantized
to 2 decimals (half away from zero) only by :func:`round_money` /
:func:`round_hours` when a record is built for persistence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from ..core.constants import EMPLOYEE_ID_MIN_DIGITS, EMPLOYEE_ID_PREFIX
from ..core.exceptions import ValidationError

Number = Union[Decimal, int, float, str]

_TWO_PLACES = Decimal("0.01")
_SECONDS_PER_HOUR = Decimal(3600)
_EMPLOYEE_ID_RE = re.compile(rf"^{EMPLOYEE_ID_PREFIX}(\d+)$")


def _as_decimal(value: Optional[Number]) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    # str() first so floats keep their shortest repr (0.1 -> "0.1").
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    return _as_decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def round_hours(value: Number) -> Decimal:
    return _as_decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_attendance_hours(check_in: Optional[time], check_out: Optional[time], work_date: date) -> Decimal:
    """Hours between check-in and check-out on ``work_date``.

    Returns 0 when either time is missing. A check-out earlier than the
    check-in is read as the next day (overnight shift), so the result is
    never negative.
    """
    if check_in is None or check_out is None:
        return Decimal(0)

    start = datetime.combine(work_date, check_in)
    end = datetime.combine(work_date, check_out)
    if end < start:
        end += timedelta(days=1)

    return Decimal(int((end - start).total_seconds())) / _SECONDS_PER_HOUR


def compute_leave_days(start_date: date, end_date: date) -> int:
    """Inclusive number of calendar days in [start_date, end_date]."""
    if end_date < start_date:
        raise ValidationError.for_field("end_date", "End date must be on or after start date")
    return (end_date - start_date).days + 1


@dataclass(frozen=True)
class PayrollAmounts:
    gross_pay: Decimal
    net_pay: Decimal
    overtime_pay: Decimal = Decimal(0)


def compute_payroll(
    base_salary: Number,
    allowances: Number,
    deductions: Number,
    overtime_hours: Number = 0,
    overtime_rate: Number = 0,
) -> PayrollAmounts:
    """gross = base + allowances + overtime_hours * overtime_rate; net = gross - deductions."""
    components = {
        "base_salary": _as_decimal(base_salary),
        "allowances": _as_decimal(allowances),
        "deductions": _as_decimal(deductions),
        "overtime_hours": _as_decimal(overtime_hours),
        "overtime_rate": _as_decimal(overtime_rate),
    }
    errors = [
        {"field": name, "message": f"{name} must not be negative"}
        for name, value in components.items()
        if value < 0
    ]
    if errors:
        raise ValidationError("Validation failed", errors)

    overtime_pay = components["overtime_hours"] * components["overtime_rate"]
    gross = components["base_salary"] + components["allowances"] + overtime_pay
    return PayrollAmounts(gross_pay=gross, net_pay=gross - components["deductions"], overtime_pay=overtime_pay)


def parse_employee_number(employee_id: str) -> int:
    match = _EMPLOYEE_ID_RE.match(employee_id or "")
    if not match:
        raise ValidationError.for_field("employee_id", f"Malformed employee id: {employee_id!r}")
    return int(match.group(1))


def format_employee_id(number: int) -> str:
    return f"{EMPLOYEE_ID_PREFIX}{number:0{EMPLOYEE_ID_MIN_DIGITS}d}"


def next_employee_id(last_issued_id: Optional[str]) -> str:
    """EMP001 when nothing was issued yet, otherwise the successor of ``last_issued_id``.

    Padding grows past three digits instead of truncating (EMP999 -> EMP1000).
    """
    if not last_issued_id:
        return format_employee_id(1)
    return format_employee_id(parse_employee_number(last_issued_id) + 1)
