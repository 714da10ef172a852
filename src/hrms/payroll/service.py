from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..accounting import round_money
from ..common.datetime_utils import today_local
from ..common.validators import PayloadValidator
from ..core.constants import MAX_MONEY_AMOUNT
from ..core.enums import PayrollStatus
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollRecord, PayrollRunResult, PayrollStats
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

_MAX_AMOUNT = Decimal(MAX_MONEY_AMOUNT)


@dataclass(frozen=True)
class PayPeriod:
    start: date
    end: date


def parse_pay_period(payload: Optional[Mapping[str, Any]]) -> PayPeriod:
    v = PayloadValidator(payload)
    start = v.iso_date("pay_period_start", "Valid pay period start date is required")
    end = v.iso_date("pay_period_end", "Valid pay period end date is required")
    if start and end and end < start:
        v.errors.append({"field": "pay_period_end", "message": "Pay period end must be on or after its start"})
    v.raise_if_invalid()
    return PayPeriod(start=start, end=end)


class PayrollService:
    """Use case: batch payroll processing and the Processed -> Paid step."""

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def process_payroll(self, period: PayPeriod, *, today: Optional[date] = None) -> PayrollRunResult:
        """Create one Processed record per Active employee for ``period``.

        Employees already holding a record for the exact same period are
        skipped, so re-running a period only fills in newcomers. The inserts
        go through one transaction: either every new record lands or none.
        A pay amount that would not fit the money columns rejects the run
        with a ValidationError naming the employees involved.
        """
        processed_date = today or today_local()
        already_paid = self._payroll.employee_ids_for_period(
            pay_period_start=period.start,
            pay_period_end=period.end,
        )

        records: list[PayrollRecord] = []
        overflow: list[dict] = []
        skipped = 0
        for employee in self._employees.list_active():
            if employee.employee_id in already_paid:
                skipped += 1
                continue

            amounts = self._calculator.calculate(employee)
            if abs(amounts.gross_pay) > _MAX_AMOUNT or abs(amounts.net_pay) > _MAX_AMOUNT:
                overflow.append(
                    {
                        "field": "employee_id",
                        "message": f"Pay for {employee.employee_id} exceeds {MAX_MONEY_AMOUNT}",
                    }
                )
                continue
            records.append(
                PayrollRecord(
                    employee_id=employee.employee_id,
                    pay_period_start=period.start,
                    pay_period_end=period.end,
                    base_salary=round_money(employee.base_salary),
                    allowances=round_money(employee.allowances),
                    overtime_hours=Decimal("0.00"),
                    overtime_rate=Decimal("0.00"),
                    deductions=round_money(employee.deductions),
                    gross_pay=round_money(amounts.gross_pay),
                    net_pay=round_money(amounts.net_pay),
                    status=PayrollStatus.PROCESSED,
                    processed_date=processed_date,
                )
            )

        if overflow:
            raise ValidationError("Payroll amounts out of range", overflow)

        created = self._payroll.create_batch(records)
        logger.info(
            "Payroll %s..%s processed for %d employees (%d skipped)",
            period.start,
            period.end,
            created,
            skipped,
        )
        return PayrollRunResult(
            pay_period_start=period.start,
            pay_period_end=period.end,
            employees_processed=created,
            employees_skipped=skipped,
            total_gross_pay=sum((r.gross_pay for r in records), Decimal("0.00")),
            total_net_pay=sum((r.net_pay for r in records), Decimal("0.00")),
        )

    def get_payroll(self, payroll_id: int) -> PayrollRecord:
        record = self._payroll.get_by_id(int(payroll_id))
        if not record:
            raise NotFoundError("Payroll record not found")
        return record

    def mark_payroll_paid(self, payroll_id: int) -> PayrollRecord:
        record = self.get_payroll(payroll_id)
        if not record.status.can_transition_to(PayrollStatus.PAID):
            raise InvalidStateError(f"Payroll record is {record.status.value}, only Processed records can be paid")

        if not self._payroll.update_status(
            payroll_id=record.id,
            from_status=PayrollStatus.PROCESSED,
            to_status=PayrollStatus.PAID,
        ):
            raise InvalidStateError("Payroll record is no longer processed")

        logger.info("Payroll record %s for %s marked paid", record.id, record.employee_id)
        return self.get_payroll(record.id)

    def list_payroll(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayrollStatus] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[PayrollRecord]:
        if month is None or year is None:
            month = year = None
        return self._payroll.list_records(employee_id=employee_id, status=status, month=month, year=year)

    def payroll_stats(self, *, today: Optional[date] = None) -> PayrollStats:
        today = today or today_local()
        records = self._payroll.list_records(month=today.month, year=today.year)

        def count(status: PayrollStatus) -> int:
            return sum(1 for r in records if r.status == status)

        total_net = sum((r.net_pay for r in records), Decimal("0.00"))
        return PayrollStats(
            month=today.month,
            year=today.year,
            total_employees=len(records),
            total_gross_pay=sum((r.gross_pay for r in records), Decimal("0.00")),
            total_net_pay=total_net,
            average_salary=round_money(total_net / len(records)) if records else None,
            processed_count=count(PayrollStatus.PROCESSED),
            pending_count=count(PayrollStatus.PENDING),
            paid_count=count(PayrollStatus.PAID),
        )
