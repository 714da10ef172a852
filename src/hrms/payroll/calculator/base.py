from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...accounting import PayrollAmounts
from ...employees.model import Employee


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        employee: Employee,
        *,
        overtime_hours: Decimal = Decimal(0),
        overtime_rate: Decimal = Decimal(0),
    ) -> PayrollAmounts:
        raise NotImplementedError
