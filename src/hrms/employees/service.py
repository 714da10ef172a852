from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.validators import PayloadValidator, require_non_empty
from ..core.constants import EMPLOYEE_ID_MAX_ATTEMPTS, MIN_NAME_LENGTH
from ..core.enums import EmployeeStatus
from ..core.exceptions import DuplicateEmailError, DuplicateEmployeeIdError, NotFoundError
from .model import Employee, EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def parse_employee_profile(
    payload: Optional[Mapping[str, Any]],
    *,
    default_status: EmployeeStatus = EmployeeStatus.ACTIVE,
) -> EmployeeProfile:
    """Validate a create/update body into an :class:`EmployeeProfile`.

    Raises ValidationError with one entry per invalid field.
    """
    v = PayloadValidator(payload)
    name = v.text("name", f"Name must be at least {MIN_NAME_LENGTH} characters", min_len=MIN_NAME_LENGTH)
    email = v.email("email", "Please provide a valid email")
    department = v.text("department", "Department is required")
    position = v.text("position", "Position is required")
    base_salary = v.amount("base_salary", "Base salary must be a non-negative number")
    allowances = v.amount("allowances", "Allowances must be a non-negative number", default=Decimal(0))
    deductions = v.amount("deductions", "Deductions must be a non-negative number", default=Decimal(0))
    status = v.choice(
        "status",
        EmployeeStatus,
        "Status must be one of: " + ", ".join(s.value for s in EmployeeStatus),
        default=default_status,
    )
    v.raise_if_invalid()

    return EmployeeProfile(
        name=name,
        email=email,
        department=department,
        position=position,
        base_salary=base_salary,
        allowances=allowances,
        deductions=deductions,
        status=status,
    )


class EmployeeService:
    """Use case: maintain the employee directory."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_employee_id(require_non_empty(employee_id, "employee_id"))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(self, payload: Optional[Mapping[str, Any]], *, today: Optional[date] = None) -> Employee:
        profile = parse_employee_profile(payload)
        hire_date = today or today_local()
        # Email is checked before an id is issued; the unique key covers races.
        if self._employees.get_by_email(profile.email):
            raise DuplicateEmailError()

        # Counter and existing rows can disagree after manual imports; retry with a fresh id.
        for attempt in range(1, EMPLOYEE_ID_MAX_ATTEMPTS + 1):
            employee_id = self._employees.issue_employee_id()
            try:
                self._employees.create(employee_id=employee_id, profile=profile, hire_date=hire_date)
                break
            except DuplicateEmployeeIdError:
                logger.warning("Employee id %s already taken (attempt %d)", employee_id, attempt)
                if attempt == EMPLOYEE_ID_MAX_ATTEMPTS:
                    raise

        logger.info("Employee %s created (%s)", employee_id, profile.email)
        return self.get_employee(employee_id)

    def update_employee(self, employee_id: str, payload: Optional[Mapping[str, Any]]) -> Employee:
        current = self.get_employee(employee_id)
        profile = parse_employee_profile(payload, default_status=current.status)

        self._employees.update(current.employee_id, profile)
        logger.info("Employee %s updated", current.employee_id)
        return self.get_employee(current.employee_id)

    def delete_employee(self, employee_id: str) -> None:
        if not self._employees.delete(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted with dependent records", employee_id)
