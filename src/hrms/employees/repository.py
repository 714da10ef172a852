from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeProfile


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Services depend on this interface, never on a concrete database.
    """

    def list_all(self) -> Sequence[Employee]:
        """Newest first."""

        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def issue_employee_id(self) -> str:
        """Atomically advance the stored id counter and return the new business id."""

        raise NotImplementedError

    def create(self, *, employee_id: str, profile: EmployeeProfile, hire_date: date) -> int:
        """Insert and return the storage primary key.

        Raises DuplicateEmailError or DuplicateEmployeeIdError on unique-key collisions.
        """

        raise NotImplementedError

    def update(self, employee_id: str, profile: EmployeeProfile) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: str) -> bool:
        raise NotImplementedError
