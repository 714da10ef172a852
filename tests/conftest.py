from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from hrms.accounting import next_employee_id
from hrms.attendance.model import AttendanceRecord
from hrms.container import Container, build_services
from hrms.core.enums import EmployeeStatus, LeaveStatus
from hrms.core.exceptions import ConflictError, DuplicateEmailError, DuplicateEmployeeIdError
from hrms.employees.model import Employee, EmployeeProfile
from hrms.leaves.model import LeaveRequest
from hrms.main import create_app
from hrms.payroll.model import PayrollRecord

_EPOCH = datetime(2025, 1, 1, 8, 0, 0)


class InMemoryEmployees:
    def __init__(self):
        self.by_employee_id: dict[str, Employee] = {}
        self.last_issued: Optional[str] = None
        self._pk = 0

    def list_all(self):
        return sorted(self.by_employee_id.values(), key=lambda e: e.id, reverse=True)

    def list_active(self):
        return [e for e in sorted(self.by_employee_id.values(), key=lambda e: e.name) if e.is_active]

    def get_by_employee_id(self, employee_id):
        return self.by_employee_id.get(employee_id)

    def get_by_email(self, email):
        return next((e for e in self.by_employee_id.values() if e.email == email), None)

    def issue_employee_id(self):
        self.last_issued = next_employee_id(self.last_issued)
        return self.last_issued

    def create(self, *, employee_id, profile, hire_date):
        if employee_id in self.by_employee_id:
            raise DuplicateEmployeeIdError(f"Employee id {employee_id} already exists")
        if any(e.email == profile.email for e in self.by_employee_id.values()):
            raise DuplicateEmailError()
        self._pk += 1
        self.by_employee_id[employee_id] = Employee(
            id=self._pk,
            employee_id=employee_id,
            hire_date=hire_date,
            created_at=_EPOCH + timedelta(minutes=self._pk),
            **vars(profile),
        )
        return self._pk

    def update(self, employee_id, profile):
        current = self.by_employee_id.get(employee_id)
        if not current:
            return False
        if any(e.email == profile.email and e.employee_id != employee_id for e in self.by_employee_id.values()):
            raise DuplicateEmailError()
        self.by_employee_id[employee_id] = replace(current, **vars(profile))
        return True

    def delete(self, employee_id):
        return self.by_employee_id.pop(employee_id, None) is not None


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.rows: dict[tuple[str, date], AttendanceRecord] = {}
        self._pk = 0

    def upsert(self, record):
        key = (record.employee_id, record.work_date)
        existing = self.rows.get(key)
        if existing:
            self.rows[key] = replace(
                record, id=existing.id, employee_name=None, created_at=existing.created_at, updated_at=_EPOCH
            )
        else:
            self._pk += 1
            self.rows[key] = replace(record, id=self._pk, employee_name=None, created_at=_EPOCH, updated_at=_EPOCH)

    def get_for_employee_and_date(self, employee_id, work_date):
        r = self.rows.get((employee_id, work_date))
        return self._named(r) if r else None

    def _named(self, r):
        employee = self._employees.get_by_employee_id(r.employee_id)
        return replace(r, employee_name=employee.name if employee else None)

    def list_records(self, *, work_date=None, employee_id=None):
        items = [
            self._named(r)
            for r in self.rows.values()
            if (work_date is None or r.work_date == work_date)
            and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: r.employee_name or "")
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items


class InMemoryLeaves:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.rows: dict[int, LeaveRequest] = {}
        self._pk = 0

    def create(self, *, employee_id, leave_type, start_date, end_date, days_requested, reason, applied_date):
        self._pk += 1
        self.rows[self._pk] = LeaveRequest(
            id=self._pk,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days_requested=days_requested,
            reason=reason,
            status=LeaveStatus.PENDING,
            applied_date=applied_date,
            created_at=_EPOCH + timedelta(hours=self._pk),
        )
        return self._pk

    def _named(self, r):
        employee = self._employees.get_by_employee_id(r.employee_id)
        return replace(r, employee_name=employee.name if employee else None)

    def get_by_id(self, request_id):
        r = self.rows.get(int(request_id))
        return self._named(r) if r else None

    def decide(self, *, request_id, status, approved_by, approved_date):
        r = self.rows.get(int(request_id))
        if not r or r.status != LeaveStatus.PENDING:
            return False
        self.rows[r.id] = replace(r, status=status, approved_by=approved_by, approved_date=approved_date)
        return True

    def list_requests(self, *, status=None, employee_id=None, applied_from=None, applied_to=None, limit=None):
        items = [
            self._named(r)
            for r in self.rows.values()
            if (status is None or r.status == status)
            and (employee_id is None or r.employee_id == employee_id)
            and (applied_from is None or r.applied_date >= applied_from)
            and (applied_to is None or r.applied_date <= applied_to)
        ]
        items.sort(key=lambda r: (r.applied_date, r.created_at, r.id), reverse=True)
        return items[:limit] if limit is not None else items


class InMemoryPayroll:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.rows: dict[int, PayrollRecord] = {}
        self._pk = 0

    def create_batch(self, records):
        taken = {(r.employee_id, r.pay_period_start, r.pay_period_end) for r in self.rows.values()}
        for r in records:
            if (r.employee_id, r.pay_period_start, r.pay_period_end) in taken:
                raise ConflictError("Payroll already processed for this period")
        for r in records:
            self._pk += 1
            self.rows[self._pk] = replace(r, id=self._pk, created_at=_EPOCH + timedelta(days=self._pk))
        return len(records)

    def employee_ids_for_period(self, *, pay_period_start, pay_period_end):
        return {
            r.employee_id
            for r in self.rows.values()
            if r.pay_period_start == pay_period_start and r.pay_period_end == pay_period_end
        }

    def _named(self, r):
        employee = self._employees.get_by_employee_id(r.employee_id)
        if not employee:
            return r
        return replace(r, employee_name=employee.name, department=employee.department, position=employee.position)

    def get_by_id(self, payroll_id):
        r = self.rows.get(int(payroll_id))
        return self._named(r) if r else None

    def update_status(self, *, payroll_id, from_status, to_status):
        r = self.rows.get(int(payroll_id))
        if not r or r.status != from_status:
            return False
        self.rows[r.id] = replace(r, status=to_status)
        return True

    def list_recent(self, *, status=None, limit):
        items = [self._named(r) for r in self.rows.values() if status is None or r.status == status]
        items.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return items[:limit]

    def list_records(self, *, employee_id=None, status=None, month=None, year=None, limit=None):
        items = [
            self._named(r)
            for r in self.rows.values()
            if (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
            and (
                month is None
                or year is None
                or (r.pay_period_start.month == month and r.pay_period_start.year == year)
            )
        ]
        items.sort(key=lambda r: (r.pay_period_start, r.created_at, r.id), reverse=True)
        return items[:limit] if limit is not None else items


def make_profile(**overrides) -> EmployeeProfile:
    values = dict(
        name="John Doe",
        email="john.doe@company.com",
        department="Engineering",
        position="Senior Developer",
        base_salary=Decimal("85000.00"),
        allowances=Decimal("5000.00"),
        deductions=Decimal("3200.00"),
        status=EmployeeStatus.ACTIVE,
    )
    values.update(overrides)
    return EmployeeProfile(**values)


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo(employees_repo):
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def leaves_repo(employees_repo):
    return InMemoryLeaves(employees_repo)


@pytest.fixture
def payroll_repo(employees_repo):
    return InMemoryPayroll(employees_repo)


@pytest.fixture
def container(employees_repo, attendance_repo, leaves_repo, payroll_repo) -> Container:
    return build_services(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
    )


@pytest.fixture
def profile():
    return make_profile


@pytest.fixture
def add_employee(employees_repo):
    """Insert an employee straight into the fake store and return it."""

    def _add(hire_date=date(2024, 1, 15), **overrides):
        employee_id = employees_repo.issue_employee_id()
        employees_repo.create(employee_id=employee_id, profile=make_profile(**overrides), hire_date=hire_date)
        return employees_repo.get_by_employee_id(employee_id)

    return _add


@pytest.fixture
def app(container):
    app = create_app(container, settings_module="hrms.config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()

