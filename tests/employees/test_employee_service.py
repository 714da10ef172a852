from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from hrms.core.enums import EmployeeStatus
from hrms.core.exceptions import DuplicateEmailError, DuplicateEmployeeIdError, NotFoundError, ValidationError
from hrms.employees.service import EmployeeService, parse_employee_profile

PAYLOAD = {
    "name": "John Doe",
    "email": "John.Doe@Company.com",
    "department": "Engineering",
    "position": "Senior Developer",
    "base_salary": 85000,
    "allowances": "5000",
    "deductions": 3200,
}


def test_first_employee_gets_emp001(employees_repo):
    service = EmployeeService(employees_repo)
    employee = service.create_employee(PAYLOAD, today=date(2024, 1, 15))

    assert employee.employee_id == "EMP001"
    assert employee.email == "john.doe@company.com"
    assert employee.status == EmployeeStatus.ACTIVE
    assert employee.hire_date == date(2024, 1, 15)
    assert employee.base_salary == Decimal(85000)


def test_deleted_ids_are_not_reissued(employees_repo):
    service = EmployeeService(employees_repo)
    first = service.create_employee(PAYLOAD)
    service.delete_employee(first.employee_id)

    second = service.create_employee(PAYLOAD)
    assert second.employee_id == "EMP002"


def test_duplicate_email_is_rejected(employees_repo):
    service = EmployeeService(employees_repo)
    service.create_employee(PAYLOAD)

    with pytest.raises(DuplicateEmailError):
        service.create_employee({**PAYLOAD, "name": "Johnny Doe"})


def test_taken_employee_id_is_retried_with_next_one(employees_repo, profile):
    # a row inserted behind the counter's back
    employees_repo.create(employee_id="EMP001", profile=profile(email="import@company.com"), hire_date=date(2020, 1, 1))

    employee = EmployeeService(employees_repo).create_employee(PAYLOAD)
    assert employee.employee_id == "EMP002"


def test_gives_up_after_bounded_retries(employees_repo, profile):
    for n in (1, 2, 3):
        employees_repo.create(
            employee_id=f"EMP00{n}", profile=profile(email=f"import{n}@company.com"), hire_date=date(2020, 1, 1)
        )

    with pytest.raises(DuplicateEmployeeIdError):
        EmployeeService(employees_repo).create_employee(PAYLOAD)


def test_invalid_payload_reports_every_field():
    with pytest.raises(ValidationError) as exc:
        parse_employee_profile({"name": "J", "email": "not-an-email", "base_salary": -10, "status": "Retired"})

    fields = {e["field"] for e in exc.value.errors}
    assert fields == {"name", "email", "department", "position", "base_salary", "status"}


def test_boolean_salary_is_not_a_number():
    with pytest.raises(ValidationError):
        parse_employee_profile({**PAYLOAD, "base_salary": True})


def test_update_keeps_status_when_omitted(employees_repo, add_employee):
    employee = add_employee(status=EmployeeStatus.ON_LEAVE)
    service = EmployeeService(employees_repo)

    updated = service.update_employee(employee.employee_id, {**PAYLOAD, "position": "Tech Lead"})

    assert updated.position == "Tech Lead"
    assert updated.status == EmployeeStatus.ON_LEAVE
    assert updated.hire_date == employee.hire_date


def test_update_and_delete_unknown_employee(employees_repo):
    service = EmployeeService(employees_repo)

    with pytest.raises(NotFoundError):
        service.update_employee("EMP404", PAYLOAD)
    with pytest.raises(NotFoundError):
        service.delete_employee("EMP404")


def test_list_is_newest_first(employees_repo, add_employee):
    add_employee(email="a@company.com")
    add_employee(email="b@company.com")

    ids = [e.employee_id for e in EmployeeService(employees_repo).list_employees()]
    assert ids == ["EMP002", "EMP001"]


def test_salary_beyond_column_range_is_rejected(employees_repo):
    with pytest.raises(ValidationError) as exc:
        EmployeeService(employees_repo).create_employee({**PAYLOAD, "base_salary": "1000000000000"})
    assert exc.value.errors[0]["field"] == "base_salary"


def test_largest_storable_salary_is_accepted():
    profile = parse_employee_profile({**PAYLOAD, "base_salary": "99999999.99", "allowances": "99999999.99"})
    assert profile.base_salary == Decimal("99999999.99")


def test_rejected_email_does_not_consume_an_id(employees_repo):
    service = EmployeeService(employees_repo)
    service.create_employee(PAYLOAD)

    with pytest.raises(DuplicateEmailError):
        service.create_employee({**PAYLOAD, "name": "Johnny Doe"})
    assert employees_repo.last_issued == "EMP001"

    assert service.create_employee({**PAYLOAD, "email": "jane@company.com"}).employee_id == "EMP002"
