from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest

from hrms.attendance.service import AttendanceService, parse_attendance_mark
from hrms.core.enums import AttendanceStatus
from hrms.core.exceptions import NotFoundError, ValidationError

DAY = date(2024, 2, 1)


@pytest.fixture
def service(attendance_repo, employees_repo):
    return AttendanceService(attendance_repo, employees_repo)


def test_marking_twice_keeps_one_record_with_second_values(service, attendance_repo, add_employee):
    employee = add_employee()

    service.mark_attendance(employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0), check_out=time(17, 0))
    service.mark_attendance(
        employee_id=employee.employee_id,
        work_date=DAY,
        check_in=time(9, 30),
        check_out=time(13, 30),
        status=AttendanceStatus.HALF_DAY,
    )

    records = attendance_repo.list_records(employee_id=employee.employee_id)
    assert len(records) == 1
    assert records[0].check_in == time(9, 30)
    assert records[0].check_out == time(13, 30)
    assert records[0].total_hours == Decimal("4.00")
    assert records[0].status == AttendanceStatus.HALF_DAY


def test_hours_are_rounded_to_cents(service, add_employee):
    employee = add_employee()
    record = service.mark_attendance(
        employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0), check_out=time(17, 20)
    )
    assert record.total_hours == Decimal("8.33")
    assert record.employee_name == "John Doe"


def test_missing_checkout_records_zero_hours(service, add_employee):
    employee = add_employee()
    record = service.mark_attendance(employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0))
    assert record.total_hours == Decimal("0.00")


def test_unknown_employee_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.mark_attendance(employee_id="EMP404", work_date=DAY)


def test_parse_mark_defaults_status_and_accepts_seconds():
    mark = parse_attendance_mark({"employee_id": "EMP001", "date": "2024-02-01", "check_in": "09:00:15"})
    assert mark.status == AttendanceStatus.PRESENT
    assert mark.check_in == time(9, 0, 15)
    assert mark.check_out is None


def test_parse_mark_rejects_bad_time_and_date():
    with pytest.raises(ValidationError) as exc:
        parse_attendance_mark({"employee_id": "EMP001", "date": "01/02/2024", "check_out": "25:00"})
    assert {e["field"] for e in exc.value.errors} == {"date", "check_out"}


def test_stats_for_a_day(service, add_employee):
    a = add_employee(name="Alice", email="a@company.com")
    b = add_employee(name="Bob", email="b@company.com")
    c = add_employee(name="Cara", email="c@company.com")

    service.mark_attendance(employee_id=a.employee_id, work_date=DAY, check_in=time(9, 0), check_out=time(17, 0))
    service.mark_attendance(
        employee_id=b.employee_id,
        work_date=DAY,
        check_in=time(9, 45),
        check_out=time(17, 0),
        status=AttendanceStatus.LATE,
    )
    service.mark_attendance(employee_id=c.employee_id, work_date=DAY, status=AttendanceStatus.ABSENT)
    service.mark_attendance(employee_id=c.employee_id, work_date=date(2024, 2, 2), check_in=time(9, 0))

    stats = service.attendance_stats(work_date=DAY)
    assert stats.total_employees == 3
    assert stats.present_count == 1
    assert stats.late_count == 1
    assert stats.absent_count == 1
    assert stats.half_day_count == 0
    # (8 + 7.25 + 0) / 3
    assert stats.average_hours == Decimal("5.08")


def test_stats_for_empty_day(service):
    stats = service.attendance_stats(work_date=DAY)
    assert stats.total_employees == 0
    assert stats.average_hours is None


def test_list_filters_by_date_and_orders_by_name(service, add_employee):
    b = add_employee(name="Bob", email="b@company.com")
    a = add_employee(name="Alice", email="a@company.com")
    for e in (b, a):
        service.mark_attendance(employee_id=e.employee_id, work_date=DAY)
    service.mark_attendance(employee_id=a.employee_id, work_date=date(2024, 2, 2))

    names = [r.employee_name for r in service.list_attendance(work_date=DAY)]
    assert names == ["Alice", "Bob"]
    assert [r.work_date for r in service.list_attendance(employee_id=a.employee_id)] == [date(2024, 2, 2), DAY]


def test_mark_returns_the_stored_row(service, add_employee):
    employee = add_employee()
    first = service.mark_attendance(employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0))
    second = service.mark_attendance(
        employee_id=employee.employee_id, work_date=DAY, check_in=time(9, 0), check_out=time(17, 0)
    )

    assert first.id is not None
    assert second.id == first.id
    assert second.created_at is not None
    assert second.employee_name == "John Doe"
    assert second.total_hours == Decimal("8.00")
