from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..common.records import record_to_dict
from ..core.constants import RECENT_ACTIVITY_LIMIT, RECENT_LEAVE_ACTIVITIES, RECENT_PAYROLL_ACTIVITIES
from ..core.enums import AttendanceStatus, LeaveStatus, PayrollStatus
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRequestRepository
from ..payroll.repository import PayrollRepository


@dataclass(frozen=True)
class Activity:
    type: str
    activity: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return record_to_dict(self)


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    present_today: int
    pending_leaves: int
    monthly_payroll: Decimal
    recent_activities: list[Activity] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = record_to_dict(self)
        out["recent_activities"] = [a.to_dict() for a in self.recent_activities]
        return out


def _stamp(created_at: Optional[datetime], fallback: Optional[date]) -> datetime:
    if created_at is not None:
        return created_at
    return datetime.combine(fallback or date.min, time.min)


class DashboardService:
    """Read-only aggregation across all four ledgers."""

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRequestRepository,
        payroll: PayrollRepository,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._payroll = payroll

    def recent_activities(self) -> list[Activity]:
        feed = [
            Activity(
                type="leave_request",
                activity=f"{r.employee_name or r.employee_id} submitted leave request",
                timestamp=_stamp(r.created_at, r.applied_date),
            )
            for r in self._leaves.list_requests(limit=RECENT_LEAVE_ACTIVITIES)
        ]
        feed += [
            Activity(
                type="payroll",
                activity="Payroll processed",
                timestamp=_stamp(p.created_at, p.processed_date),
            )
            for p in self._payroll.list_recent(status=PayrollStatus.PROCESSED, limit=RECENT_PAYROLL_ACTIVITIES)
        ]
        feed.sort(key=lambda a: a.timestamp, reverse=True)
        return feed[:RECENT_ACTIVITY_LIMIT]

    def dashboard_stats(self, *, today: Optional[date] = None) -> DashboardStats:
        today = today or today_local()

        present = sum(
            1 for r in self._attendance.list_records(work_date=today) if r.status == AttendanceStatus.PRESENT
        )
        monthly = self._payroll.list_records(month=today.month, year=today.year)

        return DashboardStats(
            total_employees=len(self._employees.list_active()),
            present_today=present,
            pending_leaves=len(self._leaves.list_requests(status=LeaveStatus.PENDING)),
            monthly_payroll=sum((p.net_pay for p in monthly), Decimal("0.00")),
            recent_activities=self.recent_activities(),
        )
