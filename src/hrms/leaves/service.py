from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..accounting import compute_leave_days
from ..common.datetime_utils import month_bounds, today_local
from ..common.validators import PayloadValidator
from ..core.constants import MIN_LEAVE_REASON_LENGTH
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InvalidStateError, NotFoundError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest, LeaveStats
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewLeaveRequest:
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str


def parse_leave_request(payload: Optional[Mapping[str, Any]]) -> NewLeaveRequest:
    v = PayloadValidator(payload)
    employee_id = v.text("employee_id", "Employee ID is required")
    leave_type = v.choice("leave_type", LeaveType, "Valid leave type is required")
    start_date = v.iso_date("start_date", "Valid start date is required")
    end_date = v.iso_date("end_date", "Valid end date is required")
    reason = v.text(
        "reason",
        f"Reason must be at least {MIN_LEAVE_REASON_LENGTH} characters",
        min_len=MIN_LEAVE_REASON_LENGTH,
    )
    if start_date and end_date and end_date < start_date:
        v.errors.append({"field": "end_date", "message": "End date must be on or after start date"})
    v.raise_if_invalid()
    return NewLeaveRequest(
        employee_id=employee_id,
        leave_type=leave_type,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
    )


class LeaveService:
    """Use case: leave submission and the Pending -> Approved/Rejected decision."""

    def __init__(self, requests: LeaveRequestRepository, employees: EmployeeRepository):
        self._requests = requests
        self._employees = employees

    def submit_leave_request(self, new: NewLeaveRequest, *, today: Optional[date] = None) -> LeaveRequest:
        employee = self._employees.get_by_employee_id(new.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        days = compute_leave_days(new.start_date, new.end_date)
        request_id = self._requests.create(
            employee_id=employee.employee_id,
            leave_type=new.leave_type,
            start_date=new.start_date,
            end_date=new.end_date,
            days_requested=days,
            reason=new.reason,
            applied_date=today or today_local(),
        )
        logger.info("Leave request %s submitted by %s (%d days)", request_id, employee.employee_id, days)
        return self.get_leave_request(request_id)

    def get_leave_request(self, request_id: int) -> LeaveRequest:
        req = self._requests.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        return req

    def _decide(self, request_id: int, status: LeaveStatus, approver: Optional[str], today: Optional[date]) -> LeaveRequest:
        req = self.get_leave_request(request_id)
        if not req.status.can_transition_to(status):
            raise InvalidStateError(f"Leave request already {req.status.value.lower()}")

        approver = (approver or "").strip() or None
        decided = self._requests.decide(
            request_id=req.id,
            status=status,
            approved_by=approver,
            approved_date=today or today_local(),
        )
        if not decided:
            # Another decision landed between the read and the conditional update.
            raise InvalidStateError("Leave request is no longer pending")

        logger.info("Leave request %s %s by %s", req.id, status.value.lower(), approver or "-")
        return self.get_leave_request(req.id)

    def approve_leave_request(self, request_id: int, approver: Optional[str], *, today: Optional[date] = None) -> LeaveRequest:
        return self._decide(request_id, LeaveStatus.APPROVED, approver, today)

    def reject_leave_request(self, request_id: int, approver: Optional[str], *, today: Optional[date] = None) -> LeaveRequest:
        return self._decide(request_id, LeaveStatus.REJECTED, approver, today)

    def list_leave_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        return self._requests.list_requests(status=status, employee_id=employee_id)

    def leave_stats(self, *, today: Optional[date] = None) -> LeaveStats:
        today = today or today_local()
        first, last = month_bounds(today)
        requests = self._requests.list_requests(applied_from=first, applied_to=last)

        def count(status: LeaveStatus) -> int:
            return sum(1 for r in requests if r.status == status)

        return LeaveStats(
            month=today.month,
            year=today.year,
            total_requests=len(requests),
            pending_count=count(LeaveStatus.PENDING),
            approved_count=count(LeaveStatus.APPROVED),
            rejected_count=count(LeaveStatus.REJECTED),
        )
