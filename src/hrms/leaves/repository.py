from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days_requested: int,
        reason: str,
        applied_date: date,
    ) -> int:
        """Insert a Pending request and return its id."""

        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approved_by: Optional[str],
        approved_date: date,
    ) -> bool:
        """Apply the decision only while the request is still Pending."""

        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[str] = None,
        applied_from: Optional[date] = None,
        applied_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        """Newest first (applied date, then creation time); rows carry ``employee_name``."""

        raise NotImplementedError
