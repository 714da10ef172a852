from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.records import record_to_dict
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    id: int
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_requested: int
    reason: str
    status: LeaveStatus
    applied_date: date
    approved_by: Optional[str] = None
    approved_date: Optional[date] = None
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return record_to_dict(self, skip_none=("employee_name",))


@dataclass(frozen=True)
class LeaveStats:
    """Counts for requests applied in one calendar month."""

    month: int
    year: int
    total_requests: int
    pending_count: int
    approved_count: int
    rejected_count: int

    def to_dict(self) -> dict:
        return record_to_dict(self)
