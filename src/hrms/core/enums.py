from __future__ import annotations

from enum import Enum


class EmployeeStatus(str, Enum):
    """Employment status stored on the employee row."""

    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    INACTIVE = "Inactive"


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored in the database."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "Half Day"


class LeaveType(str, Enum):
    ANNUAL = "Annual Leave"
    SICK = "Sick Leave"
    PERSONAL = "Personal Leave"
    EMERGENCY = "Emergency Leave"


class LeaveStatus(str, Enum):
    """Leave approval flow: Pending -> Approved | Rejected (both terminal)."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    def can_transition_to(self, target: "LeaveStatus") -> bool:
        return self is LeaveStatus.PENDING and target is not LeaveStatus.PENDING


class PayrollStatus(str, Enum):
    """Payroll flow: Pending -> Processed -> Paid, no way back."""

    PENDING = "Pending"
    PROCESSED = "Processed"
    PAID = "Paid"

    def can_transition_to(self, target: "PayrollStatus") -> bool:
        return (self, target) in {
            (PayrollStatus.PENDING, PayrollStatus.PROCESSED),
            (PayrollStatus.PROCESSED, PayrollStatus.PAID),
        }
