from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Chiều của một lần chấm công."""

    IN = "in"
    OUT = "out"


class LeaveType(str, Enum):
    """Loại nghỉ phép, quyết định cách tính lương cho ngày nghỉ."""

    PAID = "paid"
    UNPAID = "unpaid"
    SICK = "sick"
    CASUAL = "casual"


class LeaveStatus(str, Enum):
    """Trạng thái luồng duyệt đơn nghỉ phép."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceCategory(str, Enum):
    """Exactly one category per calendar day."""

    WEEKOFF = "weekoff"
    PAID_LEAVE = "paid-leave"
    UNPAID_LEAVE = "unpaid-leave"
    SICK_LEAVE = "sick-leave"
    CASUAL_LEAVE = "casual-leave"
    PRESENT = "present"
    HALF_DAY = "half-day"
    ABSENT = "absent"


class SalaryType(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"
    FAILED = "failed"


class ReimbursementStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


LEAVE_CATEGORY: dict[LeaveType, AttendanceCategory] = {
    LeaveType.PAID: AttendanceCategory.PAID_LEAVE,
    LeaveType.UNPAID: AttendanceCategory.UNPAID_LEAVE,
    LeaveType.SICK: AttendanceCategory.SICK_LEAVE,
    LeaveType.CASUAL: AttendanceCategory.CASUAL_LEAVE,
}
