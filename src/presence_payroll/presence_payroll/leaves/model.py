from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveSpan:
    """Thực thể miền (domain): Đơn nghỉ phép theo khoảng ngày (bao gồm hai đầu)."""

    leave_id: int
    user_id: int
    start_date: date
    end_date: date
    leave_type: LeaveType
    status: LeaveStatus
    reason: Optional[str] = None
    approver_id: Optional[int] = None
    approved_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
