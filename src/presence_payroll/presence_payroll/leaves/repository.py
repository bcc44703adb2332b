from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveSpan


class LeaveRepository(Protocol):
    def list_approved_for_users(self, user_ids: Sequence[int], start: date, end: date) -> Sequence[LeaveSpan]:
        """Approved leaves of the given users overlapping [start, end], in one query."""

        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveSpan]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 100) -> Sequence[LeaveSpan]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approver_id: int,
        decided_at: datetime,
    ) -> bool:
        raise NotImplementedError
