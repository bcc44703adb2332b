from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.repository import PunchRepository
from ..common.datetime_utils import now_local
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from .model import LeaveSpan
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, punches: PunchRepository):
        self._leaves = leaves
        self._punches = punches

    @staticmethod
    def _parse_type(value: LeaveType | str) -> LeaveType:
        try:
            return LeaveType(value)
        except ValueError:
            raise ValidationError(f"Unknown leave type: {value!r}")

    @staticmethod
    def _parse_status(value: LeaveStatus | str) -> LeaveStatus:
        try:
            return LeaveStatus(value)
        except ValueError:
            raise ValidationError(f"Unknown leave status: {value!r}")

    def request_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType | str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> int:
        if end_date < start_date:
            raise ValidationError("end_date must be on or after start_date")

        leave_id = self._leaves.create(
            user_id=int(user_id),
            leave_type=self._parse_type(leave_type),
            start_date=start_date,
            end_date=end_date,
            reason=(reason or "").strip() or None,
        )
        logger.info("Leave %s requested by user %s (%s..%s)", leave_id, user_id, start_date, end_date)
        return leave_id

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus | str,
        approver_id: int,
        now: Optional[datetime] = None,
    ) -> LeaveSpan:
        """Move a leave to a new status and keep punch back-links in sync.

        Approving links the user's punches inside the span to the leave;
        any other status removes the links.
        """
        new_status = self._parse_status(status)
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError(f"Leave {leave_id} not found")

        ok = self._leaves.decide(
            leave_id=leave.leave_id,
            status=new_status,
            approver_id=int(approver_id),
            decided_at=now or now_local(),
        )
        if not ok:
            raise ValidationError(f"Failed to update leave {leave_id}")

        if new_status == LeaveStatus.APPROVED:
            linked = self._punches.link_leave(
                user_id=leave.user_id,
                start_date=leave.start_date,
                end_date=leave.end_date,
                leave_id=leave.leave_id,
            )
            logger.info("Leave %s approved, %d punch(es) linked", leave.leave_id, linked)
        else:
            unlinked = self._punches.unlink_leave(leave_id=leave.leave_id)
            logger.info("Leave %s set to %s, %d punch(es) unlinked", leave.leave_id, new_status.value, unlinked)

        updated = self._leaves.get_by_id(leave.leave_id)
        if not updated:
            raise NotFoundError(f"Leave {leave_id} not found")
        return updated

    def list_for_user(self, *, user_id: int, limit: int = 100) -> Sequence[LeaveSpan]:
        return self._leaves.list_for_user(int(user_id), limit=int(limit))
