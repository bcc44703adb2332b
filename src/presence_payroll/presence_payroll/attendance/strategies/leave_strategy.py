from __future__ import annotations

from typing import Optional

from ...core.enums import LEAVE_CATEGORY
from ...core.exceptions import ConfigurationError, OverlappingLeaveError
from ..model import DayClassification
from .base import DayContext, DayRule


class LeaveRule(DayRule):
    """Approved leave covering the day decides the category by leave type."""

    def decide(self, ctx: DayContext) -> Optional[DayClassification]:
        matches = [leave for leave in ctx.leaves if leave.is_approved and leave.covers(ctx.work_date)]
        if not matches:
            return None
        if len(matches) > 1:
            ids = ", ".join(str(m.leave_id) for m in matches)
            raise OverlappingLeaveError(
                f"{ctx.work_date.isoformat()} is covered by {len(matches)} approved leaves ({ids})"
            )

        leave = matches[0]
        category = LEAVE_CATEGORY.get(leave.leave_type)
        if category is None:
            raise ConfigurationError(f"Unmapped leave type: {leave.leave_type!r}")
        return DayClassification(work_date=ctx.work_date, category=category)
