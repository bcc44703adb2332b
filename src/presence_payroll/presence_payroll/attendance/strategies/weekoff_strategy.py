from __future__ import annotations

from typing import Optional

from ...core.constants import WEEK_OFF_WEEKDAY
from ...core.enums import AttendanceCategory
from ..model import DayClassification
from .base import DayContext, DayRule


class WeekOffRule(DayRule):
    """Sunday is always a week off, even inside a leave span."""

    def decide(self, ctx: DayContext) -> Optional[DayClassification]:
        if ctx.work_date.weekday() != WEEK_OFF_WEEKDAY:
            return None
        return DayClassification(work_date=ctx.work_date, category=AttendanceCategory.WEEKOFF)
