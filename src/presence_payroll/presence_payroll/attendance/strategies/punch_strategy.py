from __future__ import annotations

from ...common.datetime_utils import minutes_between
from ...core.constants import FULL_DAY_MINUTES, HALF_DAY_MINUTES, OVERTIME_AFTER_MINUTES
from ...core.enums import AttendanceCategory, PunchKind
from ..model import DayClassification
from .base import DayContext, DayRule


class PunchRule(DayRule):
    """Classify from the first in and the last out of the day.

    Thresholds are fixed (480/240/540 minutes) and do not follow the
    per-employee standard daily hours.
    """

    def decide(self, ctx: DayContext) -> DayClassification:
        ins = [p.timestamp for p in ctx.punches if p.kind == PunchKind.IN]
        outs = [p.timestamp for p in ctx.punches if p.kind == PunchKind.OUT]

        if not ins and not outs:
            return DayClassification(work_date=ctx.work_date, category=AttendanceCategory.ABSENT)

        if not ins or not outs:
            # Incomplete pair counts as partial attendance.
            return DayClassification(work_date=ctx.work_date, category=AttendanceCategory.HALF_DAY)

        minutes = max(minutes_between(min(ins), max(outs)), 0)

        if minutes >= FULL_DAY_MINUTES:
            overtime = minutes > OVERTIME_AFTER_MINUTES
            return DayClassification(
                work_date=ctx.work_date,
                category=AttendanceCategory.PRESENT,
                worked_minutes=minutes,
                overtime=overtime,
                overtime_minutes=minutes - OVERTIME_AFTER_MINUTES if overtime else 0,
            )
        if minutes >= HALF_DAY_MINUTES:
            return DayClassification(
                work_date=ctx.work_date,
                category=AttendanceCategory.HALF_DAY,
                worked_minutes=minutes,
            )
        return DayClassification(work_date=ctx.work_date, category=AttendanceCategory.ABSENT)
