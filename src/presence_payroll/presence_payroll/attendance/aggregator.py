from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import date
from functools import reduce
from typing import Iterable, Mapping, Optional, Sequence, TypeVar

from ..common.datetime_utils import days_in_month, month_days
from ..core.enums import AttendanceCategory
from ..leaves.model import LeaveSpan
from .classifier import DayClassifier
from .model import DayClassification, MonthlySummary, PresencePunch

T = TypeVar("T")

_COUNTER_BY_CATEGORY: Mapping[AttendanceCategory, str] = {
    AttendanceCategory.WEEKOFF: "week_off_days",
    AttendanceCategory.PAID_LEAVE: "paid_leave_days",
    AttendanceCategory.UNPAID_LEAVE: "unpaid_leave_days",
    AttendanceCategory.SICK_LEAVE: "sick_leave_days",
    AttendanceCategory.CASUAL_LEAVE: "casual_leave_days",
    AttendanceCategory.PRESENT: "present_days",
    AttendanceCategory.HALF_DAY: "half_days",
    AttendanceCategory.ABSENT: "absent_days",
}

_WORKED_CATEGORIES = frozenset({AttendanceCategory.PRESENT, AttendanceCategory.HALF_DAY})


def partition_by_user(items: Iterable[T], *, key: str = "user_id") -> dict[int, list[T]]:
    """Group bulk-fetched rows by user so each employee is computed without further queries."""

    grouped: dict[int, list[T]] = defaultdict(list)
    for item in items:
        grouped[int(getattr(item, key))].append(item)
    return dict(grouped)


def _fold_day(summary: MonthlySummary, day: DayClassification) -> MonthlySummary:
    counter = _COUNTER_BY_CATEGORY[day.category]
    changes = {counter: getattr(summary, counter) + 1}
    if day.category != AttendanceCategory.WEEKOFF:
        changes["working_days"] = summary.working_days + 1
    if day.category in _WORKED_CATEGORIES:
        changes["worked_minutes"] = summary.worked_minutes + day.worked_minutes
        changes["overtime_minutes"] = summary.overtime_minutes + day.overtime_minutes
    changes["days"] = summary.days + (day,)
    return replace(summary, **changes)


class MonthlyAggregator:
    def __init__(self, *, classifier: Optional[DayClassifier] = None):
        self._classifier = classifier or DayClassifier()

    def summarize(
        self,
        *,
        user_id: int,
        year: int,
        month: int,
        punches: Sequence[PresencePunch],
        leaves: Sequence[LeaveSpan],
    ) -> MonthlySummary:
        """Fold the classifier over every day of the month."""

        punches_by_day: dict[date, list[PresencePunch]] = defaultdict(list)
        for p in punches:
            if p.user_id == user_id:
                punches_by_day[p.work_date].append(p)
        user_leaves = tuple(leave for leave in leaves if leave.user_id == user_id)

        days = (
            self._classifier.classify(d, tuple(punches_by_day.get(d, ())), user_leaves)
            for d in month_days(year, month)
        )
        initial = MonthlySummary(
            user_id=user_id,
            year=year,
            month=month,
            days_in_month=days_in_month(year, month),
        )
        return reduce(_fold_day, days, initial)
