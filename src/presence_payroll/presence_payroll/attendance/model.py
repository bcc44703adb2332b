from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceCategory, PunchKind


@dataclass(frozen=True)
class PresencePunch:
    """Thực thể miền (domain): một lần chấm công vào/ra.

    `leave_ref` is back-filled when a leave covering the punch is approved.
    """

    punch_id: int
    user_id: int
    timestamp: datetime
    kind: PunchKind
    leave_ref: Optional[int] = None

    @property
    def work_date(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class DayClassification:
    work_date: date
    category: AttendanceCategory
    worked_minutes: int = 0
    overtime: bool = False
    overtime_minutes: int = 0


@dataclass(frozen=True)
class MonthlySummary:
    """Read-model: attendance counts for one user and one month.

    The eight category counters always add up to `days_in_month`.
    """

    user_id: int
    year: int
    month: int
    days_in_month: int
    working_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    half_days: int = 0
    paid_leave_days: int = 0
    unpaid_leave_days: int = 0
    sick_leave_days: int = 0
    casual_leave_days: int = 0
    week_off_days: int = 0
    worked_minutes: int = 0
    overtime_minutes: int = 0
    days: tuple[DayClassification, ...] = field(default=(), repr=False, compare=False)

    @property
    def total_hours_worked(self) -> Decimal:
        return Decimal(self.worked_minutes) / 60

    @property
    def overtime_hours(self) -> Decimal:
        return Decimal(self.overtime_minutes) / 60

    @property
    def categorized_days(self) -> int:
        return (
            self.present_days
            + self.absent_days
            + self.half_days
            + self.paid_leave_days
            + self.unpaid_leave_days
            + self.sick_leave_days
            + self.casual_leave_days
            + self.week_off_days
        )
