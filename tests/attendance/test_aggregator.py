from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest

from src.presence_payroll.presence_payroll.attendance.aggregator import MonthlyAggregator, partition_by_user
from src.presence_payroll.presence_payroll.attendance.model import PresencePunch
from src.presence_payroll.presence_payroll.core.enums import AttendanceCategory, LeaveStatus, LeaveType, PunchKind
from src.presence_payroll.presence_payroll.core.exceptions import OverlappingLeaveError
from src.presence_payroll.presence_payroll.leaves.model import LeaveSpan

# September 2025: 30 days starting on a Monday, Sundays on 7/14/21/28.
YEAR, MONTH = 2025, 9


def _day(user_id: int, day: date, minutes: int, first_id: int) -> list[PresencePunch]:
    start = datetime.combine(day, time(9, 0))
    return [
        PresencePunch(punch_id=first_id, user_id=user_id, timestamp=start, kind=PunchKind.IN),
        PresencePunch(
            punch_id=first_id + 1, user_id=user_id, timestamp=start + timedelta(minutes=minutes), kind=PunchKind.OUT
        ),
    ]


def _workdays():
    return [date(YEAR, MONTH, d) for d in range(1, 31) if date(YEAR, MONTH, d).weekday() != 6]


def test_partition_by_user_groups_rows():
    punches = _day(1, date(2025, 9, 1), 480, 1) + _day(2, date(2025, 9, 1), 480, 3) + _day(1, date(2025, 9, 2), 480, 5)
    grouped = partition_by_user(punches)
    assert sorted(grouped) == [1, 2]
    assert len(grouped[1]) == 4
    assert len(grouped[2]) == 2


def test_empty_month_is_all_absent_except_sundays():
    s = MonthlyAggregator().summarize(user_id=1, year=YEAR, month=MONTH, punches=[], leaves=[])
    assert s.days_in_month == 30
    assert s.week_off_days == 4
    assert s.working_days == 26
    assert s.absent_days == 26
    assert s.present_days == 0
    assert s.categorized_days == 30
    assert len(s.days) == 30


def test_full_month_present():
    punches = []
    for i, d in enumerate(_workdays()):
        punches += _day(1, d, 510, i * 2 + 1)

    s = MonthlyAggregator().summarize(user_id=1, year=YEAR, month=MONTH, punches=punches, leaves=[])
    assert s.present_days == 26
    assert s.working_days == 26
    assert s.absent_days == 0
    assert s.worked_minutes == 26 * 510
    assert s.overtime_minutes == 0


def test_mixed_month_counts_every_category_once():
    workdays = _workdays()
    punches = []
    punches += _day(1, workdays[0], 600, 1)  # present with 60 overtime minutes
    punches += _day(1, workdays[1], 300, 3)  # half day
    punches += _day(1, workdays[2], 100, 5)  # absent
    leaves = [
        LeaveSpan(1, 1, date(2025, 9, 8), date(2025, 9, 9), LeaveType.PAID, LeaveStatus.APPROVED),
        LeaveSpan(2, 1, date(2025, 9, 10), date(2025, 9, 10), LeaveType.UNPAID, LeaveStatus.APPROVED),
        LeaveSpan(3, 1, date(2025, 9, 11), date(2025, 9, 11), LeaveType.SICK, LeaveStatus.APPROVED),
        # spans a Sunday: 13 casual, 14 week off, 15 casual
        LeaveSpan(4, 1, date(2025, 9, 13), date(2025, 9, 15), LeaveType.CASUAL, LeaveStatus.APPROVED),
        LeaveSpan(5, 1, date(2025, 9, 16), date(2025, 9, 16), LeaveType.PAID, LeaveStatus.REJECTED),
    ]

    s = MonthlyAggregator().summarize(user_id=1, year=YEAR, month=MONTH, punches=punches, leaves=leaves)

    assert s.present_days == 1
    assert s.half_days == 1
    assert s.paid_leave_days == 2
    assert s.unpaid_leave_days == 1
    assert s.sick_leave_days == 1
    assert s.casual_leave_days == 2
    assert s.week_off_days == 4
    assert s.absent_days == 26 - 1 - 1 - 2 - 1 - 1 - 2
    assert s.categorized_days == s.days_in_month
    assert s.working_days == s.days_in_month - s.week_off_days
    assert s.worked_minutes == 600 + 300
    assert s.overtime_minutes == 60


def test_other_users_rows_are_ignored():
    punches = _day(2, date(2025, 9, 1), 480, 1)
    leaves = [LeaveSpan(1, 2, date(2025, 9, 2), date(2025, 9, 2), LeaveType.PAID, LeaveStatus.APPROVED)]
    s = MonthlyAggregator().summarize(user_id=1, year=YEAR, month=MONTH, punches=punches, leaves=leaves)
    assert s.present_days == 0
    assert s.paid_leave_days == 0


def test_hours_are_derived_from_minutes():
    punches = _day(1, date(2025, 9, 1), 570, 1)
    s = MonthlyAggregator().summarize(user_id=1, year=YEAR, month=MONTH, punches=punches, leaves=[])
    assert s.total_hours_worked == Decimal("9.5")
    assert s.overtime_hours == Decimal("0.5")


def test_overlapping_leaves_fail_the_month():
    leaves = [
        LeaveSpan(1, 1, date(2025, 9, 1), date(2025, 9, 5), LeaveType.PAID, LeaveStatus.APPROVED),
        LeaveSpan(2, 1, date(2025, 9, 4), date(2025, 9, 4), LeaveType.SICK, LeaveStatus.APPROVED),
    ]
    with pytest.raises(OverlappingLeaveError):
        MonthlyAggregator().summarize(user_id=1, year=YEAR, month=MONTH, punches=[], leaves=leaves)


def test_february_leap_year_length():
    s = MonthlyAggregator().summarize(user_id=1, year=2024, month=2, punches=[], leaves=[])
    assert s.days_in_month == 29
    assert s.categorized_days == 29
