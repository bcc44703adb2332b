from __future__ import annotations

from decimal import Decimal

import pytest

from src.presence_payroll.presence_payroll.attendance.model import MonthlySummary
from src.presence_payroll.presence_payroll.core.enums import SalaryType
from src.presence_payroll.presence_payroll.core.exceptions import ConfigurationError
from src.presence_payroll.presence_payroll.employees.model import CompensationConfig
from src.presence_payroll.presence_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.presence_payroll.presence_payroll.reimbursements.model import ReimbursementTotal


def _summary(**overrides) -> MonthlySummary:
    values = dict(
        user_id=1,
        year=2025,
        month=9,
        days_in_month=30,
        working_days=26,
        present_days=26,
        week_off_days=4,
    )
    values.update(overrides)
    return MonthlySummary(**values)


def _config(ctc, salary_type=SalaryType.MONTHLY, **overrides) -> CompensationConfig:
    return CompensationConfig(ctc_amount=Decimal(ctc), salary_type=salary_type, **overrides)


def test_monthly_gross_and_per_day():
    b = StandardPayrollCalculator().calculate(_config("120000"), _summary())
    assert b.gross_salary == Decimal(10000)
    assert b.per_day_salary == Decimal(10000) / Decimal(26)
    assert b.net_salary == Decimal(10000)


def test_weekly_gross_uses_weeks_per_month():
    b = StandardPayrollCalculator().calculate(_config("52000", SalaryType.WEEKLY), _summary())
    assert b.gross_salary == Decimal("4330")
    assert b.per_day_salary == Decimal("4330") / Decimal(26)


def test_daily_rate_is_ctc():
    b = StandardPayrollCalculator().calculate(_config("800", SalaryType.DAILY), _summary())
    assert b.gross_salary == Decimal(800 * 26)
    assert b.per_day_salary == Decimal(800)


def test_full_breakdown():
    config = _config(
        "312000",
        per_day_travel_allowance=Decimal("100"),
        railway_pass_amount=Decimal("500"),
        standard_daily_hours=Decimal("8"),
        overtime_rate_multiplier=Decimal("1.5"),
    )
    summary = _summary(
        present_days=19,
        absent_days=2,
        half_days=3,
        unpaid_leave_days=1,
        paid_leave_days=1,
        overtime_minutes=120,
    )
    reimbursements = ReimbursementTotal(total=Decimal("750"), count=2)

    b = StandardPayrollCalculator().calculate(config, summary, reimbursements)

    assert b.gross_salary == Decimal(26000)
    assert b.per_day_salary == Decimal(1000)
    assert b.per_hour_rate == Decimal(125)
    assert b.deductions.absent == Decimal(2000)
    assert b.deductions.half_day == Decimal(1500)
    assert b.deductions.unpaid_leave == Decimal(1000)
    assert b.deductions.total == Decimal(4500)
    assert b.payable_days == Decimal("21.5")
    assert b.travel.allowance == Decimal(1900)
    assert b.travel.total == Decimal(2400)
    assert b.overtime.hours == Decimal(2)
    assert b.overtime.total == Decimal(375)
    assert b.reimbursements.count == 2
    assert b.net_salary == Decimal(26000 - 4500 + 2400 + 375 + 750)


def test_leave_days_other_than_unpaid_are_not_deducted():
    summary = _summary(present_days=20, paid_leave_days=2, sick_leave_days=2, casual_leave_days=2)
    b = StandardPayrollCalculator().calculate(_config("312000"), summary)
    assert b.deductions.total == 0
    assert b.payable_days == Decimal(26)


def test_zero_ctc_pays_nothing_at_all():
    config = _config(
        "0",
        per_day_travel_allowance=Decimal("50"),
        railway_pass_amount=Decimal("500"),
        overtime_rate_multiplier=Decimal("1.5"),
    )
    summary = _summary(present_days=20, absent_days=5, half_days=1, overtime_minutes=90)
    b = StandardPayrollCalculator().calculate(config, summary, ReimbursementTotal(total=Decimal("100"), count=1))

    money = (
        b.gross_salary,
        b.per_day_salary,
        b.per_hour_rate,
        b.deductions.absent,
        b.deductions.half_day,
        b.deductions.unpaid_leave,
        b.deductions.total,
        b.travel.allowance,
        b.travel.railway_pass,
        b.travel.total,
        b.overtime.rate,
        b.overtime.total,
        b.reimbursements.total,
        b.net_salary,
    )
    assert all(m == 0 for m in money)
    assert b.reimbursements.count == 1
    assert b.payable_days == Decimal("20.5")


def test_zero_working_days_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        StandardPayrollCalculator().calculate(_config("120000"), _summary(working_days=0, present_days=0))


def test_non_positive_daily_hours_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        StandardPayrollCalculator().calculate(_config("120000", standard_daily_hours=Decimal(0)), _summary())


def test_calculation_is_pure():
    calc = StandardPayrollCalculator()
    config, summary = _config("99999", SalaryType.WEEKLY), _summary(absent_days=3, present_days=23)
    assert calc.calculate(config, summary) == calc.calculate(config, summary)
