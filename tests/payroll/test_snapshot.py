from __future__ import annotations

from decimal import Decimal

from src.presence_payroll.presence_payroll.attendance.model import MonthlySummary
from src.presence_payroll.presence_payroll.core.enums import SalaryType
from src.presence_payroll.presence_payroll.employees.model import CompensationConfig, Employee
from src.presence_payroll.presence_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.presence_payroll.presence_payroll.payroll.snapshot import build_snapshot, round_money
from src.presence_payroll.presence_payroll.reimbursements.model import ReimbursementTotal


def test_round_money_half_up():
    assert round_money(Decimal("2.5")) == 3
    assert round_money(Decimal("2.49")) == 2
    assert round_money(Decimal("-2.5")) == -3


def test_snapshot_net_adds_up_from_rounded_parts():
    employee = Employee(user_id=1, full_name="Asha Rao", username="asha", employee_code="E-001")
    config = CompensationConfig(
        ctc_amount=Decimal("99999"),
        salary_type=SalaryType.WEEKLY,
        per_day_travel_allowance=Decimal("33.3"),
        railway_pass_amount=Decimal("120.5"),
    )
    summary = MonthlySummary(
        user_id=1,
        year=2025,
        month=9,
        days_in_month=30,
        working_days=26,
        present_days=21,
        absent_days=2,
        half_days=3,
        week_off_days=4,
        worked_minutes=21 * 545 + 3 * 250,
        overtime_minutes=21 * 5,
    )
    breakdown = StandardPayrollCalculator().calculate(
        config, summary, ReimbursementTotal(total=Decimal("10.4"), count=1)
    )

    snap = build_snapshot(employee, config, summary, breakdown)

    money = (
        snap.gross_salary,
        snap.deduction_total,
        snap.travel_total,
        snap.overtime_total,
        snap.reimbursement_total,
        snap.net_salary,
    )
    assert all(m == m.to_integral_value() for m in money)
    assert snap.deduction_total == snap.deduction_absent + snap.deduction_half_day + snap.deduction_unpaid_leave
    assert snap.travel_total == snap.travel_allowance + snap.travel_railway_pass
    assert snap.net_salary == (
        snap.gross_salary - snap.deduction_total + snap.travel_total + snap.overtime_total + snap.reimbursement_total
    )
    assert snap.payable_days == Decimal("22.5")
    assert snap.total_hours_worked == Decimal("203.25")
    assert snap.overtime_hours == Decimal("1.75")
    assert snap.full_name == "Asha Rao"
    assert snap.salary_type == SalaryType.WEEKLY
