from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..attendance.model import MonthlySummary
from ..employees.model import CompensationConfig, Employee
from .model import PayrollBreakdown, SlipSnapshot

WHOLE = Decimal("1")
TENTHS = Decimal("0.1")
HUNDREDTHS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Nearest whole currency unit, halves away from zero."""
    return value.quantize(WHOLE, rounding=ROUND_HALF_UP)


def build_snapshot(
    employee: Employee,
    config: CompensationConfig,
    summary: MonthlySummary,
    breakdown: PayrollBreakdown,
) -> SlipSnapshot:
    """Round the breakdown once and freeze it with its inputs.

    Totals are re-derived from rounded parts so the slip adds up exactly.
    """
    gross = round_money(breakdown.gross_salary)
    d_absent = round_money(breakdown.deductions.absent)
    d_half = round_money(breakdown.deductions.half_day)
    d_unpaid = round_money(breakdown.deductions.unpaid_leave)
    d_total = d_absent + d_half + d_unpaid
    t_allowance = round_money(breakdown.travel.allowance)
    t_pass = round_money(breakdown.travel.railway_pass)
    t_total = t_allowance + t_pass
    ot_total = round_money(breakdown.overtime.total)
    r_total = round_money(breakdown.reimbursements.total)

    return SlipSnapshot(
        full_name=employee.full_name,
        username=employee.username,
        employee_code=employee.employee_code,
        role=employee.role,
        department=employee.department,
        job_title=employee.job_title,
        ctc_amount=config.ctc_amount,
        salary_type=config.salary_type,
        per_day_travel_allowance=config.per_day_travel_allowance,
        railway_pass_amount=config.railway_pass_amount,
        standard_daily_hours=config.standard_daily_hours,
        overtime_rate_multiplier=config.overtime_rate_multiplier,
        days_in_month=summary.days_in_month,
        working_days=summary.working_days,
        present_days=summary.present_days,
        absent_days=summary.absent_days,
        half_days=summary.half_days,
        paid_leave_days=summary.paid_leave_days,
        unpaid_leave_days=summary.unpaid_leave_days,
        sick_leave_days=summary.sick_leave_days,
        casual_leave_days=summary.casual_leave_days,
        week_off_days=summary.week_off_days,
        total_hours_worked=summary.total_hours_worked.quantize(HUNDREDTHS, rounding=ROUND_HALF_UP),
        overtime_hours=summary.overtime_hours.quantize(HUNDREDTHS, rounding=ROUND_HALF_UP),
        gross_salary=gross,
        per_day_salary=round_money(breakdown.per_day_salary),
        per_hour_rate=round_money(breakdown.per_hour_rate),
        payable_days=breakdown.payable_days.quantize(TENTHS, rounding=ROUND_HALF_UP),
        deduction_absent=d_absent,
        deduction_half_day=d_half,
        deduction_unpaid_leave=d_unpaid,
        deduction_total=d_total,
        travel_allowance=t_allowance,
        travel_railway_pass=t_pass,
        travel_total=t_total,
        overtime_rate=round_money(breakdown.overtime.rate),
        overtime_total=ot_total,
        reimbursement_total=r_total,
        reimbursement_count=breakdown.reimbursements.count,
        net_salary=gross - d_total + t_total + ot_total + r_total,
    )
