from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...attendance.model import MonthlySummary
from ...core.constants import HALF_DAY_FACTOR, MONTHS_PER_YEAR, WEEKS_PER_MONTH, WEEKS_PER_YEAR
from ...core.enums import SalaryType
from ...core.exceptions import ConfigurationError
from ...employees.model import CompensationConfig
from ...reimbursements.model import ReimbursementTotal
from ..model import Deductions, OvertimeComponent, PayrollBreakdown, TravelComponent
from .base import PayrollCalculator

ZERO = Decimal(0)


class StandardPayrollCalculator(PayrollCalculator):
    """CTC-based payroll.

    gross: monthly ctc/12, weekly (ctc/52)*4.33, daily ctc*working_days.
    Absent and unpaid-leave days cost one per-day salary, half days half of it.
    No rounding happens here; see payroll.snapshot.

    An employee without CTC gets a zero-value breakdown: no travel, overtime
    or reimbursement is paid on top of it.
    """

    def _rates(self, salary_type: SalaryType, ctc: Decimal, working_days: Decimal) -> tuple[Decimal, Decimal]:
        if salary_type == SalaryType.MONTHLY:
            gross = ctc / MONTHS_PER_YEAR
            return gross, gross / working_days
        if salary_type == SalaryType.WEEKLY:
            gross = (ctc / WEEKS_PER_YEAR) * WEEKS_PER_MONTH
            return gross, gross / working_days
        if salary_type == SalaryType.DAILY:
            # ctc_amount is the day rate for daily-paid staff
            return ctc * working_days, ctc
        raise ConfigurationError(f"Unmapped salary type: {salary_type!r}")

    @staticmethod
    def _payable_days(summary: MonthlySummary) -> Decimal:
        return Decimal(
            summary.present_days
            + summary.half_days * HALF_DAY_FACTOR
            + summary.paid_leave_days
            + summary.sick_leave_days
            + summary.casual_leave_days
        )

    @classmethod
    def _unpaid(
        cls,
        config: CompensationConfig,
        summary: MonthlySummary,
        reimbursements: Optional[ReimbursementTotal],
    ) -> PayrollBreakdown:
        reimbursements = reimbursements or ReimbursementTotal()
        return PayrollBreakdown(
            gross_salary=ZERO,
            per_day_salary=ZERO,
            per_hour_rate=ZERO,
            payable_days=cls._payable_days(summary),
            deductions=Deductions(),
            travel=TravelComponent(per_day_allowance=config.per_day_travel_allowance),
            overtime=OvertimeComponent(hours=summary.overtime_hours, multiplier=config.overtime_rate_multiplier),
            reimbursements=ReimbursementTotal(count=reimbursements.count, line_items=reimbursements.line_items),
            net_salary=ZERO,
        )

    def calculate(
        self,
        config: CompensationConfig,
        summary: MonthlySummary,
        reimbursements: Optional[ReimbursementTotal] = None,
    ) -> PayrollBreakdown:
        if summary.working_days <= 0:
            raise ConfigurationError(
                f"No working days in {summary.year}-{summary.month:02d}; per-day salary is undefined"
            )
        if config.standard_daily_hours <= 0:
            raise ConfigurationError("standard_daily_hours must be positive")

        working_days = Decimal(summary.working_days)
        ctc = config.ctc_amount or ZERO
        if ctc <= 0:
            return self._unpaid(config, summary, reimbursements)

        gross, per_day = self._rates(config.salary_type, ctc, working_days)
        per_hour = per_day / config.standard_daily_hours

        absent = summary.absent_days * per_day
        half_day = summary.half_days * per_day * HALF_DAY_FACTOR
        unpaid = summary.unpaid_leave_days * per_day
        deductions = Deductions(absent=absent, half_day=half_day, unpaid_leave=unpaid, total=absent + half_day + unpaid)

        allowance = config.per_day_travel_allowance * summary.present_days
        travel = TravelComponent(
            per_day_allowance=config.per_day_travel_allowance,
            allowance=allowance,
            railway_pass=config.railway_pass_amount,
            total=allowance + config.railway_pass_amount,
        )

        overtime = OvertimeComponent(
            hours=summary.overtime_hours,
            rate=per_hour,
            multiplier=config.overtime_rate_multiplier,
            total=summary.overtime_hours * per_hour * config.overtime_rate_multiplier,
        )

        reimbursements = reimbursements or ReimbursementTotal()
        net = gross - deductions.total + travel.total + overtime.total + reimbursements.total

        return PayrollBreakdown(
            gross_salary=gross,
            per_day_salary=per_day,
            per_hour_rate=per_hour,
            payable_days=self._payable_days(summary),
            deductions=deductions,
            travel=travel,
            overtime=overtime,
            reimbursements=reimbursements,
            net_salary=net,
        )
