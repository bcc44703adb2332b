from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..core.enums import PaymentStatus, SalaryType
from ..reimbursements.model import ReimbursementTotal


@dataclass(frozen=True)
class Deductions:
    absent: Decimal = Decimal(0)
    half_day: Decimal = Decimal(0)
    unpaid_leave: Decimal = Decimal(0)
    total: Decimal = Decimal(0)


@dataclass(frozen=True)
class TravelComponent:
    per_day_allowance: Decimal = Decimal(0)
    allowance: Decimal = Decimal(0)
    railway_pass: Decimal = Decimal(0)
    total: Decimal = Decimal(0)


@dataclass(frozen=True)
class OvertimeComponent:
    hours: Decimal = Decimal(0)
    rate: Decimal = Decimal(0)
    multiplier: Decimal = Decimal(0)
    total: Decimal = Decimal(0)


@dataclass(frozen=True)
class PayrollBreakdown:
    """Calculator output, unrounded."""

    gross_salary: Decimal
    per_day_salary: Decimal
    per_hour_rate: Decimal
    payable_days: Decimal
    deductions: Deductions
    travel: TravelComponent
    overtime: OvertimeComponent
    reimbursements: ReimbursementTotal
    net_salary: Decimal


@dataclass(frozen=True)
class SlipSnapshot:
    """Frozen, rounded copy of everything a slip was computed from.

    Money is in whole currency units; `net_salary` always equals
    gross - deduction_total + travel_total + overtime_total + reimbursement_total.
    """

    # employee
    full_name: str
    username: str
    employee_code: str
    role: str
    department: str
    job_title: str
    # compensation config
    ctc_amount: Decimal
    salary_type: SalaryType
    per_day_travel_allowance: Decimal
    railway_pass_amount: Decimal
    standard_daily_hours: Decimal
    overtime_rate_multiplier: Decimal
    # attendance
    days_in_month: int
    working_days: int
    present_days: int
    absent_days: int
    half_days: int
    paid_leave_days: int
    unpaid_leave_days: int
    sick_leave_days: int
    casual_leave_days: int
    week_off_days: int
    total_hours_worked: Decimal
    overtime_hours: Decimal
    # money
    gross_salary: Decimal
    per_day_salary: Decimal
    per_hour_rate: Decimal
    payable_days: Decimal
    deduction_absent: Decimal
    deduction_half_day: Decimal
    deduction_unpaid_leave: Decimal
    deduction_total: Decimal
    travel_allowance: Decimal
    travel_railway_pass: Decimal
    travel_total: Decimal
    overtime_rate: Decimal
    overtime_total: Decimal
    reimbursement_total: Decimal
    reimbursement_count: int
    net_salary: Decimal


@dataclass(frozen=True)
class SalarySlip:
    """One employee's salary slip for one month, frozen at generation time."""

    slip_id: int
    user_id: int
    month: int
    year: int
    snapshot: SlipSnapshot
    payment_status: PaymentStatus = PaymentStatus.PENDING
    locked: bool = False
    payment_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    payment_reference: Optional[str] = None
    payment_notes: Optional[str] = None
    generated_by: Optional[int] = None
    generated_at: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def key(self) -> tuple[int, int, int]:
        return self.user_id, self.month, self.year

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        return _jsonable(data)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (PaymentStatus, SalaryType)):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class SkippedSlip:
    user_id: int
    name: str
    reason: str


@dataclass(frozen=True)
class SlipError:
    user_id: int
    name: str
    message: str


@dataclass(frozen=True)
class GenerationReport:
    created: tuple[SalarySlip, ...] = ()
    skipped: tuple[SkippedSlip, ...] = ()
    errors: tuple[SlipError, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "created": [s.to_dict() for s in self.created],
            "skipped": [asdict(s) for s in self.skipped],
            "errors": [asdict(e) for e in self.errors],
        }


@dataclass(frozen=True)
class SlipPreview:
    """Computed but not persisted slip (the "calculate" view)."""

    user_id: int
    month: int
    year: int
    snapshot: SlipSnapshot

    def to_dict(self) -> dict[str, Any]:
        return _jsonable(asdict(self))


@dataclass
class PreviewReport:
    previews: list[SlipPreview] = field(default_factory=list)
    errors: list[SlipError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "previews": [p.to_dict() for p in self.previews],
            "errors": [asdict(e) for e in self.errors],
        }
