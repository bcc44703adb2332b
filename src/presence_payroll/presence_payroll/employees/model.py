from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, DEFAULT_STANDARD_DAILY_HOURS
from ..core.enums import SalaryType


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    user_id: int
    full_name: str
    username: str
    employee_code: str = "-"
    role: str = "staff"
    department: str = "-"
    job_title: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class CompensationConfig:
    """Per-employee pay profile. The defaults describe an employee with no profile."""

    ctc_amount: Decimal = Decimal(0)
    salary_type: SalaryType = SalaryType.MONTHLY
    per_day_travel_allowance: Decimal = Decimal(0)
    railway_pass_amount: Decimal = Decimal(0)
    standard_daily_hours: Decimal = DEFAULT_STANDARD_DAILY_HOURS
    overtime_rate_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER
