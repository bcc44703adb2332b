from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, DEFAULT_STANDARD_DAILY_HOURS
from ..core.enums import SalaryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, to_decimal
from .model import CompensationConfig, Employee
from .repository import EmployeeRepository

_COLUMNS = "user_id, full_name, username, employee_code, role, department, job_title, is_active"


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        user_id=int(r["user_id"]),
        full_name=r["full_name"],
        username=r["username"],
        employee_code=r.get("employee_code") or "-",
        role=r.get("role") or "staff",
        department=r.get("department") or "-",
        job_title=r.get("job_title") or "",
        is_active=bool(r.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_payroll(self, *, user_id: Optional[int] = None) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            if user_id is not None:
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE is_active=1 ORDER BY user_id ASC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_compensation_configs(self, user_ids: Sequence[int]) -> Mapping[int, CompensationConfig]:
        if not user_ids:
            return {}

        placeholders, params = in_clause(user_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, ctc_amount, salary_type, per_day_travel_allowance,
                       railway_pass_amount, standard_daily_hours, overtime_rate_multiplier
                FROM compensation_profiles
                WHERE user_id IN ({placeholders})
                """,
                params,
            )
            return {
                int(r["user_id"]): CompensationConfig(
                    ctc_amount=to_decimal(r.get("ctc_amount")),
                    salary_type=SalaryType(r.get("salary_type") or SalaryType.MONTHLY.value),
                    per_day_travel_allowance=to_decimal(r.get("per_day_travel_allowance")),
                    railway_pass_amount=to_decimal(r.get("railway_pass_amount")),
                    standard_daily_hours=to_decimal(r.get("standard_daily_hours"), DEFAULT_STANDARD_DAILY_HOURS),
                    overtime_rate_multiplier=to_decimal(
                        r.get("overtime_rate_multiplier"), DEFAULT_OVERTIME_MULTIPLIER
                    ),
                )
                for r in fetchall(cur)
            }
