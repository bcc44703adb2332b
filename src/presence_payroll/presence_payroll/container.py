from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .attendance.aggregator import MonthlyAggregator
from .attendance.mysql_punch_repository import MySQLPunchRepository
from .attendance.repository import PunchRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_salary_slip_repository import MySQLSalarySlipRepository
from .payroll.repository import SalarySlipRepository
from .payroll.service import PayrollService
from .reimbursements.mysql_reimbursement_repository import MySQLReimbursementRepository
from .reimbursements.repository import ReimbursementRepository


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    punches_repo: PunchRepository
    leaves_repo: LeaveRepository
    reimbursements_repo: ReimbursementRepository
    slips_repo: SalarySlipRepository

    leave_service: LeaveService
    payroll_service: PayrollService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    punches_repo: PunchRepository,
    leaves_repo: LeaveRepository,
    reimbursements_repo: ReimbursementRepository,
    slips_repo: SalarySlipRepository,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    leave_service = LeaveService(leaves_repo, punches_repo)
    payroll_service = PayrollService(
        employees_repo,
        punches_repo,
        leaves_repo,
        reimbursements_repo,
        slips_repo,
        aggregator=MonthlyAggregator(),
    )

    return Container(
        employees_repo=employees_repo,
        punches_repo=punches_repo,
        leaves_repo=leaves_repo,
        reimbursements_repo=reimbursements_repo,
        slips_repo=slips_repo,
        leave_service=leave_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: Mapping[str, object]) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        punches_repo=MySQLPunchRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        reimbursements_repo=MySQLReimbursementRepository(conn),
        slips_repo=MySQLSalarySlipRepository(conn),
    )
