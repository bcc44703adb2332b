from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from src.presence_payroll.presence_payroll.attendance.model import PresencePunch
from src.presence_payroll.presence_payroll.container import build_services
from src.presence_payroll.presence_payroll.core.enums import LeaveStatus, PaymentStatus, PunchKind
from src.presence_payroll.presence_payroll.core.exceptions import DuplicateSlipError, LockedSlipError
from src.presence_payroll.presence_payroll.employees.model import CompensationConfig, Employee
from src.presence_payroll.presence_payroll.leaves.model import LeaveSpan
from src.presence_payroll.presence_payroll.payroll.model import SalarySlip
from src.presence_payroll.presence_payroll.reimbursements.model import ReimbursementTotal


class InMemoryEmployees:
    def __init__(self):
        self.employees: dict[int, Employee] = {}
        self.configs: dict[int, CompensationConfig] = {}
        self.config_calls = 0

    def add(self, employee: Employee, config: Optional[CompensationConfig] = None) -> Employee:
        self.employees[employee.user_id] = employee
        if config is not None:
            self.configs[employee.user_id] = config
        return employee

    def list_for_payroll(self, *, user_id=None):
        if user_id is not None:
            e = self.employees.get(int(user_id))
            return [e] if e else []
        return [e for _, e in sorted(self.employees.items()) if e.is_active]

    def get_compensation_configs(self, user_ids):
        self.config_calls += 1
        return {uid: self.configs[uid] for uid in user_ids if uid in self.configs}


class InMemoryPunches:
    def __init__(self):
        self.punches: list[PresencePunch] = []
        self.list_calls = 0

    def add(self, user_id: int, at: datetime, kind: PunchKind) -> None:
        self.punches.append(PresencePunch(punch_id=len(self.punches) + 1, user_id=user_id, timestamp=at, kind=kind))

    def add_day(self, user_id: int, day: date, start: time, end: time) -> None:
        self.add(user_id, datetime.combine(day, start), PunchKind.IN)
        self.add(user_id, datetime.combine(day, end), PunchKind.OUT)

    def list_for_users(self, user_ids, start, end):
        self.list_calls += 1
        wanted = set(user_ids)
        return [p for p in self.punches if p.user_id in wanted and start <= p.timestamp <= end]

    def link_leave(self, *, user_id, start_date, end_date, leave_id):
        n = 0
        for i, p in enumerate(self.punches):
            if p.user_id == user_id and start_date <= p.work_date <= end_date:
                self.punches[i] = replace(p, leave_ref=leave_id)
                n += 1
        return n

    def unlink_leave(self, *, leave_id):
        n = 0
        for i, p in enumerate(self.punches):
            if p.leave_ref == leave_id:
                self.punches[i] = replace(p, leave_ref=None)
                n += 1
        return n


class InMemoryLeaves:
    def __init__(self):
        self.leaves: dict[int, LeaveSpan] = {}
        self.list_calls = 0

    def add(self, leave: LeaveSpan) -> LeaveSpan:
        self.leaves[leave.leave_id] = leave
        return leave

    def list_approved_for_users(self, user_ids, start, end):
        self.list_calls += 1
        wanted = set(user_ids)
        return [
            x
            for x in self.leaves.values()
            if x.user_id in wanted and x.is_approved and x.start_date <= end and x.end_date >= start
        ]

    def get_by_id(self, leave_id):
        return self.leaves.get(int(leave_id))

    def list_for_user(self, user_id, *, limit=100):
        items = [x for x in self.leaves.values() if x.user_id == int(user_id)]
        items.sort(key=lambda x: x.start_date, reverse=True)
        return items[:limit]

    def create(self, *, user_id, leave_type, start_date, end_date, reason):
        leave_id = max(self.leaves, default=0) + 1
        self.leaves[leave_id] = LeaveSpan(
            leave_id=leave_id,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            leave_type=leave_type,
            status=LeaveStatus.PENDING,
            reason=reason,
        )
        return leave_id

    def decide(self, *, leave_id, status, approver_id, decided_at):
        leave = self.leaves.get(int(leave_id))
        if not leave:
            return False
        self.leaves[leave.leave_id] = replace(leave, status=status, approver_id=approver_id, approved_at=decided_at)
        return True


class InMemoryReimbursements:
    def __init__(self):
        self.totals: dict[int, ReimbursementTotal] = {}

    def get_approved_totals(self, user_ids, start, end):
        return {uid: self.totals[uid] for uid in user_ids if uid in self.totals}


class InMemorySlips:
    """Honours the same guards as the MySQL store (unique key, locked rows untouched)."""

    def __init__(self):
        self.slips: dict[int, SalarySlip] = {}
        self._next_id = 1
        self.key_reads = 0
        self.bulk_reads = 0

    def get_by_id(self, slip_id):
        return self.slips.get(int(slip_id))

    def get_by_key(self, *, user_id, month, year):
        self.key_reads += 1
        return self._find(user_id, month, year)

    def _find(self, user_id, month, year):
        return next((s for s in self.slips.values() if s.key == (user_id, month, year)), None)

    def list_by_keys(self, user_ids, *, month, year):
        self.bulk_reads += 1
        wanted = set(user_ids)
        return [s for s in self.slips.values() if s.user_id in wanted and (s.month, s.year) == (month, year)]

    def create(self, *, user_id, month, year, snapshot, generated_by, generated_at):
        if self._find(user_id, month, year):
            raise DuplicateSlipError(f"Slip already exists for user {user_id} {year}-{month:02d}")
        slip = SalarySlip(
            slip_id=self._next_id,
            user_id=user_id,
            month=month,
            year=year,
            snapshot=snapshot,
            generated_by=generated_by,
            generated_at=generated_at,
        )
        self.slips[slip.slip_id] = slip
        self._next_id += 1
        return slip

    def replace_snapshot(self, *, slip_id, snapshot, generated_by, generated_at):
        slip = self.slips[slip_id]
        if slip.locked:
            raise LockedSlipError(f"Salary slip {slip_id} is locked")
        self.slips[slip_id] = replace(slip, snapshot=snapshot, generated_by=generated_by, generated_at=generated_at)
        return self.slips[slip_id]

    def update_payment(
        self, *, slip_id, payment_status, locked, payment_date, payment_method, payment_reference, payment_notes
    ):
        self.slips[slip_id] = replace(
            self.slips[slip_id],
            payment_status=payment_status,
            locked=locked,
            payment_date=payment_date,
            payment_method=payment_method,
            payment_reference=payment_reference,
            payment_notes=payment_notes,
        )
        return self.slips[slip_id]

    def set_locked(self, *, slip_id, locked):
        self.slips[slip_id] = replace(self.slips[slip_id], locked=locked)
        return self.slips[slip_id]

    def delete(self, slip_id):
        slip = self.slips.get(slip_id)
        if not slip or slip.locked or slip.payment_status == PaymentStatus.PAID:
            return False
        del self.slips[slip_id]
        return True

    def _filter(self, *, month=None, year=None, user_id=None, payment_status=None):
        items = [
            s
            for s in self.slips.values()
            if (month is None or s.month == month)
            and (year is None or s.year == year)
            and (user_id is None or s.user_id == user_id)
            and (payment_status is None or s.payment_status == payment_status)
        ]
        items.sort(key=lambda s: (s.year, s.month, s.slip_id), reverse=True)
        return items

    def list(self, *, month=None, year=None, user_id=None, payment_status=None, limit=50, offset=0):
        items = self._filter(month=month, year=year, user_id=user_id, payment_status=payment_status)
        return items[offset : offset + limit]

    def count(self, *, month=None, year=None, user_id=None, payment_status=None):
        return len(self._filter(month=month, year=year, user_id=user_id, payment_status=payment_status))


@pytest.fixture
def employees():
    return InMemoryEmployees()


@pytest.fixture
def punches():
    return InMemoryPunches()


@pytest.fixture
def leaves():
    return InMemoryLeaves()


@pytest.fixture
def reimbursements():
    return InMemoryReimbursements()


@pytest.fixture
def slips():
    return InMemorySlips()


@pytest.fixture
def container(employees, punches, leaves, reimbursements, slips):
    return build_services(
        employees_repo=employees,
        punches_repo=punches,
        leaves_repo=leaves,
        reimbursements_repo=reimbursements,
        slips_repo=slips,
    )


@pytest.fixture
def monthly_config():
    # 312000 / 12 = 26000 gross; September 2025 has 26 working days -> 1000 per day
    return CompensationConfig(
        ctc_amount=Decimal("312000"),
        per_day_travel_allowance=Decimal("100"),
        railway_pass_amount=Decimal("500"),
        standard_daily_hours=Decimal("8"),
        overtime_rate_multiplier=Decimal("1.5"),
    )
