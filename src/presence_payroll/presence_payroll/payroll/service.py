from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, Optional, Sequence

from ..attendance.aggregator import MonthlyAggregator, partition_by_user
from ..attendance.repository import PunchRepository
from ..common.datetime_utils import month_bounds, month_datetime_bounds, now_local
from ..common.validators import require_month, require_year
from ..core.constants import DEFAULT_SLIP_LIST_LIMIT, DEFAULT_USER_SLIP_LIMIT
from ..core.enums import PaymentStatus
from ..core.exceptions import (
    DomainError,
    DuplicateSlipError,
    LockedSlipError,
    NotFoundError,
    ValidationError,
)
from ..employees.model import CompensationConfig, Employee
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from ..reimbursements.model import ReimbursementTotal
from ..reimbursements.repository import ReimbursementRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import (
    GenerationReport,
    PreviewReport,
    SalarySlip,
    SkippedSlip,
    SlipError,
    SlipPreview,
    SlipSnapshot,
)
from .repository import SalarySlipRepository
from .snapshot import build_snapshot

logger = logging.getLogger(__name__)

SKIP_LOCKED = "slip is locked"
SKIP_EXISTS = "slip already exists"


@dataclass(frozen=True)
class _Computed:
    employee: Employee
    snapshot: Optional[SlipSnapshot] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class SlipPage:
    slips: Sequence[SalarySlip]
    total: int
    limit: int
    offset: int


class PayrollService:
    def __init__(
        self,
        employees: EmployeeRepository,
        punches: PunchRepository,
        leaves: LeaveRepository,
        reimbursements: ReimbursementRepository,
        slips: SalarySlipRepository,
        *,
        aggregator: Optional[MonthlyAggregator] = None,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._punches = punches
        self._leaves = leaves
        self._reimbursements = reimbursements
        self._slips = slips
        self._aggregator = aggregator or MonthlyAggregator()
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    # -------- Computation --------
    def _employees_for_run(self, user_id: Optional[int]) -> Sequence[Employee]:
        employees = self._employees.list_for_payroll(user_id=user_id)
        if user_id is not None and not employees:
            raise NotFoundError(f"Employee {user_id} not found")
        return employees

    def _compute(self, employees: Sequence[Employee], *, year: int, month: int) -> Iterator[_Computed]:
        """Classify, aggregate and price every employee from bulk-loaded inputs.

        Punches and leaves come from one query each for the whole batch; a
        failure for one employee is yielded as an error and the rest continue.
        """
        user_ids = [e.user_id for e in employees]
        first_day, last_day = month_bounds(year, month)
        start, end = month_datetime_bounds(year, month)

        punches_by_user = partition_by_user(self._punches.list_for_users(user_ids, start, end))
        leaves_by_user = partition_by_user(self._leaves.list_approved_for_users(user_ids, first_day, last_day))
        configs = self._employees.get_compensation_configs(user_ids)
        reimbursements = self._reimbursements.get_approved_totals(user_ids, start, end)

        for employee in employees:
            uid = employee.user_id
            try:
                summary = self._aggregator.summarize(
                    user_id=uid,
                    year=year,
                    month=month,
                    punches=punches_by_user.get(uid, ()),
                    leaves=leaves_by_user.get(uid, ()),
                )
                config = configs.get(uid) or CompensationConfig()
                breakdown = self._calculator.calculate(config, summary, reimbursements.get(uid) or ReimbursementTotal())
                yield _Computed(employee=employee, snapshot=build_snapshot(employee, config, summary, breakdown))
            except DomainError as e:
                yield _Computed(employee=employee, error=e)
            except Exception as e:
                logger.exception("Unexpected payroll failure for user %s %d-%02d", uid, year, month)
                yield _Computed(employee=employee, error=e)

    def preview(self, *, month: int, year: int, user_id: Optional[int] = None) -> PreviewReport:
        month, year = require_month(month), require_year(year)
        report = PreviewReport()
        for item in self._compute(self._employees_for_run(user_id), year=year, month=month):
            if item.error is not None:
                report.errors.append(SlipError(item.employee.user_id, item.employee.full_name, str(item.error)))
            else:
                assert item.snapshot is not None
                report.previews.append(
                    SlipPreview(user_id=item.employee.user_id, month=month, year=year, snapshot=item.snapshot)
                )
        return report

    # -------- Generation --------
    def generate_slips(
        self,
        *,
        month: int,
        year: int,
        user_id: Optional[int] = None,
        overwrite: bool = False,
        generated_by: Optional[int] = None,
    ) -> GenerationReport:
        """Create (or with overwrite, refresh) one slip per employee for the period.

        Locked slips are never touched. Per-employee failures end up in
        `errors` and do not stop the batch.
        """
        month, year = require_month(month), require_year(year)
        employees = self._employees_for_run(user_id)

        created: list[SalarySlip] = []
        skipped: list[SkippedSlip] = []
        errors: list[SlipError] = []

        existing_slips = {
            s.user_id: s
            for s in self._slips.list_by_keys([e.user_id for e in employees], month=month, year=year)
        }

        pending: list[tuple[Employee, Optional[SalarySlip]]] = []
        for employee in employees:
            existing = existing_slips.get(employee.user_id)
            if existing and existing.locked:
                skipped.append(SkippedSlip(employee.user_id, employee.full_name, SKIP_LOCKED))
            elif existing and not overwrite:
                skipped.append(SkippedSlip(employee.user_id, employee.full_name, SKIP_EXISTS))
            else:
                pending.append((employee, existing))

        existing_by_user = {e.user_id: slip for e, slip in pending}
        generated_at = self._clock()

        for item in self._compute([e for e, _ in pending], year=year, month=month):
            employee = item.employee
            if item.error is not None:
                logger.warning("Payroll failed for user %s %d-%02d: %s", employee.user_id, year, month, item.error)
                errors.append(SlipError(employee.user_id, employee.full_name, str(item.error)))
                continue

            assert item.snapshot is not None
            existing = existing_by_user.get(employee.user_id)
            try:
                if existing is not None:
                    slip = self._slips.replace_snapshot(
                        slip_id=existing.slip_id,
                        snapshot=item.snapshot,
                        generated_by=generated_by,
                        generated_at=generated_at,
                    )
                else:
                    slip = self._slips.create(
                        user_id=employee.user_id,
                        month=month,
                        year=year,
                        snapshot=item.snapshot,
                        generated_by=generated_by,
                        generated_at=generated_at,
                    )
            except LockedSlipError:
                skipped.append(SkippedSlip(employee.user_id, employee.full_name, SKIP_LOCKED))
                continue
            except DuplicateSlipError:
                # lost the race against a concurrent generator for the same key
                skipped.append(SkippedSlip(employee.user_id, employee.full_name, SKIP_EXISTS))
                continue
            except Exception as e:
                logger.exception("Saving slip failed for user %s %d-%02d", employee.user_id, year, month)
                errors.append(SlipError(employee.user_id, employee.full_name, str(e)))
                continue
            created.append(slip)

        for s in skipped:
            logger.info("Skipped slip for user %s %d-%02d: %s", s.user_id, year, month, s.reason)
        logger.info(
            "Generated payroll %d-%02d: created=%d skipped=%d errors=%d",
            year,
            month,
            len(created),
            len(skipped),
            len(errors),
        )
        return GenerationReport(created=tuple(created), skipped=tuple(skipped), errors=tuple(errors))

    # -------- Lookups --------
    def get_slip(self, *, user_id: int, month: int, year: int) -> SalarySlip:
        month, year = require_month(month), require_year(year)
        slip = self._slips.get_by_key(user_id=int(user_id), month=month, year=year)
        if not slip:
            raise NotFoundError(f"No salary slip for user {user_id} {year}-{month:02d}")
        return slip

    def get_slip_by_id(self, slip_id: int) -> SalarySlip:
        slip = self._slips.get_by_id(int(slip_id))
        if not slip:
            raise NotFoundError(f"Salary slip {slip_id} not found")
        return slip

    def list_slips(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus | str] = None,
        limit: int = DEFAULT_SLIP_LIST_LIMIT,
        offset: int = 0,
    ) -> SlipPage:
        status = self._parse_payment_status(payment_status) if payment_status else None
        filters = dict(
            month=require_month(month) if month is not None else None,
            year=require_year(year) if year is not None else None,
            user_id=int(user_id) if user_id is not None else None,
            payment_status=status,
        )
        slips = self._slips.list(**filters, limit=int(limit), offset=int(offset))
        return SlipPage(slips=slips, total=self._slips.count(**filters), limit=int(limit), offset=int(offset))

    def list_user_slips(
        self, *, user_id: int, year: Optional[int] = None, limit: int = DEFAULT_USER_SLIP_LIMIT
    ) -> Sequence[SalarySlip]:
        return self._slips.list(
            user_id=int(user_id),
            year=require_year(year) if year is not None else None,
            limit=int(limit),
        )

    # -------- Lifecycle --------
    @staticmethod
    def _parse_payment_status(value: PaymentStatus | str) -> PaymentStatus:
        try:
            return PaymentStatus(value)
        except ValueError:
            raise ValidationError(f"Unknown payment status: {value!r}")

    def set_payment_status(
        self,
        *,
        slip_id: int,
        status: PaymentStatus | str,
        payment_date: Optional[datetime] = None,
        method: Optional[str] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> SalarySlip:
        """Record a payment transition.

        Marking a slip paid locks it for good and stamps the payment date if
        none is given. A paid slip cannot move to another status.
        """
        new_status = self._parse_payment_status(status)
        slip = self.get_slip_by_id(slip_id)

        if slip.is_paid and new_status != PaymentStatus.PAID:
            raise LockedSlipError(f"Salary slip {slip.slip_id} is paid; status cannot change to {new_status.value}")

        locked = slip.locked
        if new_status == PaymentStatus.PAID:
            locked = True
            payment_date = payment_date or slip.payment_date or self._clock()

        updated = self._slips.update_payment(
            slip_id=slip.slip_id,
            payment_status=new_status,
            locked=locked,
            payment_date=payment_date or slip.payment_date,
            payment_method=method if method is not None else slip.payment_method,
            payment_reference=reference if reference is not None else slip.payment_reference,
            payment_notes=notes if notes is not None else slip.payment_notes,
        )
        logger.info("Slip %s payment status %s -> %s", slip.slip_id, slip.payment_status.value, new_status.value)
        return updated

    def set_lock(self, *, slip_id: int, locked: bool) -> SalarySlip:
        slip = self.get_slip_by_id(slip_id)
        if not locked and slip.is_paid:
            raise LockedSlipError(f"Salary slip {slip.slip_id} is paid and cannot be unlocked")
        if slip.locked == bool(locked):
            return slip

        updated = self._slips.set_locked(slip_id=slip.slip_id, locked=bool(locked))
        logger.info("Slip %s %s", slip.slip_id, "locked" if locked else "unlocked")
        return updated

    def delete_slip(self, *, slip_id: int) -> None:
        slip = self.get_slip_by_id(slip_id)
        if slip.locked:
            raise LockedSlipError("Cannot delete a locked salary slip")
        if slip.is_paid:
            raise LockedSlipError("Cannot delete a paid salary slip")

        if not self._slips.delete(slip.slip_id):
            # locked or paid between the check and the delete
            raise LockedSlipError(f"Salary slip {slip.slip_id} could not be deleted")
        logger.info("Slip %s deleted (user %s %d-%02d)", slip.slip_id, slip.user_id, slip.year, slip.month)
