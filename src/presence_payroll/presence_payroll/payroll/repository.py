from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import SalarySlip, SlipSnapshot


class SalarySlipRepository(Protocol):
    """Slip store. `(user_id, month, year)` is unique."""

    def get_by_id(self, slip_id: int) -> Optional[SalarySlip]:
        raise NotImplementedError

    def get_by_key(self, *, user_id: int, month: int, year: int) -> Optional[SalarySlip]:
        raise NotImplementedError

    def list_by_keys(self, user_ids: Sequence[int], *, month: int, year: int) -> Sequence[SalarySlip]:
        """Existing slips of the given users for one period, in one query."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        month: int,
        year: int,
        snapshot: SlipSnapshot,
        generated_by: Optional[int],
        generated_at: datetime,
    ) -> SalarySlip:
        """Insert a pending, unlocked slip.

        Raises DuplicateSlipError when the key is already taken.
        """

        raise NotImplementedError

    def replace_snapshot(
        self,
        *,
        slip_id: int,
        snapshot: SlipSnapshot,
        generated_by: Optional[int],
        generated_at: datetime,
    ) -> SalarySlip:
        """Overwrite the figures of an unlocked slip; identity, payment and lock state are kept.

        Raises LockedSlipError if the slip got locked in the meantime.
        """

        raise NotImplementedError

    def update_payment(
        self,
        *,
        slip_id: int,
        payment_status: PaymentStatus,
        locked: bool,
        payment_date: Optional[datetime],
        payment_method: Optional[str],
        payment_reference: Optional[str],
        payment_notes: Optional[str],
    ) -> SalarySlip:
        raise NotImplementedError

    def set_locked(self, *, slip_id: int, locked: bool) -> SalarySlip:
        raise NotImplementedError

    def delete(self, slip_id: int) -> bool:
        raise NotImplementedError

    def list(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[SalarySlip]:
        """Newest period first."""

        raise NotImplementedError

    def count(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> int:
        raise NotImplementedError
