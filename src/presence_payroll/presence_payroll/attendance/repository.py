from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from .model import PresencePunch


class PunchRepository(Protocol):
    """Read contract over the punch store.

    Punch capture itself lives outside this package; payroll only reads punches
    in bulk and maintains the leave back-links.
    """

    def list_for_users(self, user_ids: Sequence[int], start: datetime, end: datetime) -> Sequence[PresencePunch]:
        """All punches of the given users with start <= timestamp <= end, in one query."""

        raise NotImplementedError

    def link_leave(self, *, user_id: int, start_date: date, end_date: date, leave_id: int) -> int:
        raise NotImplementedError

    def unlink_leave(self, *, leave_id: int) -> int:
        raise NotImplementedError
