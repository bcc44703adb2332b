from __future__ import annotations

from datetime import datetime
from typing import Mapping, Protocol, Sequence

from .model import ReimbursementTotal


class ReimbursementRepository(Protocol):
    def get_approved_totals(
        self, user_ids: Sequence[int], start: datetime, end: datetime
    ) -> Mapping[int, ReimbursementTotal]:
        """Approved claims submitted in [start, end], grouped by user; users with none are absent."""

        raise NotImplementedError
