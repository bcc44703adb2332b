from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..core.enums import ReimbursementStatus


@dataclass(frozen=True)
class ReimbursementLine:
    reimbursement_id: int
    amount: Decimal
    status: ReimbursementStatus
    submitted_at: datetime


@dataclass(frozen=True)
class ReimbursementTotal:
    total: Decimal = Decimal(0)
    count: int = 0
    line_items: tuple[ReimbursementLine, ...] = ()

    @classmethod
    def from_lines(cls, lines: tuple[ReimbursementLine, ...]) -> "ReimbursementTotal":
        return cls(total=sum((line.amount for line in lines), Decimal(0)), count=len(lines), line_items=lines)
