from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ...leaves.model import LeaveSpan
from ..model import DayClassification, PresencePunch


@dataclass(frozen=True)
class DayContext:
    """Everything known about one user on one calendar day."""

    work_date: date
    punches: Sequence[PresencePunch]
    leaves: Sequence[LeaveSpan]


class DayRule(ABC):
    """Strategy Pattern: one precedence step of the day classifier.

    A rule returns None when it does not apply so the next rule gets a turn.
    """

    @abstractmethod
    def decide(self, ctx: DayContext) -> Optional[DayClassification]:
        raise NotImplementedError
