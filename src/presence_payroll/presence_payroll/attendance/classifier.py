from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..leaves.model import LeaveSpan
from .factory import DayRuleFactory
from .model import DayClassification, PresencePunch
from .strategies.base import DayContext, DayRule
from .strategies.punch_strategy import PunchRule


class DayClassifier:
    """Pure day classifier: first rule that answers wins, punches decide the rest."""

    def __init__(self, *, factory: Optional[DayRuleFactory] = None):
        factory = factory or DayRuleFactory()
        self._rules: tuple[DayRule, ...] = factory.rules()
        self._fallback: PunchRule = factory.fallback()

    def classify(
        self,
        work_date: date,
        punches: Sequence[PresencePunch],
        leaves: Sequence[LeaveSpan],
    ) -> DayClassification:
        """Classify one day.

        `punches` must already be limited to the user's punches on `work_date`;
        `leaves` may be every leave of the user (only approved ones count).
        """
        ctx = DayContext(work_date=work_date, punches=tuple(punches), leaves=tuple(leaves))
        for rule in self._rules:
            decision = rule.decide(ctx)
            if decision is not None:
                return decision
        return self._fallback.decide(ctx)
