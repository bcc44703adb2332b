from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import DayRule
from .strategies.leave_strategy import LeaveRule
from .strategies.punch_strategy import PunchRule
from .strategies.weekoff_strategy import WeekOffRule


@dataclass
class DayRuleFactory:
    """Factory Pattern: build the rule chain in precedence order.

    `rules()` may decline a day; `fallback()` always answers.
    """

    def rules(self) -> tuple[DayRule, ...]:
        return (WeekOffRule(), LeaveRule())

    def fallback(self) -> PunchRule:
        return PunchRule()
