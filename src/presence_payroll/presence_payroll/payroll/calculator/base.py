from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import MonthlySummary
from ...employees.model import CompensationConfig
from ...reimbursements.model import ReimbursementTotal
from ..model import PayrollBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        config: CompensationConfig,
        summary: MonthlySummary,
        reimbursements: Optional[ReimbursementTotal] = None,
    ) -> PayrollBreakdown:
        raise NotImplementedError
