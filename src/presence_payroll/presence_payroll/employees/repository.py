from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import CompensationConfig, Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho nhân viên và hồ sơ lương.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def list_for_payroll(self, *, user_id: Optional[int] = None) -> Sequence[Employee]:
        """Active employees, or just `user_id` when given."""

        raise NotImplementedError

    def get_compensation_configs(self, user_ids: Sequence[int]) -> Mapping[int, CompensationConfig]:
        """Profiles keyed by user id; users without a profile are absent from the map."""

        raise NotImplementedError
