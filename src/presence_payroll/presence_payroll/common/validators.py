from __future__ import annotations

from ..core.exceptions import ValidationError


def require_month(value: object) -> int:
    try:
        month = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError("month must be an integer between 1 and 12")
    if not 1 <= month <= 12:
        raise ValidationError("month must be an integer between 1 and 12")
    return month


def require_year(value: object) -> int:
    try:
        year = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError("year must be a positive integer")
    if year <= 0:
        raise ValidationError("year must be a positive integer")
    return year
