from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import (
    ConfigurationError,
    DuplicateSlipError,
    LockedSlipError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (LockedSlipError, 409),
    (DuplicateSlipError, 409),
    (ValidationError, 400),
    (ConfigurationError, 400),
)


def json_api(view):
    """Translate domain errors into `{"success": false, "message": ...}` responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except tuple(cls for cls, _ in _STATUS_BY_ERROR) as e:
            status = next(code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls))
            return jsonify({"success": False, "message": str(e)}), status
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    return wrapper


def optional_int(value, field_name: str):
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
