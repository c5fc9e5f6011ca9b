from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """400-level input problem."""


class NotFoundError(LookupError):
    """404-level: the addressed record does not exist."""


def require_json_object(payload: Any) -> dict:
    """
    Request bodies are always JSON objects. A missing body is treated as
    an empty object; arrays, strings and numbers are rejected.
    """
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    return payload


def require_list(payload: dict, field: str) -> list:
    value = payload.get(field)
    if not isinstance(value, list):
        raise ValidationError(f"{field} must be a list")
    return value


def require_choice(value: Any, field: str, choices: tuple[str, ...]) -> str:
    if value not in choices:
        raise ValidationError(f"{field} must be one of: {', '.join(choices)}")
    return value


def _finite(value: float, field: str) -> float:
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a number")
    return value


def to_number(value: Any, field: str, *, default: float | None = None) -> float:
    """
    Coerce a JSON number (or numeric string) for arithmetic.

    None falls back to `default` when given. Booleans are rejected even
    though Python treats them as ints. NaN and infinities are rejected.
    """
    if value is None:
        if default is not None:
            return default
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _finite(value, field)
    if isinstance(value, str):
        stripped = value.strip()
        try:
            return int(stripped)
        except ValueError:
            pass
        try:
            return _finite(float(stripped), field)
        except ValueError:
            raise ValidationError(f"{field} must be a number")
    raise ValidationError(f"{field} must be a number")


def number_or_zero(value: Any) -> float:
    """Lenient variant for stored records: anything non-numeric counts as 0."""
    try:
        return to_number(value, "value", default=0)
    except ValidationError:
        return 0
