from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core.exceptions import ValidationError


def require_iterable(value: Any, field_name: str) -> list:
    """Materialize a collection argument, rejecting non-iterables and bare strings."""
    if value is None or isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ValidationError(f"{field_name} must be a collection, got {type(value).__name__}")
    return list(value)


def require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number
