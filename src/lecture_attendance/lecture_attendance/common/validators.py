from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field_name} must not be empty")
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be {max_len} characters max")
    return value


def require_present(value: Any, field_name: str) -> Any:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    return value


def require_datetime(value: Any, field_name: str) -> datetime:
    """Return `value` as a naive UTC datetime; aware values are converted."""
    require_present(value, field_name)
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a datetime")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
