from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..core.constants import MONTH_ABBREVIATIONS
from ..core.exceptions import ValidationError


def parse_iso_datetime(value: Optional[str], field_name: str) -> Optional[datetime]:
    """Parse an ISO 8601 string (as sent by JSON clients) into a naive UTC datetime.

    Empty values come back as None so the service can report the missing field.
    Values with an offset (or a trailing 'Z') are converted to UTC and the offset
    dropped; values without one are taken as UTC already. MySQL DATETIME stores
    no offset, so every value the app handles is naive.
    """
    if value is None or value == "":
        return None
    v = str(value).strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO 8601 datetime")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format as dd-MMM-yyyy HH:mm:ss, e.g. 10-Jan-2024 09:05:00."""
    return f"{value.day:02d}-{MONTH_ABBREVIATIONS[value.month - 1]}-{value.year:04d} {value:%H:%M:%S}"


def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
