"""Helpers shared by the dataset and widget factories."""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from ..errors import WidgetValidationError

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize a timestamp as UTC ISO-8601 with millisecond precision.

    Sub-millisecond digits are dropped, so a timestamp read back from an item
    can differ from the in-memory one by less than a millisecond.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored ISO-8601 timestamp; None when the attribute is absent."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def require_field(content: Mapping[str, Any], field: str, label: str) -> Any:
    """Return ``content[field]``, raising when it is missing or empty."""
    value = content.get(field)
    if not value:
        raise WidgetValidationError(
            field, f"{label} widget must have `content.{field}` field"
        )
    return value
