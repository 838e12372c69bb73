"""
Equipment history entries as returned by the inventory API.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class HistoryEntry:
    """A single change recorded against an equipment record."""

    id: int | None
    equipment_id: int | None
    changed_by: str
    change_type: str
    details: str
    timestamp: datetime | None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "HistoryEntry":
        """Build an entry from an API JSON object."""
        return cls(
            id=payload.get("id"),
            equipment_id=payload.get("equipmentId"),
            changed_by=payload.get("changedBy") or "",
            change_type=payload.get("changeType") or "",
            details=payload.get("details") or "",
            timestamp=_parse_timestamp(payload.get("timestamp")),
        )


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO timestamp, accepting the ``Z`` UTC suffix."""
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
