"""Calendar list models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CalendarInfo:
    """Information about a calendar."""

    id: str
    summary: str
    description: str | None = None
    time_zone: str | None = None
    is_primary: bool = False
    access_role: str = "reader"  # freeBusyReader, reader, writer, owner
    hidden: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CalendarInfo:
        """Create from Google Calendar API response."""
        return cls(
            id=data["id"],
            summary=data.get("summary", ""),
            description=data.get("description"),
            time_zone=data.get("timeZone"),
            is_primary=data.get("primary", False),
            access_role=data.get("accessRole", "reader"),
            hidden=data.get("hidden", False),
        )
