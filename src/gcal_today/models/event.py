"""Event models for today's calendar listing."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NO_SUMMARY_PLACEHOLDER = "<No description given>"
NO_START_PLACEHOLDER = "<No start time given>"


def parse_api_datetime(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp as returned by the Calendar API."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class EntryPoint(BaseModel):
    """One way of joining a conference (video, phone, sip, ...)."""

    model_config = ConfigDict(frozen=True)

    uri: str | None = Field(default=None, description="Join URI")
    entry_point_type: str | None = Field(
        default=None, description="video, phone, sip or more"
    )
    label: str | None = Field(default=None, description="Display label")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        """Create from a conferenceData.entryPoints[] item."""
        return cls(
            uri=data.get("uri"),
            entry_point_type=data.get("entryPointType"),
            label=data.get("label"),
        )


class ConferenceData(BaseModel):
    """Conference attached to an event."""

    model_config = ConfigDict(frozen=True)

    conference_id: str | None = None
    solution_name: str | None = None
    entry_points: list[EntryPoint] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        """Create from an event's conferenceData object."""
        return cls(
            conference_id=data.get("conferenceId"),
            solution_name=data.get("conferenceSolution", {}).get("name"),
            entry_points=[
                EntryPoint.from_api(item) for item in data.get("entryPoints", [])
            ],
        )


class Event(BaseModel):
    """A single event of today's calendar.

    Events are read-only. Missing values stay ``None`` and are only turned
    into display text by the ``display_*`` helpers below.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    id: str | None = Field(default=None, description="Calendar event ID")
    summary: str | None = Field(default=None, description="Event title")

    # Time
    start: datetime | None = Field(default=None, description="Start instant")
    end: datetime | None = Field(default=None, description="End instant")
    start_date: str | None = Field(
        default=None, description="Start date of all-day events (YYYY-MM-DD)"
    )
    end_date: str | None = Field(
        default=None, description="End date of all-day events (YYYY-MM-DD)"
    )

    # Recurrence
    recurring_id: str | None = Field(
        default=None, description="ID of the recurring event this is an instance of"
    )

    # Links
    hangout_link: str | None = Field(default=None, description="Direct meeting link")
    conference_data: ConferenceData | None = Field(
        default=None, description="Conference solution and entry points"
    )
    html_link: str | None = Field(default=None, description="Link to the web UI")

    @field_validator("start", "end")
    @classmethod
    def require_timezone(cls, v: datetime | None) -> datetime | None:
        """Instants must be timezone aware to compare against now."""
        if v is not None and v.utcoffset() is None:
            raise ValueError("Event times must be timezone aware")
        return v

    @model_validator(mode="after")
    def validate_order(self) -> Self:
        """An event cannot end before it starts."""
        if self.start is not None and self.end is not None and self.end < self.start:
            raise ValueError("Event end must not be before its start")
        return self

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        """Create from a Google Calendar API v3 event resource."""
        start_data = data.get("start", {})
        end_data = data.get("end", {})
        conference = data.get("conferenceData")

        return cls(
            id=data.get("id"),
            summary=data.get("summary"),
            start=parse_api_datetime(start_data.get("dateTime")),
            end=parse_api_datetime(end_data.get("dateTime")),
            start_date=start_data.get("date"),
            end_date=end_data.get("date"),
            recurring_id=data.get("recurringEventId"),
            hangout_link=data.get("hangoutLink"),
            conference_data=ConferenceData.from_api(conference) if conference else None,
            html_link=data.get("htmlLink"),
        )

    @property
    def is_recurring(self) -> bool:
        """Check if this is an instance of a recurring event."""
        return bool(self.recurring_id)

    @property
    def is_all_day(self) -> bool:
        """All-day events only carry a date."""
        return self.start is None and self.start_date is not None

    @property
    def display_summary(self) -> str:
        """Title, or a placeholder when the event has none."""
        return self.summary or NO_SUMMARY_PLACEHOLDER

    def display_start(self, tz: tzinfo | None = None) -> str:
        """Start time as ``HH:MM (TZ)``, in local time unless ``tz`` is given."""
        if self.start is None:
            return NO_START_PLACEHOLDER
        return self.start.astimezone(tz).strftime("%H:%M (%Z)")

    @property
    def conference_link(self) -> str | None:
        """URL used to join the event's video conference."""
        return extract_conference_link(self)


def extract_conference_link(event: Event) -> str | None:
    """Find the link to join an event's conference.

    The direct meeting link wins. Otherwise the first entry point of the
    conference data is used. Returns None if neither is set.
    """
    if event.hangout_link:
        return event.hangout_link
    if event.conference_data and event.conference_data.entry_points:
        return event.conference_data.entry_points[0].uri or None
    return None
