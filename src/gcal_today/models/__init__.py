"""Domain models for today's calendar."""

from gcal_today.models.calendar import CalendarInfo
from gcal_today.models.event import (
    NO_START_PLACEHOLDER,
    NO_SUMMARY_PLACEHOLDER,
    ConferenceData,
    EntryPoint,
    Event,
    extract_conference_link,
)

__all__ = [
    # Calendar
    "CalendarInfo",
    # Event
    "Event",
    "ConferenceData",
    "EntryPoint",
    "extract_conference_link",
    "NO_SUMMARY_PLACEHOLDER",
    "NO_START_PLACEHOLDER",
]
