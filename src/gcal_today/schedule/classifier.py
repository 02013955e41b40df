"""Temporal classification of events for the listing.

Each event is put in exactly one state relative to ``now``. When several
conditions hold the first one in this order wins:

    ONGOING > STARTING_SOON > ENDED > UPCOMING > UNDETERMINED

An event that started inside the lookahead window is therefore shown as
ongoing, never as starting soon.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta
from enum import Enum

from gcal_today.models.event import Event
from gcal_today.schedule.timing import has_ended, is_ongoing, starts_within


class EventState(str, Enum):
    """Where an event is relative to now."""

    ENDED = "ended"
    ONGOING = "ongoing"
    STARTING_SOON = "starting_soon"
    UPCOMING = "upcoming"
    UNDETERMINED = "undetermined"  # No start instant (all-day or malformed)


def classify(event: Event, now: datetime, soon_window: timedelta) -> EventState:
    """Classify one event.

    Args:
        event: Event to classify
        now: Current instant (timezone aware)
        soon_window: How far ahead an event counts as starting soon

    Returns:
        The event's state. Never raises for missing fields.
    """
    if is_ongoing(event, now):
        return EventState.ONGOING
    if starts_within(event, now, soon_window):
        return EventState.STARTING_SOON
    if has_ended(event, now):
        return EventState.ENDED
    if event.start is not None:
        return EventState.UPCOMING
    return EventState.UNDETERMINED


def classify_all(
    events: Sequence[Event],
    now: datetime,
    soon_window: timedelta,
) -> list[tuple[Event, EventState]]:
    """Classify every event, keeping list order."""
    return [(event, classify(event, now, soon_window)) for event in events]
