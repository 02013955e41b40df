"""Time predicates shared by the classifier and the resolver.

All predicates take ``now`` explicitly so that a single listing or resolution
sees one consistent instant.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from gcal_today.models.event import Event


def has_started(event: Event, now: datetime) -> bool:
    """Check if the event has a start at or before ``now``."""
    return event.start is not None and event.start <= now


def has_ended(event: Event, now: datetime) -> bool:
    """Check if the event has an end at or before ``now``."""
    return event.end is not None and event.end <= now


def is_ongoing(event: Event, now: datetime) -> bool:
    """Started and not yet ended. A missing end never ends."""
    return has_started(event, now) and not has_ended(event, now)


def starts_within(event: Event, now: datetime, window: timedelta) -> bool:
    """Not started yet, but starting no later than ``now + window``."""
    if event.start is None or has_started(event, now):
        return False
    return event.start <= now + window


def starts_after(event: Event, now: datetime) -> bool:
    """Check if the event starts strictly after ``now``."""
    return event.start is not None and event.start > now


def is_chronological(events: Sequence[Event]) -> bool:
    """Check that events with a start are in ascending start order.

    Events without a start (all-day) are ignored.
    """
    starts = [event.start for event in events if event.start is not None]
    return all(earlier <= later for earlier, later in zip(starts, starts[1:]))
