"""Meeting link resolution.

Picks the one event of today's list whose conference link should be opened.

## Selection order

1. **Explicit index**: the 1-based position shown by ``gcal-today --index``.
   Time is ignored, so past events can be joined too.
2. **Ongoing**: the first event that has started and not ended. If it has no
   link, resolution fails instead of moving on to the next event.
3. **Next upcoming**: the first event starting after now.

Events must already be sorted by start time; the list is never re-sorted.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from gcal_today.models.event import Event, extract_conference_link
from gcal_today.schedule.timing import is_chronological, is_ongoing, starts_after

logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """Base exception for meeting link resolution failures.

    Every subclass has a stable ``code`` and a distinct message so callers
    and scripts can tell the cases apart.
    """

    code: str = "resolution-error"

    def __init__(self, message: str, event: Event | None = None):
        super().__init__(message)
        self.message = message
        self.event = event


class NoEventAtIndex(ResolutionError):
    """Raised when an explicit index is outside ``[1, len(events)]``."""

    code = "no-event-at-index"

    def __init__(self, index: int, count: int):
        super().__init__(f"No event at index {index} (today has {count} events)")
        self.index = index
        self.count = count


class NoLinkForEvent(ResolutionError):
    """Raised when the explicitly chosen event has no meeting link."""

    code = "no-link-for-event"

    def __init__(self, index: int, event: Event):
        super().__init__(
            f'Event {index} ("{event.display_summary}") has no meeting link',
            event=event,
        )
        self.index = index


class NoLinkForOngoingEvent(ResolutionError):
    """Raised when the ongoing event has no meeting link."""

    code = "no-link-for-ongoing-event"

    def __init__(self, event: Event):
        super().__init__(
            f'The ongoing event ("{event.display_summary}") has no meeting link',
            event=event,
        )


class NoUpcomingEvents(ResolutionError):
    """Raised when nothing is ongoing and nothing starts later today."""

    code = "no-upcoming-events"

    def __init__(self):
        super().__init__("No ongoing or upcoming events today")


class NoLinkOnNextEvent(ResolutionError):
    """Raised when the next upcoming event has no meeting link."""

    code = "no-link-on-next-event"

    def __init__(self, event: Event):
        super().__init__(
            f'The next event ("{event.display_summary}") has no meeting link; '
            "pass an index to pick another event",
            event=event,
        )


class ResolutionPath(str, Enum):
    """Which rule selected the event."""

    EXPLICIT_INDEX = "explicit_index"
    ONGOING = "ongoing"
    NEXT_UPCOMING = "next_upcoming"


@dataclass(frozen=True)
class MeetingLink:
    """The event chosen for joining and its conference URL."""

    event: Event
    url: str
    index: int  # 1-based position in the day's list
    path: ResolutionPath


def resolve(
    events: Sequence[Event],
    now: datetime,
    explicit_index: int | None = None,
) -> MeetingLink:
    """Select the event whose meeting link should be opened.

    Args:
        events: Today's events, ascending by start time
        now: Current instant (timezone aware)
        explicit_index: 1-based index chosen by the user, if any

    Returns:
        MeetingLink for the selected event

    Raises:
        NoEventAtIndex: explicit index out of range
        NoLinkForEvent: explicitly chosen event has no link
        NoLinkForOngoingEvent: the ongoing event has no link
        NoUpcomingEvents: nothing ongoing or upcoming
        NoLinkOnNextEvent: the next upcoming event has no link
    """
    if not is_chronological(events):
        logger.warning("Events are not sorted by start time; results may be wrong")

    if explicit_index is not None:
        return _resolve_explicit(events, explicit_index)

    for position, event in enumerate(events, start=1):
        if is_ongoing(event, now):
            url = extract_conference_link(event)
            if url is None:
                raise NoLinkForOngoingEvent(event)
            logger.debug("Resolved ongoing event %d: %s", position, event.display_summary)
            return MeetingLink(event, url, position, ResolutionPath.ONGOING)

    for position, event in enumerate(events, start=1):
        if starts_after(event, now):
            url = extract_conference_link(event)
            if url is None:
                raise NoLinkOnNextEvent(event)
            logger.debug("Resolved next event %d: %s", position, event.display_summary)
            return MeetingLink(event, url, position, ResolutionPath.NEXT_UPCOMING)

    raise NoUpcomingEvents()


def _resolve_explicit(events: Sequence[Event], index: int) -> MeetingLink:
    if not 1 <= index <= len(events):
        raise NoEventAtIndex(index, len(events))

    event = events[index - 1]
    url = extract_conference_link(event)
    if url is None:
        raise NoLinkForEvent(index, event)

    logger.debug("Resolved event %d by index: %s", index, event.display_summary)
    return MeetingLink(event, url, index, ResolutionPath.EXPLICIT_INDEX)
