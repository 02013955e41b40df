"""Event classification and meeting link resolution."""

from gcal_today.schedule.classifier import EventState, classify, classify_all
from gcal_today.schedule.resolver import (
    MeetingLink,
    NoEventAtIndex,
    NoLinkForEvent,
    NoLinkForOngoingEvent,
    NoLinkOnNextEvent,
    NoUpcomingEvents,
    ResolutionError,
    ResolutionPath,
    resolve,
)
from gcal_today.schedule.timing import (
    has_ended,
    has_started,
    is_chronological,
    is_ongoing,
    starts_after,
    starts_within,
)

__all__ = [
    # Classifier
    "EventState",
    "classify",
    "classify_all",
    # Resolver
    "MeetingLink",
    "ResolutionPath",
    "resolve",
    "ResolutionError",
    "NoEventAtIndex",
    "NoLinkForEvent",
    "NoLinkForOngoingEvent",
    "NoUpcomingEvents",
    "NoLinkOnNextEvent",
    # Timing
    "has_started",
    "has_ended",
    "is_ongoing",
    "starts_within",
    "starts_after",
    "is_chronological",
]
