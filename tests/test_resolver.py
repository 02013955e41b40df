"""Tests for meeting link resolution."""

import logging
from datetime import datetime, timedelta

import pytest

from gcal_today.models.event import Event
from gcal_today.schedule.classifier import EventState, classify
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

MEET_URL = "https://meet.google.com/abc-defg-hij"
ZOOM_URL = "https://example.zoom.us/j/123456789"


class TestScenarios:
    """End-to-end resolution scenarios."""

    def test_empty_day(self, now: datetime):
        """Test that an empty list has no upcoming events."""
        with pytest.raises(NoUpcomingEvents):
            resolve([], now)

    def test_ongoing_event_with_link(self, make_event, now: datetime):
        """Test that the ongoing event is resolved."""
        event = make_event(start=-60, end=60, link=MEET_URL)
        link = resolve([event], now)

        assert link.event == event
        assert link.url == MEET_URL
        assert link.index == 1
        assert link.path is ResolutionPath.ONGOING

    def test_starting_soon_without_link(self, make_event, now: datetime):
        """Test that a soon event without link fails on the next-event path."""
        event = make_event(start=10, end=40)
        assert classify(event, now, timedelta(minutes=15)) is EventState.STARTING_SOON

        with pytest.raises(NoLinkOnNextEvent) as exc_info:
            resolve([event], now)
        assert exc_info.value.event == event

    def test_explicit_index_to_ended_event(self, make_event, now: datetime):
        """Test that an explicit index ignores whether the event is over."""
        events = [
            make_event("Early", start=-240, end=-200, link=ZOOM_URL),
            make_event("Late", start=-120, end=-60, link=MEET_URL),
        ]
        link = resolve(events, now, explicit_index=2)

        assert link.event == events[1]
        assert link.url == MEET_URL
        assert link.path is ResolutionPath.EXPLICIT_INDEX


class TestExplicitIndex:
    """Tests for the explicit index path."""

    def test_first_index(self, sample_day: list[Event], now: datetime):
        """Test that index 1 is the first event."""
        link = resolve(sample_day, now, explicit_index=1)
        assert link.event == sample_day[0]
        assert link.index == 1

    def test_last_index(self, make_event, now: datetime):
        """Test that index len(events) is the last event."""
        events = [
            make_event("A", start=-60, end=-30, link=MEET_URL),
            make_event("B", start=60, end=90, link=ZOOM_URL),
        ]
        link = resolve(events, now, explicit_index=len(events))
        assert link.event == events[-1]
        assert link.url == ZOOM_URL

    @pytest.mark.parametrize("index", [0, -1, 5, 100])
    def test_out_of_range(self, sample_day: list[Event], now: datetime, index: int):
        """Test indices outside [1, len(events)]."""
        with pytest.raises(NoEventAtIndex) as exc_info:
            resolve(sample_day, now, explicit_index=index)
        assert exc_info.value.index == index
        assert exc_info.value.count == len(sample_day)

    def test_index_on_empty_day(self, now: datetime):
        """Test any index on an empty day."""
        with pytest.raises(NoEventAtIndex):
            resolve([], now, explicit_index=1)

    def test_event_without_link(self, sample_day: list[Event], now: datetime):
        """Test an explicitly chosen event without link."""
        with pytest.raises(NoLinkForEvent) as exc_info:
            resolve(sample_day, now, explicit_index=4)
        assert exc_info.value.index == 4
        assert "Focus time" in exc_info.value.message

    def test_explicit_index_beats_ongoing(self, sample_day: list[Event], now: datetime):
        """Test that an explicit index is used even if something is ongoing."""
        link = resolve(sample_day, now, explicit_index=3)
        assert link.event == sample_day[2]
        assert link.url == MEET_URL  # via conference entry point


class TestImplicitSelection:
    """Tests for the ongoing and next-upcoming paths."""

    def test_ongoing_preferred_over_upcoming(self, sample_day: list[Event], now: datetime):
        """Test that an ongoing event wins over the next one."""
        link = resolve(sample_day, now)
        assert link.event.summary == "Design review"
        assert link.index == 2

    def test_first_ongoing_in_list_order(self, make_event, now: datetime):
        """Test overlapping ongoing events pick the first listed."""
        events = [
            make_event("Long", start=-120, end=120, link=ZOOM_URL),
            make_event("Short", start=-10, end=20, link=MEET_URL),
        ]
        assert resolve(events, now).event.summary == "Long"

    def test_ongoing_without_link_does_not_fall_through(self, make_event, now: datetime):
        """Test that a linkless ongoing event fails even if a later one has a link."""
        events = [
            make_event("Workshop", start=-30, end=30),
            make_event("Call", start=60, end=90, link=MEET_URL),
        ]
        with pytest.raises(NoLinkForOngoingEvent) as exc_info:
            resolve(events, now)
        assert exc_info.value.event == events[0]

    def test_next_upcoming_skips_ended(self, make_event, now: datetime):
        """Test that ended events are not candidates."""
        events = [
            make_event("Done", start=-90, end=-60, link=ZOOM_URL),
            make_event("Next", start=30, end=60, link=MEET_URL),
            make_event("Later", start=90, end=120, link=ZOOM_URL),
        ]
        link = resolve(events, now)
        assert link.event.summary == "Next"
        assert link.path is ResolutionPath.NEXT_UPCOMING
        assert link.index == 2

    def test_next_upcoming_uses_entry_point(self, make_event, now: datetime):
        """Test the conference data fallback on the next-upcoming path."""
        events = [make_event("Sync", start=30, end=60, entry_point=ZOOM_URL)]
        assert resolve(events, now).url == ZOOM_URL

    def test_event_starting_now_is_ongoing_not_next(self, make_event, now: datetime):
        """Test that start == now counts as ongoing."""
        events = [make_event("Now", start=0, end=30, link=MEET_URL)]
        assert resolve(events, now).path is ResolutionPath.ONGOING

    def test_only_ended_events(self, make_event, now: datetime):
        """Test a day that is over."""
        events = [
            make_event("A", start=-120, end=-90, link=MEET_URL),
            make_event("B", start=-60, end=-30, link=MEET_URL),
        ]
        with pytest.raises(NoUpcomingEvents):
            resolve(events, now)

    def test_all_day_events_ignored(self, make_event, now: datetime):
        """Test that events without start are never selected implicitly."""
        events = [
            Event(summary="Holiday", start_date="2024-06-15", hangout_link=MEET_URL),
            make_event("Call", start=30, end=60, link=ZOOM_URL),
        ]
        assert resolve(events, now).event.summary == "Call"

    def test_next_without_link_does_not_skip(self, make_event, now: datetime):
        """Test that the next event without link is reported, not skipped."""
        events = [
            make_event("Focus", start=30, end=60),
            make_event("Call", start=90, end=120, link=MEET_URL),
        ]
        with pytest.raises(NoLinkOnNextEvent):
            resolve(events, now)


class TestResolverProperties:
    """Property-style checks for the resolver."""

    def test_deterministic(self, sample_day: list[Event], now: datetime):
        """Test that identical inputs give identical results."""
        for index in (None, 1, 2, 3):
            assert resolve(sample_day, now, index) == resolve(sample_day, now, index)

    def test_input_not_reordered(self, sample_day: list[Event], now: datetime):
        """Test that the resolver leaves the list untouched."""
        before = list(sample_day)
        resolve(sample_day, now)
        assert sample_day == before

    def test_unsorted_input_logs_warning(self, make_event, now: datetime, caplog):
        """Test that out-of-order input is reported, not silently re-sorted."""
        events = [
            make_event("Later", start=90, end=120, link=ZOOM_URL),
            make_event("Sooner", start=30, end=60, link=MEET_URL),
        ]
        with caplog.at_level(logging.WARNING, logger="gcal_today.schedule.resolver"):
            link = resolve(events, now)

        assert "not sorted" in caplog.text
        assert link.event.summary == "Later"

    def test_result_is_meeting_link(self, sample_day: list[Event], now: datetime):
        """Test the returned type."""
        assert isinstance(resolve(sample_day, now), MeetingLink)


class TestResolutionErrors:
    """Tests for the error taxonomy."""

    def _errors(self, make_event) -> list[ResolutionError]:
        event = make_event("Sync")
        return [
            NoEventAtIndex(3, 2),
            NoLinkForEvent(1, event),
            NoLinkForOngoingEvent(event),
            NoUpcomingEvents(),
            NoLinkOnNextEvent(event),
        ]

    def test_all_are_resolution_errors(self, make_event):
        """Test the common base class."""
        for error in self._errors(make_event):
            assert isinstance(error, ResolutionError)

    def test_codes_are_distinct(self, make_event):
        """Test that every kind has its own code."""
        codes = [error.code for error in self._errors(make_event)]
        assert len(set(codes)) == len(codes)

    def test_messages_are_distinct(self, make_event):
        """Test that every kind has its own message."""
        messages = [error.message for error in self._errors(make_event)]
        assert len(set(messages)) == len(messages)

    def test_messages(self, make_event):
        """Test the stable message texts."""
        event = make_event(None)
        assert NoEventAtIndex(7, 3).message == "No event at index 7 (today has 3 events)"
        assert NoUpcomingEvents().message == "No ongoing or upcoming events today"
        assert NoLinkForOngoingEvent(event).message == (
            'The ongoing event ("<No description given>") has no meeting link'
        )
        assert "pass an index" in NoLinkOnNextEvent(event).message
        assert str(NoUpcomingEvents()) == NoUpcomingEvents().message
