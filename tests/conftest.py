"""Pytest fixtures for gcal-today tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Google OAuth, Calendar API, browser)
2. The data directory never points at the real user's files
3. Events are built relative to one fixed "now"
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("GCAL_TODAY_LOG_LEVEL", "DEBUG")

from gcal_today.config import Settings
from gcal_today.models.event import ConferenceData, EntryPoint, Event
from gcal_today.schedule.timing import is_chronological


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache(tmp_path, monkeypatch):
    """Reset settings cache and isolate the data directory for each test."""
    from gcal_today.config import get_settings

    monkeypatch.setenv("GCAL_TODAY_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with a temporary data directory."""
    return Settings(data_dir=tmp_path / "gcal-today")


@pytest.fixture
def mock_calendar_service():
    """Mock Calendar API discovery service."""
    service = MagicMock()
    service.events.return_value.list.return_value.execute.return_value = {"items": []}
    service.calendarList.return_value.list.return_value.execute.return_value = {
        "items": []
    }
    return service


# =============================================================================
# Event Fixtures
# =============================================================================


MEET_URL = "https://meet.google.com/abc-defg-hij"
ZOOM_URL = "https://example.zoom.us/j/123456789"


@pytest.fixture
def now() -> datetime:
    """Fixed current instant: 2024-06-15 12:00 UTC."""
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_event(now: datetime):
    """Factory for events timed relative to ``now``.

    Offsets are in minutes; pass None to leave start/end unset.
    """

    def _make(
        summary: str | None = "Meeting",
        start: float | None = 0,
        end: float | None = 30,
        link: str | None = None,
        entry_point: str | None = None,
        recurring_id: str | None = None,
    ) -> Event:
        conference = None
        if entry_point is not None:
            conference = ConferenceData(
                entry_points=[EntryPoint(uri=entry_point, entry_point_type="video")]
            )
        return Event(
            summary=summary,
            start=now + timedelta(minutes=start) if start is not None else None,
            end=now + timedelta(minutes=end) if end is not None else None,
            hangout_link=link,
            conference_data=conference,
            recurring_id=recurring_id,
        )

    return _make


@pytest.fixture
def sample_day(make_event) -> list[Event]:
    """A typical day: one past meeting, one ongoing, two later."""
    events = [
        make_event("Standup", start=-180, end=-165, link=MEET_URL),
        make_event("Design review", start=-30, end=30, link=ZOOM_URL),
        make_event("1:1", start=10, end=40, entry_point=MEET_URL),
        make_event("Focus time", start=120, end=240),
    ]
    assert is_chronological(events)
    return events


@pytest.fixture
def api_event() -> dict:
    """Event resource as returned by the Calendar API."""
    return {
        "id": "evt1",
        "status": "confirmed",
        "summary": "Sprint planning",
        "htmlLink": "https://www.google.com/calendar/event?eid=evt1",
        "start": {"dateTime": "2024-06-15T14:00:00+02:00", "timeZone": "Europe/Berlin"},
        "end": {"dateTime": "2024-06-15T15:00:00+02:00", "timeZone": "Europe/Berlin"},
        "recurringEventId": "series1",
        "hangoutLink": MEET_URL,
        "conferenceData": {
            "conferenceId": "abc-defg-hij",
            "conferenceSolution": {"name": "Google Meet"},
            "entryPoints": [
                {"entryPointType": "video", "uri": MEET_URL, "label": "meet.google.com/abc-defg-hij"},
                {"entryPointType": "phone", "uri": "tel:+1-555-0100"},
            ],
        },
    }
