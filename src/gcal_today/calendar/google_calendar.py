"""Google Calendar API client.

Provides the read-only calls the CLI needs:
- List calendars
- List today's events, expanded and sorted by start time

## API Documentation

https://developers.google.com/calendar/api/v3/reference

## Retries

Rate limiting (429), server errors (5xx) and network failures are retried
with exponential backoff. Any other API error is raised as CalendarAPIError.
"""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta, timezone
from typing import Any

from google.auth.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from gcal_today.models.calendar import CalendarInfo
from gcal_today.models.event import Event

logger = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}


class CalendarAPIError(Exception):
    """Raised when the Calendar API rejects a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _is_transient(exc: BaseException) -> bool:
    """Check if a failed request is worth retrying."""
    if isinstance(exc, HttpError):
        return exc.resp.status in TRANSIENT_STATUS_CODES
    return isinstance(exc, (TimeoutError, ConnectionError))


def today_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Get ``[local midnight, local midnight + 1 day)`` around ``now``."""
    today = (now or datetime.now(timezone.utc)).astimezone().date()
    # Each end gets the UTC offset in force at that midnight (DST days)
    start = datetime.combine(today, time()).astimezone()
    end = datetime.combine(today + timedelta(days=1), time()).astimezone()
    return start, end


class GoogleCalendarClient:
    """Client for Google Calendar API.

    Example:
        ```python
        client = GoogleCalendarClient(credentials)

        # List calendars
        calendars = client.list_calendars()

        # Today's events, oldest first
        events = client.list_today("primary")
        ```
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        retries: int = 3,
        retry_wait: wait_base | None = None,
        service: Any = None,
    ):
        """Initialize the client.

        Args:
            credentials: Authorized Google credentials
            retries: Attempts per request before giving up
            retry_wait: Backoff between attempts (exponential by default)
            service: Prebuilt discovery service, mostly for tests
        """
        self.retries = retries
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=2, max=10)

        if service is None:
            service = build(
                "calendar", "v3", credentials=credentials, cache_discovery=False
            )
        self._service = service

    def _execute(self, request: Any) -> dict[str, Any]:
        """Execute an API request with retry logic.

        Raises:
            CalendarAPIError: If the request fails for good
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.retries),
            wait=self.retry_wait,
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )
        try:
            return retrying(request.execute)
        except HttpError as e:
            status = e.resp.status
            if status == 404:
                raise CalendarAPIError("Calendar not found", status_code=404) from e
            raise CalendarAPIError(
                f"Calendar API request failed: {status}", status_code=status
            ) from e
        except (TimeoutError, ConnectionError) as e:
            raise CalendarAPIError(f"Could not reach the Calendar API: {e}") from e

    def list_calendars(self, show_hidden: bool = True) -> list[CalendarInfo]:
        """List all calendars accessible to the user.

        Args:
            show_hidden: Include calendars hidden from the web UI

        Returns:
            List of CalendarInfo objects
        """
        calendars = []
        page_token = None

        while True:
            result = self._execute(
                self._service.calendarList().list(
                    pageToken=page_token, showHidden=show_hidden
                )
            )

            for item in result.get("items", []):
                calendars.append(CalendarInfo.from_api(item))

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Fetched %d calendars", len(calendars))
        return calendars

    def list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
        max_results: int = 250,
    ) -> list[Event]:
        """List events from a calendar, ascending by start time.

        Args:
            calendar_id: Calendar ID (use 'primary' for primary calendar)
            time_min: Lower bound for event end (exclusive)
            time_max: Upper bound for event start (exclusive)
            max_results: Page size

        Returns:
            Events with recurring events expanded into instances. Items that
            fail validation (bad timestamps, end before start) are skipped.
        """
        events = []
        page_token = None

        params: dict[str, Any] = {
            "calendarId": calendar_id,
            "maxResults": max_results,
            "singleEvents": True,  # Expand recurring events
            "orderBy": "startTime",
            "timeMin": time_min.isoformat(),
            "timeMax": time_max.isoformat(),
        }

        while True:
            if page_token:
                params["pageToken"] = page_token

            result = self._execute(self._service.events().list(**params))

            for item in result.get("items", []):
                if item.get("status") == "cancelled":
                    continue
                try:
                    events.append(Event.from_api(item))
                except ValueError as e:
                    logger.warning("Skipping malformed event %s: %s", item.get("id"), e)

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Fetched %d events from calendar %s", len(events), calendar_id)
        return events

    def list_today(self, calendar_id: str, now: datetime | None = None) -> list[Event]:
        """List the events of the local day containing ``now``."""
        time_min, time_max = today_window(now)
        return self.list_events(calendar_id, time_min, time_max)
