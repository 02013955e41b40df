"""Calendar integration module.

Fetches calendars and today's events from Google Calendar.

## Google Calendar API

Uses the Google Calendar API v3:
- https://developers.google.com/calendar/api/v3/reference

## Event Listing

Events are requested with ``singleEvents=true`` and ``orderBy=startTime`` for
the local day, so recurring events arrive as individual instances sorted by
start. Classification and link resolution rely on that order.
"""

from gcal_today.calendar.google_calendar import (
    CalendarAPIError,
    GoogleCalendarClient,
    today_window,
)

__all__ = [
    "GoogleCalendarClient",
    "CalendarAPIError",
    "today_window",
]
