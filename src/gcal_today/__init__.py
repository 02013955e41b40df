"""Today's Google Calendar events from the command line.

Lists the events of the current day, styled by whether they have ended, are
ongoing or start soon, and opens the meeting link of the event you are most
likely trying to join.
"""

from gcal_today.models import Event
from gcal_today.schedule import (
    EventState,
    MeetingLink,
    ResolutionError,
    classify,
    resolve,
)

__version__ = "0.1.0"

__all__ = [
    "Event",
    "EventState",
    "MeetingLink",
    "ResolutionError",
    "classify",
    "resolve",
    "__version__",
]
