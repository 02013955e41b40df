"""Terminal rendering of today's listing.

| state         | style  | suffix      |
|---------------|--------|-------------|
| ONGOING       | red    | (ONGOING)   |
| STARTING_SOON | yellow |             |
| ENDED         | dim    |             |
| UPCOMING      | plain  |             |
| UNDETERMINED  | plain  |             |
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, tzinfo

from rich.console import Console
from rich.text import Text

from gcal_today.models.event import Event
from gcal_today.schedule.classifier import EventState, classify

EMPTY_DAY_MESSAGE = "No events today."
RECURRING_MARKER = " ↻"

STATE_STYLES: dict[EventState, str] = {
    EventState.ONGOING: "red",
    EventState.STARTING_SOON: "yellow",
    EventState.ENDED: "dim",
    EventState.UPCOMING: "",
    EventState.UNDETERMINED: "",
}


def render_event_line(
    event: Event,
    state: EventState,
    index: int | None = None,
    tz: tzinfo | None = None,
) -> Text:
    """Render one listing line for an event in the given state."""
    line = f"{event.display_summary}: {event.display_start(tz)}"
    if index is not None:
        line = f"{index}. {line}"
        if event.is_recurring:
            line += RECURRING_MARKER
    if state is EventState.ONGOING:
        line += " (ONGOING)"
    return Text(line, style=STATE_STYLES[state])


def render_listing(
    events: Sequence[Event],
    now: datetime,
    soon_window: timedelta,
    numbered: bool = False,
    tz: tzinfo | None = None,
) -> list[Text]:
    """Render every event of the day, numbered from 1 if requested."""
    return [
        render_event_line(
            event,
            classify(event, now, soon_window),
            index=position if numbered else None,
            tz=tz,
        )
        for position, event in enumerate(events, start=1)
    ]


def print_listing(
    console: Console,
    events: Sequence[Event],
    now: datetime,
    soon_window: timedelta,
    numbered: bool = False,
    tz: tzinfo | None = None,
) -> None:
    """Write the listing to the console."""
    if not events:
        console.print(EMPTY_DAY_MESSAGE)
        return
    for line in render_listing(events, now, soon_window, numbered=numbered, tz=tz):
        console.print(line, soft_wrap=True)
