"""Command-line interface for today's calendar."""

from __future__ import annotations

import argparse
import logging
import sys
import webbrowser
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console

from gcal_today import __version__
from gcal_today.auth import (
    CredentialsError,
    load_credentials,
    logout,
    setup_client_secret,
)
from gcal_today.calendar import CalendarAPIError, GoogleCalendarClient
from gcal_today.config import Settings, get_settings
from gcal_today.rendering import print_listing
from gcal_today.schedule import ResolutionError, resolve

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RESOLUTION_ERROR = 1
EXIT_CREDENTIALS_ERROR = 3
EXIT_CALENDAR_ERROR = 4
EXIT_BROWSER_ERROR = 5

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class BrowserError(Exception):
    """Raised when no browser could be launched for a meeting link."""

    def __init__(self, url: str):
        super().__init__(f"Could not open a browser; join the meeting at {url}")
        self.url = url


def setup_logging(level: str) -> None:
    """Configure root logging to stderr."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gcal-today",
        description="Today's Google Calendar events and their meeting links",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--id",
        dest="calendar_id",
        default=None,
        help="ID of the calendar to use (defaults to 'primary')",
    )
    parser.add_argument(
        "-n",
        "--index",
        action="store_true",
        help="Number the events so they can be passed to 'meet'",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Meet command
    meet_parser = subparsers.add_parser(
        "meet", help="Open the meeting link of the current or next event"
    )
    meet_parser.add_argument(
        "event_index",
        nargs="?",
        type=int,
        default=None,
        help="1-based event number as shown by --index",
    )
    meet_parser.add_argument(
        "--id",
        dest="calendar_id",
        default=argparse.SUPPRESS,
        help="ID of the calendar to use (defaults to 'primary')",
    )
    meet_parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the link instead of opening it",
    )

    # Calendars command
    calendars_parser = subparsers.add_parser(
        "calendars", help="List available calendars"
    )
    calendars_parser.add_argument(
        "--id",
        dest="show_ids",
        action="store_true",
        help="Display the IDs of the calendars",
    )

    # Setup command
    setup_parser = subparsers.add_parser(
        "setup", help="Install the OAuth client secret"
    )
    setup_parser.add_argument(
        "secret",
        type=Path,
        help="Client secret JSON downloaded from Google Cloud Console",
    )

    # Logout command
    subparsers.add_parser("logout", help="Delete the cached access tokens")

    return parser


def _echo(console: Console, text: str) -> None:
    console.print(text, highlight=False, markup=False, soft_wrap=True)


def _make_client(settings: Settings) -> GoogleCalendarClient:
    credentials = load_credentials(settings)
    return GoogleCalendarClient(credentials, retries=settings.request_retries)


def _calendar_id(args: argparse.Namespace, settings: Settings) -> str:
    return getattr(args, "calendar_id", None) or settings.calendar_id


def cmd_list(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """List today's events with temporal styling."""
    now = datetime.now(timezone.utc)
    client = _make_client(settings)
    events = client.list_today(_calendar_id(args, settings), now=now)

    soon_window = settings.index_soon_window if args.index else settings.soon_window
    print_listing(console, events, now, soon_window, numbered=args.index)
    return EXIT_OK


def cmd_meet(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """Resolve and open a meeting link."""
    now = datetime.now(timezone.utc)
    client = _make_client(settings)
    events = client.list_today(_calendar_id(args, settings), now=now)

    link = resolve(events, now, explicit_index=args.event_index)
    logger.info("Selected event %d via %s", link.index, link.path.value)

    if args.print_only:
        _echo(console, link.url)
        return EXIT_OK

    _echo(console, f"Opening {link.event.display_summary}: {link.url}")
    if not webbrowser.open(link.url):
        raise BrowserError(link.url)
    return EXIT_OK


def cmd_calendars(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """List the user's calendars by name or ID."""
    client = _make_client(settings)
    for calendar in client.list_calendars(show_hidden=True):
        _echo(console, calendar.id if args.show_ids else calendar.summary)
    return EXIT_OK


def cmd_setup(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """Install the OAuth client secret."""
    path = setup_client_secret(args.secret, settings)
    _echo(console, f"Client secret installed to {path}")
    return EXIT_OK


def cmd_logout(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """Delete cached tokens."""
    logout(settings)
    return EXIT_OK


COMMANDS = {
    None: cmd_list,
    "meet": cmd_meet,
    "calendars": cmd_calendars,
    "setup": cmd_setup,
    "logout": cmd_logout,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    console = Console()
    err_console = Console(stderr=True)

    try:
        return COMMANDS[args.command](args, settings, console)
    except ResolutionError as e:
        logger.debug("Resolution failed: %s", e.code)
        _echo(err_console, f"error: {e.message}")
        return EXIT_RESOLUTION_ERROR
    except CredentialsError as e:
        _echo(err_console, f"error: {e}")
        return EXIT_CREDENTIALS_ERROR
    except CalendarAPIError as e:
        _echo(err_console, f"error: {e}")
        return EXIT_CALENDAR_ERROR
    except BrowserError as e:
        _echo(err_console, f"error: {e}")
        return EXIT_BROWSER_ERROR


if __name__ == "__main__":
    sys.exit(main())
