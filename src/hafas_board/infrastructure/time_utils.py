from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

BERLIN_TZ: ZoneInfo = ZoneInfo("Europe/Berlin")

BOARD_DATE_FORMAT = "%d.%m.%Y"
BOARD_TIME_FORMAT = "%H:%M"


def now_berlin() -> datetime:
    """Return the current moment as a timezone-aware datetime in Europe/Berlin."""
    return datetime.now(tz=BERLIN_TZ)


def format_board_date(d: date) -> str:
    """Return date string in DD.MM.YYYY format (for the date form field)."""
    return d.strftime(BOARD_DATE_FORMAT)


def format_board_time(t: time) -> str:
    """Return time string in HH:MM format (for the time form field)."""
    return t.strftime(BOARD_TIME_FORMAT)


def parse_board_date(s: str) -> date:
    """Parse a user supplied DD.MM.YYYY date.

    Raises ValueError on empty or unparseable input.
    """
    if not s or not s.strip():
        raise ValueError("Empty date string")
    try:
        return datetime.strptime(s.strip(), BOARD_DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date {s!r}, expected DD.MM.YYYY")


def parse_board_time(s: str) -> time:
    """Parse a user supplied HH:MM time.

    Raises ValueError on empty or unparseable input.
    """
    if not s or not s.strip():
        raise ValueError("Empty time string")
    try:
        return datetime.strptime(s.strip(), BOARD_TIME_FORMAT).time()
    except ValueError:
        raise ValueError(f"Invalid time {s!r}, expected HH:MM")
