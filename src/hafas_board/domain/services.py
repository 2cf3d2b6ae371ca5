from __future__ import annotations

import re

from hafas_board.domain.entities import DepartureRecord, RawJourney

CENTURY_PREFIX = "20"
LINE_SEPARATOR = "#"
CANCELLED_SENTINELS = frozenset({"-1", "cancel"})

_SHORT_DATE = re.compile(r"^(\d{2}\.?\d{2}\.?)(\d{2})$")
_WHITESPACE = re.compile(r"\s+")


def expand_century(raw_date: str | None) -> str:
    """Insert a fixed "20" before a trailing 2-digit year.

    "01.01.15" -> "01.01.2015", "010115" -> "01012015". Anything that does not
    look like a short date is returned unchanged (None becomes "").
    The century is hard-coded; this is not calendar aware.
    """
    if not raw_date:
        return ""
    match = _SHORT_DATE.match(raw_date.strip())
    if match is None:
        return raw_date.strip()
    return match.group(1) + CENTURY_PREFIX + match.group(2)


def strip_line_suffix(train: str | None) -> str:
    """Drop the routing metadata the backend appends after "#", e.g. "ICE 691#ICE"."""
    if not train:
        return ""
    return collapse_whitespace(train.split(LINE_SEPARATOR, 1)[0])


def collapse_whitespace(text: str | None) -> str:
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def _parse_minutes(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_delay(raw_delay: str | None, raw_e_delay: str | None = None) -> tuple[int | None, bool]:
    """Return (delay_minutes, is_cancelled).

    The cancellation sentinel in the primary field wins. Otherwise the primary
    field is read as signed minutes, falling back to the secondary e_delay
    field. No usable value means None, not 0.
    """
    if raw_delay is not None and raw_delay.strip().lower() in CANCELLED_SENTINELS:
        return None, True
    delay = _parse_minutes(raw_delay)
    if delay is None:
        delay = _parse_minutes(raw_e_delay)
    return delay, False


def is_platform_changed(platform: str | None, new_platform: str | None) -> bool:
    """True when a replacement platform is given and differs from the scheduled one."""
    if not new_platform or not new_platform.strip():
        return False
    return new_platform.strip() != (platform or "").strip()


def build_departure(raw: RawJourney) -> DepartureRecord | None:
    """Normalize one raw journey. Returns None for filler rows without time or destination."""
    if not (raw.time and raw.destination):
        return None

    delay, cancelled = parse_delay(raw.delay, raw.e_delay)
    scheduled_platform = (raw.platform or "").strip()
    changed = is_platform_changed(raw.platform, raw.new_platform)
    platform = (raw.new_platform or "").strip() if changed else scheduled_platform

    return DepartureRecord(
        date=expand_century(raw.date),
        time=raw.time.strip(),
        line=strip_line_suffix(raw.train),
        destination=collapse_whitespace(raw.destination),
        platform=platform,
        scheduled_platform=scheduled_platform,
        is_platform_changed=changed,
        delay=delay,
        is_cancelled=cancelled,
        info=collapse_whitespace(raw.delay_reason),
        route_info=collapse_whitespace(raw.route_text),
        messages=tuple(collapse_whitespace(m) for m in raw.messages if m),
    )
