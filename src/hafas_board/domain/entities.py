from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from hafas_board.domain.value_objects import BoardType, Language, ModeFilter

_BERLIN_TZ = ZoneInfo("Europe/Berlin")


@dataclass(frozen=True)
class Query:
    """A fully resolved station board request."""

    station: str
    date: date
    time: time
    board_type: BoardType
    language: Language
    mode_filter: ModeFilter
    url: str  # Board endpoint without the language suffix
    service: str | None  # Registry code; None when a custom URL was given


@dataclass
class RawJourney:
    """Attributes of one Journey node exactly as the backend sent them."""

    train: str | None  # prod, e.g. "ICE  691#ICE"
    time: str | None  # fpTime
    date: str | None  # fpDate, 2-digit year
    destination: str | None  # targetLoc; the origin on arrival boards
    platform: str | None
    new_platform: str | None  # newpl
    delay: str | None
    e_delay: str | None
    delay_reason: str | None
    route_text: str  # full text content of the node
    messages: list[str] = field(default_factory=list)  # HIMMessage headers


@dataclass(frozen=True)
class DepartureRecord:
    """A normalized arrival or departure row."""

    date: str  # DD.MM.YYYY
    time: str  # HH:MM
    line: str  # e.g. "ICE 691"
    destination: str  # origin on arrival boards
    platform: str  # new platform if changed, else scheduled
    scheduled_platform: str
    is_platform_changed: bool
    delay: int | None  # minutes; None when on time or unknown
    is_cancelled: bool
    info: str
    route_info: str
    messages: tuple[str, ...] = ()

    @property
    def scheduled(self) -> datetime | None:
        """Scheduled date and time in Europe/Berlin, or None if unparseable."""
        try:
            naive = datetime.strptime(f"{self.date} {self.time}", "%d.%m.%Y %H:%M")
        except ValueError:
            return None
        return naive.replace(tzinfo=_BERLIN_TZ)


@dataclass(frozen=True)
class StationCandidate:
    """A station suggested by the stop finder for an ambiguous name."""

    name: str
    id: str
