from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum

from hafas_board.domain.exceptions import ValidationError

NEGATION_MARKER = "!"
LISTING_SENTINELS = frozenset({"help", "list", "?"})


class BoardType(str, Enum):
    """Direction of a station board, sent as the boardType form field."""

    DEPARTURE = "dep"
    ARRIVAL = "arr"


class Language(str, Enum):
    """Response language. The value is the one-letter code used in the URL path."""

    GERMAN = "d"
    ENGLISH = "e"
    ITALIAN = "i"
    DUTCH = "n"

    @classmethod
    def parse(cls, value: str) -> Language:
        """Accept "de"/"en"/"it"/"nl" as well as the raw path codes."""
        key = value.strip().lower()
        if key in _LANGUAGE_ALIASES:
            return _LANGUAGE_ALIASES[key]
        raise ValidationError(f"Unsupported language: {value!r} (expected de, en, it or nl)")


_LANGUAGE_ALIASES = {
    "de": Language.GERMAN,
    "d": Language.GERMAN,
    "en": Language.ENGLISH,
    "e": Language.ENGLISH,
    "it": Language.ITALIAN,
    "i": Language.ITALIAN,
    "nl": Language.DUTCH,
    "n": Language.DUTCH,
}


class TransportMode(str, Enum):
    """The nine mode-of-transport categories, in backend order."""

    ICE = "ice"  # high-speed
    IC_EC = "ic_ec"  # intercity / eurocity
    D = "d"  # InterRegio and similar fast regional trains
    NV = "nv"  # Nahverkehr, RegionalExpress and slower
    S = "s"  # S-Bahn
    BUS = "bus"
    FERRY = "ferry"
    U = "u"  # U-Bahn
    TRAM = "tram"


DEFAULT_MODES: dict[TransportMode, bool] = {
    TransportMode.ICE: True,
    TransportMode.IC_EC: True,
    TransportMode.D: True,
    TransportMode.NV: True,
    TransportMode.S: True,
    TransportMode.BUS: False,
    TransportMode.FERRY: False,
    TransportMode.U: False,
    TransportMode.TRAM: False,
}


def is_listing_request(text: str | None) -> bool:
    """Return True when a mode list asks for the category names instead of a query."""
    if not text:
        return False
    return any(token.strip().lower() in LISTING_SENTINELS for token in text.split(","))


@dataclass(frozen=True)
class ModeFilter:
    """Mode-of-transport selection. None means "use the default for this category"."""

    ice: bool | None = None
    ic_ec: bool | None = None
    d: bool | None = None
    nv: bool | None = None
    s: bool | None = None
    bus: bool | None = None
    ferry: bool | None = None
    u: bool | None = None
    tram: bool | None = None
    # Names the backend does not know; passed through and ignored upstream.
    unknown: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str | None) -> ModeFilter:
        """Build a filter from a comma-separated token list such as "s,bus" or "!bus".

        Bare tokens select only the named categories; tokens prefixed with "!"
        select everything except the named ones. When both forms are mixed the
        base is all-off, bare tokens switch on and negated tokens switch off.
        Naming the same category both ways raises ValidationError.
        """
        tokens = [t.strip().lower() for t in (text or "").split(",") if t.strip()]
        if not tokens:
            return cls()

        include = [t for t in tokens if not t.startswith(NEGATION_MARKER)]
        exclude = [t[len(NEGATION_MARKER):] for t in tokens if t.startswith(NEGATION_MARKER)]

        both = set(include) & set(exclude)
        if both:
            raise ValidationError(
                f"Transport mode(s) both included and excluded: {', '.join(sorted(both))}"
            )

        known = {m.value for m in TransportMode}
        base = not include
        selection: dict[str, bool] = {m.value: base for m in TransportMode}
        unknown: list[str] = []
        for name in include:
            if name in known:
                selection[name] = True
            else:
                unknown.append(name)
        for name in exclude:
            if name in known:
                selection[name] = False
            else:
                unknown.append(name)
        return cls(**selection, unknown=tuple(unknown))

    def resolve(self) -> tuple[bool, ...]:
        """Merge with DEFAULT_MODES and return one flag per TransportMode, in order."""
        return resolve_modes(self)

    def bitmask(self) -> str:
        return "".join("1" if flag else "0" for flag in self.resolve())

    def enabled(self) -> list[TransportMode]:
        return [mode for mode, flag in zip(TransportMode, self.resolve()) if flag]

    def is_default(self) -> bool:
        return all(
            getattr(self, f.name) is None for f in fields(self) if f.name != "unknown"
        ) and not self.unknown


def resolve_modes(mode_filter: ModeFilter) -> tuple[bool, ...]:
    """Pure default merge: explicit values win, unset ones come from DEFAULT_MODES."""
    resolved = []
    for mode in TransportMode:
        value = getattr(mode_filter, mode.value)
        resolved.append(DEFAULT_MODES[mode] if value is None else value)
    return tuple(resolved)
