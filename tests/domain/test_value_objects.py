"""Tests for the transport mode filter and the request enums."""
from __future__ import annotations

import pytest

from hafas_board.domain.exceptions import ValidationError
from hafas_board.domain.value_objects import (
    DEFAULT_MODES,
    Language,
    ModeFilter,
    TransportMode,
    is_listing_request,
    resolve_modes,
)

# ---------------------------------------------------------------------------
# ModeFilter defaults
# ---------------------------------------------------------------------------

def test_empty_filter_resolves_to_defaults() -> None:
    resolved = ModeFilter().resolve()
    assert resolved == (True, True, True, True, True, False, False, False, False)


def test_default_bitmask() -> None:
    assert ModeFilter().bitmask() == "111110000"


def test_resolve_keeps_category_order() -> None:
    assert len(resolve_modes(ModeFilter())) == len(TransportMode)
    assert list(DEFAULT_MODES) == list(TransportMode)


def test_explicit_value_overrides_default() -> None:
    mode_filter = ModeFilter(bus=True, ice=False)
    resolved = dict(zip(TransportMode, mode_filter.resolve()))
    assert resolved[TransportMode.BUS] is True
    assert resolved[TransportMode.ICE] is False
    assert resolved[TransportMode.S] is True  # still default


def test_is_default() -> None:
    assert ModeFilter().is_default()
    assert not ModeFilter(bus=True).is_default()
    assert not ModeFilter(unknown=("maglev",)).is_default()


# ---------------------------------------------------------------------------
# ModeFilter.parse
# ---------------------------------------------------------------------------

def test_inclusive_list_selects_only_named() -> None:
    mode_filter = ModeFilter.parse("s,bus")
    enabled = mode_filter.enabled()
    assert enabled == [TransportMode.S, TransportMode.BUS]
    assert mode_filter.bitmask() == "000011000"


def test_exclusive_list_selects_all_but_named() -> None:
    mode_filter = ModeFilter.parse("!bus")
    resolved = dict(zip(TransportMode, mode_filter.resolve()))
    assert resolved[TransportMode.BUS] is False
    assert all(flag for mode, flag in resolved.items() if mode is not TransportMode.BUS)


def test_exclusive_list_enables_non_default_categories() -> None:
    """'everything except' includes tram/ferry/u even though they default to off."""
    mode_filter = ModeFilter.parse("!ice")
    assert TransportMode.TRAM in mode_filter.enabled()
    assert TransportMode.ICE not in mode_filter.enabled()


def test_mixed_forms_start_from_all_off() -> None:
    mode_filter = ModeFilter.parse("s,u,!bus")
    assert mode_filter.enabled() == [TransportMode.S, TransportMode.U]


def test_parse_is_case_and_whitespace_insensitive() -> None:
    assert ModeFilter.parse(" S , Bus ").enabled() == [TransportMode.S, TransportMode.BUS]


def test_parse_empty_gives_default_filter() -> None:
    assert ModeFilter.parse(None) == ModeFilter()
    assert ModeFilter.parse("") == ModeFilter()
    assert ModeFilter.parse(" , ") == ModeFilter()


def test_unknown_names_are_passed_through() -> None:
    mode_filter = ModeFilter.parse("s,maglev,!zeppelin")
    assert mode_filter.unknown == ("maglev", "zeppelin")
    assert mode_filter.enabled() == [TransportMode.S]


def test_same_category_included_and_excluded_raises() -> None:
    with pytest.raises(ValidationError, match="bus"):
        ModeFilter.parse("bus,!bus")


# ---------------------------------------------------------------------------
# is_listing_request
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text", ["help", "list", "?", "s,help", "HELP"])
def test_listing_sentinels(text: str) -> None:
    assert is_listing_request(text) is True


@pytest.mark.parametrize("text", [None, "", "s,bus", "!bus"])
def test_not_a_listing_request(text: str | None) -> None:
    assert is_listing_request(text) is False


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------

def test_language_parse_iso_codes() -> None:
    assert Language.parse("de") is Language.GERMAN
    assert Language.parse("EN") is Language.ENGLISH
    assert Language.parse("it") is Language.ITALIAN
    assert Language.parse("nl") is Language.DUTCH


def test_language_parse_path_codes() -> None:
    assert Language.parse("n") is Language.DUTCH


def test_language_parse_unknown_raises() -> None:
    with pytest.raises(ValidationError, match="Unsupported language"):
        Language.parse("fr")
