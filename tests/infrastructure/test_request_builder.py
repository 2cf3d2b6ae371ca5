"""Tests for query resolution and the board form."""
from __future__ import annotations

import logging
from datetime import date, time

import pytest
from freezegun import freeze_time

from hafas_board.domain.exceptions import UnknownServiceError, ValidationError
from hafas_board.domain.value_objects import BoardType, Language, ModeFilter
from hafas_board.infrastructure.request_builder import (
    PRODUCTS_FILTER,
    board_form,
    board_url,
    build_query,
    stopfinder_form,
)
from tests.factories import DB_BOARD_URL, make_query

# ---------------------------------------------------------------------------
# build_query
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("station", [None, "", "   "])
def test_build_query_requires_station(station: str | None) -> None:
    with pytest.raises(ValidationError, match="station"):
        build_query(station)


def test_build_query_defaults_to_db() -> None:
    query = build_query("Essen Hbf", board_date=date(2026, 2, 24), board_time=time(14, 0))
    assert query.service == "DB"
    assert query.url == DB_BOARD_URL
    assert query.board_type is BoardType.DEPARTURE
    assert query.language is Language.GERMAN
    assert query.mode_filter == ModeFilter()


@freeze_time("2026-02-24 13:00:00")
def test_build_query_defaults_to_now_in_berlin() -> None:
    query = build_query("Essen Hbf")
    assert query.date == date(2026, 2, 24)
    assert query.time == time(14, 0)


def test_build_query_service_lookup_is_case_insensitive() -> None:
    query = build_query("Alexanderplatz", service="vbb")
    assert query.service == "VBB"
    assert query.url == "https://fahrinfo.vbb.de/bin/stboard.exe"


def test_build_query_unknown_service_raises() -> None:
    with pytest.raises(UnknownServiceError) as exc_info:
        build_query("Essen Hbf", service="XYZ")
    assert exc_info.value.code == "XYZ"


def test_build_query_custom_url_bypasses_registry() -> None:
    query = build_query("Essen Hbf", service="XYZ", url="https://hafas.example.org/bin/stboard.exe/")
    assert query.service is None
    assert query.url == "https://hafas.example.org/bin/stboard.exe"


def test_build_query_custom_url_ignores_mode_filter(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        query = build_query(
            "Essen Hbf",
            url="https://hafas.example.org/bin/stboard.exe",
            mode_filter=ModeFilter.parse("bus"),
        )
    assert query.mode_filter == ModeFilter()
    assert "ignored" in caplog.text


def test_build_query_strips_station() -> None:
    assert build_query("  Essen Hbf ").station == "Essen Hbf"


# ---------------------------------------------------------------------------
# board_url / board_form
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("language", "suffix"),
    [
        (Language.GERMAN, "/dn"),
        (Language.ENGLISH, "/en"),
        (Language.ITALIAN, "/in"),
        (Language.DUTCH, "/nn"),
    ],
)
def test_board_url_language_suffix(language: Language, suffix: str) -> None:
    assert board_url(DB_BOARD_URL, language) == DB_BOARD_URL + suffix


def test_board_form_fields() -> None:
    form = board_form(make_query(board_type=BoardType.ARRIVAL))
    assert form == {
        "input": "Essen Hbf",
        "date": "24.02.2026",
        "time": "14:00",
        "boardType": "arr",
        "productsFilter": PRODUCTS_FILTER,
        "start": "yes",
        "L": "vs_java3",
    }


def test_stopfinder_form_appends_wildcard() -> None:
    form = stopfinder_form("Essen")
    assert form["REQ0JourneyStopsS0G"] == "Essen?"
    assert form["getstop"] == "1"
