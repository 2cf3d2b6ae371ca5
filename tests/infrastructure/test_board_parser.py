"""Tests for the recovering board parser and the raw journey extraction."""
from __future__ import annotations

from unittest.mock import patch

from bs4 import ParserRejectedMarkup

from hafas_board.infrastructure.board_parser import (
    XML_DECLARATION,
    find_error,
    iter_journeys,
    parse_fragment,
    parse_html,
    wrap_fragment,
)
from tests.factories import encode_body

# ---------------------------------------------------------------------------
# wrap_fragment
# ---------------------------------------------------------------------------

def test_wrap_fragment_adds_declaration_and_root() -> None:
    wrapped = wrap_fragment(b"<Journey/><Journey/>")
    assert wrapped.startswith(XML_DECLARATION + b"<wrap>")
    assert wrapped.endswith(b"</wrap>")


def test_wrap_fragment_drops_backend_declaration() -> None:
    wrapped = wrap_fragment(b'<?xml version="1.0" encoding="iso-8859-1"?>\n<Journey/>')
    assert wrapped.count(b"<?xml") == 1
    assert b"iso-8859-15" in wrapped


def test_wrap_fragment_accepts_text() -> None:
    wrapped = wrap_fragment('<Journey targetLoc="Köln Hbf"/>')
    assert "Köln".encode("iso-8859-15") in wrapped


# ---------------------------------------------------------------------------
# parse_fragment
# ---------------------------------------------------------------------------

def test_parse_fragment_sibling_roots(board_body: bytes) -> None:
    tree = parse_fragment(board_body)
    assert tree is not None
    assert len(list(iter_journeys(tree))) == 5


def test_parse_fragment_decodes_legacy_encoding(board_body: bytes) -> None:
    journeys = list(iter_journeys(parse_fragment(board_body)))
    assert journeys[0].destination == "München Hbf"
    assert journeys[2].destination == "Köln Hbf"


def test_parse_fragment_recovers_from_unescaped_ampersand() -> None:
    body = encode_body(
        '<Journey fpTime="09:00" targetLoc="Essen Hbf" prod="RE 1#RE"/>\n'
        "Fahrplan & Auskunft\n"
        '<Journey fpTime="09:10" targetLoc="Bochum Hbf" prod="RE 6#RE"/>\n'
    )
    tree = parse_fragment(body)
    assert tree is not None
    times = [j.time for j in iter_journeys(tree)]
    assert times == ["09:00", "09:10"]


def test_parse_fragment_empty_body_has_no_journeys() -> None:
    tree = parse_fragment(b"")
    assert tree is not None
    assert list(iter_journeys(tree)) == []


def test_parse_fragment_rejected_markup_returns_none() -> None:
    with patch(
        "hafas_board.infrastructure.board_parser.BeautifulSoup",
        side_effect=ParserRejectedMarkup("boom"),
    ):
        assert parse_fragment(b"<Journey/>") is None


# ---------------------------------------------------------------------------
# find_error
# ---------------------------------------------------------------------------

def test_find_error(error_body: bytes) -> None:
    assert find_error(parse_fragment(error_body)) == ("Ihre Eingabe ist nicht eindeutig.", "H730")


def test_find_error_none_without_err(board_body: bytes) -> None:
    assert find_error(parse_fragment(board_body)) is None


def test_find_error_no_tree() -> None:
    assert find_error(None) is None


# ---------------------------------------------------------------------------
# iter_journeys
# ---------------------------------------------------------------------------

def test_iter_journeys_reads_raw_attributes(board_body: bytes) -> None:
    journeys = list(iter_journeys(parse_fragment(board_body)))
    second = journeys[1]
    assert second.train == "RE    1#RE"
    assert second.time == "14:12"
    assert second.date == "24.02.26"
    assert second.platform == "2"
    assert second.new_platform == "3"
    assert second.delay == "5"
    assert second.e_delay == "5"
    assert second.delay_reason == " Bauarbeiten "


def test_iter_journeys_collects_messages_in_order(board_body: bytes) -> None:
    journeys = list(iter_journeys(parse_fragment(board_body)))
    assert journeys[1].messages == [
        "Bauarbeiten zwischen Essen und Bochum",
        "Ersatzverkehr mit Bussen",
    ]
    assert journeys[0].messages == []


def test_iter_journeys_keeps_document_order(board_body: bytes) -> None:
    times = [j.time for j in iter_journeys(parse_fragment(board_body))]
    assert times == ["14:05", "14:12", "14:20", "14:30", "14:41"]


def test_iter_journeys_no_tree_yields_nothing() -> None:
    assert list(iter_journeys(None)) == []


# ---------------------------------------------------------------------------
# parse_html
# ---------------------------------------------------------------------------

def test_parse_html_finds_journeys_case_insensitively() -> None:
    html = (
        "<html><body><p>Abfahrt</p>"
        '<Journey fpTime="10:00" fpDate="01.03.26" targetLoc="Hamm" prod="RE 7#RE"></Journey>'
        "<br></body></html>"
    )
    journeys = list(iter_journeys(parse_html(html)))
    assert len(journeys) == 1
    assert journeys[0].time == "10:00"
    assert journeys[0].destination == "Hamm"
