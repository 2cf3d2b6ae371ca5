"""Shared pytest fixtures for the HAFAS station board test suite."""
from __future__ import annotations

import pytest

from hafas_board.domain.entities import Query
from tests.factories import BOARD_XML, ERROR_XML, encode_body, make_query


@pytest.fixture
def board_body() -> bytes:
    """A multi-journey board body as the backend sends it (ISO-8859-15, no root)."""
    return encode_body(BOARD_XML)


@pytest.fixture
def error_body() -> bytes:
    """A backend reply carrying the ambiguous-station error."""
    return encode_body(ERROR_XML)


@pytest.fixture
def query() -> Query:
    return make_query()
