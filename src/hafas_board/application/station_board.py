from __future__ import annotations

import logging
from functools import cached_property

import httpx
from bs4 import BeautifulSoup

from hafas_board.domain.entities import DepartureRecord, Query, StationCandidate
from hafas_board.domain.exceptions import ApiError
from hafas_board.domain.services import build_departure
from hafas_board.domain.value_objects import BoardType
from hafas_board.infrastructure.board_parser import (
    find_error,
    iter_journeys,
    parse_fragment,
    parse_html,
)
from hafas_board.infrastructure.hafas_client import HafasClient

logger = logging.getLogger(__name__)

AMBIGUOUS_STATION = "H730"


class StationBoard:
    """The outcome of one station board query.

    Either errstr is set (transport or backend error) and results is empty, or
    errstr is None and results holds the records in backend document order.
    Records are not sorted; sort by DepartureRecord.scheduled if needed.
    """

    def __init__(
        self,
        query: Query | None,
        tree: BeautifulSoup | None = None,
        errstr: str | None = None,
        errcode: str | None = None,
        board_type: BoardType | None = None,
        client: HafasClient | None = None,
        stopfinder: str | None = None,
    ) -> None:
        self.query = query
        self._tree = tree
        self._errstr = errstr
        self._errcode = errcode
        self._board_type = board_type or (query.board_type if query else BoardType.DEPARTURE)
        self._client = client
        self._stopfinder = stopfinder
        self._candidates: list[StationCandidate] | None = None

    @classmethod
    def from_response(
        cls,
        query: Query,
        body: bytes,
        client: HafasClient | None = None,
        stopfinder: str | None = None,
    ) -> StationBoard:
        """Recover the tree from a raw backend body and check it for an Err node."""
        tree = parse_fragment(body)
        errstr, errcode = _error_fields(tree)
        return cls(query, tree, errstr, errcode, client=client, stopfinder=stopfinder)

    @classmethod
    def from_html(cls, html: bytes | str, board_type: BoardType = BoardType.DEPARTURE) -> StationBoard:
        """Build a board from an HTML page saved from a non-XML installation."""
        tree = parse_html(html)
        errstr, errcode = _error_fields(tree)
        return cls(None, tree, errstr, errcode, board_type=board_type)

    @classmethod
    def from_transport_error(cls, query: Query, message: str) -> StationBoard:
        return cls(query, errstr=message)

    @property
    def errstr(self) -> str | None:
        return self._errstr

    @property
    def errcode(self) -> str | None:
        return self._errcode

    @property
    def board_type(self) -> BoardType:
        return self._board_type

    @property
    def is_ambiguous(self) -> bool:
        return self._errcode == AMBIGUOUS_STATION

    @cached_property
    def results(self) -> tuple[DepartureRecord, ...]:
        """Extract and normalize all journeys. Computed once per board."""
        if self._errstr is not None:
            return ()
        records = []
        for raw in iter_journeys(self._tree):
            record = build_departure(raw)
            if record is not None:
                records.append(record)
        logger.debug("Extracted %d records", len(records))
        return tuple(records)

    async def similar_stations(self) -> list[StationCandidate]:
        """Best-effort station suggestions for an ambiguous (H730) station name.

        Returns an empty list for any other outcome, when the service has no
        stop finder, or when the lookup fails.
        """
        if self._candidates is not None:
            return self._candidates
        if not self.is_ambiguous or self.query is None:
            return []
        if self._client is None or self._stopfinder is None:
            return []

        try:
            raw = await self._client.get_stop_suggestions(
                self._stopfinder, self.query.station, self.query.language
            )
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            logger.warning("Station suggestion lookup failed for %r: %s", self.query.station, exc)
            raw = []

        self._candidates = [
            StationCandidate(name=item.get("value", ""), id=str(item.get("extId", "")))
            for item in raw
            if item.get("value")
        ]
        return self._candidates


def _error_fields(tree: BeautifulSoup | None) -> tuple[str | None, str | None]:
    error = find_error(tree)
    if error is None:
        return None, None
    text, code = error
    if not text:
        text = f"Backend error (code {code})" if code else "Backend error"
    return text, code or None
