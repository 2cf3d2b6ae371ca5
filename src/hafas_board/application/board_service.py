from __future__ import annotations

import logging
from datetime import date, time

import httpx

from hafas_board.application.station_board import StationBoard
from hafas_board.domain.exceptions import ApiError, UnknownServiceError
from hafas_board.domain.value_objects import BoardType, Language, ModeFilter
from hafas_board.infrastructure.hafas_client import HafasClient
from hafas_board.infrastructure.hafas_services import (
    DEFAULT_SERVICE,
    HafasService,
    get_service,
    get_services,
)
from hafas_board.infrastructure.request_builder import build_query

logger = logging.getLogger(__name__)


class StationBoardService:
    """Builds queries, performs the single board request and wraps the outcome."""

    def __init__(self, client: HafasClient, default_service: str = DEFAULT_SERVICE) -> None:
        self._client = client
        self._default_service = default_service

    async def get_station_board(
        self,
        station: str | None,
        board_date: date | None = None,
        board_time: time | None = None,
        board_type: BoardType = BoardType.DEPARTURE,
        language: Language = Language.GERMAN,
        mode_filter: ModeFilter | None = None,
        service: str | None = None,
        url: str | None = None,
    ) -> StationBoard:
        """Query one station board.

        Steps:
        1. Validate and resolve options into a Query (raises ValidationError
           before any network access)
        2. POST the board form once
        3. Transport failures -> StationBoard with errstr set, no exception
        4. Otherwise recover the XML tree and check it for a backend error
        """
        query = build_query(
            station,
            board_date=board_date,
            board_time=board_time,
            board_type=board_type,
            language=language,
            mode_filter=mode_filter,
            service=None if url else (service or self._default_service),
            url=url,
        )

        stopfinder = None
        if query.service is not None:
            hafas_service = get_service(query.service)
            stopfinder = hafas_service.stopfinder if hafas_service else None

        try:
            body = await self._client.post_station_board(query)
        except ApiError as exc:
            logger.info("Station board request for %r failed: %s", query.station, exc)
            return StationBoard.from_transport_error(query, str(exc))
        except httpx.HTTPError as exc:
            logger.info("Station board request for %r failed: %r", query.station, exc)
            return StationBoard.from_transport_error(query, _describe_transport_error(exc))

        board = StationBoard.from_response(query, body, client=self._client, stopfinder=stopfinder)
        if board.errstr:
            logger.info("Backend reported %s for %r: %s", board.errcode, query.station, board.errstr)
        return board

    def list_services(self) -> list[HafasService]:
        return get_services()

    def list_transport_modes(self, service: str | None = None) -> list[str]:
        """Return the category names the given (or default) service understands."""
        code = service or self._default_service
        hafas_service = get_service(code)
        if hafas_service is None:
            raise UnknownServiceError(code)
        return list(hafas_service.productbits)


def _describe_transport_error(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return f"Request timed out: {exc}" if str(exc) else "Request timed out"
    return str(exc) or type(exc).__name__
