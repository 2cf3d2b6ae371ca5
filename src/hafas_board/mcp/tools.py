from __future__ import annotations

import dataclasses
import json
import logging
from datetime import date, time

import httpx
from mcp import types
from mcp.server.fastmcp import FastMCP

from hafas_board.application.board_service import StationBoardService
from hafas_board.application.station_board import StationBoard
from hafas_board.domain.exceptions import ApiError, UnknownServiceError, ValidationError
from hafas_board.domain.value_objects import (
    BoardType,
    Language,
    ModeFilter,
    is_listing_request,
)
from hafas_board.infrastructure.time_utils import (
    format_board_date,
    format_board_time,
    parse_board_date,
    parse_board_time,
)

logger = logging.getLogger(__name__)

_RESULT_URI = "mcp://hafas-board/result"


def _as_resource(json_str: str) -> list[types.EmbeddedResource]:
    """Wrap a JSON string as an embedded resource so the LLM does not narrate it."""
    return [
        types.EmbeddedResource(
            type="resource",
            resource=types.TextResourceContents(
                uri=_RESULT_URI,  # type: ignore[arg-type]
                mimeType="application/json",
                text=json_str,
            ),
        )
    ]


def _error_json(message: str, **extra: object) -> str:
    return json.dumps({"error": message, **extra}, ensure_ascii=False)


def _handle_exception(exc: Exception) -> list[types.EmbeddedResource]:
    if isinstance(exc, UnknownServiceError):
        return _as_resource(_error_json(str(exc), service=exc.code))
    if isinstance(exc, ValidationError):
        return _as_resource(_error_json(str(exc)))
    if isinstance(exc, ApiError):
        return _as_resource(_error_json(str(exc)))
    if isinstance(exc, httpx.TimeoutException):
        return _as_resource(_error_json("Request timed out. Please try again."))
    if isinstance(exc, ValueError):
        return _as_resource(_error_json(str(exc)))
    logger.exception("Unexpected error in MCP tool: %s", exc)
    return _as_resource(_error_json("An unexpected error occurred."))


def _parse_date(date_str: str | None) -> date | None:
    return parse_board_date(date_str) if date_str else None


def _parse_time(time_str: str | None) -> time | None:
    return parse_board_time(time_str) if time_str else None


async def _board_json(board: StationBoard, max_results: int) -> str:
    if board.errstr:
        candidates = await board.similar_stations()
        return _error_json(
            board.errstr,
            code=board.errcode,
            similarStations=[dataclasses.asdict(c) for c in candidates],
        )

    query = board.query
    records = board.results[:max_results]
    result = {
        "station": query.station if query else None,
        "service": query.service if query else None,
        "boardType": board.board_type.value,
        "date": format_board_date(query.date) if query else None,
        "time": format_board_time(query.time) if query else None,
        "departures": [dataclasses.asdict(r) for r in records],
        "count": len(records),
    }
    return json.dumps(result, default=str, ensure_ascii=False)


def register_tools(mcp: FastMCP, board_svc: StationBoardService) -> None:
    """Bind all @mcp.tool decorators. Called once during server setup."""

    @mcp.tool()
    async def list_services() -> list[types.EmbeddedResource]:
        """List the known HAFAS installations (code, name, endpoint, transport modes)."""
        services = [dataclasses.asdict(s) for s in board_svc.list_services()]
        return _as_resource(json.dumps(services, ensure_ascii=False))

    @mcp.tool()
    async def list_transport_modes(service: str | None = None) -> list[types.EmbeddedResource]:
        """List the transport mode names a service understands.

        Args:
            service: Service code such as "DB" or "VBB". Defaults to the server's default.
        """
        try:
            modes = board_svc.list_transport_modes(service)
            return _as_resource(json.dumps({"modes": modes}, ensure_ascii=False))
        except Exception as exc:
            return _handle_exception(exc)

    @mcp.tool()
    async def get_station_board(
        station: str,
        date_str: str | None = None,
        time_str: str | None = None,
        arrivals: bool = False,
        language: str = "de",
        transport_modes: str | None = None,
        service: str | None = None,
        url: str | None = None,
        max_results: int = 30,
    ) -> list[types.EmbeddedResource]:
        """Get departures (or arrivals) at a station from a HAFAS backend.

        Records are in backend order, not sorted by time.

        Args:
            station: Station name, e.g. "Essen Hbf".
            date_str: Board date as DD.MM.YYYY. Defaults to today (Europe/Berlin).
            time_str: Board time as HH:MM. Defaults to now.
            arrivals: Show arrivals instead of departures.
            language: One of de, en, it, nl.
            transport_modes: Comma-separated modes, e.g. "s,bus" (only these) or
                             "!bus" (all but these). "help" lists the valid names.
            service: HAFAS service code, e.g. "DB". Ignored when url is given.
            url: Custom station board endpoint. Disables the transport mode filter.
            max_results: Maximum number of records to return (default 30).
        """
        try:
            if not station.strip():
                return _as_resource(_error_json("Station name cannot be empty"))
            if is_listing_request(transport_modes):
                modes = board_svc.list_transport_modes(service)
                return _as_resource(json.dumps({"modes": modes}, ensure_ascii=False))

            board = await board_svc.get_station_board(
                station.strip(),
                board_date=_parse_date(date_str),
                board_time=_parse_time(time_str),
                board_type=BoardType.ARRIVAL if arrivals else BoardType.DEPARTURE,
                language=Language.parse(language),
                mode_filter=ModeFilter.parse(transport_modes),
                service=service,
                url=url,
            )
            return _as_resource(await _board_json(board, max_results))
        except Exception as exc:
            return _handle_exception(exc)
