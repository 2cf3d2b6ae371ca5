from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx

from hafas_board.domain.entities import Query
from hafas_board.domain.exceptions import ApiError
from hafas_board.domain.value_objects import Language
from hafas_board.infrastructure.board_parser import LEGACY_ENCODING
from hafas_board.infrastructure.headers import make_headers
from hafas_board.infrastructure.request_builder import board_form, board_url, stopfinder_form

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0  # seconds

_SUGGESTIONS = re.compile(r"SLs\.sls\s*=\s*(\{.*\})\s*;\s*SLs\.showSuggestion", re.DOTALL)


class HafasClient:
    """HTTP client for HAFAS bhftafel/stboard installations.

    Performs exactly one request per call; there is no retry and no caching.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def post_station_board(self, query: Query) -> bytes:
        """POST <url>/<lang>n with the board form, return the raw body.

        Raises ApiError on non-2xx status; httpx.HTTPError on transport failures.
        """
        url = board_url(query.url, query.language)
        response = await self._http.post(
            url, data=board_form(query), headers=make_headers(query.language)
        )
        self._raise_for_status(response)
        logger.debug("POST %s -> %d (%d bytes)", url, response.status_code, len(response.content))
        return response.content

    async def get_stop_suggestions(
        self, stopfinder: str, station: str, language: Language = Language.GERMAN
    ) -> list[dict[str, Any]]:
        """POST the ajax-getstop endpoint and return its raw suggestion dicts.

        The endpoint answers with JavaScript: SLs.sls={...};SLs.showSuggestion();
        Raises ValueError when the payload is not in that shape.
        """
        url = f"{stopfinder}/{language.value}n"
        response = await self._http.post(
            url, data=stopfinder_form(station), headers=make_headers(language)
        )
        self._raise_for_status(response)
        text = response.content.decode(response.charset_encoding or LEGACY_ENCODING, "replace")
        match = _SUGGESTIONS.search(text)
        if match is None:
            raise ValueError(f"Unexpected stop finder payload from {url}")
        data: dict[str, Any] = json.loads(match.group(1))
        suggestions: list[dict[str, Any]] = data.get("suggestions", [])
        return suggestions

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise ApiError for non-2xx responses, using the HTTP status line as message."""
        if not response.is_success:
            raise ApiError(
                response.status_code, f"{response.status_code} {response.reason_phrase}".strip()
            )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
