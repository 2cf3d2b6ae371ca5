from __future__ import annotations

import logging
from datetime import date, time

from hafas_board.domain.entities import Query
from hafas_board.domain.exceptions import UnknownServiceError, ValidationError
from hafas_board.domain.value_objects import BoardType, Language, ModeFilter
from hafas_board.infrastructure.hafas_services import DEFAULT_SERVICE, get_service
from hafas_board.infrastructure.time_utils import (
    format_board_date,
    format_board_time,
    now_berlin,
)

logger = logging.getLogger(__name__)

PRODUCTS_FILTER = "11111111111111"
RENDERING_MODE = "vs_java3"  # "L" parameter: selects the XML-ish output


def build_query(
    station: str | None,
    board_date: date | None = None,
    board_time: time | None = None,
    board_type: BoardType = BoardType.DEPARTURE,
    language: Language = Language.GERMAN,
    mode_filter: ModeFilter | None = None,
    service: str | None = None,
    url: str | None = None,
) -> Query:
    """Validate options and resolve defaults into an immutable Query.

    Runs before any network access. A custom url bypasses the service
    registry; a mode filter given together with it is ignored with a warning.
    """
    if station is None or not station.strip():
        raise ValidationError("You need to specify a station")

    mode_filter = mode_filter or ModeFilter()

    if url:
        if not mode_filter.is_default():
            logger.warning("Mode filter is ignored when a custom URL is given (%s)", url)
            mode_filter = ModeFilter()
        endpoint = url.rstrip("/")
        service_code = None
    else:
        code = service or DEFAULT_SERVICE
        hafas_service = get_service(code)
        if hafas_service is None:
            raise UnknownServiceError(code)
        endpoint = hafas_service.url
        service_code = hafas_service.code

    if mode_filter.unknown:
        logger.debug("Passing through unknown transport modes: %s", ", ".join(mode_filter.unknown))

    now = now_berlin()
    return Query(
        station=station.strip(),
        date=board_date if board_date is not None else now.date(),
        time=board_time if board_time is not None else now.time().replace(second=0, microsecond=0),
        board_type=board_type,
        language=language,
        mode_filter=mode_filter,
        url=endpoint,
        service=service_code,
    )


def board_url(base_url: str, language: Language) -> str:
    """Return the POST target: the fixed path suffix selects the response language."""
    return f"{base_url}/{language.value}n"


def board_form(query: Query) -> dict[str, str]:
    """Return the form fields for a station board POST."""
    return {
        "input": query.station,
        "date": format_board_date(query.date),
        "time": format_board_time(query.time),
        "boardType": query.board_type.value,
        "productsFilter": PRODUCTS_FILTER,
        "start": "yes",  # only needs to be present
        "L": RENDERING_MODE,
    }


def stopfinder_form(station: str) -> dict[str, str]:
    """Return the form fields for an ajax-getstop suggestion lookup."""
    return {
        "getstop": "1",
        "js": "true",
        "REQ0JourneyStopsS0A": "255",
        "REQ0JourneyStopsS0G": f"{station}?",
    }
