"""Command line front end: print a HAFAS station board as a table.

Examples:
    hafas-board "Essen Hbf"
    hafas-board -a -t 18:30 -m s,u "Berlin Alexanderplatz" -s VBB
    hafas-board -m help
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence

import httpx

from hafas_board.application.board_service import StationBoardService
from hafas_board.domain.entities import DepartureRecord
from hafas_board.domain.exceptions import ValidationError
from hafas_board.domain.value_objects import (
    BoardType,
    Language,
    ModeFilter,
    is_listing_request,
)
from hafas_board.infrastructure.hafas_client import DEFAULT_TIMEOUT, HafasClient
from hafas_board.infrastructure.hafas_services import DEFAULT_SERVICE, get_services
from hafas_board.infrastructure.time_utils import parse_board_date, parse_board_time

EXIT_OK = 0
EXIT_BOARD_ERROR = 1
EXIT_USAGE = 2

HAFAS_TIMEOUT = float(os.environ.get("HAFAS_TIMEOUT", str(DEFAULT_TIMEOUT)))
HAFAS_SERVICE = os.environ.get("HAFAS_SERVICE", DEFAULT_SERVICE)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING").upper()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hafas-board",
        description="Show departures or arrivals at a station from a HAFAS backend.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("station", nargs="?", help='Station name, e.g. "Essen Hbf"')
    parser.add_argument("-d", "--date", help="Date as DD.MM.YYYY (default: today)")
    parser.add_argument("-t", "--time", help="Time as HH:MM (default: now)")
    parser.add_argument(
        "-a", "--arrivals", action="store_true", help="Show arrivals instead of departures"
    )
    parser.add_argument(
        "-l", "--lang", default="de", choices=["de", "en", "it", "nl"], help="Response language"
    )
    parser.add_argument(
        "-m",
        "--mot",
        help='Transport modes: "s,bus" shows only these, "!bus" all but these, "help" lists them',
    )
    parser.add_argument("-s", "--service", default=HAFAS_SERVICE, help="HAFAS service code")
    parser.add_argument("-u", "--url", help="Custom station board URL (disables --mot)")
    parser.add_argument("--list", action="store_true", help="List known HAFAS services")
    parser.add_argument(
        "--timeout", type=float, default=HAFAS_TIMEOUT, help="HTTP timeout in seconds"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log raw backend output")
    return parser


def format_delay(record: DepartureRecord) -> str:
    if record.is_cancelled:
        return "cancel"
    if record.delay is None:
        return ""
    return f"{record.delay:+d}" if record.delay else "0"


def render_table(records: Sequence[DepartureRecord]) -> list[str]:
    """Lay out records as aligned columns: time, delay, line, destination, platform."""
    rows = [
        (
            r.time,
            format_delay(r),
            r.line,
            r.destination,
            r.platform + ("*" if r.is_platform_changed else ""),
        )
        for r in records
    ]
    if not rows:
        return []
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]

    lines = []
    for record, row in zip(records, rows):
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        notes = [record.info] if record.info else []
        notes.extend(record.messages)
        for note in notes:
            lines.append(" " * (widths[0] + 2) + note)
    return lines


def list_services() -> list[str]:
    return [f"{s.code:<6} {s.name:<40} {s.url}" for s in get_services()]


async def run(args: argparse.Namespace, board_svc: StationBoardService) -> int:
    if is_listing_request(args.mot):
        for name in board_svc.list_transport_modes(args.service):
            print(name)
        return EXIT_OK

    board = await board_svc.get_station_board(
        args.station,
        board_date=parse_board_date(args.date) if args.date else None,
        board_time=parse_board_time(args.time) if args.time else None,
        board_type=BoardType.ARRIVAL if args.arrivals else BoardType.DEPARTURE,
        language=Language.parse(args.lang),
        mode_filter=ModeFilter.parse(args.mot),
        service=args.service,
        url=args.url,
    )

    if board.errstr:
        code = f" (code {board.errcode})" if board.errcode else ""
        print(f"Request error: {board.errstr}{code}", file=sys.stderr)
        candidates = await board.similar_stations()
        if candidates:
            print("Did you mean one of these?", file=sys.stderr)
            for candidate in candidates:
                print(f"  {candidate.name} ({candidate.id})", file=sys.stderr)
        return EXIT_BOARD_ERROR

    for line in render_table(board.results):
        print(line)
    return EXIT_OK


async def _main(args: argparse.Namespace) -> int:
    async with httpx.AsyncClient(timeout=args.timeout, follow_redirects=True) as http_client:
        board_svc = StationBoardService(HafasClient(http_client), default_service=args.service)
        return await run(args, board_svc)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.list:
        for line in list_services():
            print(line)
        return EXIT_OK

    if not args.station and not is_listing_request(args.mot):
        parser.print_usage(sys.stderr)
        print("hafas-board: error: a station is required", file=sys.stderr)
        return EXIT_USAGE

    try:
        return asyncio.run(_main(args))
    except (ValidationError, ValueError) as exc:
        print(f"hafas-board: error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
