from __future__ import annotations

import dataclasses
import json

from mcp.server.fastmcp import FastMCP

from hafas_board.infrastructure.hafas_services import get_services


def services_catalog_json() -> str:
    return json.dumps(
        [dataclasses.asdict(service) for service in get_services()], ensure_ascii=False
    )


def register_resources(mcp: FastMCP) -> None:
    """Register the static service catalog. Called once during server setup."""

    @mcp.resource("hafas://services", mime_type="application/json")
    def services() -> str:
        """Known HAFAS installations with their endpoints and transport modes."""
        return services_catalog_json()
