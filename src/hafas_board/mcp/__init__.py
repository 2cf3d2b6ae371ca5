from __future__ import annotations

import httpx
from mcp.server.fastmcp import FastMCP

from hafas_board.application.board_service import StationBoardService
from hafas_board.infrastructure.hafas_client import DEFAULT_TIMEOUT, HafasClient
from hafas_board.infrastructure.hafas_services import DEFAULT_SERVICE
from hafas_board.mcp.resources import register_resources
from hafas_board.mcp.tools import register_tools


def create_mcp_app(
    timeout: float = DEFAULT_TIMEOUT, default_service: str = DEFAULT_SERVICE
) -> FastMCP:
    """Create and configure the FastMCP application with all services wired."""
    http_client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)
    hafas_client = HafasClient(http_client=http_client)

    board_svc = StationBoardService(hafas_client, default_service=default_service)

    mcp = FastMCP("HAFAS Station Board", stateless_http=True)
    register_tools(mcp, board_svc)
    register_resources(mcp)
    return mcp
