from __future__ import annotations

from gleam_packages_mcp.core.protocol import MCPDispatcher
from gleam_packages_mcp.services import close_service, create_service

_dispatcher: MCPDispatcher | None = None


async def get_dispatcher() -> MCPDispatcher:
    """Return the shared ``MCPDispatcher``, creating it lazily on first call."""
    global _dispatcher  # noqa: PLW0603
    if _dispatcher is None:
        _dispatcher = MCPDispatcher(create_service())
    return _dispatcher


async def shutdown_dispatcher() -> None:
    global _dispatcher  # noqa: PLW0603
    if _dispatcher is not None:
        await close_service(_dispatcher.service)
        _dispatcher = None
