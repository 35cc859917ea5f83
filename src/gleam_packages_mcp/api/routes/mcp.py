from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from gleam_packages_mcp.api.dependencies import get_dispatcher
from gleam_packages_mcp.core.protocol import MCPDispatcher

router = APIRouter(tags=["mcp"])


@router.post("/")
@router.post("/mcp")
async def mcp(
    request: Request,
    dispatcher: MCPDispatcher = Depends(get_dispatcher),
) -> Response:
    """JSON-RPC 2.0 endpoint for MCP clients."""
    reply = await dispatcher.handle_body(await request.body())
    if reply.status_code == 204:
        return Response(status_code=204)
    return Response(
        content=reply.body,
        status_code=reply.status_code,
        media_type=reply.media_type,
        headers=reply.headers,
    )
