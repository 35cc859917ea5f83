from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gleam_packages_mcp.__version__ import __version__
from gleam_packages_mcp.api.lifespan import lifespan
from gleam_packages_mcp.api.routes.health import router as health_router
from gleam_packages_mcp.api.routes.mcp import router as mcp_router
from gleam_packages_mcp.core.protocol import JSONRPCErrorCode

logger = logging.getLogger(__name__)


async def _unhandled_error(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while serving request")
    return JSONResponse(
        status_code=500,
        content={
            "jsonrpc": "2.0",
            "id": None,
            "error": {
                "code": JSONRPCErrorCode.INTERNAL_ERROR.value,
                "message": f"Internal server error: {exc}",
            },
        },
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Gleam Packages MCP",
        description="Documentation lookups for Gleam packages over the Model Context Protocol.",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_exception_handler(Exception, _unhandled_error)

    app.include_router(health_router, include_in_schema=False)
    app.include_router(mcp_router)

    return app
