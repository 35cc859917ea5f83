"""FastMCP server exposing the package documentation tools over stdio/SSE."""

from __future__ import annotations

import json
from typing import Any

from fastmcp import FastMCP

from gleam_packages_mcp.core.tools import TOOLS_BY_NAME, PackageDocsService


def create_mcp_server(service: PackageDocsService) -> FastMCP:
    """Create a FastMCP server wired to the given service."""

    mcp = FastMCP("gleam-packages", instructions="Look up documentation for Gleam packages published on hex.pm.")

    async def _call(tool: str, **arguments: Any) -> str:
        result = await service.call(TOOLS_BY_NAME[tool], arguments)
        return result.text

    @mcp.tool()
    async def search_packages(query: str) -> str:
        """Search hex.pm for Gleam packages."""
        return await _call("search_packages", query=query)

    @mcp.tool()
    async def get_package_info(package_name: str) -> str:
        """Get metadata for a package: description, versions, licenses, links."""
        return await _call("get_package_info", package_name=package_name)

    @mcp.tool()
    async def get_modules(package_name: str) -> str:
        """List the public modules of a package."""
        return await _call("get_modules", package_name=package_name)

    @mcp.tool()
    async def get_module_info(package_name: str, module_name: str) -> str:
        """Get the documentation, types, constants, type aliases and functions of one module."""
        return await _call("get_module_info", package_name=package_name, module_name=module_name)

    @mcp.tool()
    async def search_functions(package_name: str, query: str, limit: int = 50) -> str:
        """Search the functions of a package by name, documentation or signature."""
        return await _call("search_functions", package_name=package_name, query=query, limit=limit)

    @mcp.tool()
    async def search_types(package_name: str, query: str, limit: int = 50) -> str:
        """Search the types of a package by name, documentation or signature."""
        return await _call("search_types", package_name=package_name, query=query, limit=limit)

    @mcp.tool()
    async def get_package_releases(package_name: str) -> str:
        """List the releases of a package, including retirement notices."""
        return await _call("get_package_releases", package_name=package_name)

    @mcp.resource("gleam://packages", mime_type="application/json")
    async def packages() -> str:
        """Gleam packages published on hex.pm."""
        return json.dumps({"packages": await service.read_packages_resource()})

    return mcp
