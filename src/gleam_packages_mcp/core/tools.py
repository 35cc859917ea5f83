"""MCP tool definitions and the read-through service that executes them."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gleam_packages_mcp.core import formatting
from gleam_packages_mcp.core.errors import CacheWriteError, ToolArgumentError, ToolExecutionError
from gleam_packages_mcp.core.hex import decode_package_info, decode_package_releases, decode_package_search
from gleam_packages_mcp.core.interface import decode_package_interface
from gleam_packages_mcp.core.ports.cache import CacheStore
from gleam_packages_mcp.core.ports.registry import PackageRegistry
from gleam_packages_mcp.core.ports.tasks import TaskSpawner
from gleam_packages_mcp.core.search import find_functions, find_types
from gleam_packages_mcp.models import PackageInterface

logger = logging.getLogger(__name__)

T = TypeVar("T")

PACKAGE_TTL = 3600
SEARCH_TTL = 3600
INTERFACE_TTL = 86400

GLEAM_PACKAGES_QUERY = "build_tools:gleam"


def package_key(name: str) -> str:
    return f"pkg:{name}"


def search_key(query: str) -> str:
    return f"search:{query}"


def interface_key(name: str) -> str:
    return f"interface:{name}"


# ---------------------------------------------------------------------------
# Tool arguments
# ---------------------------------------------------------------------------


class _Arguments(BaseModel):
    model_config = ConfigDict(strict=True)


class SearchPackagesArgs(_Arguments):
    query: str = Field(description="Search terms, matched against package names and descriptions")


class PackageArgs(_Arguments):
    package_name: str = Field(description="Name of the package on hex.pm, e.g. gleam_stdlib")


class ModuleArgs(PackageArgs):
    module_name: str = Field(description="Module path within the package, e.g. gleam/list")


class PackageSearchArgs(PackageArgs):
    query: str = Field(description="Case-insensitive text matched against names, docs and signatures")
    limit: int = Field(50, ge=1, le=500, description="Maximum number of matches to return")


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    arguments: type[_Arguments]

    def definition(self) -> dict[str, Any]:
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        return {"name": self.name, "description": self.description, "inputSchema": schema}

    def parse(self, arguments: Any) -> Any:
        try:
            return self.arguments.model_validate(arguments)
        except ValidationError as exc:
            raise ToolArgumentError(self.name) from exc


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec("search_packages", "Search hex.pm for Gleam packages.", SearchPackagesArgs),
    ToolSpec("get_package_info", "Get metadata for a package: description, versions, licenses, links.", PackageArgs),
    ToolSpec("get_modules", "List the public modules of a package.", PackageArgs),
    ToolSpec(
        "get_module_info",
        "Get the documentation, types, constants, type aliases and functions of one module.",
        ModuleArgs,
    ),
    ToolSpec(
        "search_functions",
        "Search the functions of a package by name, documentation or signature.",
        PackageSearchArgs,
    ),
    ToolSpec("search_types", "Search the types of a package by name, documentation or signature.", PackageSearchArgs),
    ToolSpec("get_package_releases", "List the releases of a package, including retirement notices.", PackageArgs),
)

TOOLS_BY_NAME = {spec.name: spec for spec in TOOLS}

PACKAGES_RESOURCE = {
    "uri": "gleam://packages",
    "name": "Gleam packages",
    "description": "Gleam packages published on hex.pm",
    "mimeType": "application/json",
}


@dataclass(frozen=True)
class ToolResult:
    """Result of a tool call: human-readable text plus the structured data it was built from."""

    text: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "data": self.data}


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class PackageDocsService:
    """Executes tools against the package registry through a read-through cache.

    On a cache miss the raw document is fetched and decoded, and the cache write
    is handed to ``spawner`` so the caller never waits on it.
    """

    def __init__(
        self,
        registry: PackageRegistry,
        cache: CacheStore,
        spawner: TaskSpawner,
        *,
        clock: Callable[[], float] = time.time,
        package_ttl: int = PACKAGE_TTL,
        search_ttl: int = SEARCH_TTL,
        interface_ttl: int = INTERFACE_TTL,
        logger_instance: logging.Logger | None = None,
    ) -> None:
        self.registry = registry
        self.cache = cache
        self.spawner = spawner
        self.clock = clock
        self.package_ttl = package_ttl
        self.search_ttl = search_ttl
        self.interface_ttl = interface_ttl
        self.logger = logger_instance or logger
        self._handlers: dict[str, Callable[[Any], Awaitable[ToolResult]]] = {
            "search_packages": self.search_packages,
            "get_package_info": self.get_package_info,
            "get_modules": self.get_modules,
            "get_module_info": self.get_module_info,
            "search_functions": self.search_functions,
            "search_types": self.search_types,
            "get_package_releases": self.get_package_releases,
        }

    async def call(self, spec: ToolSpec, arguments: Any) -> ToolResult:
        """Validate ``arguments`` against ``spec`` and run the matching tool."""
        args = spec.parse(arguments)
        return await self._handlers[spec.name](args)

    async def _read_through(
        self,
        key: str,
        ttl: int,
        fetch: Callable[[], Awaitable[str]],
        decode: Callable[[str], T],
    ) -> T:
        cached = await self.cache.get(key, self.clock())
        if cached is not None:
            self.logger.debug("Cache hit for %s", key)
            return decode(cached)
        self.logger.debug("Cache miss for %s", key)
        text = await fetch()
        value = decode(text)
        self.spawner.spawn(self._write_cache(key, text, ttl))
        return value

    async def _write_cache(self, key: str, value: str, ttl: int) -> None:
        try:
            await self.cache.set(key, value, self.clock(), ttl)
        except CacheWriteError as exc:
            self.logger.warning("Cache write for %s failed: %s", key, exc)

    async def _interface(self, name: str) -> PackageInterface:
        return await self._read_through(
            interface_key(name),
            self.interface_ttl,
            lambda: self.registry.fetch_interface(name),
            decode_package_interface,
        )

    # -- tools --

    async def search_packages(self, args: SearchPackagesArgs) -> ToolResult:
        packages = await self._read_through(
            search_key(args.query),
            self.search_ttl,
            lambda: self.registry.search_packages(args.query),
            decode_package_search,
        )
        return ToolResult(
            formatting.format_package_search(args.query, packages),
            {"query": args.query, "packages": [p.model_dump(mode="json") for p in packages]},
        )

    async def get_package_info(self, args: PackageArgs) -> ToolResult:
        info = await self._read_through(
            package_key(args.package_name),
            self.package_ttl,
            lambda: self.registry.fetch_package(args.package_name),
            decode_package_info,
        )
        return ToolResult(formatting.format_package_info(info), {"package": info.model_dump(mode="json")})

    async def get_package_releases(self, args: PackageArgs) -> ToolResult:
        releases = await self._read_through(
            package_key(args.package_name),
            self.package_ttl,
            lambda: self.registry.fetch_package(args.package_name),
            decode_package_releases,
        )
        return ToolResult(formatting.format_releases(releases), releases.model_dump(mode="json"))

    async def get_modules(self, args: PackageArgs) -> ToolResult:
        interface = await self._interface(args.package_name)
        names = sorted(interface.modules)
        return ToolResult(
            formatting.format_module_list(interface, names),
            {
                "package": interface.name,
                "version": interface.version,
                "gleam_version_constraint": interface.gleam_version_constraint,
                "modules": names,
            },
        )

    async def get_module_info(self, args: ModuleArgs) -> ToolResult:
        interface = await self._interface(args.package_name)
        module = interface.modules.get(args.module_name)
        if module is None:
            raise ToolExecutionError(f"Module not found: {args.module_name} in package {args.package_name}")
        return ToolResult(
            formatting.format_module(interface.name, module),
            {"package": interface.name, "version": interface.version, "module": module.model_dump(mode="json")},
        )

    async def search_functions(self, args: PackageSearchArgs) -> ToolResult:
        interface = await self._interface(args.package_name)
        matches = find_functions(interface, args.query)
        shown = matches[: args.limit]
        return ToolResult(
            formatting.format_function_matches(interface.name, args.query, shown, len(matches)),
            {
                "package": interface.name,
                "query": args.query,
                "total": len(matches),
                "functions": [{"module": m.module, **m.function.model_dump(mode="json")} for m in shown],
            },
        )

    async def search_types(self, args: PackageSearchArgs) -> ToolResult:
        interface = await self._interface(args.package_name)
        matches = find_types(interface, args.query)
        shown = matches[: args.limit]
        return ToolResult(
            formatting.format_type_matches(interface.name, args.query, shown, len(matches)),
            {
                "package": interface.name,
                "query": args.query,
                "total": len(matches),
                "types": [{"module": m.module, **m.type.model_dump(mode="json")} for m in shown],
            },
        )

    # -- resources --

    async def read_packages_resource(self) -> list[dict[str, Any]]:
        packages = await self._read_through(
            search_key(GLEAM_PACKAGES_QUERY),
            self.search_ttl,
            lambda: self.registry.search_packages(GLEAM_PACKAGES_QUERY),
            decode_package_search,
        )
        return [p.model_dump(mode="json") for p in packages]
