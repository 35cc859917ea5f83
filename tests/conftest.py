"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import json
from collections.abc import Coroutine, Iterator
from pathlib import Path
from typing import Any

import pytest

from gleam_packages_mcp.cache import InMemoryCacheStore
from gleam_packages_mcp.core.errors import CacheWriteError, FetchError, NotFoundError
from gleam_packages_mcp.core.tools import PackageDocsService

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


def named(name: str, module: str = "gleam", package: str = "", parameters: list[Any] | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"kind": "named", "name": name, "module": module, "package": package}
    if parameters is not None:
        node["parameters"] = parameters
    return node


def variable(node_id: int) -> dict[str, Any]:
    return {"kind": "variable", "id": node_id}


SAMPLE_INTERFACE: dict[str, Any] = {
    "name": "sample",
    "version": "1.2.0",
    "gleam-version-constraint": ">= 1.0.0",
    "modules": {
        "sample/list": {
            "documentation": ["Working with lists.", "", "Every function is pure."],
            "functions": {
                "map": {
                    "documentation": "Applies a function to every element.\n",
                    "parameters": [
                        {"label": None, "type": named("List", parameters=[variable(0)])},
                        {"label": "with", "type": {"kind": "fn", "parameters": [variable(0)], "return": variable(1)}},
                    ],
                    "return": named("List", parameters=[variable(1)]),
                    "implementations": {
                        "gleam": True,
                        "uses-erlang-externals": False,
                        "uses-javascript-externals": False,
                        "can-run-on-erlang": True,
                        "can-run-on-javascript": True,
                    },
                },
                "length": {
                    "parameters": [{"label": "of", "type": named("List", parameters=[variable(0)])}],
                    "return": named("Int"),
                    "deprecation": {"message": "Use count instead"},
                    "implementations": {"uses-erlang-externals": True, "can-run-on-javascript": False},
                },
            },
            "types": {
                "Pair": {
                    "documentation": "A pair of values.",
                    "parameters": 2,
                    "opaque": False,
                    "constructors": [
                        {
                            "name": "Pair",
                            "parameters": [
                                {"label": "first", "type": variable(0)},
                                {"label": "second", "type": variable(1)},
                            ],
                        }
                    ],
                },
            },
            "constants": {
                "empty_size": {"documentation": "Zero.", "type": named("Int")},
            },
            "type-aliases": {
                "Mapper": {
                    "parameters": 2,
                    "alias": {"kind": "fn", "parameters": [variable(0)], "return": variable(1)},
                },
            },
        },
        "sample/dict": {
            "documentation": ["Key-value maps."],
            "functions": {
                "new": {
                    "documentation": "Creates an empty dict.",
                    "parameters": [],
                    "return": named("Dict", module="sample/dict", parameters=[variable(0), variable(1)]),
                },
            },
            "types": {
                "Dict": {
                    "documentation": "A map from keys to values.",
                    "parameters": 2,
                    "opaque": True,
                    "constructors": [],
                },
            },
        },
    },
}

SAMPLE_PACKAGE: dict[str, Any] = {
    "name": "sample",
    "html_url": "https://hex.pm/packages/sample",
    "docs_html_url": "https://hexdocs.pm/sample/",
    "latest_version": "1.2.0",
    "latest_stable_version": "1.2.0",
    "downloads": {"all": 1500, "recent": 120},
    "inserted_at": "2023-01-01T00:00:00Z",
    "updated_at": "2024-06-01T00:00:00Z",
    "meta": {
        "description": "Sample utilities for Gleam.",
        "licenses": ["Apache-2.0"],
        "links": {"Repository": "https://github.com/example/sample"},
    },
    "releases": [
        {"version": "1.2.0", "inserted_at": "2024-06-01T00:00:00Z", "has_docs": True},
        {"version": "1.1.0", "inserted_at": "2024-01-01T00:00:00Z", "has_docs": True},
        {"version": "1.0.0", "inserted_at": "2023-01-01T00:00:00Z", "has_docs": False},
    ],
    "retirements": {"1.1.0": {"reason": "security", "message": "CVE fix in 1.2.0"}},
}

SAMPLE_SEARCH: list[dict[str, Any]] = [
    {
        "name": "sample",
        "latest_version": "1.2.0",
        "html_url": "https://hex.pm/packages/sample",
        "downloads": {"all": 1500},
        "meta": {"description": "Sample utilities for Gleam."},
    },
    {"name": "sample_extra", "latest_version": "0.1.0", "meta": {}},
]


# ---------------------------------------------------------------------------
# Fakes for the ports
# ---------------------------------------------------------------------------


class FakeRegistry:
    """In-memory ``PackageRegistry`` keyed by package name / query."""

    def __init__(self) -> None:
        self.packages: dict[str, str] = {"sample": json.dumps(SAMPLE_PACKAGE)}
        self.interfaces: dict[str, str] = {"sample": json.dumps(SAMPLE_INTERFACE)}
        self.searches: dict[str, str] = {}
        self.default_search = json.dumps(SAMPLE_SEARCH)
        self.errors: dict[str, FetchError] = {}
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def _lookup(self, kind: str, key: str, source: dict[str, str], default: str | None = None) -> str:
        self.calls.append((kind, key))
        if key in self.errors:
            raise self.errors[key]
        if key in source:
            return source[key]
        if default is not None:
            return default
        raise NotFoundError(f"https://example.test/{kind}/{key}")

    async def fetch_package(self, name: str) -> str:
        return self._lookup("package", name, self.packages)

    async def search_packages(self, query: str) -> str:
        return self._lookup("search", query, self.searches, self.default_search)

    async def fetch_interface(self, name: str) -> str:
        return self._lookup("interface", name, self.interfaces)

    async def close(self) -> None:
        self.closed = True


class FailingCacheStore(InMemoryCacheStore):
    async def set(self, key: str, value: str, now: float, ttl: int) -> None:
        raise CacheWriteError(f"refusing to store {key}")


class InlineSpawner:
    """Collects spawned coroutines so tests decide when (and whether) they run."""

    def __init__(self) -> None:
        self.pending: list[Coroutine[Any, Any, None]] = []

    def spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        self.pending.append(coro)

    async def run_all(self) -> None:
        while self.pending:
            await self.pending.pop(0)

    def discard(self) -> None:
        for coro in self.pending:
            coro.close()
        self.pending.clear()


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def interface_json() -> str:
    return json.dumps(SAMPLE_INTERFACE)


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def cache() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def spawner() -> Iterator[InlineSpawner]:
    spawner = InlineSpawner()
    yield spawner
    spawner.discard()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(
    registry: FakeRegistry, cache: InMemoryCacheStore, spawner: InlineSpawner, clock: FakeClock
) -> PackageDocsService:
    return PackageDocsService(registry, cache, spawner, clock=clock)
