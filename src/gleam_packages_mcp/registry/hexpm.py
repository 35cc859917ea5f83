"""hex.pm / hexdocs.pm client implementing the ``PackageRegistry`` port."""

from __future__ import annotations

import json
import logging
from urllib.parse import quote

import httpx

from gleam_packages_mcp.core.errors import HttpError, NotFoundError, ParseError

logger = logging.getLogger(__name__)

_USER_AGENT = "gleam-packages-mcp"


class HexRegistry:
    def __init__(
        self,
        api_url: str = "https://hex.pm/api",
        docs_url: str = "https://hexdocs.pm",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.docs_url = docs_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"user-agent": _USER_AGENT, "accept": "application/json"},
        )

    def package_url(self, name: str) -> str:
        return f"{self.api_url}/packages/{quote(name, safe='')}"

    def search_url(self, query: str) -> str:
        return f"{self.api_url}/packages?search={quote(query, safe='')}&sort=recent_downloads"

    def interface_url(self, name: str) -> str:
        return f"{self.docs_url}/{quote(name, safe='')}/package-interface.json"

    async def fetch_package(self, name: str) -> str:
        return await self.fetch_json(self.package_url(name))

    async def search_packages(self, query: str) -> str:
        return await self.fetch_json(self.search_url(query))

    async def fetch_interface(self, name: str) -> str:
        return await self.fetch_json(self.interface_url(name))

    async def fetch_json(self, url: str) -> str:
        """GET ``url`` and return the body, checking that it is JSON."""
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise HttpError(url, str(exc) or type(exc).__name__) from exc

        if response.status_code == 404:
            raise NotFoundError(url)
        if response.status_code >= 400:
            raise HttpError(url, f"status {response.status_code}", status_code=response.status_code)

        text = response.text
        try:
            json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise ParseError(url, str(exc)) from exc
        return text

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
