from __future__ import annotations

from gleam_packages_mcp.cache import InMemoryCacheStore, SqlCacheStore, get_engine
from gleam_packages_mcp.config import Settings, load_settings
from gleam_packages_mcp.core.ports.cache import CacheStore
from gleam_packages_mcp.core.tools import PackageDocsService
from gleam_packages_mcp.registry import HexRegistry
from gleam_packages_mcp.tasks.spawner import AsyncioTaskSpawner


def create_cache(settings: Settings) -> CacheStore:
    """Use the SQL cache when ``DATABASE_URL`` is configured, else an in-process one."""
    if settings.database_url:
        return SqlCacheStore(get_engine(settings.database_url))
    return InMemoryCacheStore()


def create_service(settings: Settings | None = None) -> PackageDocsService:
    settings = settings or load_settings()
    return PackageDocsService(
        HexRegistry(settings.hex_api_url, settings.hexdocs_url, timeout=settings.http_timeout),
        create_cache(settings),
        AsyncioTaskSpawner(),
        package_ttl=settings.package_ttl,
        search_ttl=settings.search_ttl,
        interface_ttl=settings.interface_ttl,
    )


async def close_service(service: PackageDocsService) -> None:
    spawner = service.spawner
    if isinstance(spawner, AsyncioTaskSpawner):
        await spawner.drain()
    await service.registry.close()
    await service.cache.close()
