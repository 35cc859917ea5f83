from gleam_packages_mcp.cache.memory import InMemoryCacheEntry, InMemoryCacheStore
from gleam_packages_mcp.cache.sql import SqlCacheStore, get_engine

__all__ = [
    "InMemoryCacheEntry",
    "InMemoryCacheStore",
    "SqlCacheStore",
    "get_engine",
]
