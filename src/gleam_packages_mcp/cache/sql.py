"""SQLAlchemy-backed cache store for deployments that share a database."""

from __future__ import annotations

import logging

import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from gleam_packages_mcp.core.errors import CacheWriteError

logger = logging.getLogger(__name__)

metadata = sa.MetaData()

cache_entries = sa.Table(
    "cache_entries",
    metadata,
    sa.Column("key", sa.String(512), primary_key=True),
    sa.Column("value", sa.Text, nullable=False),
    sa.Column("expires_at", sa.Float, nullable=False),
)


def get_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, future=True)


class SqlCacheStore:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._ready = False

    async def ensure_ready(self) -> None:
        if self._ready:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        self._ready = True

    async def get(self, key: str, now: float) -> str | None:
        try:
            await self.ensure_ready()
            async with self._engine.connect() as conn:
                result = await conn.execute(
                    sa.select(cache_entries.c.value).where(
                        cache_entries.c.key == key,
                        cache_entries.c.expires_at > now,
                    )
                )
                row = result.first()
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Cache read for %s failed, treating as miss: %s", key, exc)
            return None
        return None if row is None else str(row[0])

    async def set(self, key: str, value: str, now: float, ttl: int) -> None:
        try:
            await self.ensure_ready()
            async with self._engine.begin() as conn:
                await conn.execute(sa.delete(cache_entries).where(cache_entries.c.key == key))
                await conn.execute(sa.insert(cache_entries).values(key=key, value=value, expires_at=now + ttl))
        except (SQLAlchemyError, OSError) as exc:
            raise CacheWriteError(f"could not store {key}: {exc}") from exc

    async def close(self) -> None:
        await self._engine.dispose()
