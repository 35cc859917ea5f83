from typing import Protocol


class CacheStore(Protocol):
    """TTL key-value store for raw response text.

    ``set`` raises ``CacheWriteError`` when the entry cannot be stored.
    """

    async def get(self, key: str, now: float) -> str | None: ...

    async def set(self, key: str, value: str, now: float, ttl: int) -> None: ...

    async def close(self) -> None: ...
