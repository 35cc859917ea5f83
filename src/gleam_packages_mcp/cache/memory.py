from dataclasses import dataclass


@dataclass(frozen=True)
class InMemoryCacheEntry:
    value: str
    expires_at: float


class InMemoryCacheStore:
    """Process-local TTL cache. An entry expires once ``now >= stored_at + ttl``."""

    def __init__(self) -> None:
        self.entries: dict[str, InMemoryCacheEntry] = {}

    async def get(self, key: str, now: float) -> str | None:
        entry = self.entries.get(key)
        if entry is None:
            return None
        if now >= entry.expires_at:
            del self.entries[key]
            return None
        return entry.value

    async def set(self, key: str, value: str, now: float, ttl: int) -> None:
        self.entries[key] = InMemoryCacheEntry(value=value, expires_at=now + ttl)

    async def close(self) -> None:
        self.entries.clear()
