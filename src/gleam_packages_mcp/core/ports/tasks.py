from collections.abc import Coroutine
from typing import Any, Protocol


class TaskSpawner(Protocol):
    """Schedules a coroutine to run detached from the caller."""

    def spawn(self, coro: Coroutine[Any, Any, None]) -> None: ...
