from typing import Protocol


class PackageRegistry(Protocol):
    """Remote source of raw package documents.

    Every method returns the response body as text or raises a ``FetchError``
    subclass (``HttpError``, ``ParseError``, ``NotFoundError``).
    """

    async def fetch_package(self, name: str) -> str: ...

    async def search_packages(self, query: str) -> str: ...

    async def fetch_interface(self, name: str) -> str: ...

    async def close(self) -> None: ...
