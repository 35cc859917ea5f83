class GleamPackagesError(Exception):
    """Base class for all errors raised by gleam-packages-mcp."""


class FetchError(GleamPackagesError):
    """A remote document could not be fetched."""

    kind = "fetch"

    def __init__(self, url: str, detail: str = "") -> None:
        self.url = url
        self.detail = detail
        message = f"{self.kind} error for {url}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class HttpError(FetchError):
    kind = "HTTP"

    def __init__(self, url: str, detail: str = "", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(url, detail)


class ParseError(FetchError):
    kind = "Parse"


class NotFoundError(FetchError):
    kind = "Not found"


class InterfaceDecodeError(GleamPackagesError):
    """A package-interface document is missing a required top-level field."""


class PackageDecodeError(GleamPackagesError):
    """A hex.pm metadata document could not be decoded."""


class CacheWriteError(GleamPackagesError):
    """A cache store rejected a write."""


class ToolArgumentError(GleamPackagesError):
    """Arguments passed to a tool do not match its schema."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Invalid arguments for {tool}")


class ToolExecutionError(GleamPackagesError):
    """A tool failed while producing its result (e.g. a module was not found)."""
