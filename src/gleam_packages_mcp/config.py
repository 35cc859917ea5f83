"""Runtime settings read from environment variables."""

import os
from dataclasses import dataclass

from gleam_packages_mcp.core.tools import INTERFACE_TTL, PACKAGE_TTL, SEARCH_TTL


@dataclass(frozen=True)
class Settings:
    hex_api_url: str = "https://hex.pm/api"
    hexdocs_url: str = "https://hexdocs.pm"
    http_timeout: float = 10.0
    database_url: str | None = None
    package_ttl: int = PACKAGE_TTL
    search_ttl: int = SEARCH_TTL
    interface_ttl: int = INTERFACE_TTL
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    return Settings(
        hex_api_url=os.getenv("HEX_API_URL", Settings.hex_api_url).rstrip("/"),
        hexdocs_url=os.getenv("HEXDOCS_URL", Settings.hexdocs_url).rstrip("/"),
        http_timeout=_float_env("HTTP_TIMEOUT", Settings.http_timeout),
        database_url=os.getenv("DATABASE_URL") or None,
        package_ttl=_int_env("PACKAGE_CACHE_TTL", PACKAGE_TTL),
        search_ttl=_int_env("SEARCH_CACHE_TTL", SEARCH_TTL),
        interface_ttl=_int_env("INTERFACE_CACHE_TTL", INTERFACE_TTL),
        log_level=os.getenv("LOG_LEVEL", Settings.log_level).upper(),
    )
