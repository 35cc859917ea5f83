"""Optional-field readers for loosely-typed JSON objects.

Each reader returns its default when the field is absent or has the wrong
shape, so entity decoders can be composed from independent lookups that never
abort the enclosing document.
"""

from typing import Any


def optional_str(data: Any, key: str, default: str = "") -> str:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, str) else default


def optional_bool(data: Any, key: str, default: bool) -> bool:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, bool) else default


def optional_int(data: Any, key: str, default: int = 0) -> int:
    value = data.get(key) if isinstance(data, dict) else None
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def optional_list(data: Any, key: str) -> list[Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, list) else []


def optional_dict(data: Any, key: str) -> dict[str, Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def optional_doc(data: Any, key: str = "documentation") -> str:
    """Read a doc string that may be stored as one string or a list of lines."""
    value = data.get(key) if isinstance(data, dict) else None
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "\n".join(line for line in value if isinstance(line, str))
    return ""


def optional_deprecation(data: Any) -> str | None:
    """Return the deprecation message, or ``None`` when the entity is not deprecated."""
    value = data.get("deprecation") if isinstance(data, dict) else None
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        message = value.get("message")
        if isinstance(message, str):
            return message
    return None
