"""Decoding of ``package-interface.json`` documents into ``PackageInterface``."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, TypeVar

from gleam_packages_mcp.core.entities import decode_constant, decode_function, decode_type, decode_type_alias
from gleam_packages_mcp.core.errors import InterfaceDecodeError
from gleam_packages_mcp.core.fields import optional_dict, optional_doc, optional_str
from gleam_packages_mcp.models import ModuleInfo, PackageInterface

T = TypeVar("T")


def _decode_entries(module_data: Any, key: str, decoder: Callable[[str, Any], T]) -> tuple[T, ...]:
    return tuple(decoder(name, data) for name, data in optional_dict(module_data, key).items())


def decode_module(name: str, data: Any) -> ModuleInfo:
    return ModuleInfo(
        name=name,
        documentation=optional_doc(data),
        functions=_decode_entries(data, "functions", decode_function),
        types=_decode_entries(data, "types", decode_type),
        constants=_decode_entries(data, "constants", decode_constant),
        type_aliases=_decode_entries(data, "type-aliases", decode_type_alias),
    )


def _require(document: dict[str, Any], key: str, expected: type, label: str) -> Any:
    if key not in document:
        raise InterfaceDecodeError(f"package interface is missing required field '{key}'")
    value = document[key]
    if not isinstance(value, expected):
        raise InterfaceDecodeError(f"package interface field '{key}' must be {label}, got {type(value).__name__}")
    return value


def decode_package_interface(text: str | bytes) -> PackageInterface:
    """Decode a package-interface document.

    Raises ``InterfaceDecodeError`` when the text is not JSON or when one of the
    top-level ``name``/``version``/``modules`` fields is absent or mistyped.
    Everything below the top level degrades to defaults instead of failing.
    """
    try:
        document = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise InterfaceDecodeError(f"package interface is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise InterfaceDecodeError("package interface must be a JSON object")

    name = _require(document, "name", str, "a string")
    version = _require(document, "version", str, "a string")
    modules = _require(document, "modules", dict, "an object")

    return PackageInterface(
        name=name,
        version=version,
        gleam_version_constraint=optional_str(document, "gleam-version-constraint"),
        modules={path: decode_module(path, data) for path, data in modules.items()},
    )
