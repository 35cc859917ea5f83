"""Gleam type AST and its rendering into human-readable signatures.

Nodes come from the ``package-interface.json`` export, where every type is a
small tagged object (``{"kind": "named", ...}``).  Parsing never raises: any
node whose required fields are missing or mistyped becomes ``UnknownType``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MAX_TYPE_DEPTH = 64

_VARIABLE_LETTERS = "abcdef"


@dataclass(frozen=True)
class NamedType:
    name: str
    module: str = ""
    package: str = ""
    parameters: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class VariableType:
    id: int


@dataclass(frozen=True)
class FnType:
    parameters: tuple[TypeNode, ...]
    returns: TypeNode


@dataclass(frozen=True)
class TupleType:
    elements: tuple[TypeNode, ...]


@dataclass(frozen=True)
class UnknownType:
    pass


TypeNode = NamedType | VariableType | FnType | TupleType | UnknownType

UNKNOWN = UnknownType()


class _Malformed(Exception):
    pass


def variable_name(index: int) -> str:
    """Return the letter used for type variable ``index`` (``a``..``f``, then ``t6``, ``t7``...)."""
    if 0 <= index < len(_VARIABLE_LETTERS):
        return _VARIABLE_LETTERS[index]
    return f"t{index}"


def parse_type_node(raw: Any, depth: int = 0) -> TypeNode:
    """Convert a loosely-typed JSON type node into a ``TypeNode``."""
    if depth >= MAX_TYPE_DEPTH or not isinstance(raw, dict):
        return UNKNOWN
    try:
        return _parse_kind(raw, depth)
    except _Malformed:
        return UNKNOWN


def _parse_kind(raw: dict[str, Any], depth: int) -> TypeNode:
    kind = raw.get("kind")
    if kind == "named":
        return NamedType(
            name=_required_str(raw, "name"),
            module=_optional_str(raw, "module"),
            package=_optional_str(raw, "package"),
            parameters=_parse_children(raw, "parameters", depth, required=False),
        )
    if kind == "variable":
        node_id = raw.get("id")
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            raise _Malformed
        return VariableType(id=node_id)
    if kind == "fn":
        if "return" not in raw:
            raise _Malformed
        return FnType(
            parameters=_parse_children(raw, "parameters", depth, required=False),
            returns=parse_type_node(raw["return"], depth + 1),
        )
    if kind == "tuple":
        return TupleType(elements=_parse_children(raw, "elements", depth, required=True))
    return UNKNOWN


def _required_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise _Malformed
    return value


def _optional_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _Malformed
    return value


def _parse_children(raw: dict[str, Any], key: str, depth: int, *, required: bool) -> tuple[TypeNode, ...]:
    if key not in raw:
        if required:
            raise _Malformed
        return ()
    items = raw[key]
    if not isinstance(items, list):
        raise _Malformed
    return tuple(parse_type_node(item, depth + 1) for item in items)


def render_type(node: TypeNode, depth: int = 0) -> str:
    """Render a ``TypeNode`` as Gleam source syntax. Never returns an empty string."""
    if depth >= MAX_TYPE_DEPTH:
        return "unknown"
    if isinstance(node, NamedType):
        if not node.name:
            return "unknown"
        prefix = f"{node.package}/" if node.package else ""
        if node.module and node.module != "gleam":
            prefix += f"{node.module}."
        rendered = prefix + node.name
        if node.parameters:
            rendered += "(" + _render_all(node.parameters, depth) + ")"
        return rendered
    if isinstance(node, VariableType):
        return variable_name(node.id)
    if isinstance(node, FnType):
        return f"fn({_render_all(node.parameters, depth)}) -> {render_type(node.returns, depth + 1)}"
    if isinstance(node, TupleType):
        return f"#({_render_all(node.elements, depth)})"
    return "unknown"


def _render_all(nodes: tuple[TypeNode, ...], depth: int) -> str:
    return ", ".join(render_type(n, depth + 1) for n in nodes)


def render_raw_type(raw: Any) -> str:
    """Parse and render a raw JSON type node in one step."""
    return render_type(parse_type_node(raw))
