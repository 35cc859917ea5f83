from typing import NamedTuple

from gleam_packages_mcp.models import FunctionInfo, PackageInterface, TypeInfo


class FunctionMatch(NamedTuple):
    module: str
    function: FunctionInfo


class TypeMatch(NamedTuple):
    module: str
    type: TypeInfo


def _matches(query: str, *fields: str) -> bool:
    return any(query in field.lower() for field in fields)


def find_functions(interface: PackageInterface, query: str) -> list[FunctionMatch]:
    """Case-insensitive substring search over function names, docs and signatures."""
    needle = query.lower()
    return [
        FunctionMatch(module.name, fn)
        for module in interface.modules.values()
        for fn in module.functions
        if _matches(needle, fn.name, fn.documentation, fn.signature)
    ]


def find_types(interface: PackageInterface, query: str) -> list[TypeMatch]:
    needle = query.lower()
    return [
        TypeMatch(module.name, t)
        for module in interface.modules.values()
        for t in module.types
        if _matches(needle, t.name, t.documentation, t.signature)
    ]


def search_functions(interface: PackageInterface, query: str) -> list[FunctionInfo]:
    return [match.function for match in find_functions(interface, query)]


def search_types(interface: PackageInterface, query: str) -> list[TypeInfo]:
    return [match.type for match in find_types(interface, query)]
