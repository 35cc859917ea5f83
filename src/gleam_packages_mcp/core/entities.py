from typing import Any

from gleam_packages_mcp.core.fields import (
    optional_bool,
    optional_deprecation,
    optional_dict,
    optional_doc,
    optional_int,
    optional_list,
    optional_str,
)
from gleam_packages_mcp.core.signatures import render_raw_type, variable_name
from gleam_packages_mcp.models import (
    ConstantInfo,
    FunctionInfo,
    Implementations,
    ParameterInfo,
    TypeAliasInfo,
    TypeInfo,
    TypeKind,
)


def decode_parameter(data: Any) -> ParameterInfo:
    return ParameterInfo(
        label=optional_str(data, "label"),
        type_name=render_raw_type(data.get("type") if isinstance(data, dict) else None),
    )


def decode_implementations(data: Any) -> Implementations:
    impl = optional_dict(data, "implementations")
    return Implementations(
        gleam=optional_bool(impl, "gleam", False),
        uses_erlang_externals=optional_bool(impl, "uses-erlang-externals", False),
        uses_javascript_externals=optional_bool(impl, "uses-javascript-externals", False),
        can_run_on_erlang=optional_bool(impl, "can-run-on-erlang", True),
        can_run_on_javascript=optional_bool(impl, "can-run-on-javascript", True),
    )


def format_parameters(parameters: list[ParameterInfo] | tuple[ParameterInfo, ...]) -> str:
    return ", ".join(f"{p.label}: {p.type_name}" if p.label else p.type_name for p in parameters)


def function_signature(name: str, parameters: list[ParameterInfo], return_type: str) -> str:
    return f"{name}({format_parameters(parameters)}) -> {return_type}"


def type_parameters(count: int) -> str:
    if count <= 0:
        return ""
    return "(" + ", ".join(variable_name(i) for i in range(count)) + ")"


def decode_function(name: str, data: Any) -> FunctionInfo:
    parameters = [decode_parameter(p) for p in optional_list(data, "parameters")]
    return_type = render_raw_type(data.get("return") if isinstance(data, dict) else None)
    return FunctionInfo(
        name=name,
        documentation=optional_doc(data),
        signature=function_signature(name, parameters, return_type),
        parameters=tuple(parameters),
        deprecation=optional_deprecation(data),
        implementations=decode_implementations(data),
    )


def _constructor_string(data: Any) -> str:
    name = optional_str(data, "name", "unknown")
    parameters = [decode_parameter(p) for p in optional_list(data, "parameters")]
    if not parameters:
        return name
    return f"{name}({format_parameters(parameters)})"


def type_signature(name: str, parameter_count: int, constructors: list[str]) -> str:
    head = f"type {name}{type_parameters(parameter_count)}"
    if not constructors:
        return head
    return head + " {\n  " + "\n  ".join(constructors) + "\n}"


def _type_kind(data: Any) -> TypeKind:
    opaque = data.get("opaque") if isinstance(data, dict) else None
    if opaque is True:
        return "opaque"
    if opaque is False:
        return "custom"
    return "unknown"


def decode_type(name: str, data: Any) -> TypeInfo:
    constructors = [_constructor_string(c) for c in optional_list(data, "constructors")]
    return TypeInfo(
        name=name,
        documentation=optional_doc(data),
        signature=type_signature(name, optional_int(data, "parameters"), constructors),
        type_kind=_type_kind(data),
        deprecation=optional_deprecation(data),
    )


def decode_constant(name: str, data: Any) -> ConstantInfo:
    return ConstantInfo(
        name=name,
        documentation=optional_doc(data),
        type_name=render_raw_type(data.get("type") if isinstance(data, dict) else None),
    )


def decode_type_alias(name: str, data: Any) -> TypeAliasInfo:
    return TypeAliasInfo(
        name=name,
        documentation=optional_doc(data),
        type_name=render_raw_type(data.get("alias") if isinstance(data, dict) else None),
        deprecation=optional_deprecation(data),
    )
