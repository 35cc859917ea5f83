"""Unit tests for entity decoding."""

from __future__ import annotations

from gleam_packages_mcp.core.entities import (
    decode_constant,
    decode_function,
    decode_type,
    decode_type_alias,
    type_parameters,
)
from gleam_packages_mcp.models import Implementations
from tests.conftest import SAMPLE_INTERFACE, named, variable

LIST_MODULE = SAMPLE_INTERFACE["modules"]["sample/list"]


class TestDecodeFunction:
    def test_signature_with_labelled_and_positional_parameters(self) -> None:
        fn = decode_function("map", LIST_MODULE["functions"]["map"])
        assert fn.signature == "map(List(a), with: fn(a) -> b) -> List(b)"
        assert [p.label for p in fn.parameters] == ["", "with"]
        assert fn.documentation == "Applies a function to every element.\n"
        assert fn.deprecation is None
        assert fn.implementations.gleam is True

    def test_deprecation_and_partial_implementations(self) -> None:
        fn = decode_function("length", LIST_MODULE["functions"]["length"])
        assert fn.deprecation == "Use count instead"
        assert fn.implementations == Implementations(
            gleam=False,
            uses_erlang_externals=True,
            uses_javascript_externals=False,
            can_run_on_erlang=True,
            can_run_on_javascript=False,
        )

    def test_missing_documentation_defaults_to_empty(self) -> None:
        fn = decode_function("f", {"parameters": [], "return": named("Nil")})
        assert fn.documentation == ""
        assert fn.signature == "f() -> Nil"

    def test_everything_missing(self) -> None:
        fn = decode_function("f", {})
        assert fn.signature == "f() -> unknown"
        assert fn.parameters == ()
        assert fn.implementations == Implementations()
        assert fn.implementations.can_run_on_erlang is True
        assert fn.implementations.can_run_on_javascript is True

    def test_non_object_data_degrades(self) -> None:
        fn = decode_function("f", "garbage")
        assert fn.signature == "f() -> unknown"

    def test_null_documentation_and_deprecation(self) -> None:
        fn = decode_function("f", {"documentation": None, "deprecation": None, "return": named("Int")})
        assert fn.documentation == ""
        assert fn.deprecation is None

    def test_malformed_parameter_keeps_other_fields(self) -> None:
        fn = decode_function(
            "f",
            {"parameters": [{"label": 3, "type": {"kind": "bogus"}}, {"type": variable(0)}], "return": variable(0)},
        )
        assert fn.signature == "f(unknown, a) -> a"

    def test_non_boolean_implementation_flag_uses_default(self) -> None:
        fn = decode_function("f", {"implementations": {"can-run-on-erlang": "yes", "gleam": 1}})
        assert fn.implementations.can_run_on_erlang is True
        assert fn.implementations.gleam is False


class TestDecodeType:
    def test_custom_type_with_constructor(self) -> None:
        t = decode_type("Pair", LIST_MODULE["types"]["Pair"])
        assert t.signature == "type Pair(a, b) {\n  Pair(first: a, second: b)\n}"
        assert t.type_kind == "custom"

    def test_opaque_type_without_constructors(self) -> None:
        t = decode_type("Dict", SAMPLE_INTERFACE["modules"]["sample/dict"]["types"]["Dict"])
        assert t.signature == "type Dict(a, b)"
        assert t.type_kind == "opaque"

    def test_nullary_constructors(self) -> None:
        t = decode_type(
            "Order",
            {"parameters": 0, "constructors": [{"name": "Lt"}, {"name": "Eq", "parameters": []}, {"name": "Gt"}]},
        )
        assert t.signature == "type Order {\n  Lt\n  Eq\n  Gt\n}"

    def test_positional_constructor_parameters(self) -> None:
        t = decode_type("Box", {"parameters": 1, "constructors": [{"name": "Box", "parameters": [{"type": variable(0)}]}]})
        assert t.signature == "type Box(a) {\n  Box(a)\n}"

    def test_type_kind_unknown_when_absent_or_not_boolean(self) -> None:
        assert decode_type("T", {}).type_kind == "unknown"
        assert decode_type("T", {"opaque": "true"}).type_kind == "unknown"

    def test_deprecated_type(self) -> None:
        assert decode_type("T", {"deprecation": {"message": "gone"}}).deprecation == "gone"


def test_type_parameters_follow_variable_naming() -> None:
    assert type_parameters(0) == ""
    assert type_parameters(3) == "(a, b, c)"
    assert type_parameters(8) == "(a, b, c, d, e, f, t6, t7)"


def test_decode_constant() -> None:
    const = decode_constant("empty_size", LIST_MODULE["constants"]["empty_size"])
    assert const.type_name == "Int"
    assert const.documentation == "Zero."
    assert decode_constant("x", {}).type_name == "unknown"


def test_decode_type_alias() -> None:
    alias = decode_type_alias("Mapper", LIST_MODULE["type-aliases"]["Mapper"])
    assert alias.type_name == "fn(a) -> b"
    assert alias.documentation == ""
    assert alias.deprecation is None
