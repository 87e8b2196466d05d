"""Tests for the evaluation Environment."""

from __future__ import annotations

import json
import math

import pytest
from pydantic import BaseModel

from hangle.bridge.environment import (
    Environment,
    format_error,
    kind_of,
    own_properties,
    to_json,
)


class Point(BaseModel):
    x: int
    y: int


class Slotted:
    __slots__ = ("left", "right")

    def __init__(self) -> None:
        self.left = 1
        self.right = "r"


class TestEvaluate:
    def test_expression_is_pretty_json(self, environment: Environment) -> None:
        assert environment.evaluate("some_object") == '{\n  "a": 1,\n  "b": "x"\n}'

    def test_scalar(self, environment: Environment) -> None:
        assert environment.evaluate("1+1") == "2"
        assert environment.evaluate("'hi'") == '"hi"'

    def test_statement_returns_null_and_binds_name(self, environment: Environment) -> None:
        assert environment.evaluate("total = sum(numbers)") == "null"
        assert environment["total"] == 6
        assert environment.evaluate("total * 2") == "12"

    def test_error_text(self, environment: Environment) -> None:
        result = environment.evaluate("1 / 0")
        assert result == "ZeroDivisionError: division by zero"

    def test_syntax_error_text(self, environment: Environment) -> None:
        assert environment.evaluate("1 +").startswith("SyntaxError")

    def test_system_exit_is_contained(self, environment: Environment) -> None:
        assert environment.evaluate("raise SystemExit(3)") == "SystemExit: 3"

    def test_error_without_message_is_not_empty(self, environment: Environment) -> None:
        assert environment.evaluate("raise KeyError") == "KeyError"

    def test_model_value(self) -> None:
        env = Environment({"p": Point(x=1, y=2)})
        assert json.loads(env.evaluate("p")) == {"x": 1, "y": 2}

    def test_unknown_value_sent_as_repr(self, environment: Environment) -> None:
        assert json.loads(environment.evaluate("sample")).startswith("<")

    def test_non_ascii_kept(self, environment: Environment) -> None:
        assert environment.evaluate("'héllo'") == '"héllo"'

    def test_non_finite_floats_are_null(self, environment: Environment) -> None:
        assert environment.evaluate("float('nan')") == "null"
        assert json.loads(environment.evaluate("{'hi': [float('inf'), 1.5]}")) == {
            "hi": [None, 1.5]
        }


class TestDescribe:
    def test_mapping_members_in_order(self, environment: Environment) -> None:
        assert environment.describe("some_object") == (
            '[{"name":"a","type":"number"},{"name":"b","type":"string"}]'
        )

    def test_object_members(self, environment: Environment) -> None:
        members = json.loads(environment.describe("sample"))
        assert members == [
            {"name": "count", "type": "number"},
            {"name": "label", "type": "string"},
            {"name": "enabled", "type": "boolean"},
            {"name": "parent", "type": "undefined"},
        ]

    def test_unknown_name(self, environment: Environment) -> None:
        assert environment.describe("nonExistentName") == "[]"

    def test_invalid_expression(self, environment: Environment) -> None:
        assert environment.describe("x = 1") == "[]"

    def test_describe_does_not_sort(self) -> None:
        env = Environment({"d": {"z": 1, "a": 2}})
        names = [m["name"] for m in json.loads(env.describe("d"))]
        assert names == ["z", "a"]

    def test_empty_mapping(self) -> None:
        env = Environment({"d": {}})
        assert env.describe("d") == "[]"

    def test_system_exit_gives_empty_list(self, environment: Environment) -> None:
        assert environment.describe("__import__('sys').exit(2)") == "[]"


class TestPreload:
    def test_preload_binds_top_level_name(self) -> None:
        env = Environment()
        env.preload(["os.path", "math"])
        assert env.evaluate("os.path.join('a', 'b')") == '"a/b"'
        assert env["math"] is math

    def test_preload_unknown_module_raises(self) -> None:
        with pytest.raises(ImportError):
            Environment().preload(["no_such_module_anywhere"])


class TestHelpers:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "boolean"),
            (3, "number"),
            (2.5, "number"),
            ("s", "string"),
            (None, "undefined"),
            (len, "function"),
            ([], "object"),
            (b"raw", "object"),
        ],
    )
    def test_kind_of(self, value: object, expected: str) -> None:
        assert kind_of(value) == expected

    def test_own_properties_without_dict(self) -> None:
        names = [name for name, _ in own_properties(Slotted())]
        assert "left" in names
        assert "right" in names
        assert not any(name.startswith("__") for name in names)

    def test_to_json_set(self) -> None:
        assert json.loads(to_json({1})) == [1]

    def test_format_error(self) -> None:
        assert format_error(ValueError("bad")) == "ValueError: bad"
        assert format_error(ValueError()) == "ValueError"
