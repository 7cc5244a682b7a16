"""Tests for constraintkit.wire module."""

from __future__ import annotations

import json
import math
from datetime import timedelta
from decimal import Decimal
from fractions import Fraction
from typing import Any

from constraintkit import Violation, new_context, validate
from constraintkit.constraints import ExactlyNRequired
from constraintkit.wire import (
    map_to_struct,
    to_value,
    violation_to_struct,
    violations_to_json,
)


def supported_values() -> dict[str, Any]:
    return {
        "nil": None,
        "bool": True,
        "int": 123,
        "float": 123.456,
        "decimal": Decimal("1.5"),
        "fraction": Fraction(1, 4),
        "string": "test",
        "error": ValueError("test error"),
        "unsupported": timedelta(seconds=15),
        "list": [1, "a"],
    }


def assert_supported_values(output: dict[str, Any]) -> None:
    assert output["nil"] == {"null_value": None}
    assert output["bool"] == {"bool_value": True}
    assert output["int"] == {"number_value": 123.0}
    assert output["float"] == {"number_value": 123.456}
    assert output["decimal"] == {"number_value": 1.5}
    assert output["fraction"] == {"number_value": 0.25}
    assert output["string"] == {"string_value": "test"}
    assert output["error"] == {"string_value": "test error"}
    assert output["unsupported"] == {"string_value": "0:00:15"}
    assert output["list"] == {"list_value": [{"number_value": 1.0}, {"string_value": "a"}]}


class TestMapToStruct:
    """Tests for converting mappings into documents."""

    def test_empty_mapping(self) -> None:
        """Test empty and missing mappings convert to None."""
        assert map_to_struct({}) is None
        assert map_to_struct(None) is None

    def test_supported_types(self) -> None:
        """Test every supported value type, including nested mappings."""
        values = supported_values()
        values["nested"] = supported_values()

        output = map_to_struct(values)

        assert output is not None
        assert_supported_values(output)
        assert set(output["nested"]) == {"struct_value"}
        assert_supported_values(output["nested"]["struct_value"])

    def test_bool_is_not_a_number(self) -> None:
        """Test booleans keep their own tag."""
        assert to_value(False) == {"bool_value": False}

    def test_numbers_beyond_float_range(self) -> None:
        """Test numbers too large for a float convert to infinity."""
        assert to_value(10**400) == {"number_value": math.inf}
        assert to_value(-(10**400)) == {"number_value": -math.inf}
        assert to_value(Fraction(10**400, 3)) == {"number_value": math.inf}
        assert to_value(Decimal("sNaN")) == {"string_value": "sNaN"}

    def test_large_details_convert(self) -> None:
        """Test transport-safe details never fail to convert."""
        violation = new_context(None).violation("too big", {"n": 10**400})
        assert violation_to_struct(violation)["details"] == {"n": {"number_value": math.inf}}

    def test_unsupported_objects_never_fail(self) -> None:
        """Test arbitrary objects are rendered as strings."""

        class Opaque:
            def __str__(self) -> str:
                return "opaque"

        assert to_value(Opaque()) == {"string_value": "opaque"}


class TestViolationDocuments:
    """Tests for converting violations."""

    def test_violation_to_struct(self) -> None:
        """Test violations convert with their details."""
        violation = Violation(path=".a", message="bad", details={"expected": 1})
        assert violation_to_struct(violation) == {
            "path": ".a",
            "message": "bad",
            "details": {"expected": {"number_value": 1.0}},
        }

    def test_violation_without_details(self) -> None:
        """Test violations without details convert to a None struct."""
        assert violation_to_struct(Violation(path="", message="bad"))["details"] is None

    def test_validator_details_always_convert(self) -> None:
        """Test details produced by shipped constraints convert without loss."""
        from dataclasses import dataclass

        @dataclass
        class Pair:
            a: str = ""
            b: str = ""

        violations = validate(Pair(a="x", b="y"), ExactlyNRequired(1, "a", "b"))
        struct = violation_to_struct(violations[0])
        assert struct["details"]["fields"] == {
            "list_value": [{"string_value": "a"}, {"string_value": "b"}]
        }

    def test_violations_to_json(self) -> None:
        """Test violations serialise to a JSON array."""
        violations = [
            Violation(path=".[0]", message="bad", details={"n": Decimal("2")}),
            Violation(path=".[1]", message="worse"),
        ]
        assert json.loads(violations_to_json(violations)) == [
            {"path": ".[0]", "message": "bad", "details": {"n": "2"}},
            {"path": ".[1]", "message": "worse", "details": None},
        ]
