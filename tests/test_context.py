"""Tests for constraintkit.context module."""

from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from constraintkit import (
    InvalidDetailsError,
    Kind,
    Pointer,
    UnexpectedTypeError,
    Violation,
    new_context,
)


class TestNewContext:
    """Tests for root context creation."""

    def test_defaults(self) -> None:
        """Test the root context has an empty path and strict types."""
        ctx = new_context({"a": 1})
        assert ctx.path == ""
        assert ctx.strict_types is True
        assert ctx.node.kind is Kind.MAPPING
        assert ctx.value == {"a": 1}

    def test_custom_values(self) -> None:
        """Test strict types and root path can be set."""
        ctx = new_context(None, strict_types=False, path="request")
        assert ctx.path == "request"
        assert ctx.strict_types is False
        assert ctx.node.is_nil()

    def test_context_is_frozen(self) -> None:
        """Test contexts cannot be mutated."""
        ctx = new_context(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.path = ".changed"  # type: ignore[misc]


class TestDerivation:
    """Tests for child context derivation."""

    def test_with_index(self) -> None:
        """Test sequence index segments."""
        ctx = new_context(["a", "b"]).with_index(0, "a")
        assert ctx.path == ".[0]"
        assert ctx.value == "a"

    def test_with_key(self) -> None:
        """Test mapping key segments use the key's string form."""
        assert new_context({}).with_key("Hello", "World").path == ".Hello"
        assert new_context({}).with_key(7, "x").path == ".7"

    def test_with_field(self) -> None:
        """Test field segments use the given alias."""
        assert new_context(None).with_field("field3", []).path == ".field3"

    def test_nested_segments(self) -> None:
        """Test segments concatenate onto the parent path."""
        ctx = new_context(None).with_field("items", [1]).with_index(2, 1).with_key("k", None)
        assert ctx.path == ".items.[2].k"

    def test_root_path_prefix(self) -> None:
        """Test children of a named root are addressed relative to it."""
        ctx = new_context(None, path="request").with_field("items", []).with_index(0, None)
        assert ctx.path == "request.items.[0]"

    def test_parent_is_not_modified(self) -> None:
        """Test one parent can derive many children without aliasing."""
        parent = new_context([1, 2, 3])
        children = [parent.with_index(i, v) for i, v in enumerate(parent.value)]
        assert parent.path == ""
        assert parent.value == [1, 2, 3]
        assert [c.path for c in children] == [".[0]", ".[1]", ".[2]"]
        assert [c.value for c in children] == [1, 2, 3]

    def test_strict_types_inherited(self) -> None:
        """Test derived contexts keep the strict types flag."""
        ctx = new_context([1], strict_types=False).with_index(0, 1)
        assert ctx.strict_types is False

    def test_with_node_keeps_path(self) -> None:
        """Test replacing the value keeps the path."""
        ctx = new_context("x").with_field("name", " Ada ").with_node("Ada")
        assert ctx.path == ".name"
        assert ctx.value == "Ada"

    def test_with_strict_types(self) -> None:
        """Test the strict types flag can be overridden explicitly."""
        ctx = new_context(1).with_strict_types(False)
        assert ctx.strict_types is False
        assert ctx.value == 1


class TestViolation:
    """Tests for creating violations from a context."""

    def test_violation_uses_current_path(self) -> None:
        """Test violations are stamped with the context's path."""
        ctx = new_context([1]).with_index(0, 1)
        violation = ctx.violation("bad value", {"limit": 3})
        assert violation == Violation(path=".[0]", message="bad value", details={"limit": 3})

    def test_violation_without_details(self) -> None:
        """Test details default to None."""
        assert new_context(1).violation("bad").details is None

    def test_details_are_copied(self) -> None:
        """Test later changes to the caller's dict do not leak into the violation."""
        details = {"limit": 3}
        violation = new_context(1).violation("bad", details)
        details["limit"] = 4
        assert violation.details == {"limit": 3}

    def test_nested_transport_safe_details(self) -> None:
        """Test nested lists and mappings of primitives are accepted."""
        details = {"fields": ["a", "b"], "nested": {"n": None, "ok": True, "ratio": 0.5}}
        assert new_context(1).violation("bad", details).details == details

    def test_unsafe_details_rejected(self) -> None:
        """Test details outside the transport-safe set raise."""
        with pytest.raises(InvalidDetailsError, match="'when'"):
            new_context(1).violation("bad", {"when": datetime(2020, 1, 1)})

    def test_unsafe_nested_details_rejected(self) -> None:
        """Test unsafe values nested in lists are rejected."""
        with pytest.raises(InvalidDetailsError):
            new_context(1).violation("bad", {"items": [object()]})


class TestUnexpectedType:
    """Tests for the strict/non-strict type contract."""

    def test_strict_raises(self) -> None:
        """Test strict mode raises and carries the mismatch."""
        ctx = new_context("text").with_field("when", "text")
        with pytest.raises(UnexpectedTypeError) as exc_info:
            ctx.unexpected_type("datetime")
        assert exc_info.value.path == ".when"
        assert exc_info.value.expected == "datetime"
        assert exc_info.value.actual == "str"

    def test_non_strict_reports_one_violation(self) -> None:
        """Test non-strict mode reports the mismatch as a single violation."""
        ctx = new_context(123, strict_types=False)
        violations = ctx.unexpected_type("struct")
        assert len(violations) == 1
        assert violations[0].path == ""
        assert violations[0].details == {"expected": "struct", "actual": "int"}


class TestIsEmpty:
    """Tests for Context.is_empty."""

    def test_is_empty_dereferences(self) -> None:
        """Test emptiness is checked through one pointer level."""
        assert new_context(Pointer("")).is_empty()
        assert not new_context(Pointer("x")).is_empty()
        assert new_context(Pointer(None)).is_empty()
