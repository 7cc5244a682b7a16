"""Constraints on scalar values."""

from __future__ import annotations

import re
from typing import Any

from constraintkit.constraint import TypedConstraint
from constraintkit.context import Context
from constraintkit.errors import InvalidConstraintError
from constraintkit.node import Kind, Node
from constraintkit.violation import Violation, is_transport_safe


class Regexp(TypedConstraint):
    """Require a string to match a regular expression.

    The pattern is searched for, so anchor it to match the whole string.
    """

    expected = "string"

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        try:
            self.pattern = re.compile(pattern)
        except (re.error, TypeError) as e:
            raise InvalidConstraintError(f"invalid regular expression {pattern!r}: {e}") from e

    def accepts(self, node: Node) -> bool:
        return node.kind is Kind.STRING

    def check(self, ctx: Context, value: Any) -> list[Violation]:
        if self.pattern.search(value):
            return []
        return [
            ctx.violation(
                "value must match the regular expression",
                {"regexp": self.pattern.pattern},
            )
        ]


class OneOf(TypedConstraint):
    """Require a bool, number or string to be one of the allowed values.

    Booleans only match booleans, so ``True`` is not accepted by ``OneOf(1)``.
    """

    expected = "bool, number or string"

    def __init__(self, *allowed: Any) -> None:
        if not allowed:
            raise InvalidConstraintError("OneOf requires at least one allowed value")
        if not is_transport_safe(list(allowed)):
            raise InvalidConstraintError(
                "OneOf allowed values must be transport-safe (see is_transport_safe)"
            )
        self.allowed = list(allowed)

    def accepts(self, node: Node) -> bool:
        return node.kind in (Kind.BOOL, Kind.NUMBER, Kind.STRING)

    def check(self, ctx: Context, value: Any) -> list[Violation]:
        is_bool = isinstance(value, bool)
        if any(isinstance(a, bool) is is_bool and a == value for a in self.allowed):
            return []
        return [ctx.violation("value must be one of the allowed values", {"allowed": self.allowed})]
