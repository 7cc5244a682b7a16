"""Presence constraints."""

from __future__ import annotations

from typing import Any

from constraintkit.aliases import field_alias
from constraintkit.constraint import Constraint, TypedConstraint
from constraintkit.context import Context
from constraintkit.errors import InvalidConstraintError
from constraintkit.node import Kind, Node
from constraintkit.violation import Violation


class Required(Constraint):
    """Require a non-empty value.

    This is the one constraint that reports empty values rather than
    skipping them; compose it with others to make a value mandatory.
    """

    def violations(self, ctx: Context) -> list[Violation]:
        if ctx.is_empty():
            return [ctx.violation("a value is required")]
        return []


class ExactlyNRequired(TypedConstraint):
    """Require exactly ``n`` of the listed struct fields to be set.

    A field is set when its value is not empty. Violation details name the
    fields by alias.

    Args:
        n: Number of fields that must be set. Must be a positive integer.
        *fields: Field identifiers to count. There must be more than ``n``.

    Raises:
        InvalidConstraintError: If ``n`` is not positive, or not enough
            fields are listed for the choice to be meaningful.
    """

    expected = "struct"

    def __init__(self, n: int, *fields: str) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InvalidConstraintError(f"n must be a positive integer, got {n!r}")
        if len(fields) <= n:
            raise InvalidConstraintError(
                f"number of fields ({len(fields)}) must be greater than n ({n})"
            )
        self.n = n
        self.fields = list(fields)

    def accepts(self, node: Node) -> bool:
        return node.kind is Kind.STRUCT

    def check(self, ctx: Context, value: Any) -> list[Violation]:
        node = Node.wrap(value)
        actual = sum(1 for name in self.fields if not node.field(name).is_empty())
        if actual == self.n:
            return []

        cls = type(value)
        return [
            ctx.violation(
                f"exactly {self.n} of the listed fields must be set",
                {
                    "actual": actual,
                    "expected": self.n,
                    "fields": [field_alias(cls, name) for name in self.fields],
                },
            )
        ]
