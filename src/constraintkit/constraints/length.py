"""Length constraints for strings, sequences and mappings."""

from __future__ import annotations

from typing import Any

from constraintkit.constraint import TypedConstraint
from constraintkit.context import Context
from constraintkit.errors import InvalidConstraintError
from constraintkit.node import Kind, Node
from constraintkit.violation import Violation

_SIZED_KINDS = (Kind.STRING, Kind.SEQUENCE, Kind.MAPPING)


class _LengthConstraint(TypedConstraint):
    expected = "string, sequence or mapping"

    def __init__(self, limit: int) -> None:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise InvalidConstraintError(f"length limit must be a non-negative integer, got {limit!r}")
        self.limit = limit

    def accepts(self, node: Node) -> bool:
        return node.kind in _SIZED_KINDS


class MinLength(_LengthConstraint):
    """Require a length of at least ``limit``. Empty values are skipped."""

    def check(self, ctx: Context, value: Any) -> list[Violation]:
        actual = len(value)
        if actual >= self.limit:
            return []
        return [
            ctx.violation(
                f"length must be at least {self.limit}",
                {"minimum": self.limit, "actual": actual},
            )
        ]


class MaxLength(_LengthConstraint):
    """Require a length of at most ``limit``."""

    def check(self, ctx: Context, value: Any) -> list[Violation]:
        actual = len(value)
        if actual <= self.limit:
            return []
        return [
            ctx.violation(
                f"length must be at most {self.limit}",
                {"maximum": self.limit, "actual": actual},
            )
        ]
