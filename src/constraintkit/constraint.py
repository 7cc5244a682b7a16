"""Constraint abstractions.

A constraint inspects the value in a Context and returns zero or more
violations. Constraints hold only their own configuration, fixed at
construction; everything about the value being checked arrives through the
Context.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, Union

from constraintkit.context import Context
from constraintkit.errors import InvalidConstraintError
from constraintkit.node import Node
from constraintkit.violation import Violation

ConstraintLike = Union["Constraint", Callable[[Context], "Iterable[Violation] | None"]]


class Constraint(ABC):
    """Abstract base class for all constraints.

    Constraints are also callable, so ``constraint(ctx)`` is the same as
    ``constraint.violations(ctx)``.
    """

    @abstractmethod
    def violations(self, ctx: Context) -> list[Violation]:
        """Validate the value in the given context.

        Args:
            ctx: The traversal context.

        Returns:
            The violations found, empty if the value is valid.
        """

    def __call__(self, ctx: Context) -> list[Violation]:
        return self.violations(ctx)


class ConstraintFunc(Constraint):
    """Adapter that lets a plain function be used as a constraint.

    The function may return any iterable of violations, or None.
    """

    def __init__(self, func: Callable[[Context], Iterable[Violation] | None]) -> None:
        self.func = func

    def violations(self, ctx: Context) -> list[Violation]:
        return list(self.func(ctx) or [])

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"ConstraintFunc({name})"


def as_constraint(value: ConstraintLike) -> Constraint:
    """Coerce a constraint or plain function into a Constraint.

    Raises:
        InvalidConstraintError: If the value is neither.
    """
    if isinstance(value, Constraint):
        return value
    if callable(value):
        return ConstraintFunc(value)
    raise InvalidConstraintError(
        f"Expected a Constraint or callable, got {type(value).__name__}"
    )


class TypedConstraint(Constraint):
    """Base class for constraints that accept a closed set of value types.

    Handles the rules every concrete constraint must follow, in order:

    1. Dereference one pointer level.
    2. Report nothing for nil values.
    3. Reject values of an unaccepted type (raise in strict mode, otherwise
       report a single violation).
    4. Report nothing for empty values, so every constraint is optional
       unless a presence constraint such as ``Required`` is composed in.
    5. Delegate to :meth:`check` with the raw value.

    Attributes:
        expected: Description of the accepted type(s), used in mismatch reports.
    """

    expected: str = "value"

    @abstractmethod
    def accepts(self, node: Node) -> bool:
        """Check whether a (non-nil, dereferenced) node has an accepted type."""

    @abstractmethod
    def check(self, ctx: Context, value: Any) -> list[Violation]:
        """Validate a non-empty value of an accepted type."""

    def violations(self, ctx: Context) -> list[Violation]:
        node = ctx.node.deref()
        if node.is_nil():
            return []
        if not self.accepts(node):
            return ctx.unexpected_type(self.expected)
        if node.is_empty():
            return []
        return self.check(ctx, node.raw)
