"""Composition constructs.

Each construct is itself a Constraint that runs other constraints, either
against the same context or against derived child contexts:

- Constraints: run every member against the same value.
- Elements: run against every element of a sequence or value of a mapping.
- Fields: run against named fields of a struct-like value.
- Keys: run against every key of a mapping.
- Map: run against a value derived from the current one.
- Lazy: build the constraint at validation time (allows self-reference).
- When / WhenFn: run only when a condition holds.

Violations from children are concatenated in iteration order. Nothing
short-circuits: every failure surfaces in a single pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from constraintkit.aliases import field_alias
from constraintkit.constraint import Constraint, ConstraintLike, as_constraint
from constraintkit.context import Context
from constraintkit.node import Kind
from constraintkit.violation import Violation

logger = logging.getLogger(__name__)


def _run_all(constraints: Iterable[Constraint], ctx: Context) -> list[Violation]:
    violations: list[Violation] = []
    for constraint in constraints:
        violations.extend(constraint.violations(ctx))
    return violations


class Constraints(Constraint):
    """Run every member constraint against the same context.

    Never inspects the value itself, so it can be applied to anything,
    including None.
    """

    def __init__(self, *constraints: ConstraintLike) -> None:
        self.constraints = [as_constraint(c) for c in constraints]

    def violations(self, ctx: Context) -> list[Violation]:
        return _run_all(self.constraints, ctx)

    def __len__(self) -> int:
        return len(self.constraints)


class Elements(Constraint):
    """Run constraints against every element of a sequence or mapping.

    Sequence elements are addressed by index (``.[0]``), mapping values by
    their key (``.key``). A nil or empty container produces no violations.
    """

    def __init__(self, *constraints: ConstraintLike) -> None:
        self.constraints = [as_constraint(c) for c in constraints]

    def violations(self, ctx: Context) -> list[Violation]:
        node = ctx.node.deref()
        if node.is_nil():
            return []

        if node.kind is Kind.SEQUENCE:
            children = [ctx.with_index(i, item) for i, item in enumerate(node.raw)]
        elif node.kind is Kind.MAPPING:
            children = [ctx.with_key(key, item) for key, item in node.raw.items()]
        else:
            return ctx.unexpected_type("sequence or mapping")

        violations: list[Violation] = []
        for child in children:
            violations.extend(_run_all(self.constraints, child))
        return violations


class Fields(Constraint):
    """Run constraints against named fields of a struct-like value.

    Child paths use the field's alias when one is declared. Unset fields
    are still visited; whether an empty field is acceptable is up to the
    constraint applied to it.

    Example:
        >>> Fields({
        ...     "Name": Required(),
        ...     "Tags": Elements(MaxLength(10)),
        ... })
    """

    def __init__(
        self,
        fields: Mapping[str, ConstraintLike] | None = None,
        /,
        **kwargs: ConstraintLike,
    ) -> None:
        declared = dict(fields or {})
        declared.update(kwargs)
        self.fields: dict[str, Constraint] | None = {
            name: as_constraint(c) for name, c in declared.items()
        }
        self.each_field: list[Constraint] = []

    @classmethod
    def each(cls, *constraints: ConstraintLike) -> Fields:
        """Build a Fields construct that applies constraints to every field."""
        instance = cls()
        instance.fields = None
        instance.each_field = [as_constraint(c) for c in constraints]
        return instance

    def violations(self, ctx: Context) -> list[Violation]:
        node = ctx.node.deref()
        if node.is_nil():
            return []
        if node.kind is not Kind.STRUCT:
            return ctx.unexpected_type("struct")

        cls = type(node.raw)
        if self.fields is None:
            targets = [(name, self.each_field) for name in node.field_names()]
        else:
            targets = [(name, [c]) for name, c in self.fields.items()]

        violations: list[Violation] = []
        for name, constraints in targets:
            child = ctx.with_field(field_alias(cls, name), node.field(name))
            violations.extend(_run_all(constraints, child))
        return violations


class Keys(Constraint):
    """Run constraints against every key of a mapping.

    The key itself becomes the child value, addressed by its own string form.
    A nil or empty mapping produces no violations.
    """

    def __init__(self, *constraints: ConstraintLike) -> None:
        self.constraints = [as_constraint(c) for c in constraints]

    def violations(self, ctx: Context) -> list[Violation]:
        node = ctx.node.deref()
        if node.is_nil():
            return []
        if node.kind is not Kind.MAPPING:
            return ctx.unexpected_type("mapping")

        violations: list[Violation] = []
        for key in node.raw:
            violations.extend(_run_all(self.constraints, ctx.with_key(key, key)))
        return violations


class Map(Constraint):
    """Run constraints against a value derived from the current one.

    The transform receives the raw current value and must be pure. The path
    is unchanged.

    Example:
        >>> Map(str.strip, MinLength(1))
    """

    def __init__(self, transform: Callable[[Any], Any], *constraints: ConstraintLike) -> None:
        self.transform = transform
        self.constraints = [as_constraint(c) for c in constraints]

    def violations(self, ctx: Context) -> list[Violation]:
        mapped = ctx.with_node(self.transform(ctx.value))
        return _run_all(self.constraints, mapped)


class Lazy(Constraint):
    """Build a constraint at validation time rather than construction time.

    Allows a constraint to refer to itself, or to a peer that is defined
    later. The factory is called on every validation.

    Example:
        >>> tree: Constraint = Fields({
        ...     "children": Elements(Lazy(lambda: tree)),
        ... })
    """

    def __init__(self, factory: Callable[[], ConstraintLike]) -> None:
        self.factory = factory

    def violations(self, ctx: Context) -> list[Violation]:
        constraint = as_constraint(self.factory())
        logger.debug("Resolved lazy constraint %r at %r", constraint, ctx.path)
        return constraint.violations(ctx)


class When(Constraint):
    """Run constraints only if a condition, fixed at construction, is true."""

    def __init__(self, condition: bool, *constraints: ConstraintLike) -> None:
        self.condition = condition
        self.constraints = [as_constraint(c) for c in constraints]

    def violations(self, ctx: Context) -> list[Violation]:
        if not self.condition:
            return []
        return _run_all(self.constraints, ctx)


class WhenFn(Constraint):
    """Run constraints only if a predicate over the context is true."""

    def __init__(self, predicate: Callable[[Context], bool], *constraints: ConstraintLike) -> None:
        self.predicate = predicate
        self.constraints = [as_constraint(c) for c in constraints]

    def violations(self, ctx: Context) -> list[Violation]:
        if not self.predicate(ctx):
            return []
        return _run_all(self.constraints, ctx)
