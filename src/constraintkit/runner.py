"""Validation entry points.

``validate`` wraps a value in a root Context and runs a constraint against
it. ``check`` does the same and summarises the outcome in a
ValidationResult.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from constraintkit.config import ValidationConfig
from constraintkit.constraint import ConstraintLike, as_constraint
from constraintkit.context import new_context
from constraintkit.violation import Violation

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating one value.

    Attributes:
        status: Overall status ("pass" if there are no violations, "fail" otherwise).
        violations: All violations found, in traversal order.
    """

    status: Literal["pass", "fail"]
    violations: list[Violation]

    @property
    def ok(self) -> bool:
        return self.status == "pass"

    def by_path(self) -> Mapping[str, list[Violation]]:
        """Group violations by path, preserving traversal order."""
        grouped: dict[str, list[Violation]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.path, []).append(violation)
        return grouped


def validate(
    value: Any,
    constraint: ConstraintLike,
    *,
    strict_types: bool | None = None,
    config: ValidationConfig | None = None,
) -> list[Violation]:
    """Validate a value against a constraint.

    Args:
        value: The value to validate.
        constraint: The top-level constraint (or plain constraint function).
        strict_types: Overrides ``config.strict_types`` when given.
        config: Settings for this run. Defaults to ValidationConfig().

    Returns:
        All violations found; an empty list if the value is valid.

    Raises:
        ConfigurationError: If the constraints are wired to values they
            cannot handle, or were configured with invalid parameters.
    """
    config = config or ValidationConfig()
    strict = config.strict_types if strict_types is None else strict_types

    ctx = new_context(value, strict_types=strict, path=config.root_path)
    logger.debug("Validating %s value (strict_types=%s)", ctx.node.type_name, strict)

    violations = list(as_constraint(constraint).violations(ctx))

    logger.debug("Validation finished with %d violation(s)", len(violations))
    return violations


def check(
    value: Any,
    constraint: ConstraintLike,
    *,
    strict_types: bool | None = None,
    config: ValidationConfig | None = None,
) -> ValidationResult:
    """Validate a value and summarise the outcome.

    Accepts the same arguments as :func:`validate`.

    Returns:
        ValidationResult with status and violations.
    """
    violations = validate(value, constraint, strict_types=strict_types, config=config)
    status: Literal["pass", "fail"] = "fail" if violations else "pass"
    return ValidationResult(status=status, violations=violations)
