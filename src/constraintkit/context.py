"""Traversal context.

A Context bundles the node currently being validated, its path from the root
value, and the strict-types flag. Contexts are frozen: every step of the
traversal derives a new Context for the child it visits, so one parent can be
reused for any number of children.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from constraintkit.errors import UnexpectedTypeError
from constraintkit.node import Node
from constraintkit.violation import TransportValue, Violation, check_details

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Context:
    """State passed to a constraint.

    Attributes:
        node: The node being validated.
        path: Structural address of the node from the root (root is "").
        strict_types: Whether type mismatches raise instead of being reported.
    """

    node: Node
    path: str = ""
    strict_types: bool = True

    @property
    def value(self) -> Any:
        """The raw value of the current node."""
        return self.node.raw

    def with_value(self, segment: str, value: Any) -> Context:
        """Derive a child context one path segment below this one."""
        return replace(self, node=Node.wrap(value), path=f"{self.path}.{segment}")

    def with_index(self, index: int, value: Any) -> Context:
        return self.with_value(f"[{index}]", value)

    def with_key(self, key: Any, value: Any) -> Context:
        return self.with_value(str(key), value)

    def with_field(self, alias: str, value: Any) -> Context:
        return self.with_value(alias, value)

    def with_node(self, value: Any) -> Context:
        """Derive a context for another value at the same path."""
        return replace(self, node=Node.wrap(value))

    def with_strict_types(self, strict_types: bool) -> Context:
        return replace(self, strict_types=strict_types)

    def is_empty(self) -> bool:
        """Check whether the current value, dereferenced once, is empty."""
        return self.node.deref().is_empty()

    def violation(
        self,
        message: str,
        details: Mapping[str, TransportValue] | None = None,
    ) -> Violation:
        """Create a violation at the current path.

        Args:
            message: Human-readable description of the failure.
            details: Optional structured details.

        Returns:
            The new Violation.

        Raises:
            InvalidDetailsError: If details hold values that are not transport-safe.
        """
        return Violation(path=self.path, message=message, details=check_details(details))

    def unexpected_type(self, expected: str) -> list[Violation]:
        """Handle a value a constraint does not accept.

        Args:
            expected: Description of the accepted type(s), e.g. "struct".

        Returns:
            A single violation describing the mismatch, when strict types
            are disabled.

        Raises:
            UnexpectedTypeError: If strict types are enabled.
        """
        actual = self.node.deref().type_name
        if self.strict_types:
            raise UnexpectedTypeError(self.path, expected, actual)

        logger.debug("Type mismatch at %r reported as violation: expected %s, got %s",
                     self.path, expected, actual)
        return [
            self.violation(
                f"expected a value of type {expected}, got {actual}",
                {"expected": expected, "actual": actual},
            )
        ]


def new_context(value: Any, strict_types: bool = True, path: str = "") -> Context:
    """Create the root context for a value.

    Args:
        value: The value to validate.
        strict_types: Whether type mismatches raise (default) or are reported.
        path: Path of the root value.

    Returns:
        The root Context.
    """
    return Context(node=Node.wrap(value), path=path, strict_types=strict_types)
