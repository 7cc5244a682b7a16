"""constraintkit - composable validation of in-memory values.

Constraints are small validation units composed into a tree with the
constructs in ``constraintkit.composite``. ``validate`` runs a constraint
tree against a value and returns every violation found, each addressed by
its path from the root value.

Example:
    >>> from constraintkit import Elements, Fields, validate
    >>> from constraintkit.constraints import MinLength, Required
    >>> violations = validate(order, Fields({
    ...     "customer": Required(),
    ...     "lines": Elements(Fields({"sku": MinLength(3)})),
    ... }))
"""

from __future__ import annotations

from constraintkit.aliases import (
    AliasRegistry,
    alias,
    field_alias,
    field_aliases,
    get_alias_registry,
    register_aliases,
)
from constraintkit.composite import (
    Constraints,
    Elements,
    Fields,
    Keys,
    Lazy,
    Map,
    When,
    WhenFn,
)
from constraintkit.config import ValidationConfig, load_config
from constraintkit.constraint import (
    Constraint,
    ConstraintFunc,
    ConstraintLike,
    TypedConstraint,
    as_constraint,
)
from constraintkit.context import Context, new_context
from constraintkit.errors import (
    ConfigurationError,
    InvalidConstraintError,
    InvalidDetailsError,
    UnexpectedTypeError,
    UnknownFieldError,
)
from constraintkit.node import Kind, Node, Pointer
from constraintkit.runner import ValidationResult, check, validate
from constraintkit.violation import Violation, is_transport_safe

__version__ = "0.1.0"

__all__ = [
    # Core types
    "Context",
    "Kind",
    "Node",
    "Pointer",
    "Violation",
    "new_context",
    "is_transport_safe",
    # Constraint contract
    "Constraint",
    "ConstraintFunc",
    "ConstraintLike",
    "TypedConstraint",
    "as_constraint",
    # Composition
    "Constraints",
    "Elements",
    "Fields",
    "Keys",
    "Lazy",
    "Map",
    "When",
    "WhenFn",
    # Aliases
    "AliasRegistry",
    "alias",
    "field_alias",
    "field_aliases",
    "get_alias_registry",
    "register_aliases",
    # Entry points
    "ValidationResult",
    "check",
    "validate",
    # Configuration
    "ValidationConfig",
    "load_config",
    # Errors
    "ConfigurationError",
    "InvalidConstraintError",
    "InvalidDetailsError",
    "UnexpectedTypeError",
    "UnknownFieldError",
]
