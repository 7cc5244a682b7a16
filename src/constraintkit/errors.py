"""Configuration faults raised by constraintkit.

These signal a defect in how constraints were assembled or configured by the
calling code. They are never produced by bad input data; data problems are
reported as violations instead.
"""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base class for every constraint wiring or configuration fault."""


class UnexpectedTypeError(ConfigurationError):
    """Raised when a constraint is applied to a value it cannot handle.

    Only raised while strict types are enabled. With strict types disabled
    the same mismatch is reported as a single violation.
    """

    def __init__(self, path: str, expected: str, actual: str) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        location = path or "<root>"
        super().__init__(f"Unexpected type at {location}: expected {expected}, got {actual}")


class InvalidConstraintError(ConfigurationError):
    """Raised when a constraint is constructed with invalid parameters."""


class UnknownFieldError(ConfigurationError):
    """Raised when a constraint names a field the value does not have."""

    def __init__(self, type_name: str, field: str) -> None:
        self.type_name = type_name
        self.field = field
        super().__init__(f"Type '{type_name}' has no field '{field}'")


class InvalidDetailsError(ConfigurationError):
    """Raised when violation details hold a value that is not transport-safe."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"Violation detail '{key}' has unsupported type {type(value).__name__}; "
            "details may only hold None, bool, numbers, strings, lists and mappings"
        )
