"""Violation model.

A violation is one reported validation failure. Its details are restricted to
a transport-safe set of values so they can always be converted into a wire
document (see ``constraintkit.wire``).
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Union

from constraintkit.errors import InvalidDetailsError

TransportValue = Union[
    None, bool, int, float, str, "list[TransportValue]", "dict[str, TransportValue]"
]

_SCALARS = (bool, int, float, str, Decimal, Fraction)


@dataclass(frozen=True)
class Violation:
    """A single validation failure.

    Attributes:
        path: Structural address of the offending value (e.g. ".items.[0]").
        message: Human-readable description of the failure.
        details: Optional structured details, restricted to transport-safe values.
    """

    path: str
    message: str
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "path": self.path,
            "message": self.message,
            "details": self.details,
        }


def is_transport_safe(value: Any) -> bool:
    """Check that a value only holds None, bool, numbers, strings, lists and mappings.

    Args:
        value: The value to check, recursively.

    Returns:
        True if the value can be converted to a wire document.
    """
    if value is None or isinstance(value, _SCALARS):
        return True
    if isinstance(value, Mapping):
        return all(isinstance(k, str) and is_transport_safe(v) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return all(is_transport_safe(item) for item in value)
    return False


def check_details(details: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Validate and copy violation details.

    Args:
        details: Details passed by a constraint, or None.

    Returns:
        A deep copy of the details, or None if none were given.

    Raises:
        InvalidDetailsError: If any detail is not transport-safe.
    """
    if details is None:
        return None
    for key, value in details.items():
        if not isinstance(key, str) or not is_transport_safe(value):
            raise InvalidDetailsError(str(key), value)
    return copy.deepcopy(dict(details))
