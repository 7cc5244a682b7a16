"""Conversion of violation details into a generic structured document.

The document mirrors the shape of a protobuf ``Struct``: every value is a
single-key mapping tagged with its kind (``null_value``, ``bool_value``,
``number_value``, ``string_value``, ``struct_value`` or ``list_value``).
Conversion never fails. Errors and values of unsupported types are rendered
through ``str()``. Numbers too large for a float become infinite.
"""

from __future__ import annotations

import json
import math
import numbers
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from constraintkit.violation import Violation


def to_value(value: Any) -> dict[str, Any]:
    """Convert one value into a tagged document value.

    Args:
        value: Any value.

    Returns:
        A single-key mapping naming the value's kind.
    """
    if value is None:
        return {"null_value": None}
    if isinstance(value, bool):
        return {"bool_value": value}
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            return {"number_value": float(value)}
        except OverflowError:
            return {"number_value": math.inf if value > 0 else -math.inf}
        except ValueError:
            return {"string_value": str(value)}
    if isinstance(value, str):
        return {"string_value": value}
    if isinstance(value, BaseException):
        return {"string_value": str(value)}
    if isinstance(value, Mapping):
        return {"struct_value": {str(k): to_value(v) for k, v in value.items()}}
    if isinstance(value, (list, tuple)):
        return {"list_value": [to_value(item) for item in value]}
    return {"string_value": str(value)}


def map_to_struct(mapping: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Convert a mapping into a document struct.

    Args:
        mapping: The mapping to convert, typically violation details.

    Returns:
        Mapping of field name to tagged value, or None if the mapping is
        empty or None.
    """
    if not mapping:
        return None
    return {str(key): to_value(value) for key, value in mapping.items()}


def violation_to_struct(violation: Violation) -> dict[str, Any]:
    """Convert a violation into a document, converting its details."""
    return {
        "path": violation.path,
        "message": violation.message,
        "details": map_to_struct(violation.details),
    }


def violations_to_json(violations: list[Violation], indent: int | None = None) -> str:
    """Serialise violations as a JSON array of plain dictionaries."""
    return json.dumps([v.to_dict() for v in violations], indent=indent, default=str)
