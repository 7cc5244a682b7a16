"""Concrete constraints built on the constraintkit core.

Every constraint here except ``Required`` is optional: it reports nothing for
nil or empty values of the types it accepts.
"""

from __future__ import annotations

from constraintkit.constraints.length import MaxLength, MinLength
from constraintkit.constraints.required import ExactlyNRequired, Required
from constraintkit.constraints.temporal import TimeAfter, TimeBefore, format_rfc3339
from constraintkit.constraints.values import OneOf, Regexp

__all__ = [
    # Presence
    "ExactlyNRequired",
    "Required",
    # Length
    "MaxLength",
    "MinLength",
    # Time
    "TimeAfter",
    "TimeBefore",
    "format_rfc3339",
    # Values
    "OneOf",
    "Regexp",
]
