"""Time constraints.

Both constraints accept ``datetime`` and ``date`` values. A date is compared
as midnight of that day, and naive values are treated as UTC, so naive and
aware times can be compared with each other. The zero time (``datetime.min``
or ``date.min``) counts as empty and is skipped. Details carry the boundary
formatted as RFC 3339.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from constraintkit.constraint import TypedConstraint
from constraintkit.context import Context
from constraintkit.errors import InvalidConstraintError
from constraintkit.node import Node
from constraintkit.violation import Violation


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as RFC 3339 with second precision.

    Naive datetimes and UTC offsets of zero are written with a "Z" suffix.

    Example:
        >>> format_rfc3339(datetime(2000, 1, 1, tzinfo=timezone.utc))
        '2000-01-01T00:00:00Z'
    """
    offset = value.utcoffset()
    text = value.replace(microsecond=0, tzinfo=None).isoformat()
    if offset is None or offset == timedelta(0):
        return text + "Z"

    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def to_aware(value: date) -> datetime:
    """Promote a date to midnight and attach UTC to naive datetimes."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time())
    if value.utcoffset() is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


class _TimeConstraint(TypedConstraint):
    expected = "datetime or date"

    def __init__(self, boundary: datetime | date) -> None:
        if not isinstance(boundary, date):
            raise InvalidConstraintError(
                f"boundary must be a datetime or date, got {type(boundary).__name__}"
            )
        self.boundary = to_aware(boundary)

    def accepts(self, node: Node) -> bool:
        return isinstance(node.raw, date)


class TimeAfter(_TimeConstraint):
    """Require a time strictly after the given time."""

    def check(self, ctx: Context, value: Any) -> list[Violation]:
        if to_aware(value) > self.boundary:
            return []
        formatted = format_rfc3339(self.boundary)
        return [ctx.violation(f"value must be after {formatted}", {"time": formatted})]


class TimeBefore(_TimeConstraint):
    """Require a time strictly before the given time."""

    def check(self, ctx: Context, value: Any) -> list[Violation]:
        if to_aware(value) < self.boundary:
            return []
        formatted = format_rfc3339(self.boundary)
        return [ctx.violation(f"value must be before {formatted}", {"time": formatted})]
