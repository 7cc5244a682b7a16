"""Uniform introspection over the values being validated.

A Node wraps one runtime value and answers the questions every constraint
needs to ask: what kind of value is this, is it nil, is it empty, and what
does it point at. Values are classified into a small closed set of kinds so
traversal code can match on them exhaustively.
"""

from __future__ import annotations

import dataclasses
import numbers
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Generic, TypeVar

from constraintkit.errors import UnknownFieldError

T = TypeVar("T")


class Kind(Enum):
    """Closed set of value kinds understood by the traversal."""

    NIL = "nil"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRUCT = "struct"
    POINTER = "pointer"


@dataclass(frozen=True)
class Pointer(Generic[T]):
    """An explicit reference to another value.

    ``Pointer(None)`` is the nil pointer. Dereferencing strips exactly one
    level, so ``Pointer(Pointer(x))`` needs two dereferences to reach ``x``.

    Attributes:
        target: The referenced value, or None for a nil pointer.
    """

    target: T | None = None

    def is_nil(self) -> bool:
        return self.target is None


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def kind_of(value: Any) -> Kind:
    """Classify a raw value into its Kind.

    Args:
        value: Any Python value.

    Returns:
        The Kind of the value. Objects that are not scalars, containers or
        pointers are struct-like.
    """
    if value is None:
        return Kind.NIL
    if isinstance(value, Pointer):
        return Kind.POINTER
    # bool is a numbers.Number, so it must be matched first
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, numbers.Number):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if _is_namedtuple(value):
        return Kind.STRUCT
    if isinstance(value, (Sequence, Set)):
        return Kind.SEQUENCE
    return Kind.STRUCT


def _is_zero_time(value: Any) -> bool | None:
    """Return whether a time-like value is its zero value, or None if not time-like."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) == datetime.min
    if isinstance(value, date):
        return value == date.min
    if isinstance(value, time):
        return value.replace(tzinfo=None) == time.min
    if isinstance(value, timedelta):
        return value == timedelta(0)
    return None


@dataclass(frozen=True)
class Node:
    """Introspection wrapper around one value.

    Attributes:
        raw: The underlying value, for type-specific casts by constraints.
        kind: The classified Kind of ``raw``.
    """

    raw: Any
    kind: Kind

    @classmethod
    def wrap(cls, value: Any) -> Node:
        """Wrap a value, leaving an existing Node untouched."""
        if isinstance(value, Node):
            return value
        return cls(raw=value, kind=kind_of(value))

    @property
    def type_name(self) -> str:
        if self.kind is Kind.NIL:
            return "None"
        return type(self.raw).__name__

    def is_nil(self) -> bool:
        """Check for None or a nil pointer."""
        if self.kind is Kind.NIL:
            return True
        return self.kind is Kind.POINTER and self.raw.is_nil()

    def is_empty(self) -> bool:
        """Check whether the value is the zero value for its apparent type.

        Empty values are: None, nil pointers, False, numeric zero, empty
        strings, zero-length containers, zero-valued time-like values, and
        structs whose fields are all empty. Objects exposing no fields are
        never considered empty.

        Returns:
            True if the value is empty.
        """
        kind = self.kind
        if kind is Kind.NIL:
            return True
        if kind is Kind.POINTER:
            return self.raw.is_nil()
        if kind is Kind.BOOL:
            return self.raw is False
        if kind is Kind.NUMBER:
            return bool(self.raw == 0)
        if kind in (Kind.STRING, Kind.SEQUENCE, Kind.MAPPING):
            return len(self.raw) == 0

        zero_time = _is_zero_time(self.raw)
        if zero_time is not None:
            return zero_time

        names = self.field_names()
        if not names:
            return False
        return all(self.field(name).is_empty() for name in names)

    def deref(self) -> Node:
        """Strip one pointer level.

        A nil pointer dereferences to a nil Node. Non-pointer nodes are
        returned unchanged.
        """
        if self.kind is not Kind.POINTER:
            return self
        return Node.wrap(self.raw.target)

    def length(self) -> int | None:
        """Return the length of strings and containers, None for other kinds."""
        if self.kind in (Kind.STRING, Kind.SEQUENCE, Kind.MAPPING):
            return len(self.raw)
        return None

    def field_names(self) -> list[str]:
        """List the fields of a struct-like value in declaration order.

        Dataclasses report their declared fields, named tuples their
        ``_fields``, and plain objects their public instance attributes
        (from ``__dict__`` or ``__slots__``).

        Returns:
            Field identifiers, or an empty list for non-struct values.
        """
        if self.kind is not Kind.STRUCT:
            return []

        raw = self.raw
        if dataclasses.is_dataclass(raw) and not isinstance(raw, type):
            return [f.name for f in dataclasses.fields(raw)]
        if _is_namedtuple(raw):
            return list(raw._fields)

        names: list[str] = []
        if hasattr(raw, "__dict__"):
            names.extend(name for name in vars(raw) if not name.startswith("_"))
        for klass in type(raw).__mro__:
            slots = klass.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            for name in slots:
                if not name.startswith("_") and name not in names and hasattr(raw, name):
                    names.append(name)
        return names

    def field(self, name: str) -> Node:
        """Return the Node for one field of a struct-like value.

        Args:
            name: Field identifier (not its alias).

        Returns:
            Node wrapping the field's value.

        Raises:
            UnknownFieldError: If the value has no such field.
        """
        if name not in self.field_names():
            raise UnknownFieldError(self.type_name, name)
        return Node.wrap(getattr(self.raw, name))
