"""Field alias resolution.

An alias is the externally visible name of a struct field. It is what
appears in violation paths and in violation details. Aliases are declared on
dataclass fields through metadata, or registered explicitly for any type.
The name-to-alias table for a type is built once and cached.

Example:
    >>> @dataclass
    ... class Subject:
    ...     Field1: str = ""
    ...     Field3: list[str] = alias("field3", default_factory=list)
    >>> field_alias(Subject, "Field3")
    'field3'
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

# Dataclass field metadata key holding a field's alias
ALIAS_METADATA_KEY = "validation"


def alias(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field with an alias.

    Args:
        name: The alias to use for the field.
        **kwargs: Passed through to ``dataclasses.field``.

    Returns:
        A dataclass field carrying the alias in its metadata.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ALIAS_METADATA_KEY] = name
    return dataclasses.field(metadata=metadata, **kwargs)


class AliasRegistry:
    """Registry mapping types to their field alias tables.

    Explicit registrations take precedence over dataclass metadata, and
    registrations on a base class apply to its subclasses.

    Example:
        >>> registry = AliasRegistry()
        >>> registry.register(Subject, {"Field1": "field_one"})
        >>> registry.alias_for(Subject, "Field1")
        'field_one'
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._explicit: dict[type, dict[str, str]] = {}
        self._tables: dict[type, dict[str, str]] = {}

    def register(self, cls: type, aliases: Mapping[str, str]) -> None:
        """Register aliases for the fields of a type.

        Args:
            cls: The type whose fields are aliased.
            aliases: Mapping of field identifier to alias.

        Raises:
            ValueError: If an alias is not a non-empty string.
        """
        for name, value in aliases.items():
            if not value or not isinstance(value, str):
                raise ValueError(
                    f"Alias for field '{name}' of {cls.__name__} must be a non-empty string"
                )
        self._explicit.setdefault(cls, {}).update(aliases)
        # Subclass tables may include these aliases
        self._tables.clear()

    def aliases_for(self, cls: type) -> Mapping[str, str]:
        """Get the alias table for a type.

        Only fields with a declared alias appear in the table.

        Args:
            cls: The type to resolve.

        Returns:
            Mapping of field identifier to alias.
        """
        table = self._tables.get(cls)
        if table is None:
            table = self._build_table(cls)
            self._tables[cls] = table
        return table

    def alias_for(self, cls: type, name: str) -> str:
        """Resolve one field to its alias, falling back to the identifier."""
        return self.aliases_for(cls).get(name, name)

    def _build_table(self, cls: type) -> dict[str, str]:
        table: dict[str, str] = {}
        if dataclasses.is_dataclass(cls):
            for f in dataclasses.fields(cls):
                declared = f.metadata.get(ALIAS_METADATA_KEY)
                if declared:
                    table[f.name] = declared
        for klass in reversed(cls.__mro__):
            table.update(self._explicit.get(klass, {}))
        return table


_global_registry: AliasRegistry | None = None


def get_alias_registry() -> AliasRegistry:
    """Get the process-wide alias registry."""
    global _global_registry
    if _global_registry is None:
        _global_registry = AliasRegistry()
    return _global_registry


def register_aliases(cls: type, aliases: Mapping[str, str]) -> None:
    """Register field aliases for a type in the global registry."""
    get_alias_registry().register(cls, aliases)


def field_aliases(cls: type) -> Mapping[str, str]:
    """Get the declared aliases of a type from the global registry."""
    return get_alias_registry().aliases_for(cls)


def field_alias(cls: type, name: str) -> str:
    """Resolve a field identifier to its alias, or the identifier itself."""
    return get_alias_registry().alias_for(cls, name)
