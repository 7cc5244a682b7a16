"""Configuration for constraintkit.

Handles configuration loading from multiple sources with precedence:
explicit overrides > environment variables > pyproject.toml > defaults

Loading is always explicit: ``validate`` never reads configuration on its
own, it only uses a ValidationConfig it is given.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})

ENV_VARS = {
    "CONSTRAINTKIT_STRICT_TYPES": "strict_types",
    "CONSTRAINTKIT_ROOT_PATH": "root_path",
}


@dataclass
class ValidationConfig:
    """Settings applied to a validation run.

    Attributes:
        strict_types: Whether type mismatches raise (default: True) or are
            reported as violations.
        root_path: Path of the root value (default: ""). Violations below the
            root are addressed relative to it, e.g. "request.items.[0]".
    """

    strict_types: bool = True
    root_path: str = ""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not isinstance(self.strict_types, bool):
            raise ValueError("strict_types must be a boolean")

        if not isinstance(self.root_path, str):
            raise ValueError("root_path must be a string")
        if self.root_path.endswith("."):
            raise ValueError("root_path must not end with '.'")


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names."""
    return {f.name for f in fields(ValidationConfig)}


def _parse_bool(name: str, value: Any) -> Any:
    """Coerce a string flag from the environment or a config file to a boolean.

    Non-string values are returned unchanged and checked by ValidationConfig.

    Raises:
        ValueError: If a string value is not a recognised boolean.
    """
    if not isinstance(value, str):
        return value
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def find_config_file(filename: str = "pyproject.toml", start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / filename).is_file():
            return directory / filename
    return None


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the pyproject.toml [tool.constraintkit] section.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary of configuration values, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    section = data.get("tool", {}).get("constraintkit", {})

    # Filter to only valid config fields
    valid_fields = _get_config_field_names()
    return {k: v for k, v in section.items() if k in valid_fields}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from the CONSTRAINTKIT_* environment variables."""
    return {key: os.environ[name] for name, key in ENV_VARS.items() if name in os.environ}


def load_config(
    overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> ValidationConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables (CONSTRAINTKIT_*)
    3. pyproject.toml [tool.constraintkit] section
    4. Default values

    Args:
        overrides: Configuration values set by the caller.
        start_dir: Directory to start searching for pyproject.toml.

    Returns:
        Fully resolved ValidationConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    pyproject_config = _load_from_pyproject(start_dir)
    env_config = _load_from_env()

    valid_fields = _get_config_field_names()
    override_config = {
        k: v for k, v in (overrides or {}).items() if k in valid_fields and v is not None
    }

    merged: dict[str, Any] = {}
    for source in (pyproject_config, env_config, override_config):
        merged.update((k, v) for k, v in source.items() if v is not None)
    if "strict_types" in merged:
        merged["strict_types"] = _parse_bool("strict_types", merged["strict_types"])

    return ValidationConfig(**merged)
