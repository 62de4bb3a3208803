"""Error hierarchy for configuration resolution.

All errors inherit from ConfigError, which carries the offending field
path. The command layer maps any ConfigError to a non-zero exit status
and prints its message, which always names the field and the violated
constraint.
"""

from collections.abc import Mapping
from pathlib import Path


class ConfigError(Exception):
    """Base exception for all configuration errors."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class ShapeError(ConfigError):
    """Raised when a known field holds a value of the wrong kind."""

    def __init__(self, field: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(field, f"{field}: expected {expected}, got {actual}")


class DomainError(ConfigError):
    """Raised when a value has the right kind but an invalid value."""

    def __init__(self, field: str, reason: str) -> None:
        self.reason = reason
        super().__init__(field, f"{field}: {reason}")


class DocumentError(ConfigError):
    """Raised when a settings document cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__("<document>", f"{path}: {reason}")


class PluginResolutionError(ConfigError):
    """Raised by the plugin loader when a plugin reference cannot be loaded."""

    def __init__(self, plugin_id: str, reason: str) -> None:
        self.plugin_id = plugin_id
        self.reason = reason
        super().__init__("plugins", f"plugin {plugin_id!r}: {reason}")


def describe_kind(value: object) -> str:
    """Name the kind of a raw document value for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__
