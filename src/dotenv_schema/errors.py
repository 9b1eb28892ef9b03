"""
dotenv-schema — error taxonomy.

File: src/dotenv_schema/errors.py
Last updated: 2026-10-19

Purpose
- Define the exceptions raised while normalizing schemas, applying fields and
  handling destructed values.

Functional requirements
- Field-level errors carry the offending field name once re-raised by
  ``Schema.apply()``.
- The original failure is always preserved as ``__cause__``.
"""

from __future__ import annotations

from typing import Self


class SchemaError(ValueError):
    """Base class for every field-level schema failure."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

    def for_field(self, name: str) -> Self:
        """Return a copy of this error prefixed with the field ``name``."""

        return type(self)(f"Env {name!r}: {self.message}", field=name)


class UnknownFieldShapeError(SchemaError):
    """Raised when a field declaration matches none of the supported shapes."""


class UnknownTypeError(SchemaError):
    """Raised when a field or pointer names a type missing from the registry."""


class InvalidPointerError(SchemaError):
    """Raised when a cast/validate/uncast pointer targets another pointer."""


class CastError(SchemaError):
    """Raised when a field's cast function fails."""


class RequiredError(SchemaError):
    """Raised when a required field has no value after defaulting and casting."""


class ValidationError(SchemaError):
    """Raised when a field's validator fails or returns a falsy result."""


class AlreadyDestroyedError(RuntimeError):
    """Raised when mutating a destruct cell that has already been destroyed."""


class DestructedValueError(RuntimeError):
    """Raised by the default replacement when reading a destroyed value."""


class SchemaLoadError(ValueError):
    """Raised when a schema declaration file cannot be loaded."""


class SettingsError(ValueError):
    """Raised when runtime settings overrides cannot be coerced."""


__all__ = [
    "AlreadyDestroyedError",
    "CastError",
    "DestructedValueError",
    "InvalidPointerError",
    "RequiredError",
    "SchemaError",
    "SchemaLoadError",
    "SettingsError",
    "UnknownFieldShapeError",
    "UnknownTypeError",
    "ValidationError",
]
