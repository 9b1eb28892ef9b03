"""
dotenv-schema — typed, validated dotenv configuration.

File: src/dotenv_schema/__init__.py
Last updated: 2026-10-19

Purpose
- Package root. Exposes the session facade, schema primitives and errors.

Functional requirements
- Must not have side effects at import time (no settings loading, no logging init).
"""

from dotenv_schema.config import ConfigObject
from dotenv_schema.destruct import DestructCell
from dotenv_schema.errors import (
    AlreadyDestroyedError,
    CastError,
    DestructedValueError,
    InvalidPointerError,
    RequiredError,
    SchemaError,
    SchemaLoadError,
    SettingsError,
    UnknownFieldShapeError,
    UnknownTypeError,
    ValidationError,
)
from dotenv_schema.observability import configure_logging
from dotenv_schema.schema import (
    MISSING,
    FieldSchema,
    Schema,
    TypeDescriptor,
    TypeRef,
    TypeRegistry,
    default_registry,
    normalize_field,
)
from dotenv_schema.session import DotEnv, load
from dotenv_schema.settings import RuntimeSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "AlreadyDestroyedError",
    "CastError",
    "ConfigObject",
    "DestructCell",
    "DestructedValueError",
    "DotEnv",
    "FieldSchema",
    "InvalidPointerError",
    "RequiredError",
    "RuntimeSettings",
    "Schema",
    "SchemaError",
    "SchemaLoadError",
    "SettingsError",
    "TypeDescriptor",
    "TypeRef",
    "TypeRegistry",
    "UnknownFieldShapeError",
    "UnknownTypeError",
    "ValidationError",
    "__version__",
    "configure_logging",
    "default_registry",
    "load",
    "load_settings",
    "normalize_field",
]
