"""Schema layer: type registry, field normalization and the apply engine."""

from dotenv_schema.schema.engine import Schema
from dotenv_schema.schema.fields import FIELD_KEYS, MISSING, FieldSchema, normalize_field
from dotenv_schema.schema.types import (
    NATIVE_ALIASES,
    SPLIT_METHODS,
    TypeDescriptor,
    TypeRef,
    TypeRegistry,
    builtin_types,
    default_registry,
)

__all__ = [
    "FIELD_KEYS",
    "MISSING",
    "NATIVE_ALIASES",
    "SPLIT_METHODS",
    "FieldSchema",
    "Schema",
    "TypeDescriptor",
    "TypeRef",
    "TypeRegistry",
    "builtin_types",
    "default_registry",
    "normalize_field",
]
