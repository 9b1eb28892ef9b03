"""
dotenv-schema — field schema normalization.

File: src/dotenv_schema/schema/fields.py
Last updated: 2026-10-19

Purpose
- Turn shorthand field declarations into fully-resolved ``FieldSchema`` records.

What should be included in this file
- The ``FieldSchema`` record and the ``MISSING`` sentinel.
- The ordered shape-matching algorithm in ``normalize_field()``.

Functional requirements
- Shapes, by precedence: type name string, mapping with string ``type``,
  native alias, mapping with alias ``type``, mapping with any other ``type``,
  typeless mapping.
- Type defaults are merged underneath the field's own keys.
- Unknown type names raise ``UnknownTypeError``; unknown shapes raise
  ``UnknownFieldShapeError``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

from dotenv_schema.errors import UnknownFieldShapeError
from dotenv_schema.schema.types import (
    POINTER_ROLES,
    Describer,
    FieldFunction,
    TypeRef,
    TypeRegistry,
    default_registry,
)


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final[Any] = _Missing()

FIELD_KEYS: Final[frozenset[str]] = frozenset(
    {
        "cast",
        "default",
        "default_raw",
        "describe",
        "destruct",
        "help",
        "required",
        "type",
        "uncast",
        "validate",
    }
)


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """Normalized per-field casting/validation configuration."""

    type: str
    required: bool = True
    default: Any = MISSING
    default_raw: Any = MISSING
    cast: FieldFunction | TypeRef | None = None
    validate: FieldFunction | TypeRef | None = None
    uncast: FieldFunction | TypeRef | None = None
    describe: Describer | None = None
    destruct: Any = None
    help: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def has_default_raw(self) -> bool:
        return self.default_raw is not MISSING

    def get(self, key: str, default: Any = None) -> Any:
        if key in FIELD_KEYS:
            value = getattr(self, key)
            return default if value is MISSING else value
        return self.options.get(key, default)

    def __getitem__(self, key: str) -> Any:
        if key in FIELD_KEYS:
            return getattr(self, key)
        return self.options[key]

    def __contains__(self, key: object) -> bool:
        if key in FIELD_KEYS:
            return getattr(self, str(key)) not in (None, MISSING)
        return key in self.options

    def with_options(self, **overrides: Any) -> FieldSchema:
        """Return a copy with ``overrides`` applied on top of this record."""

        core = {key: value for key, value in overrides.items() if key in FIELD_KEYS}
        extra = {key: value for key, value in overrides.items() if key not in FIELD_KEYS}
        return dataclasses.replace(self, **core, options={**self.options, **extra})

    def underlay(self, defaults: Mapping[str, Any]) -> FieldSchema:
        """Return a copy with ``defaults`` merged beneath this record's options."""

        extra = {key: value for key, value in defaults.items() if key not in FIELD_KEYS}
        return dataclasses.replace(self, options={**extra, **self.options})

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.options)
        for key in sorted(FIELD_KEYS):
            value = getattr(self, key)
            if value is not MISSING:
                payload[key] = value
        return payload


def normalize_field(raw: object, registry: TypeRegistry | None = None) -> FieldSchema:
    """Resolve a raw field declaration into a ``FieldSchema``."""

    if isinstance(raw, FieldSchema):
        return raw

    types = registry if registry is not None else default_registry()
    spec = _resolve_shape(raw, types)
    descriptor = types.resolve(spec["type"])

    merged: dict[str, Any] = dict(descriptor.defaults)
    for role in (*POINTER_ROLES, "describe"):
        inherited = getattr(descriptor, role)
        if inherited is not None:
            merged[role] = inherited
    merged.update(spec)
    merged["type"] = descriptor.name

    for role in POINTER_ROLES:
        value = merged.get(role)
        if isinstance(value, str):
            merged[role] = TypeRef(value)

    options = {key: value for key, value in merged.items() if key not in FIELD_KEYS}
    return FieldSchema(
        type=descriptor.name,
        required=bool(merged.get("required", True)),
        default=merged.get("default", MISSING),
        default_raw=merged.get("default_raw", MISSING),
        cast=merged.get("cast"),
        validate=merged.get("validate"),
        uncast=merged.get("uncast"),
        describe=merged.get("describe"),
        destruct=merged.get("destruct"),
        help=merged.get("help"),
        options=options,
    )


def _resolve_shape(raw: object, registry: TypeRegistry) -> dict[str, Any]:
    if isinstance(raw, str):
        return {"required": True, "type": raw.strip().lower()}

    if isinstance(raw, Mapping):
        declared = _string_keys(raw)
        declared_type = declared.get("type")
        if isinstance(declared_type, str):
            return {"required": True, **declared, "type": declared_type.strip().lower()}
        alias = registry.alias_for(declared_type) if "type" in declared else None
        if alias is not None:
            return {"required": True, **declared, "type": alias}
        if "type" in declared:
            return {"required": True, **declared}
        return {"required": False, "type": "any", **declared}

    alias = registry.alias_for(raw)
    if alias is not None:
        return {"required": True, "type": alias}

    raise UnknownFieldShapeError(f"Unknown field shape {type(raw).__name__!s} ({raw!r})")


def _string_keys(raw: Mapping[object, object]) -> dict[str, Any]:
    declared: dict[str, Any] = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            raise UnknownFieldShapeError(f"Field schema keys must be strings, got {key!r}")
        declared[key] = value
    return declared


__all__ = ["FIELD_KEYS", "MISSING", "FieldSchema", "normalize_field"]
