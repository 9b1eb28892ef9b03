"""
dotenv-schema — schema engine.

File: src/dotenv_schema/schema/engine.py
Last updated: 2026-10-19

Purpose
- Apply a map of field declarations to a raw string-keyed config.

What should be included in this file
- Per-field pipeline: default_raw short-circuit, defaulting, optional
  short-circuit, cast, required check, validate, destruct wrapping.
- One-hop pointer resolution for cast/validate/uncast.
- Per-field error enrichment (``Env '<name>': ...``).

Functional requirements
- ``apply()`` is synchronous and fail-fast: the first failing field aborts.
- The error class of the underlying failure is preserved; the original error
  is chained as ``__cause__``.

Non-functional requirements
- Field declarations are normalized once per schema and cached.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

import structlog

from dotenv_schema.config import ConfigObject, resolve_slot
from dotenv_schema.destruct import DEFAULT_DESTRUCT_AT, DEFAULT_TICK_MS, Clock, DestructCell
from dotenv_schema.errors import (
    CastError,
    RequiredError,
    SchemaError,
    ValidationError,
)
from dotenv_schema.schema.fields import FieldSchema, normalize_field
from dotenv_schema.schema.types import (
    FieldFunction,
    PointerRole,
    TypeRef,
    TypeRegistry,
    default_registry,
)

_UNCATEGORISED_FAILURE: Final[str] = (
    "Uncategorised validation failure (validator returned falsy but not None)"
)

_logger = structlog.get_logger(__name__)


def _is_blank(value: object) -> bool:
    return value is None or value == ""


class Schema:
    """Ordered field declarations plus the registry used to interpret them."""

    def __init__(
        self,
        fields: Mapping[str, object] | None = None,
        *,
        registry: TypeRegistry | None = None,
        reject: bool = True,
        destruct_at: str = DEFAULT_DESTRUCT_AT,
        destruct_tick: int | str | None = DEFAULT_TICK_MS,
        clock: Clock | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.fields: dict[str, object] = dict(fields or {})
        self.reject = reject
        self.destruct_at = destruct_at
        self.destruct_tick = destruct_tick
        self._clock = clock
        self._normalized: dict[str, FieldSchema] = {}

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def set_field(self, name: str, declaration: object) -> None:
        """Add or overwrite one field declaration."""

        self.fields[name] = declaration
        self._normalized.pop(name, None)

    def rename_fields(self, renames: Mapping[str, str]) -> None:
        """Rename declarations in place, keeping declaration order."""

        self.fields = {renames.get(key, key): value for key, value in self.fields.items()}
        self._normalized = {
            renames.get(key, key): value for key, value in self._normalized.items()
        }

    def normalize(self, declaration: object) -> FieldSchema:
        return normalize_field(declaration, self.registry)

    def get_field_schema(self, name: str) -> FieldSchema:
        """Return the normalized ``FieldSchema`` for field ``name``."""

        cached = self._normalized.get(name)
        if cached is None:
            cached = self.normalize(self.fields[name])
            self._normalized[name] = cached
        return cached

    def describe(self, name: str) -> str | None:
        """Return a human-readable description of field ``name``'s accepted values."""

        field = self.get_field_schema(name)
        if callable(field.describe):
            return field.describe(field)
        return field.describe

    def apply_field(self, raw: object, declaration: object, *, name: str | None = None) -> Any:
        """Run one raw value through the field pipeline and return the final value."""

        field = (
            self.get_field_schema(name)
            if name is not None and name in self.fields and self.fields[name] is declaration
            else self.normalize(declaration)
        )

        if field.has_default_raw:
            return field.default_raw

        value = raw
        if field.has_default and _is_blank(value):
            default = field.default(field) if callable(field.default) else field.default
            if not isinstance(default, str):
                return default
            value = default

        if not field.required and _is_blank(value):
            return None

        if isinstance(value, str) and field.cast is not None:
            cast, effective = self._resolve(field, field.cast, "cast")
            try:
                value = cast(value, effective)
            except Exception as exc:
                raise CastError(f"Failed to cast: {_describe_exc(exc)}") from exc

        if field.required and value is None:
            raise RequiredError("Value required")

        if field.validate is not None:
            validate, effective = self._resolve(field, field.validate, "validate")
            try:
                result = validate(value, effective)
            except Exception as exc:
                raise ValidationError(f"Failed validation: {_describe_exc(exc)}") from exc
            if result is not None and not result:
                raise ValidationError(f"Failed validation: {_UNCATEGORISED_FAILURE}")

        if field.destruct:
            value = DestructCell.from_config(
                value,
                field.destruct,
                default_at=self.destruct_at,
                default_tick=self.destruct_tick,
                clock=self._clock,
                name=name,
            )
        return value

    def apply(self, config: Mapping[str, object]) -> ConfigObject:
        """Apply every field to ``config`` and return the resulting ``ConfigObject``."""

        applied: dict[str, Any] = {}
        for name, declaration in self.fields.items():
            try:
                applied[name] = self.apply_field(config.get(name), declaration, name=name)
            except SchemaError as exc:
                raise exc.for_field(name) from exc
            except Exception as exc:
                raise SchemaError(f"Env {name!r}: {_describe_exc(exc)}", field=name) from exc
            _logger.debug(
                "schema_field_applied",
                field=name,
                destruct=isinstance(applied[name], DestructCell),
            )

        slots: dict[str, Any] = {}
        if not self.reject:
            slots.update(config.backing if isinstance(config, ConfigObject) else config)
        slots.update(applied)
        return ConfigObject(slots)

    def uncast(self, name: str, value: Any) -> str:
        """Return the canonical string form of ``value`` for field ``name``."""

        value = resolve_slot(value)
        if value is None:
            return ""
        field = self.get_field_schema(name)
        if field.uncast is None:
            return str(value)
        uncast, effective = self._resolve(field, field.uncast, "uncast")
        return str(uncast(value, effective))

    def _resolve(
        self,
        field: FieldSchema,
        function: FieldFunction | TypeRef,
        role: PointerRole,
    ) -> tuple[FieldFunction, FieldSchema]:
        if isinstance(function, TypeRef):
            target, descriptor = self.registry.resolve_function(function, role)
            return target, field.underlay(descriptor.defaults)
        return function, field


def _describe_exc(exc: BaseException) -> str:
    message = exc.message if isinstance(exc, SchemaError) else str(exc)
    return message or exc.__class__.__name__


__all__ = ["Schema"]
