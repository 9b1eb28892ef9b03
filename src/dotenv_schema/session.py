"""
dotenv-schema — DotEnv session.

File: src/dotenv_schema/session.py
Last updated: 2026-10-19

Purpose
- Chainable facade tying parsing, schema application and key mangling to one
  owned config state.

What should be included in this file
- ``DotEnv`` with ``parse``, ``import_environ``, ``schema``, ``schema_file``,
  ``schema_glob``, ``value``, ``get``, ``set``, ``map``, ``filter``,
  ``rename``, ``to_tree`` and ``export``.

Functional requirements
- Every mutating method returns the session for chaining.
- ``set``, ``map``, ``filter``, ``rename``, ``to_tree`` and ``schema_glob``
  mutate the backing dict in place, so a previously returned ``value()`` view
  observes the change.
- ``export`` emits uncast values in declaration order with optional
  ``# HEADER #`` grouping and trailing ``# help`` comments.

Non-functional requirements
- A session owns its state exclusively; methods are not safe to call
  concurrently on the same instance.
"""

from __future__ import annotations

import fnmatch
import os
import re
from collections.abc import Callable, Mapping
from typing import Any, Final

import structlog

from dotenv_schema.config import ConfigObject
from dotenv_schema.destruct import Clock, DestructCell
from dotenv_schema.errors import SchemaError
from dotenv_schema.parse import Source, parse_source
from dotenv_schema.schema.engine import Schema
from dotenv_schema.schema.types import TypeRegistry
from dotenv_schema.schema_file import load_schema_file
from dotenv_schema.settings import RuntimeSettings, load_settings
from dotenv_schema.strutils import MUTATORS

DEFAULT_HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(.+?)_")

_NEEDS_QUOTES = re.compile(r"[\s#'\"]")
_UNSET: Final[object] = object()

KeyPattern = str | re.Pattern[str] | Callable[[str], bool]

_logger = structlog.get_logger(__name__)


class DotEnv:
    """One configuration session: raw parsed strings plus the applied state."""

    def __init__(
        self,
        *,
        settings: RuntimeSettings | None = None,
        registry: TypeRegistry | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self._registry = registry
        self._clock = clock
        self._raw: dict[str, str] = {}
        self._state = ConfigObject()
        self._schema: Schema | None = None

    @property
    def schema_definition(self) -> Schema | None:
        """The schema applied by the last ``schema()`` call, if any."""

        return self._schema

    def parse(self, source: Source, *, allow_missing: bool = True) -> DotEnv:
        """Replace the session state with the contents of ``source``."""

        self._raw = parse_source(source, allow_missing=allow_missing)
        self._state = ConfigObject(dict(self._raw))
        self._schema = None
        _logger.debug("dotenv_parsed", keys=len(self._raw))
        return self

    def import_environ(
        self,
        prefix: str | None = None,
        environ: Mapping[str, str] | None = None,
        *,
        strip_prefix: bool = True,
    ) -> DotEnv:
        """Merge process environment variables into the session.

        Only keys starting with ``prefix`` are imported when one is given; the
        prefix is removed from the imported names unless ``strip_prefix`` is false.
        """

        source = os.environ if environ is None else environ
        imported: dict[str, str] = {}
        for key, value in source.items():
            if prefix:
                if not key.startswith(prefix):
                    continue
                if strip_prefix:
                    key = key[len(prefix) :]
                    if not key:
                        continue
            imported[key] = value
        self._raw.update(imported)
        self._state.backing.update(imported)
        _logger.debug("environ_imported", keys=len(imported), prefix=prefix)
        return self

    def schema(self, fields: Mapping[str, object], *, reject: bool | None = None) -> DotEnv:
        """Apply ``fields`` to the current state, replacing it with the typed result."""

        self._schema = self._new_schema(fields, reject=reject)
        self._state = self._schema.apply(self._state)
        return self

    def schema_file(self, path: str | os.PathLike[str], *, reject: bool | None = None) -> DotEnv:
        return self.schema(load_schema_file(path), reject=reject)

    def schema_glob(self, pattern: str | re.Pattern[str], declaration: object) -> DotEnv:
        """Declare every existing key matching ``pattern`` with ``declaration``.

        Matching keys are re-run through the field pipeline from their raw
        parsed string where one exists. Other fields are left untouched.
        """

        if self._schema is None:
            self._schema = self._new_schema({}, reject=False)
        matched = [key for key in self._state if _matches(pattern, key)]
        for key in matched:
            self._schema.set_field(key, declaration)
            raw = self._raw[key] if key in self._raw else self._state[key]
            try:
                self._state[key] = self._schema.apply_field(raw, declaration, name=key)
            except SchemaError as exc:
                raise exc.for_field(key) from exc
        _logger.debug("schema_glob_applied", matched=len(matched))
        return self

    def value(self) -> ConfigObject:
        """Return the live config view."""

        return self._state

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def set(self, key: str | Mapping[str, Any], value: Any = _UNSET) -> DotEnv:
        """Store plain values, either one ``key``/``value`` pair or a mapping."""

        if isinstance(key, Mapping):
            if value is not _UNSET:
                raise TypeError("value must not be given when setting from a mapping")
            updates = dict(key)
        else:
            if value is _UNSET:
                raise TypeError("set() requires a value when given a single key")
            updates = {key: value}
        self._state.backing.update(updates)
        return self

    def map(self, function: Callable[[str, Any], tuple[str, Any]]) -> DotEnv:
        """Rebuild the state from ``function(key, value) -> (key, value)``.

        Destruct cells whose value is returned unchanged keep their protection.
        """

        backing = self._state.backing
        rebuilt: dict[str, Any] = {}
        for key in list(backing):
            slot = backing[key]
            current = self._state[key]
            new_key, new_value = function(key, current)
            if isinstance(slot, DestructCell) and new_value is current:
                new_value = slot
            rebuilt[new_key] = new_value
        backing.clear()
        backing.update(rebuilt)
        return self

    def filter(self, pattern: KeyPattern) -> DotEnv:
        """Keep only keys matching a glob, compiled regex or predicate."""

        backing = self._state.backing
        for key in [key for key in backing if not _matches(pattern, key)]:
            del backing[key]
        return self

    def rename(self, mutator: str | Callable[[str], str]) -> DotEnv:
        """Rename every key with a named case mutator or a callable."""

        rename = _resolve_mutator(mutator)
        renames = {key: rename(key) for key in self._state}
        self.map(lambda key, value: (renames[key], value))
        if self._schema is not None:
            self._schema.rename_fields(renames)
        self._raw = {renames.get(key, key): value for key, value in self._raw.items()}
        return self

    def to_tree(
        self,
        separator: str = "_",
        *,
        mutator: str | Callable[[str], str] | None = None,
    ) -> DotEnv:
        """Split keys on ``separator`` into nested ``ConfigObject`` branches.

        A later key replaces an earlier leaf or branch occupying the same path.
        Slots (destruct cells included) move into the tree without being read.
        """

        rename = _resolve_mutator(mutator) if mutator is not None else None
        backing = self._state.backing
        slots = list(backing.items())
        backing.clear()
        for key, slot in slots:
            segments = [segment for segment in key.split(separator) if segment] or [key]
            if rename is not None:
                segments = [rename(segment) for segment in segments]
            branch = backing
            for segment in segments[:-1]:
                node = branch.get(segment)
                if not isinstance(node, ConfigObject):
                    node = ConfigObject()
                    branch[segment] = node
                branch = node.backing
            branch[segments[-1]] = slot
        return self

    def export(
        self,
        *,
        header: bool | str | re.Pattern[str] | None = True,
        help: bool = True,
    ) -> str:
        """Render the state as dotenv text.

        ``header`` enables grouping with the default ``^(.+?)_`` prefix regex,
        or supplies a custom pattern whose first group names the section.
        """

        header_pattern = _header_pattern(header)
        lines: list[str] = []
        current_header: str | None = None
        for key in self._export_order():
            if header_pattern is not None:
                match = header_pattern.search(key)
                section = match.group(1) if match else None
                if section != current_header:
                    if lines:
                        lines.append("")
                    if section is not None:
                        lines.append(f"# {section} #")
                    current_header = section

            line = f"{key}={_quote(self._export_value(key))}"
            if help and self._schema is not None and key in self._schema:
                help_text = self._schema.get_field_schema(key).help
                if help_text:
                    line = f"{line} # {help_text}"
            lines.append(line)
        return "\n".join(lines)

    def _new_schema(self, fields: Mapping[str, object], *, reject: bool | None) -> Schema:
        return Schema(
            fields,
            registry=self._registry,
            reject=self.settings.reject_unknown if reject is None else reject,
            destruct_at=self.settings.destruct_at,
            destruct_tick=self.settings.destruct_tick_ms,
            clock=self._clock,
        )

    def _export_order(self) -> list[str]:
        keys = list(self._state)
        if self._schema is None:
            return keys
        declared = [name for name in self._schema.fields if name in self._state]
        return declared + [key for key in keys if key not in self._schema]

    def _export_value(self, key: str) -> str:
        slot = self._state.slot(key)
        if self._schema is not None and key in self._schema:
            rendered = self._schema.uncast(key, slot)
            if rendered == "":
                default = self._schema.get_field_schema(key).default
                if isinstance(default, str):
                    return default
            return rendered
        value = self._state[key]
        return "" if value is None else str(value)


def _matches(pattern: KeyPattern, key: str) -> bool:
    if isinstance(pattern, re.Pattern):
        return pattern.search(key) is not None
    if isinstance(pattern, str):
        return fnmatch.fnmatchcase(key, pattern)
    return bool(pattern(key))


def _resolve_mutator(mutator: str | Callable[[str], str]) -> Callable[[str], str]:
    if callable(mutator):
        return mutator
    try:
        return MUTATORS[mutator]
    except KeyError:
        known = ", ".join(sorted(MUTATORS))
        raise ValueError(f"Unknown key mutator {mutator!r}. Known: {known}") from None


def _header_pattern(header: bool | str | re.Pattern[str] | None) -> re.Pattern[str] | None:
    if header is None or header is False:
        return None
    if header is True:
        return DEFAULT_HEADER_PATTERN
    if isinstance(header, re.Pattern):
        return header
    return re.compile(header)


def _quote(value: str) -> str:
    if not _NEEDS_QUOTES.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def load(
    source: Source | None = None,
    fields: Mapping[str, object] | None = None,
    **kwargs: Any,
) -> ConfigObject:
    """Parse ``source`` (when given), apply ``fields`` and return the config view."""

    session = DotEnv(**kwargs)
    if source is not None:
        session.parse(source)
    if fields is not None:
        session.schema(fields)
    return session.value()


__all__ = ["DEFAULT_HEADER_PATTERN", "DotEnv", "KeyPattern", "load"]
