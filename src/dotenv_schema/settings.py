"""
dotenv-schema — runtime settings.

File: src/dotenv_schema/settings.py
Last updated: 2026-10-19

Purpose
- Resolve library-level behaviour (destruct defaults, unknown-key policy,
  logging) from defaults, ``DOTENV_SCHEMA_`` environment overrides and
  explicit overrides.

Functional requirements
- Precedence: explicit overrides > environment > defaults.
- Reject values that cannot be coerced with a clear ``SettingsError``.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal

from dotenv_schema.destruct import DEFAULT_DESTRUCT_AT, DEFAULT_TICK_MS
from dotenv_schema.durations import parse_duration
from dotenv_schema.errors import SettingsError

ENV_PREFIX: Final[str] = "DOTENV_SCHEMA_"

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})
_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
_LOG_FORMATS: Final[tuple[str, ...]] = ("json", "text")

_ValueKind = Literal["str", "int", "bool", "duration", "level", "format"]

_FIELD_KINDS: Final[dict[str, _ValueKind]] = {
    "destruct_at": "duration",
    "destruct_tick_ms": "int",
    "reject_unknown": "bool",
    "log_level": "level",
    "log_format": "format",
}


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Library-level behaviour shared by every ``DotEnv`` session."""

    destruct_at: str = DEFAULT_DESTRUCT_AT
    destruct_tick_ms: int = DEFAULT_TICK_MS
    reject_unknown: bool = True
    log_level: str = "INFO"
    log_format: str = "json"


def load_settings(
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
) -> RuntimeSettings:
    """Return settings with environment and explicit overrides applied."""

    env_map = os.environ if environ is None else environ
    values: dict[str, object] = {}

    for field_name in sorted(_FIELD_KINDS):
        env_name = f"{ENV_PREFIX}{field_name.upper()}"
        raw = env_map.get(env_name)
        if raw is None:
            continue
        values[field_name] = _coerce(raw, _FIELD_KINDS[field_name], env_name)

    for key in sorted(overrides or {}):
        if key not in _FIELD_KINDS:
            raise SettingsError(f"unknown setting {key!r}")
        value = (overrides or {})[key]
        values[key] = _coerce(value, _FIELD_KINDS[key], key) if isinstance(value, str) else value

    settings = dataclasses.replace(RuntimeSettings(), **values)
    _check(settings)
    return settings


def _coerce(raw: str, kind: _ValueKind, source: str) -> object:
    value = raw.strip()
    if kind == "str":
        return value
    if kind == "int":
        try:
            return int(value)
        except ValueError as exc:
            raise SettingsError(f"{source} must be an integer") from exc
    if kind == "duration":
        try:
            parse_duration(value)
        except ValueError as exc:
            raise SettingsError(f"{source} must be a duration such as '1m' or '500ms'") from exc
        return value
    if kind == "level":
        upper = value.upper()
        if upper not in _LOG_LEVELS:
            raise SettingsError(f"{source} must be one of {', '.join(_LOG_LEVELS)}")
        return upper
    if kind == "format":
        lowered = value.lower()
        if lowered not in _LOG_FORMATS:
            raise SettingsError(f"{source} must be one of {', '.join(_LOG_FORMATS)}")
        return lowered

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise SettingsError(f"{source} must be a boolean (true/false/1/0/yes/no/on/off)")


def _check(settings: RuntimeSettings) -> None:
    if not isinstance(settings.destruct_tick_ms, int) or settings.destruct_tick_ms < 0:
        raise SettingsError("destruct_tick_ms must be an integer >= 0")
    if not isinstance(settings.reject_unknown, bool):
        raise SettingsError("reject_unknown must be a boolean")


__all__ = ["ENV_PREFIX", "RuntimeSettings", "load_settings"]
