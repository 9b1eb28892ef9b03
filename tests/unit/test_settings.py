"""
dotenv-schema — unit tests for runtime settings

File: tests/unit/test_settings.py
Last updated: 2026-10-19

Purpose
- Validate defaults, ``DOTENV_SCHEMA_`` environment overrides and explicit
  overrides, including strict coercion errors.

What this test file should cover
- Precedence: overrides > env > defaults.
- Boolean literal sets and actionable error messages naming the variable.
"""

from __future__ import annotations

import dataclasses

import pytest

from dotenv_schema.errors import SettingsError
from dotenv_schema.settings import RuntimeSettings, load_settings


def test_defaults_without_environment() -> None:
    settings = load_settings(environ={})

    assert settings == RuntimeSettings()
    assert settings.destruct_at == "1m"
    assert settings.destruct_tick_ms == 500
    assert settings.reject_unknown is True
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_environment_overrides_are_coerced() -> None:
    settings = load_settings(
        environ={
            "DOTENV_SCHEMA_DESTRUCT_AT": "5m",
            "DOTENV_SCHEMA_DESTRUCT_TICK_MS": " 100 ",
            "DOTENV_SCHEMA_REJECT_UNKNOWN": "off",
            "DOTENV_SCHEMA_LOG_LEVEL": "debug",
            "DOTENV_SCHEMA_LOG_FORMAT": "TEXT",
            "UNRELATED": "ignored",
        }
    )

    assert settings.destruct_at == "5m"
    assert settings.destruct_tick_ms == 100
    assert settings.reject_unknown is False
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"


@pytest.mark.parametrize("literal", ["1", "true", "t", "yes", "y", "on", "TRUE"])
def test_truthy_literals(literal: str) -> None:
    settings = load_settings(environ={"DOTENV_SCHEMA_REJECT_UNKNOWN": literal})

    assert settings.reject_unknown is True


def test_overrides_beat_environment() -> None:
    settings = load_settings(
        environ={"DOTENV_SCHEMA_DESTRUCT_TICK_MS": "100"},
        overrides={"destruct_tick_ms": 0, "reject_unknown": "no"},
    )

    assert settings.destruct_tick_ms == 0
    assert settings.reject_unknown is False


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("DOTENV_SCHEMA_DESTRUCT_TICK_MS", "soon", "must be an integer"),
        ("DOTENV_SCHEMA_REJECT_UNKNOWN", "maybe", "must be a boolean"),
        ("DOTENV_SCHEMA_DESTRUCT_AT", "later", "must be a duration"),
        ("DOTENV_SCHEMA_LOG_LEVEL", "LOUD", "must be one of"),
        ("DOTENV_SCHEMA_LOG_FORMAT", "xml", "must be one of"),
    ],
)
def test_invalid_environment_values_name_the_variable(name: str, value: str, message: str) -> None:
    with pytest.raises(SettingsError, match=f"{name} {message}"):
        load_settings(environ={name: value})


def test_negative_tick_is_rejected() -> None:
    with pytest.raises(SettingsError, match="destruct_tick_ms must be an integer >= 0"):
        load_settings(environ={}, overrides={"destruct_tick_ms": -1})


def test_unknown_override_is_rejected() -> None:
    with pytest.raises(SettingsError, match="unknown setting 'colour'"):
        load_settings(environ={}, overrides={"colour": "blue"})


def test_settings_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        RuntimeSettings().log_level = "DEBUG"  # type: ignore[misc]


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOTENV_SCHEMA_DESTRUCT_AT", "30s")

    assert load_settings().destruct_at == "30s"
