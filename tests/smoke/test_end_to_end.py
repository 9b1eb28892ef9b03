"""
dotenv-schema — end-to-end smoke test of the public API

File: tests/smoke/test_end_to_end.py
Last updated: 2026-10-19

Purpose
- Validate the documented usage paths against the package root only: parse and
  cast, self-destructing values with the real clock, grouped export and
  unknown type rejection.
"""

from __future__ import annotations

import time

import pytest

from dotenv_schema import DotEnv, RuntimeSettings
from dotenv_schema.errors import DestructedValueError, UnknownTypeError


def _session() -> DotEnv:
    return DotEnv(settings=RuntimeSettings())


@pytest.mark.smoke
def test_parse_and_cast() -> None:
    config = _session().parse("FOO=Foo!\nBAR=123").schema({"FOO": str, "BAR": int}).value()

    assert config == {"FOO": "Foo!", "BAR": 123}


@pytest.mark.smoke
def test_destructed_value_keeps_its_key() -> None:
    session = _session().parse("PASS=hunter2")
    session.schema({"PASS": {"type": "string", "destruct": "100ms"}})
    config = session.value()

    assert config["PASS"] == "hunter2"
    time.sleep(0.15)

    assert "PASS" in config
    with pytest.raises(DestructedValueError):
        config["PASS"]


@pytest.mark.smoke
def test_export_groups_declared_fields_under_one_header() -> None:
    session = (
        _session()
        .parse("FOOBAR_BAR=bar\nFOOBAR_FOO=foo")
        .schema({"FOOBAR_FOO": str, "FOOBAR_BAR": str})
    )

    assert session.export() == "# FOOBAR #\nFOOBAR_FOO=foo\nFOOBAR_BAR=bar"


@pytest.mark.smoke
def test_unknown_type_is_rejected() -> None:
    with pytest.raises(UnknownTypeError):
        _session().parse("FOO=1").schema({"FOO": "!!!INVALID!!!"})
