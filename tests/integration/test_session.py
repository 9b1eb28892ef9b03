"""
dotenv-schema — integration tests for the DotEnv session

File: tests/integration/test_session.py
Last updated: 2026-10-19

Purpose
- Validate the chainable session across parsing, schema application, key
  mangling and export.

What this test file should cover
- parse/schema/value chaining and settings-driven defaults.
- schema_glob with glob and regex patterns.
- In-place mutation via set/map/filter/rename/to_tree.
- Export grouping, help comments, quoting and uncast values.
- Environment import with and without prefix stripping.

Functional requirements
- Offline operation; sessions are built with explicit settings so the host
  environment cannot change results.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from dotenv_schema import DotEnv, RuntimeSettings, load
from dotenv_schema.config import ConfigObject
from dotenv_schema.destruct import DestructCell
from dotenv_schema.errors import DestructedValueError, ValidationError
from dotenv_schema.parse import parse_text

_START = datetime(2026, 1, 1, tzinfo=UTC)


class _Clock:
    def __init__(self) -> None:
        self.now = _START

    def __call__(self) -> datetime:
        return self.now


def _session(**settings: object) -> DotEnv:
    return DotEnv(settings=RuntimeSettings(**settings))  # type: ignore[arg-type]


# parse / schema / value {{{


def test_parse_then_value() -> None:
    config = _session().parse("FOO=Foo!").value()

    assert config["FOO"] == "Foo!"


def test_schema_casts_and_rejects_unknown_keys() -> None:
    session = _session().parse("FOO=Foo!\nBAR=123\nEXTRA=x")

    config = session.schema({"FOO": str, "BAR": int}).value()

    assert config == {"FOO": "Foo!", "BAR": 123}


def test_settings_can_keep_unknown_keys() -> None:
    config = (
        _session(reject_unknown=False).parse("EXTRA=x\nBAR=123").schema({"BAR": int}).value()
    )

    assert config == {"EXTRA": "x", "BAR": 123}


def test_schema_reject_argument_beats_settings() -> None:
    config = _session().parse("EXTRA=x\nBAR=1").schema({"BAR": int}, reject=False).value()

    assert "EXTRA" in config


def test_schema_errors_name_the_field() -> None:
    session = _session().parse("PORT=80")

    with pytest.raises(ValidationError, match="Env 'PORT'") as excinfo:
        session.schema({"PORT": {"type": "number", "min": 1024}})

    assert excinfo.value.field == "PORT"


def test_schema_file(tmp_path: Path) -> None:
    schema_path = tmp_path / "schema.yaml"
    schema_path.write_text(
        "PORT: number\nNAME:\n  type: string\n  default: app\n", encoding="utf-8"
    )

    config = _session().parse("PORT=8080").schema_file(schema_path).value()

    assert config == {"PORT": 8080, "NAME": "app"}


def test_destruct_defaults_come_from_settings() -> None:
    clock = _Clock()
    session = DotEnv(
        settings=RuntimeSettings(destruct_at="1s", destruct_tick_ms=0),
        clock=clock,
    )

    session.parse("PASS=hunter2").schema({"PASS": {"type": "string", "destruct": True}})
    config = session.value()

    assert config["PASS"] == "hunter2"
    clock.now = _START + timedelta(seconds=1)
    with pytest.raises(DestructedValueError):
        config["PASS"]
    assert list(config) == ["PASS"]


def test_get_with_default() -> None:
    session = _session().parse("A=1")

    assert session.get("A") == "1"
    assert session.get("MISSING", "fallback") == "fallback"


def test_load_helper() -> None:
    config = load("PORT=1", {"PORT": int}, settings=RuntimeSettings())

    assert config == {"PORT": 1}


# }}}
# schema_glob {{{


def test_schema_glob_with_glob_pattern() -> None:
    session = _session().parse("DB_PORT=5432\nAPP_PORT=80\nNAME=x")

    session.schema_glob("*_PORT", int)

    assert session.value() == {"DB_PORT": 5432, "APP_PORT": 80, "NAME": "x"}
    assert session.schema_definition is not None
    assert set(session.schema_definition.fields) == {"DB_PORT", "APP_PORT"}


def test_schema_glob_with_regex_and_existing_schema() -> None:
    session = (
        _session()
        .parse("FLAG_A=yes\nFLAG_B=no\nNAME=x")
        .schema({"NAME": str}, reject=False)
        .schema_glob(re.compile(r"^FLAG_"), "boolean")
    )

    assert session.value() == {"FLAG_A": True, "FLAG_B": False, "NAME": "x"}


def test_schema_glob_recasts_from_raw_strings() -> None:
    session = _session().parse("PORT=8080").schema_glob("PORT", int).schema_glob("PORT", "string")

    assert session.value()["PORT"] == "8080"


def test_schema_glob_errors_name_the_field() -> None:
    session = _session().parse("DB_PORT=80")

    with pytest.raises(ValidationError, match="Env 'DB_PORT'"):
        session.schema_glob("DB_*", {"type": "number", "min": 1024})


# }}}
# mutation {{{


def test_value_view_observes_in_place_mutation() -> None:
    session = _session().parse("A=1")
    view = session.value()

    session.set("B", "2").set({"C": "3", "A": "0"})

    assert view == {"A": "0", "B": "2", "C": "3"}


def test_set_argument_validation() -> None:
    session = _session()

    with pytest.raises(TypeError):
        session.set("A")
    with pytest.raises(TypeError):
        session.set({"A": "1"}, "2")


def test_map_rewrites_keys_and_values() -> None:
    session = _session().parse("A=1\nB=2").map(lambda key, value: (key.lower(), value * 2))

    assert session.value() == {"a": "11", "b": "22"}


def test_map_keeps_destruct_cells_for_unchanged_values() -> None:
    session = _session()
    cell = DestructCell("secret", "1h", tick=0)
    session.set("PASS", cell)

    session.map(lambda key, value: (f"APP_{key}", value))

    assert session.value().slot("APP_PASS") is cell


def test_filter_by_glob_regex_and_predicate() -> None:
    text = "DB_HOST=h\nDB_PORT=1\nAPP_NAME=n\nAPP_MODE=m"

    assert list(_session().parse(text).filter("DB_*").value()) == ["DB_HOST", "DB_PORT"]
    assert list(_session().parse(text).filter(re.compile("MODE$")).value()) == ["APP_MODE"]
    assert list(_session().parse(text).filter(lambda key: "NAME" in key).value()) == ["APP_NAME"]


def test_rename_with_named_mutator_keeps_schema() -> None:
    session = (
        _session()
        .parse("DB_HOST=localhost\nDB_PORT=5432")
        .schema({"DB_HOST": str, "DB_PORT": int})
        .rename("camel_case")
    )

    assert session.value() == {"dbHost": "localhost", "dbPort": 5432}
    assert session.export(header=False) == "dbHost=localhost\ndbPort=5432"


def test_rename_with_callable_and_unknown_mutator() -> None:
    session = _session().parse("a=1").rename(str.upper)

    assert list(session.value()) == ["A"]
    with pytest.raises(ValueError, match="Unknown key mutator 'shout'"):
        session.rename("shout")


def test_to_tree_nests_keys() -> None:
    session = _session().parse("DB_HOST=h\nDB_PORT=1\nNAME=n").to_tree()

    config = session.value()
    assert isinstance(config["DB"], ConfigObject)
    assert config.to_dict() == {"DB": {"HOST": "h", "PORT": "1"}, "NAME": "n"}


def test_to_tree_with_mutator_and_separator() -> None:
    session = _session().parse("DB.HOST_NAME=h\nDB.PORT=1").to_tree(".", mutator="camel_case")

    assert session.value().to_dict() == {"db": {"hostName": "h", "port": "1"}}


def test_to_tree_later_keys_replace_leaves() -> None:
    session = _session().parse("DB=plain\nDB_HOST=h").to_tree()

    assert session.value().to_dict() == {"DB": {"HOST": "h"}}


def test_to_tree_moves_cells_without_reading() -> None:
    clock = _Clock()
    session = DotEnv(settings=RuntimeSettings(destruct_tick_ms=0), clock=clock)
    session.parse("DB_PASS=x").schema({"DB_PASS": {"type": "string", "destruct": "1s"}})

    session.to_tree()

    branch = session.value()["DB"]
    assert isinstance(branch.slot("PASS"), DestructCell)
    clock.now = _START + timedelta(seconds=5)
    assert branch.is_destroyed("PASS") is False
    with pytest.raises(DestructedValueError):
        branch["PASS"]


# }}}
# import_environ {{{


def test_import_environ_with_prefix_stripping() -> None:
    environ = {"APP_PORT": "80", "APP_": "ignored", "OTHER": "x"}

    config = _session().import_environ("APP_", environ).value()

    assert config == {"PORT": "80"}


def test_import_environ_without_stripping_merges_over_parsed() -> None:
    environ = {"APP_PORT": "81", "HOME": "/root"}

    session = _session().parse("APP_PORT=80\nAPP_NAME=n").import_environ(
        "APP_", environ, strip_prefix=False
    )

    assert session.value() == {"APP_PORT": "81", "APP_NAME": "n"}


def test_import_environ_defaults_to_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOTENV_SCHEMA_TEST_FLAG", "on")

    config = _session().import_environ("DOTENV_SCHEMA_TEST_").value()

    assert config["FLAG"] == "on"


# }}}
# export {{{


def test_export_groups_by_header_with_help() -> None:
    session = (
        _session()
        .parse("FOOBAR_FOO=foo\nFOOBAR_BAR=bar\nOTHER=1")
        .schema(
            {
                "FOOBAR_FOO": str,
                "FOOBAR_BAR": {"type": "string", "help": "The bar"},
                "OTHER": int,
            }
        )
    )

    assert session.export() == "# FOOBAR #\nFOOBAR_FOO=foo\nFOOBAR_BAR=bar # The bar\n\nOTHER=1"
    assert session.export(help=False, header=False) == "FOOBAR_FOO=foo\nFOOBAR_BAR=bar\nOTHER=1"


def test_export_uses_uncast_and_quotes_when_needed() -> None:
    session = (
        _session()
        .parse("TAGS=b, a\nPATTERN=/ab+/i\nGREETING=hello world\nWAIT=10m")
        .schema(
            {"TAGS": set, "PATTERN": re.Pattern, "GREETING": str, "WAIT": "duration"}
        )
    )

    assert session.export(header=False) == (
        'TAGS="a, b"\nPATTERN=/ab+/i\nGREETING="hello world"\nWAIT=10m'
    )


def test_export_blank_values_and_string_defaults() -> None:
    session = (
        _session()
        .parse("EMPTY=\nPORT=")
        .schema(
            {
                "EMPTY": {"type": "string", "required": False},
                "PORT": {"type": "number", "default": "8080"},
            }
        )
    )
    session.set("PORT", None)

    assert session.export(header=False) == "EMPTY=\nPORT=8080"


def test_export_custom_header_pattern() -> None:
    session = _session().parse("db.host=h\ndb.port=1\ncache.ttl=5")

    exported = session.export(header=r"^(\w+)\.")

    assert exported == "# db #\ndb.host=h\ndb.port=1\n\n# cache #\ncache.ttl=5"


def test_export_round_trips_through_parser() -> None:
    session = (
        _session()
        .parse('NAME="a \\"quoted\\" # value"\nTAGS=x, y\nPORT=80')
        .schema({"NAME": str, "TAGS": set, "PORT": {"type": "number", "help": "Port"}})
    )

    reparsed = parse_text(session.export())

    assert reparsed == {"NAME": 'a "quoted" # value', "TAGS": "x, y", "PORT": "80"}


def test_export_resolves_destruct_cells() -> None:
    clock = _Clock()
    session = DotEnv(settings=RuntimeSettings(destruct_tick_ms=0), clock=clock)
    session.parse("PASS=x").schema({"PASS": {"type": "string", "destruct": "1s"}})

    assert session.export() == "PASS=x"
    clock.now = _START + timedelta(seconds=1)
    with pytest.raises(DestructedValueError):
        session.export()


# }}}
