"""
dotenv-schema — unit tests for duration parsing and formatting

File: tests/unit/test_durations.py
Last updated: 2026-10-19
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dotenv_schema.durations import (
    canonical_unit,
    duration_seconds,
    format_duration,
    parse_duration,
)


@pytest.mark.parametrize(
    ("text", "unit", "expected"),
    [
        ("500ms", "ms", 500),
        ("1h 30m", "ms", 5_400_000),
        ("1h30m", "s", 5_400),
        ("1.5h", "m", 90),
        ("2 weeks", "d", 14),
        ("1 day, 2 hours", "h", 26),
        ("90s", "m", 1.5),
        ("1y", "d", 365.25),
        ("-5s", "ms", -5_000),
    ],
)
def test_parse_duration(text: str, unit: str, expected: float) -> None:
    assert parse_duration(text, unit) == expected


def test_parse_duration_returns_int_for_integral_totals() -> None:
    assert isinstance(parse_duration("2s"), int)
    assert isinstance(parse_duration("1.5ms"), float)


@pytest.mark.parametrize("text", ["", "500", "soon", "5 parsecs"])
def test_parse_duration_rejects_unparsable_text(text: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(text)


def test_canonical_unit_aliases() -> None:
    assert canonical_unit("Minutes") == "m"
    assert canonical_unit("hrs") == "h"
    assert canonical_unit("months") == "mth"
    with pytest.raises(ValueError, match="unsupported duration unit"):
        canonical_unit("fortnight")


@pytest.mark.parametrize(
    ("value", "unit", "expected"),
    [
        (600_000, "ms", "10m"),
        (0, "ms", "0ms"),
        (1_500, "ms", "1500ms"),
        (90, "s", "90s"),
        (2, "w", "2w"),
        (48, "h", "2d"),
        (1.5, "ms", "1.5ms"),
        (-3_600_000, "ms", "-1h"),
    ],
)
def test_format_duration(value: float, unit: str, expected: str) -> None:
    assert format_duration(value, unit) == expected


def test_duration_seconds() -> None:
    assert duration_seconds("2m") == 120.0


@given(milliseconds=st.integers(min_value=-(10**11), max_value=10**11))
@settings(max_examples=100, derandomize=True, deadline=None)
def test_property_format_then_parse_is_identity(milliseconds: int) -> None:
    assert parse_duration(format_duration(milliseconds)) == milliseconds
