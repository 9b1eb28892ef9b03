"""Timestring-style duration parsing and formatting (``"1h 30m"``, ``"500ms"``, ``"2w"``)."""

from __future__ import annotations

import math
import re
from typing import Final

_SECONDS_PER_DAY: Final[float] = 86_400.0
_DAYS_PER_YEAR: Final[float] = 365.25

UNIT_SECONDS: Final[dict[str, float]] = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3_600.0,
    "d": _SECONDS_PER_DAY,
    "w": 7 * _SECONDS_PER_DAY,
    "mth": _DAYS_PER_YEAR / 12 * _SECONDS_PER_DAY,
    "y": _DAYS_PER_YEAR * _SECONDS_PER_DAY,
}

_UNIT_ALIASES: Final[dict[str, str]] = {
    alias: unit
    for unit, aliases in {
        "ms": ("ms", "milli", "millisecond", "milliseconds"),
        "s": ("s", "sec", "secs", "second", "seconds"),
        "m": ("m", "min", "mins", "minute", "minutes"),
        "h": ("h", "hr", "hrs", "hour", "hours"),
        "d": ("d", "day", "days"),
        "w": ("w", "week", "weeks"),
        "mth": ("mon", "mth", "mths", "month", "months"),
        "y": ("y", "yr", "yrs", "year", "years"),
    }.items()
    for alias in aliases
}

# Largest first; only exact multiples are used when formatting.
_FORMAT_UNITS: Final[tuple[str, ...]] = ("w", "d", "h", "m", "s", "ms")

_STRIP_PATTERN = re.compile(r"[^.a-z0-9+-]")
_GROUP_PATTERN = re.compile(r"[-+]?[0-9.]+[a-z]+")
_SPLIT_PATTERN = re.compile(r"([-+]?[0-9.]+)([a-z]+)")


def canonical_unit(unit: str) -> str:
    """Return the canonical unit key for ``unit`` or raise ``ValueError``."""

    resolved = _UNIT_ALIASES.get(unit.strip().lower())
    if resolved is None:
        raise ValueError(f"unsupported duration unit {unit!r}")
    return resolved


def parse_duration(text: str, unit: str = "ms") -> float | int:
    """Parse ``text`` and return the total expressed in ``unit``.

    Integral totals are returned as ``int``.
    """

    target = UNIT_SECONDS[canonical_unit(unit)]
    cleaned = _STRIP_PATTERN.sub("", str(text).lower())
    groups = _GROUP_PATTERN.findall(cleaned)
    if not groups:
        raise ValueError(f"the string {text!r} could not be parsed as a duration")

    total_seconds = 0.0
    for group in groups:
        match = _SPLIT_PATTERN.fullmatch(group)
        if match is None:
            raise ValueError(f"invalid duration segment {group!r}")
        amount_text, unit_text = match.groups()
        try:
            amount = float(amount_text)
        except ValueError as exc:
            raise ValueError(f"invalid duration amount {amount_text!r}") from exc
        total_seconds += amount * UNIT_SECONDS[canonical_unit(unit_text)]

    result = total_seconds / target
    if not math.isfinite(result):
        return result
    nearest = round(result)
    if math.isclose(result, nearest, rel_tol=1e-12, abs_tol=1e-9):
        return int(nearest)
    return round(result, 9)


def format_duration(value: float, unit: str = "ms") -> str:
    """Render ``value`` (expressed in ``unit``) as a compact timestring."""

    source = canonical_unit(unit)
    milliseconds = value * UNIT_SECONDS[source] * 1000
    if milliseconds == 0:
        return "0ms"
    rounded = round(milliseconds)
    if abs(milliseconds - rounded) > 1e-6:
        return f"{value:g}{source}"

    sign = "-" if rounded < 0 else ""
    remaining = abs(rounded)
    for candidate in _FORMAT_UNITS:
        step = round(UNIT_SECONDS[candidate] * 1000)
        if remaining % step == 0:
            return f"{sign}{remaining // step}{candidate}"
    return f"{sign}{remaining}ms"


def duration_seconds(text: str) -> float:
    return float(parse_duration(text, "s"))


__all__ = [
    "UNIT_SECONDS",
    "canonical_unit",
    "duration_seconds",
    "format_duration",
    "parse_duration",
]
