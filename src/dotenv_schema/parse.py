"""Parse dotenv sources (text, bytes, paths) into flat string maps via python-dotenv."""

from __future__ import annotations

import io
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from dotenv import dotenv_values

Source = str | bytes | os.PathLike[str] | Iterable[str | os.PathLike[str]]


def parse_source(source: Source, *, allow_missing: bool = True) -> dict[str, str]:
    """Parse ``source`` into a ``KEY -> value`` map.

    A non-blank string containing no newline and no ``=`` is treated as a path,
    as is any ``os.PathLike``. A list/tuple of paths is merged in order (later
    files win); missing files are skipped unless ``allow_missing`` is false.
    """

    if isinstance(source, bytes):
        return parse_text(source.decode("utf-8"))
    if isinstance(source, str):
        if not source.strip() or "\n" in source or "=" in source:
            return parse_text(source)
        return parse_file(source, allow_missing=False)
    if isinstance(source, os.PathLike):
        return parse_file(source, allow_missing=False)
    if isinstance(source, Iterable):
        merged: dict[str, str] = {}
        for path in source:
            merged.update(parse_file(path, allow_missing=allow_missing))
        return merged
    raise TypeError(f"unsupported dotenv source {type(source).__name__}")


def parse_text(text: str) -> dict[str, str]:
    return _flatten(dotenv_values(stream=io.StringIO(text), interpolate=False))


def parse_file(path: str | os.PathLike[str], *, allow_missing: bool = True) -> dict[str, str]:
    resolved = Path(path).expanduser()
    if not resolved.is_file():
        if allow_missing:
            return {}
        raise FileNotFoundError(f"dotenv file not found: {resolved}")
    return _flatten(dotenv_values(resolved, interpolate=False, encoding="utf-8"))


def _flatten(values: Mapping[str, str | None]) -> dict[str, str]:
    return {key: "" if value is None else value for key, value in values.items()}


__all__ = ["Source", "parse_file", "parse_source", "parse_text"]
