"""Small string helpers: word splitting, case mutators and description joins."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Final

_WORD_BOUNDARY = re.compile(r"[\W_]+")


def words(text: object) -> list[str]:
    """Split ``text`` on punctuation/whitespace, dropping empty segments."""

    return [part for part in _WORD_BOUNDARY.split(str(text)) if part]


def camel_case(text: object) -> str:
    parts = words(text)
    return "".join(
        (part[0].lower() if index == 0 else part[0].upper()) + part[1:].lower()
        for index, part in enumerate(parts)
    )


def start_case(text: object, *, spacing: bool = False) -> str:
    parts = [part[0].upper() + part[1:].lower() for part in words(text)]
    return (" " if spacing else "").join(parts)


def env_case(text: object) -> str:
    return "_".join(part.upper() for part in words(text))


def filtered_join(parts: Iterable[object], separator: str = " ") -> str:
    """Join the truthy members of ``parts``."""

    return separator.join(str(part) for part in parts if part)


def range_phrase(
    minimum: object,
    maximum: object,
    *,
    both: str,
    lower: str,
    upper: str,
    neither: str | None = None,
) -> str | None:
    """Render a min/max phrase using ``{min}``/``{max}`` templates."""

    if minimum is not None and maximum is not None:
        return both.format(min=minimum, max=maximum)
    if minimum is not None:
        return lower.format(min=minimum)
    if maximum is not None:
        return upper.format(max=maximum)
    return neither


MUTATORS: Final[dict[str, Callable[[str], str]]] = {
    "camel_case": camel_case,
    "env_case": env_case,
    "start_case": start_case,
}


__all__ = [
    "MUTATORS",
    "camel_case",
    "env_case",
    "filtered_join",
    "range_phrase",
    "start_case",
    "words",
]
