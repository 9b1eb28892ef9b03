"""Config facade: a mutable mapping whose reads transparently resolve destruct cells."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from dotenv_schema.destruct import DestructCell


def resolve_slot(slot: object) -> Any:
    """Return the effective value held in a config slot."""

    if isinstance(slot, DestructCell):
        return slot.read()
    return slot


class ConfigObject(MutableMapping[str, Any]):
    """Key/value view over a backing dict of plain values and ``DestructCell`` slots.

    The backing dict is shared, not copied, so changes made through the owning
    session are visible here and vice versa.
    """

    __slots__ = ("_slots",)

    def __init__(self, slots: dict[str, Any] | None = None) -> None:
        self._slots: dict[str, Any] = slots if slots is not None else {}

    def __getitem__(self, key: str) -> Any:
        return resolve_slot(self._slots[key])

    def __setitem__(self, key: str, value: Any) -> None:
        self._slots[key] = value

    def __delitem__(self, key: str) -> None:
        del self._slots[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.to_dict() == dict(other.items())

    __hash__ = None  # type: ignore[assignment]

    def slot(self, key: str) -> Any:
        """Return the raw slot for ``key`` without resolving destruct cells."""

        return self._slots[key]

    def is_destroyed(self, key: str) -> bool:
        slot = self._slots[key]
        return isinstance(slot, DestructCell) and slot.destroyed

    def to_dict(self) -> dict[str, Any]:
        """Resolve every slot (nested ``ConfigObject`` values included)."""

        resolved: dict[str, Any] = {}
        for key in self._slots:
            value = self[key]
            resolved[key] = value.to_dict() if isinstance(value, ConfigObject) else value
        return resolved

    @property
    def backing(self) -> dict[str, Any]:
        return self._slots

    def __repr__(self) -> str:
        rendered = ", ".join(f"{key!r}: {slot!r}" for key, slot in self._slots.items())
        return f"ConfigObject({{{rendered}}})"


__all__ = ["ConfigObject", "resolve_slot"]
