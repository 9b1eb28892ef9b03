"""
dotenv-schema — self-destructing value cells.

File: src/dotenv_schema/destruct.py
Last updated: 2026-10-19

Purpose
- Hold a sensitive config value that is irreversibly replaced after a deadline.

What should be included in this file
- ``DestructCell`` with pull (checked on read) and push (background timer) destruction.
- Construction from field-level ``destruct`` declarations.

Functional requirements
- Reads at or after the deadline never observe the original value.
- Destruction is one-way; mutating a destroyed cell raises ``AlreadyDestroyedError``.
- Destroying a cell cancels its pending timer.

Non-functional requirements
- Reads and timer ticks race safely; the transition happens exactly once.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, Final

import structlog

from dotenv_schema.durations import duration_seconds, parse_duration
from dotenv_schema.errors import AlreadyDestroyedError, DestructedValueError

DEFAULT_DESTRUCT_AT: Final[str] = "1m"
DEFAULT_TICK_MS: Final[int] = 500

_CONFIG_KEYS: Final[frozenset[str]] = frozenset({"at", "replacement", "tick"})

Clock = Callable[[], datetime]

_logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _raise_destructed() -> Any:
    raise DestructedValueError("Config value not available after application boot")


class DestructCell:
    """Value holder that swaps its payload for a replacement after a deadline."""

    def __init__(
        self,
        value: Any,
        at: str | datetime | timedelta = DEFAULT_DESTRUCT_AT,
        *,
        replacement: Any = _raise_destructed,
        tick: int | str | None = DEFAULT_TICK_MS,
        clock: Clock | None = None,
        name: str | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._clock: Clock = clock or _utcnow
        self._name = name
        self._value: Any = None
        self._replacement: Any = None
        self._deadline: datetime = self._clock()
        self._destroyed = False
        self._tick_ms = 0
        self._timer: threading.Timer | None = None

        self.set_value(value)
        self.set_deadline(at)
        self.set_replacement(replacement)
        self.restart_timer(tick)

    @classmethod
    def from_config(
        cls,
        value: Any,
        config: object,
        *,
        default_at: str = DEFAULT_DESTRUCT_AT,
        default_tick: int | str | None = DEFAULT_TICK_MS,
        clock: Clock | None = None,
        name: str | None = None,
    ) -> DestructCell:
        """Build a cell from a field ``destruct`` declaration.

        ``config`` may be a duration string, ``datetime``, ``timedelta``,
        ``True`` (use the defaults) or a mapping with ``at``, ``replacement``
        and ``tick`` keys. Any other mapping key raises ``ValueError``.
        """

        settings: dict[str, Any] = {"at": default_at, "tick": default_tick}
        if isinstance(config, (str, datetime, timedelta)):
            settings["at"] = config
        elif isinstance(config, Mapping):
            unknown = sorted(str(key) for key in config if key not in _CONFIG_KEYS)
            if unknown:
                raise ValueError(
                    f"Unknown destruct option {unknown[0]!r}; expected one of at, replacement, tick"
                )
            settings.update(config)
        elif config is not True:
            raise ValueError(
                "Unsupported destruct config; expected a duration, datetime, timedelta or mapping"
            )

        kwargs: dict[str, Any] = {}
        if "replacement" in settings:
            kwargs["replacement"] = settings["replacement"]
        return cls(
            value,
            settings["at"],
            tick=settings["tick"],
            clock=clock,
            name=name,
            **kwargs,
        )

    @property
    def destroyed(self) -> bool:
        with self._lock:
            return self._destroyed

    @property
    def deadline(self) -> datetime:
        with self._lock:
            return self._deadline

    @property
    def tick_ms(self) -> int:
        return self._tick_ms

    @property
    def timer_active(self) -> bool:
        with self._lock:
            return self._timer is not None

    def read(self) -> Any:
        """Return the current value, destroying first if the deadline has passed."""

        with self._lock:
            if not self._destroyed and self._clock() >= self._deadline:
                self._destruct_locked(reason="read")
            current = self._value
        return current() if callable(current) else current

    def destruct(self) -> DestructCell:
        """Destroy the value now; a no-op if already destroyed."""

        with self._lock:
            if not self._destroyed:
                self._destruct_locked(reason="manual")
        return self

    def set_value(self, value: Any) -> DestructCell:
        with self._lock:
            self._ensure_alive("set a value")
            self._value = value
        return self

    def set_deadline(self, at: str | datetime | timedelta) -> DestructCell:
        with self._lock:
            self._ensure_alive("set a destruction deadline")
            if isinstance(at, str):
                self._deadline = self._clock() + timedelta(seconds=duration_seconds(at))
            elif isinstance(at, timedelta):
                self._deadline = self._clock() + at
            elif isinstance(at, datetime):
                self._deadline = at if at.tzinfo is not None else at.replace(tzinfo=UTC)
            else:
                raise TypeError(
                    "Unsupported deadline type; must be a duration string, timedelta or datetime"
                )
        return self

    def set_replacement(self, replacement: Any) -> DestructCell:
        with self._lock:
            self._ensure_alive("set a replacement")
            self._replacement = replacement
        return self

    def restart_timer(self, tick: int | str | None = None) -> DestructCell:
        """Start (or reset) the background deadline check.

        ``tick`` is a millisecond interval or duration string; ``0`` disables
        background checking so destruction happens only on read.
        """

        with self._lock:
            self._ensure_alive("start the destruct timer")
            if tick is not None:
                if isinstance(tick, str):
                    self._tick_ms = int(parse_duration(tick, "ms"))
                else:
                    self._tick_ms = int(tick)
            if self._tick_ms < 0:
                raise ValueError("tick must be >= 0")
            self._cancel_timer_locked()
            if self._tick_ms > 0:
                self._schedule_locked()
                _logger.debug(
                    "destruct_timer_started",
                    field=self._name,
                    tick_ms=self._tick_ms,
                    deadline=self._deadline.isoformat(),
                )
        return self

    def cancel_timer(self) -> None:
        with self._lock:
            self._cancel_timer_locked()

    def _tick(self) -> None:
        with self._lock:
            self._timer = None
            if self._destroyed:
                return
            if self._clock() >= self._deadline:
                self._destruct_locked(reason="timer")
                return
            self._schedule_locked()

    def _schedule_locked(self) -> None:
        timer = threading.Timer(self._tick_ms / 1000, self._tick)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_timer_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _destruct_locked(self, *, reason: str) -> None:
        self._cancel_timer_locked()
        self._value = self._replacement
        self._destroyed = True
        _logger.info("config_value_destructed", field=self._name, reason=reason)

    def _ensure_alive(self, action: str) -> None:
        if self._destroyed:
            raise AlreadyDestroyedError(f"Cannot {action} after the value has been destructed")

    def __repr__(self) -> str:
        state = "destroyed" if self._destroyed else f"alive until {self._deadline.isoformat()}"
        label = f" {self._name!r}" if self._name else ""
        return f"<DestructCell{label} {state}>"


__all__ = ["DEFAULT_DESTRUCT_AT", "DEFAULT_TICK_MS", "Clock", "DestructCell"]
