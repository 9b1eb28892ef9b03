"""Structured logging setup (structlog) with JSON-lines output and key redaction."""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Mapping, MutableMapping
from typing import Any, Final, TextIO

import structlog

_REDACTED_VALUE: Final[str] = "***REDACTED***"

_SENSITIVE_KEY_TERMS: Final[tuple[str, ...]] = (
    "secret",
    "token",
    "password",
    "passphrase",
    "api_key",
    "apikey",
    "authorization",
    "credential",
    "cookie",
    "private_key",
)

_SENSITIVE_ASSIGNMENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?i)\b(api[_-]?key|token|password|secret|authorization)\b\s*([:=])\s*([^\s,;]+)"
)

# Keys structlog itself adds; never masked.
_RESERVED_KEYS: Final[frozenset[str]] = frozenset({"event", "level", "timestamp", "logger"})


def configure_logging(
    level: int | str = "INFO",
    *,
    json_output: bool = True,
    redact: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for the library's event logs.

    Parameters
    ----------
    level:
        Minimum level, as a name (``"DEBUG"``) or ``logging`` constant.
    json_output:
        Render canonical JSON lines (sorted keys) instead of console output.
    redact:
        Mask values of sensitive-looking keys as ``***REDACTED***``.
    stream:
        Output stream; defaults to ``sys.stderr``.
    """

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if redact:
        processors.append(redact_event)
    if json_output:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_parse_log_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: Any, *, stream: TextIO | None = None) -> None:
    """Configure logging from a ``RuntimeSettings`` instance."""

    configure_logging(
        settings.log_level,
        json_output=settings.log_format == "json",
        stream=stream,
    )


def redact_event(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """structlog processor masking sensitive keys and inline secret assignments."""

    for key in list(event_dict):
        if key in _RESERVED_KEYS:
            continue
        event_dict[key] = _redact_value(event_dict[key], key_context=key)
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = _redact_string(event)
    return event_dict


def _redact_value(value: object, *, key_context: str | None) -> object:
    if key_context is not None and _requires_redaction_for_key(key_context):
        return _REDACTED_VALUE
    if isinstance(value, str):
        return _redact_string(value)
    if isinstance(value, (list, tuple)):
        return [_redact_value(item, key_context=None) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _redact_value(item, key_context=str(key)) for key, item in value.items()}
    return value


def _requires_redaction_for_key(key: str) -> bool:
    key_lower = key.lower()
    return any(term in key_lower for term in _SENSITIVE_KEY_TERMS)


def _redact_string(text: str) -> str:
    return _SENSITIVE_ASSIGNMENT_PATTERN.sub(
        lambda match: f"{match.group(1)}{match.group(2)}{_REDACTED_VALUE}", text
    )


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    parsed = logging.getLevelName(value.strip().upper())
    if isinstance(parsed, int):
        return parsed
    raise ValueError(f"unsupported logging level {value!r}")


__all__ = ["configure_from_settings", "configure_logging", "redact_event"]
