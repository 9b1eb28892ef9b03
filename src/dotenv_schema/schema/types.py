"""
dotenv-schema — type registry.

File: src/dotenv_schema/schema/types.py
Last updated: 2026-10-19

Purpose
- Define the catalog of named value types used by field schemas.

What should be included in this file
- ``TypeRef`` pointers, ``TypeDescriptor`` bundles and the ``TypeRegistry``.
- Built-in cast/validate/uncast/describe behaviour for every supported type.
- Native Python type aliases used by schema shorthand (``{"PORT": int}``).

Functional requirements
- Pointers resolve in exactly one hop; pointer chains are rejected on registration.
- Unknown type names fail with ``UnknownTypeError``.

Non-functional requirements
- Descriptor option bags are read-only; fields never mutate them.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Literal, NamedTuple, TypeAlias
from urllib.parse import SplitResult, urlsplit

from rich.errors import StyleSyntaxError
from rich.style import Style

from dotenv_schema.durations import format_duration, parse_duration
from dotenv_schema.errors import InvalidPointerError, UnknownTypeError
from dotenv_schema.strutils import filtered_join, range_phrase

if TYPE_CHECKING:
    from dotenv_schema.schema.fields import FieldSchema

FieldFunction: TypeAlias = Callable[[Any, "FieldSchema"], Any]
Describer: TypeAlias = Callable[["FieldSchema"], str] | str
PointerRole: TypeAlias = Literal["cast", "validate", "uncast"]

POINTER_ROLES: Final[tuple[PointerRole, ...]] = ("cast", "validate", "uncast")


@dataclass(frozen=True, slots=True)
class TypeRef:
    """Pointer to the same-role function of another registered type."""

    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip().lower())


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Named cast/validate/uncast/describe bundle plus default field options."""

    name: str
    cast: FieldFunction | TypeRef | None = None
    validate: FieldFunction | TypeRef | None = None
    uncast: FieldFunction | TypeRef | None = None
    describe: Describer | None = None
    defaults: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip().lower())
        for role in POINTER_ROLES:
            value = getattr(self, role)
            if isinstance(value, str):
                object.__setattr__(self, role, TypeRef(value))
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))


class TypeRegistry:
    """Catalog of ``TypeDescriptor`` entries keyed by lowercase name."""

    __slots__ = ("_aliases", "_types")

    def __init__(
        self,
        types: Iterable[TypeDescriptor] = (),
        aliases: Mapping[object, str] | None = None,
    ) -> None:
        self._types: dict[str, TypeDescriptor] = {}
        self._aliases: dict[object, str] = {}
        for descriptor in types:
            self._types[descriptor.name] = descriptor
        for descriptor in self._types.values():
            self._check_pointers(descriptor)
        for native, name in (aliases or {}).items():
            self.add_alias(native, name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def names(self) -> tuple[str, ...]:
        return tuple(self._types)

    def register(self, descriptor: TypeDescriptor, *, replace: bool = False) -> TypeDescriptor:
        """Add ``descriptor``; existing names require ``replace=True``."""

        if descriptor.name in self._types and not replace:
            raise ValueError(f"type {descriptor.name!r} is already registered")
        self._check_pointers(descriptor)
        self._types[descriptor.name] = descriptor
        return descriptor

    def resolve(self, name: object) -> TypeDescriptor:
        if not isinstance(name, str):
            raise UnknownTypeError(f"Invalid schema type {name!r}")
        descriptor = self._types.get(name.lower())
        if descriptor is None:
            raise UnknownTypeError(f"Invalid schema type {name!r}")
        return descriptor

    def resolve_function(
        self, ref: TypeRef, role: PointerRole
    ) -> tuple[FieldFunction, TypeDescriptor]:
        """Follow ``ref`` exactly one hop and return the target function and type."""

        target = self._types.get(ref.name)
        if target is None:
            raise UnknownTypeError(f"{role.capitalize()} pointer to {ref.name!r} does not exist")
        function = getattr(target, role)
        if isinstance(function, TypeRef):
            raise InvalidPointerError(
                f"{role.capitalize()} pointer to {ref.name!r} is itself a pointer"
                " - point to the original instead"
            )
        if function is None:
            raise InvalidPointerError(f"{role.capitalize()} pointer to {ref.name!r} has no {role}")
        return function, target

    def alias_for(self, native: object) -> str | None:
        try:
            return self._aliases.get(native)
        except TypeError:
            return None

    def add_alias(self, native: object, name: str) -> None:
        resolved = self.resolve(name)
        self._aliases[native] = resolved.name

    def copy(self) -> TypeRegistry:
        return TypeRegistry(self._types.values(), self._aliases)

    def _check_pointers(self, descriptor: TypeDescriptor) -> None:
        for role in POINTER_ROLES:
            value = getattr(descriptor, role)
            if isinstance(value, TypeRef):
                self.resolve_function(value, role)


# Shared helpers {{{

_CSV_PATTERN = re.compile(r"\s*,\s*")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:infinity|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?))", re.IGNORECASE
)


def _parse_int(text: str) -> int | float:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else math.nan


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return math.nan
    token = match.group(1)
    if token.lower().lstrip("+-") == "infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def _check_size(size: int, field: FieldSchema, below: str, above: str) -> None:
    minimum = field.get("min")
    maximum = field.get("max")
    if minimum is not None and size < minimum:
        raise ValueError(below.format(min=minimum))
    if maximum is not None and size > maximum:
        raise ValueError(above.format(max=maximum))


def _count_phrase(field: FieldSchema, neither: str | None = None) -> str | None:
    return range_phrase(
        field.get("min"),
        field.get("max"),
        both="with between {min} and {max}",
        lower="with a minimum of {min}",
        upper="with a maximum of {max}",
        neither=neither,
    )


# }}}
# any / string {{{


def _cast_string(value: object, field: FieldSchema) -> str:
    return str(value)


def _validate_string(value: object, field: FieldSchema) -> None:
    if not isinstance(value, str):
        raise ValueError("Must be a string")
    choices = field.get("enum")
    if choices and value not in choices:
        rendered = ", ".join(f'"{item}"' for item in choices)
        raise ValueError(f"Must be one of: {rendered}")
    _check_size(
        len(value), field, 'Below minimum length of "{min}"', 'Above maximum length of "{max}"'
    )


def _describe_string(field: FieldSchema) -> str:
    return filtered_join(
        [
            "String",
            range_phrase(
                field.get("min"),
                field.get("max"),
                both="with a length between {min} and {max}",
                lower="with a minimum length of {min}",
                upper="with a maximum length of {max}",
            ),
        ]
    )


# }}}
# array {{{


class SplitMethod(NamedTuple):
    pattern: re.Pattern[str]
    join: str
    title: str


SPLIT_METHODS: Final[Mapping[str, SplitMethod]] = MappingProxyType(
    {
        "csv": SplitMethod(_CSV_PATTERN, ", ", "CSV"),
        "non_alpha": SplitMethod(re.compile(r"[^A-Za-z]+"), ", ", "Non-alpha split string"),
        "non_alphanumeric": SplitMethod(
            re.compile(r"[^A-Za-z0-9]+"), ", ", "Non-alpha-numeric split string"
        ),
        "non_numeric": SplitMethod(re.compile(r"[^0-9]+"), ", ", "Non-numeric split string"),
        "whitespace": SplitMethod(re.compile(r"\s+"), " ", "Whitespace split string"),
    }
)


def _split_method(field: FieldSchema) -> SplitMethod | None:
    split = field.get("split")
    methods = field.get("split_methods") or SPLIT_METHODS
    if isinstance(split, str):
        return methods.get(split)
    return None


def _cast_array(value: str, field: FieldSchema) -> list[str]:
    text = str(value).strip()
    if not text:
        return []
    split = field.get("split")
    if isinstance(split, re.Pattern):
        return split.split(text)
    method = _split_method(field)
    pattern = method.pattern if method is not None else _CSV_PATTERN
    return pattern.split(text)


def _uncast_array(value: Iterable[object], field: FieldSchema) -> str:
    method = _split_method(field)
    separator = method.join if method is not None else str(field.get("join", ", "))
    return separator.join(str(item) for item in value)


def _validate_array(value: object, field: FieldSchema) -> None:
    if not isinstance(value, list):
        raise ValueError("Not an array")
    _check_size(
        len(value), field, 'Below minimum value of "{min}"', 'Above maximum value of "{max}"'
    )


def _describe_array(field: FieldSchema) -> str:
    method = _split_method(field)
    return filtered_join(
        [
            method.title if method is not None else "Split string",
            "of",
            range_phrase(
                field.get("min"),
                field.get("max"),
                both="{min} to {max}",
                lower="at least {min}",
                upper="at most {max}",
            ),
            "strings",
        ]
    )


# }}}
# boolean {{{


def _literals(field: FieldSchema, key: str) -> tuple[str, ...]:
    raw = field.get(key) or ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(str(item) for item in raw)


def _cast_boolean(value: str, field: FieldSchema) -> bool:
    truthy = _literals(field, "true")
    falsy = _literals(field, "false")
    if value in truthy:
        return True
    if value in falsy:
        return False
    valid = ", ".join(f'"{item}"' for item in (*truthy, *falsy))
    raise ValueError(f'Not a valid true/false response "{value}". Valid: {valid}')


def _uncast_boolean(value: object, field: FieldSchema) -> str:
    options = _literals(field, "true" if value else "false")
    if not options:
        return "true" if value else "false"
    return options[0]


# }}}
# date {{{


def _as_utc(value: object) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
    if isinstance(value, date):
        return datetime.combine(value, time(), UTC)
    if isinstance(value, str):
        return _as_utc(datetime.fromisoformat(value.strip()))
    raise TypeError(f"cannot interpret {value!r} as a date")


def _cast_date(value: str, field: FieldSchema) -> datetime:
    return _as_utc(datetime.fromisoformat(value.strip()))


def _validate_date(value: object, field: FieldSchema) -> None:
    if not isinstance(value, datetime):
        raise ValueError("Must be a date object or something that parses to one")
    current = _as_utc(value)
    minimum = field.get("min")
    maximum = field.get("max")
    if minimum is not None and current < _as_utc(minimum):
        raise ValueError(f'Below minimum date of "{minimum}"')
    if maximum is not None and current > _as_utc(maximum):
        raise ValueError(f'Above maximum date of "{maximum}"')


def _uncast_date(value: datetime, field: FieldSchema) -> str:
    return _as_utc(value).astimezone(UTC).isoformat().replace("+00:00", "Z")


def _describe_date(field: FieldSchema) -> str:
    return filtered_join(
        [
            "ISO parsable date/date+time",
            range_phrase(
                field.get("min"),
                field.get("max"),
                both="with a range of {min} to {max}",
                lower="starting at {min}",
                upper="ending at {max}",
            ),
        ]
    )


# }}}
# duration {{{


def _cast_duration(value: str, field: FieldSchema) -> float | int:
    return parse_duration(value, str(field.get("unit", "ms")))


def _uncast_duration(value: object, field: FieldSchema) -> str:
    unit = str(field.get("unit", "ms"))
    if isinstance(value, timedelta):
        return format_duration(value.total_seconds(), "s")
    if not isinstance(value, (int, float)):
        raise ValueError(f"Cannot format {value!r} as a duration")
    return format_duration(value, unit)


# }}}
# email / emails {{{

_EMAIL_PLAIN = re.compile(r"^(?P<prefix>.+?)@(?P<server>.+)$")
_EMAIL_NAMED = re.compile(r"^(?P<name>.+)\s+<(?P<prefix>.+?)@(?P<server>.+)>$")


def _split_emails(value: object) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return _CSV_PATTERN.split(str(value).strip())


def _validate_emails(value: object, field: FieldSchema) -> bool:
    emails = _split_emails(value)
    minimum = field.get("min")
    maximum = field.get("max")
    if minimum is not None and len(emails) < minimum:
        raise ValueError(f"Minimum number of emails is {minimum}")
    if maximum is not None and len(emails) > maximum:
        raise ValueError(f"Maximum number of emails is {maximum}")
    allow_named = bool(field.get("name"))
    return all(
        _EMAIL_PLAIN.match(item) is not None
        or (allow_named and _EMAIL_NAMED.match(item) is not None)
        for item in emails
    )


def _validate_email(value: object, field: FieldSchema) -> bool:
    return _validate_emails(value, field.with_options(min=1, max=1))


def _uncast_emails(value: object, field: FieldSchema) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def _describe_emails(field: FieldSchema) -> str:
    return filtered_join(
        [
            "CSV of",
            range_phrase(
                field.get("min"),
                field.get("max"),
                both="{min} to {max}",
                lower="at least {min}",
                upper="at most {max}",
            ),
            "email address" if field.get("max") == 1 else "email addresses",
        ]
    )


# }}}
# file {{{


def _cast_file(value: str, field: FieldSchema) -> str | bytes:
    path = Path(value).expanduser()
    if field.get("string"):
        return path.read_text(encoding=str(field.get("encoding", "utf-8")))
    return path.read_bytes()


# }}}
# number / float / percent {{{


def _cast_number(value: str, field: FieldSchema) -> int | float:
    return _parse_float(value) if field.get("float") else _parse_int(value)


def _validate_number(value: object, field: FieldSchema) -> None:
    if not value and not field.required:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Number is invalid")
    if math.isnan(value):
        raise ValueError("Number is invalid")
    if math.isinf(value):
        raise ValueError("Number must be finite")
    minimum = field.get("min")
    maximum = field.get("max")
    if minimum is not None and value < minimum:
        raise ValueError(f'Below minimum value of "{minimum}"')
    if maximum is not None and value > maximum:
        raise ValueError(f'Above maximum value of "{maximum}"')


def _validate_float(value: object, field: FieldSchema) -> None:
    _validate_number(value, field.with_options(float=True))


def _cast_float(value: str, field: FieldSchema) -> float:
    return _parse_float(value)


def _uncast_number(value: object, field: FieldSchema) -> str:
    return str(value)


def _describe_number(field: FieldSchema) -> str:
    return filtered_join(
        [
            "Number",
            range_phrase(
                field.get("min"),
                field.get("max"),
                both="in the range {min} to {max}",
                lower="with a minimum of {min}",
                upper="with a maximum of {max}",
            ),
            field.get("float") and "with optional decimal places",
        ]
    )


def _describe_float(field: FieldSchema) -> str:
    return _describe_number(field.with_options(float=True))


_PERCENT_SUFFIX = re.compile(r"\s*%")


def _cast_percent(value: str, field: FieldSchema) -> int | float:
    stripped = _PERCENT_SUFFIX.sub("", value)
    return _parse_float(stripped) if field.get("float") else _parse_int(stripped)


def _uncast_percent(value: object, field: FieldSchema) -> str:
    return f"{value}%"


# }}}
# keyvals / object {{{

_KEYVAL_PATTERN = re.compile(r"^\s*(?P<key>.+?)\s*[:=]\s*(?P<val>.*)$")


def _cast_keyvals(value: str, field: FieldSchema) -> dict[str, object]:
    no_value = field.get("no_value", False)
    result: dict[str, object] = {}
    for expression in _CSV_PATTERN.split(value.strip()):
        if not expression:
            continue
        match = _KEYVAL_PATTERN.match(expression)
        if match is not None:
            result[match.group("key")] = match.group("val")
            continue
        if no_value is False:
            raise ValueError(
                f'Invalid object format for "{value}" expected in format "key1:val, key2:val" etc.'
            )
        result[expression] = no_value
    return result


def _uncast_keyvals(value: Mapping[str, object], field: FieldSchema) -> str:
    return ", ".join(f"{key}={item}" for key, item in value.items())


def _validate_keyvals(value: object, field: FieldSchema) -> None:
    if not isinstance(value, Mapping):
        raise ValueError("Must be an object")
    _check_size(
        len(value),
        field,
        'Below minimum number of keys "{min}"',
        'Above maximum number of keys "{max}"',
    )


def _validate_object(value: object, field: FieldSchema) -> bool:
    return isinstance(value, Mapping)


def _describe_keyvals(field: FieldSchema) -> str:
    return filtered_join(["Object made up of a CSV", _count_phrase(field, "of"), "key/vals"])


def _describe_object(field: FieldSchema) -> str:
    return filtered_join(["Object made up of a CSV", _count_phrase(field), "key/vals"])


# }}}
# regexp {{{

_SURROUNDED = re.compile(r"^/(?P<body>.+)/(?P<flags>\w*)$", re.DOTALL)
_REGEXP_FLAGS: Final[dict[str, int]] = {
    "a": re.ASCII,
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    # JavaScript-only flags with no Python equivalent.
    "g": 0,
    "u": 0,
    "y": 0,
}
_FLAG_LETTERS: Final[tuple[tuple[int, str], ...]] = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


def _compile_flags(letters: str) -> int:
    flags = 0
    for letter in letters:
        if letter not in _REGEXP_FLAGS:
            raise ValueError(f'Unsupported RegExp flag "{letter}"')
        flags |= _REGEXP_FLAGS[letter]
    return flags


def _cast_regexp(value: str, field: FieldSchema) -> re.Pattern[str]:
    surrounds = bool(field.get("surrounds"))
    accept_plain = bool(field.get("accept_plain"))
    if accept_plain and not surrounds:
        raise ValueError("`accept_plain` also requires `surrounds`")

    body = value
    flags = str(field.get("flags") or "")
    if surrounds:
        match = _SURROUNDED.match(value)
        if match is None:
            if not accept_plain:
                raise ValueError(
                    f'RegExp must be enclosed in "/slashes/[optional-flags]" got "{value}"'
                )
            return re.compile(
                str(field.get("plain_prefix") or "")
                + re.escape(value)
                + str(field.get("plain_suffix") or ""),
                _compile_flags(flags),
            )
        body = match.group("body")
        flags = match.group("flags")

    if field.get("escape"):
        body = re.escape(body)
    return re.compile(body, _compile_flags(flags))


def _uncast_regexp(value: re.Pattern[str], field: FieldSchema) -> str:
    letters = "".join(letter for flag, letter in _FLAG_LETTERS if value.flags & flag)
    return f"/{value.pattern}/{letters}"


def _validate_regexp(value: object, field: FieldSchema) -> bool:
    return isinstance(value, re.Pattern)


# }}}
# set {{{


def _cast_set(value: str, field: FieldSchema) -> set[str]:
    text = str(value).strip()
    return set(_CSV_PATTERN.split(text)) if text else set()


def _uncast_set(value: Iterable[object], field: FieldSchema) -> str:
    return ", ".join(sorted(str(item) for item in value))


def _validate_set(value: object, field: FieldSchema) -> None:
    if not isinstance(value, (set, frozenset)):
        raise ValueError("Must be a set")
    _check_size(
        len(value),
        field,
        'Below minimum set size of "{min}"',
        'Above maximum set size of "{max}"',
    )


def _describe_set(field: FieldSchema) -> str:
    return filtered_join(
        ["CSV of strings constituting Set", _count_phrase(field, "of"), "items"]
    )


# }}}
# style {{{

_STYLE_SPLIT = re.compile(r"[+,\s]+")


def _parse_style_token(definition: str, token: str) -> Style:
    try:
        return Style.parse(definition)
    except StyleSyntaxError as exc:
        raise ValueError(f'Unsupported console style "{token}"') from exc


def _cast_style(value: str, field: FieldSchema) -> Style:
    style = Style()
    background_next = False
    for token in (part.lower() for part in _STYLE_SPLIT.split(value) if part):
        if token == "on":
            background_next = True
            continue
        if background_next:
            definition = f"on {token}"
            background_next = False
        elif token.startswith("bg") and len(token) > 2:
            definition = f"on {token[2:]}"
        elif token.startswith("fg") and len(token) > 2:
            definition = token[2:]
        else:
            definition = token
        style += _parse_style_token(definition, token)
    if background_next:
        raise ValueError('Console style "on" must be followed by a color')
    return style


def _uncast_style(value: Style, field: FieldSchema) -> str:
    return str(value)


def _validate_style(value: object, field: FieldSchema) -> bool:
    return isinstance(value, Style)


# }}}
# uri / mongouri {{{


def _uri_text(value: object) -> str:
    if isinstance(value, SplitResult):
        return value.geturl()
    return str(value)


def _cast_uri(value: str, field: FieldSchema) -> str | SplitResult:
    if field.get("parse"):
        return urlsplit(value.strip())
    return value


def _validate_uri(value: object, field: FieldSchema) -> None:
    parts = value if isinstance(value, SplitResult) else urlsplit(str(value).strip())
    if not parts.scheme or not (parts.netloc or parts.path):
        raise ValueError(f'Invalid URI "{_uri_text(value)}"')


def _uncast_uri(value: object, field: FieldSchema) -> str:
    return _uri_text(value)


_MONGO_PREFIX = re.compile(r"^mongodb(?:\+srv)?://")


def _validate_mongouri(value: object, field: FieldSchema) -> None:
    if _MONGO_PREFIX.match(_uri_text(value)) is None:
        raise ValueError('URI must begin with "mongodb://" or "mongodb+srv://"')


# }}}


def builtin_types() -> tuple[TypeDescriptor, ...]:
    """Return descriptors for every built-in type."""

    return (
        TypeDescriptor("any", describe="Any value"),
        TypeDescriptor(
            "array",
            cast=_cast_array,
            validate=_validate_array,
            uncast=_uncast_array,
            describe=_describe_array,
            defaults={"split": "csv", "split_methods": SPLIT_METHODS, "join": ", "},
        ),
        TypeDescriptor(
            "boolean",
            cast=_cast_boolean,
            uncast=_uncast_boolean,
            describe="Boolean yes/no",
            defaults={
                "true": ("true", "yes", "1", "on"),
                "false": ("false", "no", "0", "off"),
            },
        ),
        TypeDescriptor(
            "date",
            cast=_cast_date,
            validate=_validate_date,
            uncast=_uncast_date,
            describe=_describe_date,
        ),
        TypeDescriptor(
            "duration",
            cast=_cast_duration,
            uncast=_uncast_duration,
            describe="Timestring compatible duration",
            defaults={"unit": "ms"},
        ),
        TypeDescriptor(
            "email",
            cast="string",
            validate=_validate_email,
            describe="Email address",
            defaults={"name": True},
        ),
        TypeDescriptor(
            "emails",
            cast="string",
            validate=_validate_emails,
            uncast=_uncast_emails,
            describe=_describe_emails,
            defaults={"name": True},
        ),
        TypeDescriptor(
            "file",
            cast=_cast_file,
            describe="Path to a file on disk",
            defaults={"string": False},
        ),
        TypeDescriptor(
            "float",
            cast=_cast_float,
            validate=_validate_float,
            uncast=_uncast_number,
            describe=_describe_float,
        ),
        TypeDescriptor(
            "keyvals",
            cast=_cast_keyvals,
            validate=_validate_keyvals,
            uncast=_uncast_keyvals,
            describe=_describe_keyvals,
            defaults={"no_value": False},
        ),
        TypeDescriptor(
            "mongouri",
            cast="uri",
            validate=_validate_mongouri,
            uncast="uri",
            describe="MongoDB compatible URI",
            defaults={"parse": False},
        ),
        TypeDescriptor(
            "number",
            cast=_cast_number,
            validate=_validate_number,
            uncast=_uncast_number,
            describe=_describe_number,
            defaults={"float": False},
        ),
        TypeDescriptor(
            "object",
            cast="keyvals",
            validate=_validate_object,
            uncast="keyvals",
            describe=_describe_object,
        ),
        TypeDescriptor(
            "percent",
            cast=_cast_percent,
            validate="number",
            uncast=_uncast_percent,
            describe="Percentage with optional '%' suffix",
            defaults={"float": False},
        ),
        TypeDescriptor(
            "regexp",
            cast=_cast_regexp,
            validate=_validate_regexp,
            uncast=_uncast_regexp,
            describe="RegExp string",
            defaults={
                "escape": False,
                "surrounds": True,
                "accept_plain": False,
                "plain_prefix": "",
                "plain_suffix": "",
                "flags": "",
            },
        ),
        TypeDescriptor(
            "set",
            cast=_cast_set,
            validate=_validate_set,
            uncast=_uncast_set,
            describe=_describe_set,
        ),
        TypeDescriptor(
            "string",
            cast=_cast_string,
            validate=_validate_string,
            describe=_describe_string,
        ),
        TypeDescriptor(
            "style",
            cast=_cast_style,
            validate=_validate_style,
            uncast=_uncast_style,
            describe="Combination of console styles",
        ),
        TypeDescriptor(
            "uri",
            cast=_cast_uri,
            validate=_validate_uri,
            uncast=_uncast_uri,
            describe="Parsable URI",
            defaults={"parse": False},
        ),
    )


NATIVE_ALIASES: Final[Mapping[object, str]] = MappingProxyType(
    {
        bool: "boolean",
        date: "date",
        datetime: "date",
        dict: "object",
        float: "float",
        frozenset: "set",
        int: "number",
        list: "array",
        Path: "file",
        re.Pattern: "regexp",
        set: "set",
        str: "string",
        timedelta: "duration",
        tuple: "array",
    }
)


def default_registry() -> TypeRegistry:
    """Return a new registry populated with the built-in types and aliases."""

    return TypeRegistry(builtin_types(), NATIVE_ALIASES)


__all__ = [
    "NATIVE_ALIASES",
    "POINTER_ROLES",
    "SPLIT_METHODS",
    "Describer",
    "FieldFunction",
    "SplitMethod",
    "TypeDescriptor",
    "TypeRef",
    "TypeRegistry",
    "builtin_types",
    "default_registry",
]
