"""Load schema declarations from YAML or TOML files."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import yaml

from dotenv_schema.errors import SchemaLoadError

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})
_TOML_SUFFIXES = frozenset({".toml"})


def load_schema_file(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Return the field declarations stored in ``path``.

    The document root must be a mapping of field name to declaration, in the
    same shapes accepted by ``normalize_field`` (type names, option tables).
    Declaration order follows the file.
    """

    resolved = Path(path).expanduser()
    suffix = resolved.suffix.lower()
    if suffix not in _YAML_SUFFIXES | _TOML_SUFFIXES:
        raise SchemaLoadError(f"unsupported schema file type {suffix or '<none>'!r}: {resolved}")

    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError(f"unable to read schema file {resolved}: {exc}") from exc

    document: object
    try:
        if suffix in _YAML_SUFFIXES:
            document = yaml.safe_load(text)
        else:
            document = tomllib.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
        raise SchemaLoadError(f"invalid schema file {resolved}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise SchemaLoadError(f"schema file root must be a mapping: {resolved}")
    for key in document:
        if not isinstance(key, str):
            raise SchemaLoadError(f"schema field names must be strings, got {key!r}: {resolved}")
    return {name: _option_keys(declaration) for name, declaration in document.items()}


def _option_keys(declaration: object) -> object:
    # YAML reads bare `true:` / `false:` option keys as booleans
    if not isinstance(declaration, dict):
        return declaration
    return {
        (str(key).lower() if isinstance(key, bool) else key): value
        for key, value in declaration.items()
    }


__all__ = ["load_schema_file"]
