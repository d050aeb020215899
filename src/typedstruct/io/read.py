"""
Load declaration documents (YAML, JSON, TOML) into compiled structs.

Document shape
--------------
```yaml
structs:
  Person:
    fields:
      - {name: name, type: str, enforce: true}
      - {name: age, type: int}
      - {name: happy, type: bool, default: true}
```

- Each entry under ``structs`` is one declaration block, compiled independently.
- ``type`` is kept as text; the compiler never interprets it.
- Every other key of a field entry is an option; unknown option keys follow
  CompilerSettings.strict_options.

Notes
- Declaration errors (InvalidFieldName, DuplicateFieldError, UnknownOptionError) propagate
  unchanged; document-shape problems raise IoDeclarationError.
- YAML is parsed with ``yaml.safe_load``; TOML with stdlib ``tomllib``.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from typedstruct.config import CompilerSettings
from typedstruct.core.builder import SchemaBuilder
from typedstruct.core.emitter import Schema

from .errors import IoConfigError, IoDeclarationError

__all__ = [
    "load_document",
    "compile_document",
    "load_schemas",
]

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_document(path: str | os.PathLike[str]) -> dict[str, Any]:
    """
    Parse a declaration document by suffix.

    Raises:
        IoConfigError: If the suffix is not .yaml/.yml/.json/.toml.
        IoDeclarationError: If the file cannot be read or parsed, or is not a mapping.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    try:
        if suffix in _YAML_SUFFIXES:
            data = yaml.safe_load(p.read_text(encoding="utf-8"))
        elif suffix == ".json":
            data = json.loads(p.read_text(encoding="utf-8"))
        elif suffix == ".toml":
            with p.open("rb") as fh:
                data = tomllib.load(fh)
        else:
            raise IoConfigError(
                f"unsupported declaration file {p.name!r} (expected .yaml, .yml, .json or .toml)"
            )
    except (OSError, yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise IoDeclarationError(f"failed to read {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise IoDeclarationError(f"{p}: document must be a mapping, got {type(data).__name__}")
    return data


def _compile_block(
    name: str, body: Any, settings: CompilerSettings
) -> Schema:
    if not isinstance(body, Mapping) or not isinstance(body.get("fields", []), list):
        raise IoDeclarationError(f"struct {name!r}: expected a mapping with a 'fields' list")
    builder = SchemaBuilder(name, **settings.builder_options())
    for i, entry in enumerate(body.get("fields", [])):
        if not isinstance(entry, Mapping) or "name" not in entry or "type" not in entry:
            raise IoDeclarationError(
                f"struct {name!r}: field #{i} must be a mapping with 'name' and 'type'"
            )
        options = {k: v for k, v in entry.items() if k not in ("name", "type")}
        builder.declare(entry["name"], str(entry["type"]), options)
    schema = builder.build()
    logger.info("compiled struct %s with %d field(s)", name, len(schema))
    return schema


def compile_document(
    data: Mapping[str, Any], settings: CompilerSettings | None = None
) -> dict[str, Schema]:
    """
    Compile every struct block of a parsed document.

    Args:
        data (Mapping[str, Any]): Parsed document.
        settings (CompilerSettings | None): Compiler settings (defaults when None).

    Returns:
        dict[str, Schema]: Struct name -> emitted schema, in document order.

    Raises:
        IoDeclarationError: If the document shape is wrong.
        SchemaError: On the first declaration error; nothing is returned.
    """
    settings = settings or CompilerSettings()
    structs = data.get("structs")
    if not isinstance(structs, Mapping):
        raise IoDeclarationError("document must contain a 'structs' mapping")
    return {str(name): _compile_block(str(name), body, settings) for name, body in structs.items()}


def load_schemas(
    path: str | os.PathLike[str], settings: CompilerSettings | None = None
) -> dict[str, Schema]:
    """Parse and compile a declaration document file."""
    return compile_document(load_document(path), settings)
