"""
typedstruct: typed record structs from one ordered declaration block.

Declare fields once (name, type, options) and get the struct with its defaults, the
set of enforced fields, a nullable-aware type descriptor, and reflection accessors.

## Public API
- typed_struct / field: class-body declarations.
- typedstruct: ``with`` block declarations.
- SchemaBuilder: explicit builder.
- Errors: InvalidFieldName, DuplicateFieldError, MissingRequiredFieldError, ...
"""

from __future__ import annotations

from .core import (
    MISSING,
    DuplicateFieldError,
    InvalidFieldName,
    MissingRequiredFieldError,
    Schema,
    SchemaBuilder,
    SchemaError,
    SchemaStateError,
    UnknownOptionError,
    asdict,
    describe,
    field,
    fields,
    replace,
    typed_struct,
    typedstruct,
)

__all__ = [
    "MISSING",
    "DuplicateFieldError",
    "InvalidFieldName",
    "MissingRequiredFieldError",
    "Schema",
    "SchemaBuilder",
    "SchemaError",
    "SchemaStateError",
    "UnknownOptionError",
    "asdict",
    "describe",
    "field",
    "fields",
    "replace",
    "typed_struct",
    "typedstruct",
]
