"""
Core package aggregator for the typedstruct compiler (declaration, nullability, accumulation, emission).

## Pipeline (single source of truth)
- Declaration: options parsing and the declaration validator (name well-formedness, duplicates).
- Nullability: widens a declared type to admit None when a field has no default and is not enforced.
- Accumulator: per-block, append-only SchemaState with an accumulate → finalize state machine.
- Emitter: immutable Schema carrying the shape, required set, type descriptor and reflection accessors.
- Struct: generated classes interpreted from a Schema.
- Builder: SchemaBuilder, the ``with typedstruct(...)`` block, and the ``@typed_struct`` decorator.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Declared types are opaque tokens; nothing here type-checks values.
- No module-level mutable state; independent blocks never share a SchemaState.

## Downstream usage
- typedstruct.io: loads declaration documents into builders, writes descriptors, builds polars frames.
- typedstruct.cli: describes and exports compiled structs.

## Examples
```python
from typedstruct.core import field, typed_struct

@typed_struct
class Person:
    name: str = field(enforce=True)
    age: int
    happy: bool = True

Person.__keys__()      # ('name', 'age', 'happy')
Person.__types__()     # {'name': str, 'age': Optional[int], 'happy': bool}
Person(name="Ada")     # Person(name='Ada', age=None, happy=True)
```
"""

from __future__ import annotations

from .accumulator import AccumulatedField, BlockState, SchemaState
from .builder import Block, FieldSpec, SchemaBuilder, field, typed_struct, typedstruct
from .declaration import MISSING, FieldDeclaration, FieldOptions
from .descriptor import StructDescriptor, describe, schema_hash
from .emitter import Schema, emit
from .errors import (
    DuplicateFieldError,
    InvalidFieldName,
    MissingRequiredFieldError,
    SchemaError,
    SchemaStateError,
    UnknownOptionError,
)
from .grammar import NamePolicy
from .nullability import OrNone, effective_type
from .struct import asdict, build_struct, fields, is_typed_struct, replace, schema_of

__all__ = [
    "AccumulatedField",
    "Block",
    "BlockState",
    "DuplicateFieldError",
    "FieldDeclaration",
    "FieldOptions",
    "FieldSpec",
    "InvalidFieldName",
    "MISSING",
    "MissingRequiredFieldError",
    "NamePolicy",
    "OrNone",
    "Schema",
    "SchemaBuilder",
    "SchemaError",
    "SchemaState",
    "SchemaStateError",
    "StructDescriptor",
    "UnknownOptionError",
    "asdict",
    "build_struct",
    "describe",
    "effective_type",
    "emit",
    "field",
    "fields",
    "is_typed_struct",
    "replace",
    "schema_hash",
    "schema_of",
    "typed_struct",
    "typedstruct",
]
