"""
typedstruct.io: document loading, descriptor export, and polars frames.

## Responsibilities
- Load declaration documents (YAML/JSON/TOML) and compile each struct block through the core pipeline.
- Write descriptor bundles atomically (tmp → fsync → rename).
- Project struct instances to and from polars DataFrames.

## Import DAG discipline
- Depends on stdlib, pyyaml, polars, typedstruct.config and typedstruct.core.*.
- typedstruct.core MUST NOT import this package.

## Examples
```python
from typedstruct.io import load_schemas, write_descriptors

schemas = load_schemas("structs.yaml")
write_descriptors("out/structs.json", schemas.values())
```
"""

from __future__ import annotations

from .errors import IoConfigError, IoDeclarationError, IoError, IoWriteError
from .frame import from_frame, polars_schema, to_frame
from .read import compile_document, load_document, load_schemas
from .write import descriptor_bundle, write_descriptors, write_text_atomic

__all__ = [
    "IoConfigError",
    "IoDeclarationError",
    "IoError",
    "IoWriteError",
    "compile_document",
    "descriptor_bundle",
    "from_frame",
    "load_document",
    "load_schemas",
    "polars_schema",
    "to_frame",
    "write_descriptors",
    "write_text_atomic",
]
