"""
Pydantic v2 projection of emitted schemas.

Builds a `pydantic.BaseModel` subclass carrying the same field order, defaults, and
effective types as an emitted schema, for consumers that want parsing and validation
at a boundary (request payloads, config files). The struct itself never validates
values; this projection is opt-in.

Notes:
    - Enforced fields are required in the model, even when they carry a default,
      mirroring the struct constructor.
    - Other fields default to their declared default, or None.
    - Models forbid extra keys (``extra="forbid"``).
    - Text annotations ("str | None") are resolved by pydantic against builtins only;
      use type objects for anything else.
    - Pydantic treats names with a leading underscore as private attributes; such
      fields are rejected by pydantic at model creation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, create_model

from .emitter import Schema

__all__ = [
    "to_pydantic_model",
    "struct_from_model",
]


def to_pydantic_model(
    schema: Schema,
    *,
    model_name: str | None = None,
    extra: str = "forbid",
) -> type[BaseModel]:
    """
    Build a pydantic model class from an emitted schema.

    Args:
        schema (Schema): Emitted schema.
        model_name (str | None): Class name (defaults to ``<schema.name>Model``).
        extra (str): Pydantic ``extra`` policy.

    Returns:
        type[BaseModel]: The model class.

    Examples:
        >>> from typedstruct.core.builder import SchemaBuilder
        >>> b = SchemaBuilder("Person")
        >>> _ = b.field("name", str, enforce=True)
        >>> _ = b.field("age", int)
        >>> PersonModel = to_pydantic_model(b.build())
        >>> PersonModel(name="Ada").model_dump()
        {'name': 'Ada', 'age': None}
    """
    definitions: dict[str, Any] = {}
    for f in schema.fields:
        if f.enforced:
            definitions[f.name] = (f.type, Field(...))
        else:
            definitions[f.name] = (f.type, schema.shape[f.name])
    return create_model(  # type: ignore[call-overload]
        model_name or f"{schema.name}Model",
        __config__=ConfigDict(extra=extra),  # type: ignore[typeddict-item]
        **definitions,
    )


def struct_from_model(struct: type, model: BaseModel) -> Any:
    """Construct a struct instance from a validated model instance."""
    return struct(**model.model_dump())
