"""
Frozen, JSON-ready descriptors of emitted schemas.

Notes:
    - A descriptor renders each effective type to text, so it can be written to disk,
      diffed, and hashed without importing the declaring module.
    - ``fields`` keeps declaration order; ``required`` and ``nullable`` are listed in
      declaration order too.
    - required ∩ nullable = ∅ and (required ∪ nullable) ⊆ fields.
    - Defaults that are not JSON values are rendered with repr().
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import UnionType
from typing import Any, Union, get_args, get_origin

from .constants import DESCRIPTOR_FORMAT_VERSION
from .emitter import Schema
from .hashing import hash_mapping
from .nullability import OrNone
from .typing import JsonDict, TypeExpr

__all__ = [
    "StructDescriptor",
    "type_repr",
    "describe",
    "schema_hash",
]


@dataclass(frozen=True)
class StructDescriptor:
    """
    Frozen descriptor for an emitted struct schema.

    Attributes:
        name (str): Struct name.
        fields (dict[str, str]): Ordered field name -> rendered effective type.
        defaults (dict[str, Any]): Ordered field name -> JSON-safe default (None when absent).
        required (list[str]): Enforced field names.
        nullable (list[str]): Fields whose type was widened to admit None.
        version (int): Descriptor format version.

    Examples:
        >>> from typedstruct.core.builder import SchemaBuilder
        >>> b = SchemaBuilder("Demo")
        >>> _ = b.field("a_field", "str")
        >>> describe(b.build()).fields
        {'a_field': 'str | None'}
    """

    name: str
    fields: dict[str, str]
    defaults: dict[str, Any]
    required: list[str]
    nullable: list[str]
    version: int = DESCRIPTOR_FORMAT_VERSION

    def to_dict(self) -> JsonDict:
        return {
            "name": self.name,
            "fields": [{"name": k, "type": v} for k, v in self.fields.items()],
            "defaults": dict(self.defaults),
            "required": list(self.required),
            "nullable": list(self.nullable),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StructDescriptor:
        return cls(
            name=str(data["name"]),
            fields={str(f["name"]): str(f["type"]) for f in data.get("fields", [])},
            defaults=dict(data.get("defaults", {})),
            required=list(data.get("required", [])),
            nullable=list(data.get("nullable", [])),
            version=int(data.get("version", DESCRIPTOR_FORMAT_VERSION)),
        )


def type_repr(type_: TypeExpr) -> str:
    """
    Render a type token as text.

    Examples:
        >>> from typing import Optional
        >>> type_repr(int), type_repr("str | None"), type_repr(Optional[int])
        ('int', 'str | None', 'int | None')
    """
    if isinstance(type_, str):
        return type_
    if isinstance(type_, OrNone):
        return f"{type_repr(type_.inner)} | None"
    if type_ is None or type_ is type(None):
        return "None"
    if get_origin(type_) in (Union, UnionType):
        return " | ".join(type_repr(a) for a in get_args(type_))
    if isinstance(type_, type) and get_origin(type_) is None:
        return type_.__qualname__
    return repr(type_).replace("typing.", "")


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, dict) and all(isinstance(k, str) for k in value):
        return {k: _json_safe(v) for k, v in value.items()}
    return repr(value)


def describe(schema: Schema) -> StructDescriptor:
    """
    Build the descriptor of an emitted schema.

    Args:
        schema (Schema): Emitted schema.

    Returns:
        StructDescriptor: Rendered, JSON-ready projection.
    """
    return StructDescriptor(
        name=schema.name,
        fields={k: type_repr(t) for k, t in schema.types().items()},
        defaults={k: _json_safe(v) for k, v in schema.defaults().items()},
        required=[k for k in schema.keys() if k in schema.required],
        nullable=list(schema.nullable),
    )


def schema_hash(schema: Schema | StructDescriptor) -> str:
    """SHA-256 fingerprint over the canonical JSON of a schema's descriptor."""
    desc = schema if isinstance(schema, StructDescriptor) else describe(schema)
    return hash_mapping(desc.to_dict())
