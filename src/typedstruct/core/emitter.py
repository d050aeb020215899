"""
Schema emitter: projects a finalized SchemaState into an immutable Schema.

Responsibilities
- Produce the structure shape (ordered name → default).
- Produce the required-field set (enforced names).
- Produce the type descriptor (ordered name → effective type).
- Expose reflection accessors keys(), defaults(), types() as stable snapshots.

Notes:
    - All projections are computed once in `emit` and stored read-only, so repeated
      accessor calls return the identical objects.
    - In the shape and in defaults(), a field without a default maps to None.
    - The type descriptor is for static tooling only; nothing here checks values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .accumulator import AccumulatedField, SchemaState
from .errors import SchemaStateError
from .typing import TypeExpr

__all__ = [
    "Schema",
    "emit",
]


@dataclass(frozen=True, eq=False)
class Schema:
    """
    Composed output of one declaration block.

    Attributes:
        name (str): Struct name.
        fields (tuple[AccumulatedField, ...]): Fields in declaration order.
        shape (Mapping[str, Any]): Read-only ordered name → default (None when absent).
        required (frozenset[str]): Enforced field names.
        type_descriptor (Mapping[str, TypeExpr]): Read-only ordered name → effective type.

    Examples:
        >>> from typedstruct.core.builder import SchemaBuilder
        >>> b = SchemaBuilder("Demo")
        >>> _ = b.field("a_field", str)
        >>> _ = b.field("with_default", int, default=7)
        >>> s = b.build()
        >>> s.keys()
        ('a_field', 'with_default')
        >>> dict(s.defaults())
        {'a_field': None, 'with_default': 7}
    """

    name: str
    fields: tuple[AccumulatedField, ...]
    shape: Mapping[str, Any]
    required: frozenset[str]
    type_descriptor: Mapping[str, TypeExpr]
    _keys: tuple[str, ...]

    def keys(self) -> tuple[str, ...]:
        """Field names in declaration order."""
        return self._keys

    def defaults(self) -> Mapping[str, Any]:
        """Ordered name → default mapping (None where no default was given)."""
        return self.shape

    def types(self) -> Mapping[str, TypeExpr]:
        """Ordered name → effective type mapping."""
        return self.type_descriptor

    def field(self, name: str) -> AccumulatedField:
        for fld in self.fields:
            if fld.name == name:
                return fld
        raise KeyError(f"{self.name} has no field {name!r}")

    @property
    def nullable(self) -> tuple[str, ...]:
        """Names whose effective type was widened to admit None."""
        return tuple(f.name for f in self.fields if f.nullable)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, keys={self._keys!r}, required={sorted(self.required)!r})"


def emit(state: SchemaState) -> Schema:
    """
    Emit the composed schema from a finalized state.

    Args:
        state (SchemaState): Finalized accumulator.

    Returns:
        Schema: Immutable projections of the state.

    Raises:
        SchemaStateError: If the state is still accumulating.
    """
    if not state.finalized:
        raise SchemaStateError(f"{state.name}: cannot emit while accumulating")
    fields = state.fields()
    shape = {f.name: (f.default if f.has_default else None) for f in fields}
    types = {f.name: f.type for f in fields}
    return Schema(
        name=state.name,
        fields=fields,
        shape=MappingProxyType(shape),
        required=state.required(),
        type_descriptor=MappingProxyType(types),
        _keys=tuple(f.name for f in fields),
    )
