"""
Polars projections of typed structs.

Purpose
- Map a schema's effective types to polars dtypes, in declaration order.
- Materialize struct instances as a DataFrame and read them back.

Type mapping
- int → Int64, float → Float64, str → Utf8, bool → Boolean
- ``T | None`` / ``Optional[T]`` map like T (polars columns are nullable)
- Text annotations ("int", "str | None", "Optional[int]") are mapped by name
- Anything else → Object

Notes
- Values are not validated; polars raises if a value cannot be stored in its column.
- Reading rows back goes through the struct constructor, so missing enforced columns
  surface as MissingRequiredFieldError.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin

import polars as pl

from typedstruct.core.emitter import Schema
from typedstruct.core.nullability import OrNone
from typedstruct.core.struct import schema_of
from typedstruct.core.typing import TypeExpr

__all__ = [
    "polars_dtype",
    "polars_schema",
    "to_frame",
    "from_frame",
]

# Polars exposes dtype singletons/classes (e.g., pl.Int64); keep the mapping loosely typed.
_DTYPE_MAP: dict[Any, object] = {
    int: pl.Int64,
    float: pl.Float64,
    str: pl.Utf8,
    bool: pl.Boolean,
}
_TEXT_DTYPE_MAP: dict[str, object] = {
    "int": pl.Int64,
    "float": pl.Float64,
    "str": pl.Utf8,
    "bool": pl.Boolean,
}
_OPTIONAL_TEXT_RE = re.compile(r"^Optional\[(.+)\]$")


def _strip_none_text(text: str) -> str:
    text = text.strip()
    m = _OPTIONAL_TEXT_RE.match(text)
    if m:
        return m.group(1).strip()
    parts = [p.strip() for p in text.split("|") if p.strip() != "None"]
    return parts[0] if len(parts) == 1 else text


def polars_dtype(type_: TypeExpr) -> object:
    """
    Polars dtype for one effective type.

    Examples:
        >>> from typing import Optional
        >>> polars_dtype(Optional[int]) == pl.Int64
        True
        >>> polars_dtype("str | None") == pl.Utf8
        True
    """
    if isinstance(type_, str):
        return _TEXT_DTYPE_MAP.get(_strip_none_text(type_), pl.Object)
    if isinstance(type_, OrNone):
        return polars_dtype(type_.inner)
    if get_origin(type_) in (Union, UnionType):
        args = [a for a in get_args(type_) if a is not NoneType]
        if len(args) == 1:
            return polars_dtype(args[0])
        return pl.Object
    try:
        return _DTYPE_MAP.get(type_, pl.Object)
    except TypeError:  # unhashable token
        return pl.Object


def polars_schema(schema: Schema | type) -> dict[str, object]:
    """Ordered column name -> polars dtype for a schema or struct class."""
    s = schema if isinstance(schema, Schema) else schema_of(schema)
    return {k: polars_dtype(t) for k, t in s.types().items()}


def to_frame(records: Iterable[Any], struct: type) -> pl.DataFrame:
    """
    Build a DataFrame from struct instances, one row per instance.

    Args:
        records (Iterable[Any]): Instances of `struct`.
        struct (type): Struct class (fixes the column set and order).

    Returns:
        pl.DataFrame: Columns in declaration order.

    Raises:
        TypeError: If a record is not an instance of `struct`.
    """
    rows = list(records)
    for r in rows:
        if not isinstance(r, struct):
            raise TypeError(f"expected {struct.__name__} instances, got {type(r).__name__}")
    columns = [
        pl.Series(name, [getattr(r, name) for r in rows], dtype=dtype)  # type: ignore[arg-type]
        for name, dtype in polars_schema(struct).items()
    ]
    return pl.DataFrame(columns)


def from_frame(df: pl.DataFrame, struct: type, *, strict: bool = False) -> list[Any]:
    """
    Construct struct instances from DataFrame rows.

    Args:
        df (pl.DataFrame): Source frame.
        struct (type): Struct class.
        strict (bool): Pass unknown columns through to the constructor (TypeError) instead
            of dropping them.

    Returns:
        list[Any]: One instance per row; absent columns take their defaults.
    """
    keys = set(schema_of(struct).keys())
    columns = list(df.columns) if strict else [c for c in df.columns if c in keys]
    if not columns:
        return [struct() for _ in range(df.height)]
    return [struct(**row) for row in df.select(columns).iter_rows(named=True)]
