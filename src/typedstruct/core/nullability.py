"""
Nullability resolution for declared field types.

A field's effective type admits None exactly when the field has no default and is not
enforced; otherwise it is the declared type unchanged.

| default | enforce | effective type            |
|---------|---------|---------------------------|
| yes     | any     | declared                  |
| no      | true    | declared                  |
| no      | false   | declared widened to admit None |

Widening by token kind:
    - text annotation ``"T"``           → ``"T | None"``
    - class, typing construct or None   → ``typing.Optional[T]``
    - anything else                     → ``OrNone(T)``

Widening is idempotent: tokens that already admit None are returned unchanged.

Notes:
    - Pure functions; the declared type is never inspected beyond choosing how to
      spell the union.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, get_origin

from .typing import TypeExpr

__all__ = [
    "OrNone",
    "is_nullable",
    "widen",
    "effective_type",
]

# Text already spelled as "None", "... | None" or "Optional[...]".
_NULLABLE_TEXT_RE = re.compile(r"(^\s*None\s*$)|(\|\s*None\s*$)|(^\s*(typing\.)?Optional\[)")


@dataclass(frozen=True, slots=True)
class OrNone:
    """Union of an opaque token (neither a class nor a typing construct) with None."""

    inner: TypeExpr

    def __repr__(self) -> str:
        return f"{self.inner!r} | None"


def is_nullable(has_default: bool, enforce: bool) -> bool:
    """Return True when a field with these options must admit None."""
    return not has_default and not enforce


def widen(type_: TypeExpr) -> TypeExpr:
    """
    Widen a type token to "type or None".

    Args:
        type_ (TypeExpr): Declared type token.

    Returns:
        TypeExpr: The widened token (see module docstring).
    """
    if isinstance(type_, str):
        if _NULLABLE_TEXT_RE.search(type_):
            return type_
        return f"{type_} | None"
    if isinstance(type_, OrNone):
        return type_
    if type_ is None or isinstance(type_, type) or get_origin(type_) is not None:
        return Optional[type_]
    return OrNone(type_)


def effective_type(type_: TypeExpr, *, has_default: bool, enforce: bool) -> TypeExpr:
    """
    Resolve the effective type of a field.

    Args:
        type_ (TypeExpr): Declared type token.
        has_default (bool): Whether an explicit default was given (``None`` counts).
        enforce (bool): Whether the field is enforced.

    Returns:
        TypeExpr: Declared type, or its widened form when the field is nullable.

    Examples:
        >>> from typing import Optional
        >>> effective_type(int, has_default=False, enforce=False) == Optional[int]
        True
        >>> effective_type(int, has_default=True, enforce=False)
        <class 'int'>
        >>> effective_type("str", has_default=False, enforce=False)
        'str | None'
    """
    if is_nullable(has_default, enforce):
        return widen(type_)
    return type_
