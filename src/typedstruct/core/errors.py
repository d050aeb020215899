"""
Core exception types raised while declaring, compiling, and instantiating typed structs.

Provides typed exceptions for core-domain failures:
- SchemaError as the base for declaration-time failures.
- InvalidFieldName when a field name is not a valid identifier.
- DuplicateFieldError when a name is declared twice in one block.
- UnknownOptionError when strict option parsing meets an unrecognized key.
- SchemaStateError for misuse of the accumulate → finalize state machine.
- MissingRequiredFieldError when a generated constructor is called without enforced fields.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Declaration-time errors abort the whole block; no partial schema is emitted.
    - MissingRequiredFieldError subclasses TypeError, matching how Python reports
      a missing required argument to any callable.

Examples:
    Catch a duplicate declaration.

    >>> from typedstruct.core.builder import SchemaBuilder
    >>> from typedstruct.core.errors import DuplicateFieldError
    >>> b = SchemaBuilder("Demo")
    >>> _ = b.field("name", str)
    >>> try:
    ...     b.field("name", int)
    ... except DuplicateFieldError as e:
    ...     msg = str(e)
    >>> "already set" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SchemaError",
    "InvalidFieldName",
    "DuplicateFieldError",
    "UnknownOptionError",
    "SchemaStateError",
    "MissingRequiredFieldError",
]


class SchemaError(ValueError):
    """Declaration-time failure (naming, duplication, options, block shape)."""


class InvalidFieldName(SchemaError):
    """Field name is not a valid identifier under the active naming policy."""


class DuplicateFieldError(SchemaError):
    """Field name declared more than once in the same block."""


class UnknownOptionError(SchemaError):
    """Unrecognized field option key (raised only under strict option parsing)."""


class SchemaStateError(RuntimeError):
    """Accumulator used out of order (append after finalize, emit before finalize)."""


class MissingRequiredFieldError(TypeError):
    """
    Enforced fields omitted when constructing a struct instance.

    Attributes:
        struct_name (str): Name of the struct being constructed.
        missing (tuple[str, ...]): Omitted enforced field names, in declaration order.
    """

    def __init__(self, struct_name: str, missing: tuple[str, ...]) -> None:
        self.struct_name = struct_name
        self.missing = missing
        names = ", ".join(missing)
        super().__init__(f"{struct_name}: missing required field(s): {names}")
