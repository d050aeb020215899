"""
Field declarations and the declaration validator.

A declaration is one (name, type, options) triple inside a declaration block. This
module parses the options mapping and checks a declaration against the names already
accumulated in the block, before anything is appended.

Notes:
    - Absence of a default is modelled by the MISSING sentinel, distinct from an
      explicit ``default=None``.
    - `enforce` is coerced with ``bool()``; absence means False.
    - Unrecognized option keys are ignored with a warning, or rejected with
      UnknownOptionError under strict parsing.
    - Validation never mutates the block; on failure the caller simply stops.
"""

from __future__ import annotations

import logging
from collections.abc import Container, Mapping
from dataclasses import dataclass
from typing import Any, Final

from .constants import OPTION_DEFAULT, OPTION_ENFORCE, RECOGNIZED_OPTIONS
from .errors import DuplicateFieldError, UnknownOptionError
from .grammar import NamePolicy, assert_field_name
from .typing import TypeExpr

__all__ = [
    "MISSING",
    "FieldOptions",
    "FieldDeclaration",
    "parse_options",
    "validate_declaration",
]

logger = logging.getLogger(__name__)


class _MissingType:
    """Sentinel type for "no default given"."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _MissingType()


@dataclass(frozen=True, slots=True)
class FieldOptions:
    """
    Parsed options of one field declaration.

    Attributes:
        default (Any): Default value, or MISSING when none was given.
        enforce (bool): Whether the field must be supplied at construction.
    """

    default: Any = MISSING
    enforce: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    """
    One (name, type, options) triple as written in a declaration block.

    Attributes:
        name (str): Field name (validated later, not here).
        type (TypeExpr): Opaque type annotation.
        options (FieldOptions): Parsed options.
    """

    name: str
    type: TypeExpr
    options: FieldOptions = FieldOptions()


def parse_options(
    options: Mapping[str, Any] | None,
    *,
    strict: bool = False,
    field_name: Any = None,
) -> FieldOptions:
    """
    Parse a raw options mapping into FieldOptions.

    Args:
        options (Mapping[str, Any] | None): Raw options; None means no options.
        strict (bool): Reject unrecognized keys instead of ignoring them.
        field_name (Any): Field name used in messages only.

    Returns:
        FieldOptions: Parsed options.

    Raises:
        UnknownOptionError: If strict and an unrecognized key is present.
    """
    if not options:
        return FieldOptions()

    unknown = sorted(str(k) for k in options if k not in RECOGNIZED_OPTIONS)
    if unknown:
        if strict:
            raise UnknownOptionError(
                f"unknown option(s) {unknown} for field {field_name!r} "
                f"(allowed={sorted(RECOGNIZED_OPTIONS)})"
            )
        logger.warning("ignoring unknown option(s) %s for field %r", unknown, field_name)

    return FieldOptions(
        default=options.get(OPTION_DEFAULT, MISSING),
        enforce=bool(options.get(OPTION_ENFORCE, False)),
    )


def validate_declaration(
    decl: FieldDeclaration,
    existing: Container[str],
    *,
    policy: NamePolicy = NamePolicy.PYTHON,
) -> FieldDeclaration:
    """
    Check one declaration against the naming policy and the names already declared.

    Args:
        decl (FieldDeclaration): Declaration to check.
        existing (Container[str]): Names already accumulated in the current block.
        policy (NamePolicy): Identifier policy for the name.

    Returns:
        FieldDeclaration: The same declaration, for chaining.

    Raises:
        InvalidFieldName: If the name is not a valid identifier.
        DuplicateFieldError: If the name is already declared in this block.
    """
    assert_field_name(decl.name, policy)
    if decl.name in existing:
        raise DuplicateFieldError(f"the field {decl.name!r} is already set")
    return decl
