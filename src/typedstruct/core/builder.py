"""
Declaration blocks: the builder threaded through one block, and its two front-ends.

Responsibilities
- SchemaBuilder owns one SchemaState and runs every `field(...)` call through
  validate → resolve → append.
- `typedstruct(name)` wraps a builder in a ``with`` block that finalizes on exit.
- `typed_struct` reads a class body's annotations, in order, as one block.

Style
- No module-level mutable state; each block owns its builder exclusively.
- A failure inside a block propagates immediately and nothing is emitted.

Examples
--------
Builder:

>>> b = SchemaBuilder("Person")
>>> _ = b.field("name", str, enforce=True)
>>> _ = b.field("happy", bool, default=True)
>>> b.build().keys()
('name', 'happy')

Block:

>>> with typedstruct("Person") as block:
...     _ = block.field("name", str, enforce=True)
...     _ = block.field("age", int)
>>> block.struct(name="Ada")
Person(name='Ada', age=None)

Class body:

>>> @typed_struct
... class Point:
...     x: int = field(enforce=True)
...     y: int = 0
>>> Point(x=1)
Point(x=1, y=0)
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from types import FunctionType
from typing import Any, ClassVar, get_origin

from .accumulator import AccumulatedField, SchemaState
from .constants import OPTION_DEFAULT, OPTION_ENFORCE
from .declaration import MISSING, FieldDeclaration, parse_options, validate_declaration
from .emitter import Schema, emit
from .errors import SchemaError, SchemaStateError
from .grammar import NamePolicy, name_policy_from_value
from .nullability import effective_type
from .struct import build_struct
from .typing import TypeExpr

__all__ = [
    "SchemaBuilder",
    "Block",
    "FieldSpec",
    "field",
    "typedstruct",
    "typed_struct",
]

logger = logging.getLogger(__name__)


class SchemaBuilder:
    """
    Explicit builder for one declaration block.

    Args:
        name (str): Struct name.
        strict_options (bool): Reject unrecognized option keys.
        name_policy (NamePolicy | str): Identifier policy for field names.
    """

    def __init__(
        self,
        name: str,
        *,
        strict_options: bool = False,
        name_policy: NamePolicy | str = NamePolicy.PYTHON,
    ) -> None:
        self.name = name
        self.strict_options = strict_options
        self.name_policy = name_policy_from_value(name_policy)
        self._state = SchemaState(name)
        self._schema: Schema | None = None
        self._aborted: SchemaError | None = None

    @property
    def finalized(self) -> bool:
        return self._state.finalized

    @property
    def aborted(self) -> bool:
        return self._aborted is not None

    def _check_open(self) -> None:
        if self._aborted is not None:
            raise SchemaStateError(
                f"{self.name}: block was aborted by an earlier declaration error"
            ) from self._aborted

    def field(self, name: str, type_: TypeExpr, **options: Any) -> AccumulatedField:
        """
        Declare one field.

        Args:
            name (str): Field name.
            type_ (TypeExpr): Opaque type annotation.
            **options: ``default`` and/or ``enforce``.

        Returns:
            AccumulatedField: The appended field.

        Raises:
            InvalidFieldName, DuplicateFieldError, UnknownOptionError: Declaration errors.
            SchemaStateError: If the block is already finalized or was aborted.
        """
        return self.declare(name, type_, options)

    def declare(
        self, name: Any, type_: TypeExpr, options: Mapping[str, Any] | None = None
    ) -> AccumulatedField:
        """
        Declare one field from a raw options mapping.

        A declaration error aborts the block: the error propagates and every later
        `declare`/`build` call raises SchemaStateError.
        """
        self._check_open()
        if self._state.finalized:
            raise SchemaStateError(f"{self.name}: cannot declare {name!r} after the block ended")
        try:
            opts = parse_options(options, strict=self.strict_options, field_name=name)
            decl = validate_declaration(
                FieldDeclaration(name=name, type=type_, options=opts),
                self._state,
                policy=self.name_policy,
            )
        except SchemaError as exc:
            self._aborted = exc
            logger.debug("block %s aborted: %s", self.name, exc)
            raise
        resolved = effective_type(decl.type, has_default=opts.has_default, enforce=opts.enforce)
        return self._state.append(
            decl.name, opts.default, resolved, opts.enforce, declared_type=decl.type
        )

    def build(self) -> Schema:
        """
        End the block and emit its schema. Idempotent once built.

        Returns:
            Schema: The emitted schema.

        Raises:
            SchemaStateError: If a declaration error aborted the block.
        """
        self._check_open()
        if self._schema is None:
            self._state.finalize()
            self._schema = emit(self._state)
            logger.debug("built schema %r", self._schema)
        return self._schema

    def build_struct(self, **kwargs: Any) -> type:
        """Build the schema and its struct class (kwargs go to `build_struct`)."""
        return build_struct(self.build(), **kwargs)


@dataclass
class Block:
    """Result holder of a ``with typedstruct(...)`` block."""

    builder: SchemaBuilder
    schema: Schema | None = None
    struct: type | None = None

    def field(self, name: str, type_: TypeExpr, **options: Any) -> AccumulatedField:
        return self.builder.field(name, type_, **options)


@contextmanager
def typedstruct(
    name: str,
    *,
    strict_options: bool = False,
    name_policy: NamePolicy | str = NamePolicy.PYTHON,
    module: str | None = None,
) -> Iterator[Block]:
    """
    Open a declaration block; the schema and struct are emitted on normal exit.

    If the body raises, the exception propagates and `schema`/`struct` stay None.
    """
    block = Block(
        SchemaBuilder(name, strict_options=strict_options, name_policy=name_policy)
    )
    yield block
    block.schema = block.builder.build()
    block.struct = build_struct(block.schema, module=module)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Options marker used as a class-body value under `typed_struct`."""

    default: Any = MISSING
    enforce: bool = False

    def options(self) -> dict[str, Any]:
        opts: dict[str, Any] = {OPTION_ENFORCE: self.enforce}
        if self.default is not MISSING:
            opts[OPTION_DEFAULT] = self.default
        return opts


def field(*, default: Any = MISSING, enforce: bool = False) -> Any:
    """
    Field options for a `typed_struct` class body.

    Examples:
        >>> @typed_struct
        ... class User:
        ...     email: str = field(enforce=True)
        >>> User.__keys__()
        ('email',)
    """
    return FieldSpec(default=default, enforce=enforce)


# Class-body attributes type() must not receive again.
_SKIP_ATTRS = frozenset(
    {
        "__dict__",
        "__weakref__",
        "__annotations__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
    }
)

_CLASSVAR_TEXT_RE = re.compile(r"^\s*(typing\.)?ClassVar\b")


def _is_classvar(type_: TypeExpr) -> bool:
    if isinstance(type_, str):
        return bool(_CLASSVAR_TEXT_RE.match(type_))
    return type_ is ClassVar or get_origin(type_) is ClassVar


def _rebind_class_cell(obj: Any, old: type, new: type) -> None:
    """Point the zero-argument ``super()`` cell of a carried function at `new`."""
    if isinstance(obj, (classmethod, staticmethod)):
        obj = obj.__func__
    if isinstance(obj, property):
        for fn in (obj.fget, obj.fset, obj.fdel):
            _rebind_class_cell(fn, old, new)
        return
    if not isinstance(obj, FunctionType) or "__class__" not in obj.__code__.co_freevars:
        return
    cell = obj.__closure__[obj.__code__.co_freevars.index("__class__")]
    if cell.cell_contents is old:
        cell.cell_contents = new


def typed_struct(
    cls: type | None = None,
    *,
    strict_options: bool = False,
    name_policy: NamePolicy | str = NamePolicy.PYTHON,
) -> Any:
    """
    Class decorator: compile a class body into a typed struct.

    Each annotated name, in order, is one declaration; ``ClassVar`` annotations stay
    plain class attributes. A plain class value is the default; a `field(...)` value
    carries default/enforce. Other attributes (methods, properties, docstring) are
    carried over to the generated class, and zero-argument ``super()`` in them refers
    to the generated class.

    Raises:
        SchemaError: If the class has base classes other than object.
    """

    def wrap(c: type) -> type:
        if c.__bases__ != (object,):
            raise SchemaError(f"{c.__name__}: typed structs cannot inherit from other classes")
        builder = SchemaBuilder(c.__name__, strict_options=strict_options, name_policy=name_policy)
        body = dict(c.__dict__)
        annotations = inspect.get_annotations(c)
        for name, type_ in annotations.items():
            if _is_classvar(type_):
                continue
            value = body.pop(name, MISSING)
            if isinstance(value, FieldSpec):
                options = value.options()
            elif value is MISSING:
                options = {}
            else:
                options = {OPTION_DEFAULT: value}
            builder.declare(name, type_, options)
        for key in _SKIP_ATTRS:
            body.pop(key, None)
        struct = build_struct(
            builder.build(), namespace=body, module=c.__module__, qualname=c.__qualname__
        )
        for value in body.values():
            _rebind_class_cell(value, c, struct)
        return struct

    if cls is None:
        return wrap
    return wrap(cls)
