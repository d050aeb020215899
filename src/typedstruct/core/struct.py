"""
Generated struct classes interpreted from an emitted Schema.

`build_struct` turns a Schema into a plain Python class whose constructor accepts keyword
overrides, fills omissions from the schema's defaults, and raises
MissingRequiredFieldError for omitted enforced fields. The class carries the schema's
type descriptor as ``__annotations__`` for static tooling and exposes class-level
reflection via ``__keys__()``, ``__defaults__()`` and ``__types__()``.

Notes:
    - One generic constructor interprets the schema at call time; no source is generated.
    - Defaults are stored by reference; a mutable default is shared between instances.
    - Values are never checked against the declared types.

Examples:
    >>> from typedstruct.core.builder import SchemaBuilder
    >>> b = SchemaBuilder("Person")
    >>> _ = b.field("name", str, enforce=True)
    >>> _ = b.field("age", int)
    >>> Person = b.build_struct()
    >>> Person(name="Ada")
    Person(name='Ada', age=None)
    >>> Person.__keys__()
    ('name', 'age')
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from .emitter import Schema
from .errors import MissingRequiredFieldError

__all__ = [
    "SCHEMA_ATTR",
    "build_struct",
    "is_typed_struct",
    "schema_of",
    "fields",
    "asdict",
    "replace",
]

SCHEMA_ATTR = "__schema__"


def _signature(schema: Schema) -> inspect.Signature:
    params = [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for f in schema.fields:
        if f.enforced:
            default = inspect.Parameter.empty
        else:
            default = schema.shape[f.name]
        params.append(
            inspect.Parameter(
                f.name, inspect.Parameter.KEYWORD_ONLY, default=default, annotation=f.type
            )
        )
    return inspect.Signature(params)


def _init(self: Any, **overrides: Any) -> None:
    schema: Schema = type(self).__schema__
    unknown = [k for k in overrides if k not in schema.shape]
    if unknown:
        raise TypeError(
            f"{schema.name}.__init__() got unexpected keyword argument(s): "
            + ", ".join(repr(k) for k in unknown)
        )
    missing = tuple(k for k in schema.keys() if k in schema.required and k not in overrides)
    if missing:
        raise MissingRequiredFieldError(schema.name, missing)
    for key, default in schema.shape.items():
        setattr(self, key, overrides.get(key, default))


def _repr(self: Any) -> str:
    schema: Schema = type(self).__schema__
    body = ", ".join(f"{k}={getattr(self, k)!r}" for k in schema.keys())
    return f"{type(self).__qualname__}({body})"


def _eq(self: Any, other: Any) -> Any:
    if other.__class__ is not self.__class__:
        return NotImplemented
    keys = type(self).__schema__.keys()
    return all(getattr(self, k) == getattr(other, k) for k in keys)


def _keys(cls: type) -> tuple[str, ...]:
    return cls.__schema__.keys()


def _defaults(cls: type) -> Mapping[str, Any]:
    return cls.__schema__.defaults()


def _types(cls: type) -> Mapping[str, Any]:
    return cls.__schema__.types()


def build_struct(
    schema: Schema,
    *,
    namespace: Mapping[str, Any] | None = None,
    module: str | None = None,
    qualname: str | None = None,
) -> type:
    """
    Build the struct class for an emitted schema.

    Args:
        schema (Schema): Emitted schema.
        namespace (Mapping[str, Any] | None): Extra class attributes (e.g. methods from a
            decorated class body). Generated attributes take precedence, except that
            ``__repr__``, ``__eq__`` and ``__hash__`` given here are kept.
        module (str | None): ``__module__`` for the class.
        qualname (str | None): ``__qualname__`` for the class (defaults to schema.name).

    Returns:
        type: The generated class.
    """
    ns: dict[str, Any] = dict(namespace or {})

    def __init__(self: Any, **overrides: Any) -> None:
        _init(self, **overrides)

    __init__.__signature__ = _signature(schema)  # type: ignore[attr-defined]
    __init__.__qualname__ = f"{qualname or schema.name}.__init__"

    ns.update(
        {
            SCHEMA_ATTR: schema,
            "__annotations__": dict(schema.type_descriptor),
            "__init__": __init__,
            "__match_args__": schema.keys(),
            "__keys__": classmethod(_keys),
            "__defaults__": classmethod(_defaults),
            "__types__": classmethod(_types),
        }
    )
    # Dunder methods from the class body win over the generated ones.
    ns.setdefault("__repr__", _repr)
    if "__eq__" not in ns:
        ns["__eq__"] = _eq
        ns["__hash__"] = ns.get("__hash__")
    if module is not None:
        ns["__module__"] = module
    cls = type(schema.name, (object,), ns)
    if qualname is not None:
        cls.__qualname__ = qualname
    return cls


def is_typed_struct(obj: Any) -> bool:
    """Return True for generated struct classes and their instances."""
    cls = obj if isinstance(obj, type) else type(obj)
    return isinstance(getattr(cls, SCHEMA_ATTR, None), Schema)


def schema_of(obj: Any) -> Schema:
    """
    Return the Schema behind a struct class or instance.

    Raises:
        TypeError: If obj is not a typed struct.
    """
    if not is_typed_struct(obj):
        raise TypeError(f"expected a typed struct class or instance, got {obj!r}")
    cls = obj if isinstance(obj, type) else type(obj)
    return getattr(cls, SCHEMA_ATTR)


def fields(obj: Any) -> tuple[str, ...]:
    """Field names of a struct class or instance, in declaration order."""
    return schema_of(obj).keys()


def asdict(instance: Any) -> dict[str, Any]:
    """Ordered name → value dict of a struct instance (shallow)."""
    if isinstance(instance, type):
        raise TypeError("asdict() should be called on struct instances")
    return {k: getattr(instance, k) for k in fields(instance)}


def replace(instance: Any, **changes: Any) -> Any:
    """
    Return a new instance with `changes` applied over the current values.

    Raises:
        TypeError: If a change names an unknown field.
    """
    values = asdict(instance)
    values.update(changes)
    return type(instance)(**values)
