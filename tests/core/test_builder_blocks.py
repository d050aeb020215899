from typing import ClassVar, Optional

import pytest

from typedstruct.core.builder import SchemaBuilder, field, typed_struct, typedstruct
from typedstruct.core.errors import (
    DuplicateFieldError,
    InvalidFieldName,
    MissingRequiredFieldError,
    SchemaError,
    SchemaStateError,
    UnknownOptionError,
)
from typedstruct.core.grammar import NamePolicy
from typedstruct.core.struct import schema_of


def test_with_block_emits_on_exit() -> None:
    with typedstruct("Person") as block:
        block.field("name", str, enforce=True)
        block.field("age", int)
        assert block.schema is None and block.struct is None
    assert block.schema is not None
    assert block.schema.keys() == ("name", "age")
    p = block.struct(name="Ada")
    assert p.age is None


def test_with_block_failure_emits_nothing() -> None:
    captured = {}
    with pytest.raises(DuplicateFieldError):
        with typedstruct("Broken") as block:
            captured["block"] = block
            block.field("name", str)
            block.field("name", int)
    assert captured["block"].schema is None
    assert captured["block"].struct is None


def test_builder_rejects_fields_after_build() -> None:
    b = SchemaBuilder("Demo")
    b.field("a", int)
    s = b.build()
    assert b.build() is s
    with pytest.raises(SchemaStateError):
        b.field("b", int)


def test_builder_strict_options() -> None:
    b = SchemaBuilder("Demo", strict_options=True)
    with pytest.raises(UnknownOptionError):
        b.field("a", int, doc="nope")


def test_builder_lenient_options_ignore_unknown() -> None:
    b = SchemaBuilder("Demo")
    b.field("a", int, doc="ignored", default=2)
    assert b.build().defaults()["a"] == 2


def test_builder_name_policy() -> None:
    b = SchemaBuilder("Demo", name_policy="lower_snake")
    assert b.name_policy is NamePolicy.LOWER_SNAKE
    with pytest.raises(InvalidFieldName):
        b.field("camelCase", int)


def test_decorator_reads_class_body_in_order() -> None:
    @typed_struct
    class Person:
        """A person."""

        name: str = field(enforce=True)
        age: int
        happy: bool = True
        phone: str

        def greeting(self) -> str:
            return f"hi {self.name}"

    assert Person.__keys__() == ("name", "age", "happy", "phone")
    assert Person.__types__()["age"] == Optional[int]
    assert Person.__types__()["happy"] is bool
    assert Person.__types__()["name"] is str
    assert Person.__doc__ == "A person."
    assert Person.__qualname__.endswith("Person")
    p = Person(name="Ada")
    assert p.greeting() == "hi Ada"
    assert p.happy is True
    with pytest.raises(MissingRequiredFieldError):
        Person()


def test_decorator_explicit_none_default_is_not_nullable() -> None:
    @typed_struct
    class Box:
        label: str = None  # type: ignore[assignment]
        size: int = field(default=None)

    assert Box.__types__()["label"] is str
    assert Box.__types__()["size"] is int
    assert schema_of(Box).nullable == ()


def test_decorator_with_options() -> None:
    @typed_struct(name_policy="lower_snake")
    class Row:
        edge_kind: str = field(enforce=True)

    assert Row(edge_kind="x").edge_kind == "x"

    with pytest.raises(InvalidFieldName):

        @typed_struct(name_policy="lower_snake")
        class Bad:
            EdgeKind: str


def test_decorator_rejects_inheritance() -> None:
    class Base:
        pass

    with pytest.raises(SchemaError, match="inherit"):

        @typed_struct
        class Child(Base):
            x: int


def test_decorator_text_annotations_pass_through() -> None:
    @typed_struct
    class Legacy:
        name: "String.t()"  # noqa: F821
        count: "int" = 0

    assert Legacy.__types__()["name"] == "String.t() | None"
    assert Legacy.__types__()["count"] == "int"


def test_decorator_keeps_body_repr_and_eq() -> None:
    @typed_struct
    class Tagged:
        x: int = 0

        def __repr__(self) -> str:
            return "custom"

        def __eq__(self, other: object) -> bool:
            return isinstance(other, Tagged) and other.x % 2 == self.x % 2

    assert repr(Tagged()) == "custom"
    assert Tagged(x=1) == Tagged(x=3)
    assert Tagged.__hash__ is None


def test_decorator_methods_support_zero_arg_super() -> None:
    @typed_struct
    class Node:
        label: str = "n"

        def __repr__(self) -> str:
            return "Node:" + super().__repr__()

        @property
        def size(self) -> int:
            return super().__sizeof__()

        @classmethod
        def blank(cls) -> "Node":
            inst = super().__new__(cls)
            inst.label = "blank"
            return inst

    assert repr(Node()).startswith("Node:<")
    assert Node().size > 0
    assert Node.blank().label == "blank"
    assert isinstance(Node.blank(), Node)


def test_decorator_skips_classvar_annotations() -> None:
    @typed_struct
    class Registry:
        registry: ClassVar[dict] = {}
        legacy: "ClassVar[int]" = 3
        y: int = 0

    assert Registry.__keys__() == ("y",)
    assert Registry.registry == {}
    assert Registry.legacy == 3
    assert Registry(y=2).y == 2
