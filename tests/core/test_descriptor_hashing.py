from datetime import date

from typedstruct.core.builder import SchemaBuilder
from typedstruct.core.descriptor import StructDescriptor, describe, schema_hash, type_repr
from typedstruct.core.hashing import hash_mapping, json_dumps_canonical


def _schema(order=("name", "age", "joined")):
    b = SchemaBuilder("Person")
    spec = {
        "name": (str, {"enforce": True}),
        "age": (int, {}),
        "joined": (date, {"default": date(2020, 1, 1)}),
    }
    for n in order:
        t, opts = spec[n]
        b.field(n, t, **opts)
    return b.build()


def test_descriptor_contract() -> None:
    desc = describe(_schema())
    assert list(desc.fields) == ["name", "age", "joined"]
    assert desc.fields == {"name": "str", "age": "int | None", "joined": "date"}
    assert desc.required == ["name"]
    assert desc.nullable == ["age"]
    assert set(desc.required).isdisjoint(desc.nullable)
    assert set(desc.required).union(desc.nullable).issubset(desc.fields)
    # Non-JSON defaults are rendered with repr().
    assert desc.defaults["joined"] == repr(date(2020, 1, 1))
    assert desc.defaults["age"] is None


def test_descriptor_dict_roundtrip() -> None:
    desc = describe(_schema())
    assert StructDescriptor.from_dict(desc.to_dict()) == desc


def test_schema_hash_is_stable_and_order_sensitive() -> None:
    assert schema_hash(_schema()) == schema_hash(_schema())
    assert schema_hash(_schema()) == schema_hash(describe(_schema()))
    assert schema_hash(_schema()) != schema_hash(_schema(("age", "name", "joined")))


def test_canonical_json() -> None:
    assert json_dumps_canonical({"b": 1, "a": "é"}) == '{"a":"é","b":1}'
    assert hash_mapping({"a": 1, "b": 2}) == hash_mapping({"b": 2, "a": 1})


def test_type_repr() -> None:
    assert type_repr(list[int]) == "list[int]"
    assert type_repr(None) == "None"
    assert type_repr("Foo") == "Foo"
