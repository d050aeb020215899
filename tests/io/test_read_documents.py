from __future__ import annotations

import json
from pathlib import Path

import pytest

from typedstruct.config import CompilerSettings
from typedstruct.core.errors import DuplicateFieldError, InvalidFieldName, UnknownOptionError
from typedstruct.core.struct import build_struct
from typedstruct.io.errors import IoConfigError, IoDeclarationError
from typedstruct.io.read import compile_document, load_document, load_schemas

_YAML = """
structs:
  Person:
    fields:
      - {name: name, type: str, enforce: true}
      - {name: age, type: int}
      - {name: happy, type: bool, default: true}
  Empty:
    fields: []
"""


def test_load_yaml_document(tmp_path: Path) -> None:
    p = tmp_path / "structs.yaml"
    p.write_text(_YAML)

    schemas = load_schemas(p)

    assert list(schemas) == ["Person", "Empty"]
    person = schemas["Person"]
    assert person.keys() == ("name", "age", "happy")
    assert person.types()["age"] == "int | None"
    assert person.types()["happy"] == "bool"
    assert person.required == frozenset({"name"})
    assert schemas["Empty"].keys() == ()

    Person = build_struct(person)
    assert Person(name="Ada").happy is True


def test_load_json_and_toml_documents(tmp_path: Path) -> None:
    doc = {"structs": {"Point": {"fields": [{"name": "x", "type": "float", "default": 0.0}]}}}
    pj = tmp_path / "structs.json"
    pj.write_text(json.dumps(doc))
    pt = tmp_path / "structs.toml"
    pt.write_text(
        """
        [[structs.Point.fields]]
        name = "x"
        type = "float"
        default = 0.0
        """.strip()
    )
    for p in (pj, pt):
        schema = load_schemas(p)["Point"]
        assert schema.defaults()["x"] == 0.0
        assert schema.types()["x"] == "float"


def test_unsupported_suffix(tmp_path: Path) -> None:
    p = tmp_path / "structs.ini"
    p.write_text("")
    with pytest.raises(IoConfigError):
        load_document(p)


def test_unparseable_and_non_mapping_documents(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(IoDeclarationError):
        load_document(bad)
    listy = tmp_path / "list.yaml"
    listy.write_text("- a\n- b\n")
    with pytest.raises(IoDeclarationError, match="mapping"):
        load_document(listy)
    with pytest.raises(IoDeclarationError):
        load_document(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "doc",
    [
        {},
        {"structs": []},
        {"structs": {"A": {"fields": "nope"}}},
        {"structs": {"A": {"fields": [{"name": "x"}]}}},
        {"structs": {"A": {"fields": ["x"]}}},
    ],
)
def test_malformed_documents(doc: dict) -> None:
    with pytest.raises(IoDeclarationError):
        compile_document(doc)


def test_declaration_errors_propagate() -> None:
    dup = {"structs": {"A": {"fields": [{"name": "x", "type": "int"}, {"name": "x", "type": "int"}]}}}
    with pytest.raises(DuplicateFieldError):
        compile_document(dup)
    bad = {"structs": {"A": {"fields": [{"name": "happy?", "type": "bool"}]}}}
    with pytest.raises(InvalidFieldName):
        compile_document(bad)


def test_settings_flow_into_blocks() -> None:
    doc = {"structs": {"A": {"fields": [{"name": "x", "type": "int", "doc": "extra"}]}}}
    assert compile_document(doc)["A"].keys() == ("x",)
    with pytest.raises(UnknownOptionError):
        compile_document(doc, CompilerSettings(strict_options=True))
    camel = {"structs": {"A": {"fields": [{"name": "camelCase", "type": "int"}]}}}
    with pytest.raises(InvalidFieldName):
        compile_document(camel, CompilerSettings(name_policy="lower_snake"))
