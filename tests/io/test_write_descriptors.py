from __future__ import annotations

import json
from pathlib import Path

import pytest

from typedstruct.core.builder import SchemaBuilder
from typedstruct.core.descriptor import schema_hash
from typedstruct.io.errors import IoWriteError
from typedstruct.io.write import descriptor_bundle, write_descriptors, write_text_atomic


def _schema():
    b = SchemaBuilder("Person")
    b.field("name", str, enforce=True)
    b.field("age", int)
    return b.build()


def test_write_text_atomic_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "out.txt"
    st = write_text_atomic(target, "hello")
    assert target.read_text() == "hello"
    assert st["bytes"] == 5
    assert not (target.parent / "out.txt.tmp").exists()


def test_write_text_atomic_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(IoWriteError):
        write_text_atomic(blocker / "child.json", "{}")


def test_descriptor_bundle_contents() -> None:
    schema = _schema()
    bundle = descriptor_bundle([schema])
    assert bundle["version"] == 1
    (entry,) = bundle["structs"]
    assert entry["name"] == "Person"
    assert [f["name"] for f in entry["fields"]] == ["name", "age"]
    assert entry["hash"] == schema_hash(schema)


def test_write_descriptors_canonical_and_indented(tmp_path: Path) -> None:
    compact = tmp_path / "compact.json"
    pretty = tmp_path / "pretty.json"
    st = write_descriptors(compact, [_schema()])
    write_descriptors(pretty, [_schema()], indent=2)
    assert st["structs"] == 1
    assert "\n  " not in compact.read_text().strip()
    assert "\n  " in pretty.read_text()
    assert json.loads(compact.read_text()) == json.loads(pretty.read_text())
