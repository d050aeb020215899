from __future__ import annotations

import json
from pathlib import Path

import pytest

from typedstruct.cli import main

_DOC = """
structs:
  Person:
    fields:
      - {name: name, type: str, enforce: true}
      - {name: age, type: int}
  Empty:
    fields: []
"""


@pytest.fixture
def doc(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    for key in ("STRICT_OPTIONS", "NAME_POLICY", "LOG_LEVEL", "DESCRIPTOR_INDENT"):
        monkeypatch.delenv(f"TYPEDSTRUCT_{key}", raising=False)
    p = tmp_path / "structs.yaml"
    p.write_text(_DOC)
    return p


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as ei:
        main(argv)
    return ei.value.code


def test_no_args_prints_help(capsys) -> None:
    main([])
    assert "typedstruct" in capsys.readouterr().out


def test_describe_prints_every_struct(doc: Path, capsys) -> None:
    assert _run(["describe", str(doc)]) == 0
    out = capsys.readouterr().out
    assert "Person  (2 field(s), hash=" in out
    assert "required" in out
    assert "int | None" in out
    assert "(no fields)" in out


def test_describe_single_struct(doc: Path, capsys) -> None:
    assert _run(["describe", str(doc), "--struct", "Empty"]) == 0
    out = capsys.readouterr().out
    assert "Person" not in out
    assert _run(["describe", str(doc), "--struct", "Nope"]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_export_writes_bundle(doc: Path, tmp_path: Path, capsys) -> None:
    out_file = tmp_path / "out" / "structs.json"
    assert _run(["export", str(doc), "--out", str(out_file)]) == 0
    assert "[INFO] Wrote 2 descriptor(s)" in capsys.readouterr().out
    bundle = json.loads(out_file.read_text())
    assert [s["name"] for s in bundle["structs"]] == ["Person", "Empty"]


def test_errors_exit_with_code_2(doc: Path, tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("structs:\n  A:\n    fields:\n      - {name: x, type: int}\n      - {name: x, type: int}\n")
    assert _run(["describe", str(bad)]) == 2
    assert "already set" in capsys.readouterr().err
    assert _run(["frobnicate"]) == 2
    assert "Unknown command" in capsys.readouterr().err
