import logging

import pytest

from typedstruct.core.accumulator import SchemaState
from typedstruct.core.constants import RECOGNIZED_OPTIONS
from typedstruct.core.declaration import (
    MISSING,
    FieldDeclaration,
    FieldOptions,
    parse_options,
    validate_declaration,
)
from typedstruct.core.errors import DuplicateFieldError, InvalidFieldName, UnknownOptionError


def test_parse_options_defaults() -> None:
    assert parse_options(None) == FieldOptions()
    opts = parse_options({})
    assert opts.default is MISSING
    assert opts.has_default is False
    assert opts.enforce is False


def test_explicit_none_default_is_a_default() -> None:
    opts = parse_options({"default": None})
    assert opts.has_default is True
    assert opts.default is None


def test_enforce_is_coerced_to_bool() -> None:
    assert parse_options({"enforce": 1}).enforce is True
    assert parse_options({"enforce": ""}).enforce is False


def test_unknown_options_ignored_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="typedstruct.core.declaration"):
        opts = parse_options({"default": 3, "doc": "x"}, field_name="n")
    assert opts.default == 3
    assert "doc" in caplog.text


def test_unknown_options_rejected_when_strict() -> None:
    with pytest.raises(UnknownOptionError, match="doc"):
        parse_options({"doc": "x"}, strict=True, field_name="n")


def test_missing_sentinel_is_falsy_singleton() -> None:
    assert not MISSING
    assert repr(MISSING) == "MISSING"
    assert type(MISSING)() is MISSING


def test_validate_rejects_duplicate_without_mutation() -> None:
    state = SchemaState("Demo")
    state.append("name", MISSING, str, False)
    with pytest.raises(DuplicateFieldError, match="already set"):
        validate_declaration(FieldDeclaration("name", int), state)
    assert len(state) == 1


def test_validate_rejects_invalid_name() -> None:
    with pytest.raises(InvalidFieldName):
        validate_declaration(FieldDeclaration("not valid", int), set())


def test_validate_returns_declaration() -> None:
    decl = FieldDeclaration("age", int)
    assert validate_declaration(decl, set()) is decl


def test_recognized_options_are_the_only_vocabulary() -> None:
    assert RECOGNIZED_OPTIONS == frozenset({"default", "enforce"})
    opts = parse_options({"default": 1, "enforce": True}, strict=True)
    assert (opts.default, opts.enforce) == (1, True)
