"""
Naming grammar for field declarations.

Defines the identifier policies a field name is checked against. Includes zero-IO validators/helpers used by the declaration
validator, the document loader, and the CLI.

Responsibilities
- Decide whether a candidate field name is a valid symbolic identifier.
- Provide the lower_snake predicate used by the stricter naming policy.

Design principles
-----------------
1) A field name becomes an attribute and a keyword argument of the generated struct:
   - it must be a `str` and a Python identifier,
   - it must not be a keyword (`class`, `def`, ...),
   - it must not be a dunder name; those belong to the struct's own protocol
     (`__init__`, `__keys__`, `__schema__`, ...).

2) Policies are additive:
   - "python": rules above.
   - "lower_snake": rules above plus ``^[a-z][a-z0-9_]*$``.

Examples
--------
>>> from typedstruct.core.grammar import is_field_name, is_lower_snake, NamePolicy
>>> is_field_name("happy")
True
>>> is_field_name("class")
False
>>> is_field_name("Phone", NamePolicy.LOWER_SNAKE)
False
>>> is_lower_snake("edge_kind")
True
"""

from __future__ import annotations

import keyword
import re
from enum import Enum
from typing import Any

from .errors import InvalidFieldName

__all__ = [
    "NamePolicy",
    "is_lower_snake",
    "is_dunder",
    "is_field_name",
    "assert_field_name",
    "name_policy_from_value",
]

_LOWER_SNAKE_RE = re.compile(r"^[a-z][a-z0-9_]*$")


class NamePolicy(Enum):
    """
    Identifier policies for field names.

    Serialized values appear in:
      - CompilerSettings.name_policy
      - TYPEDSTRUCT_NAME_POLICY / [tool.typedstruct] name_policy
    """

    PYTHON = "python"
    LOWER_SNAKE = "lower_snake"


def is_lower_snake(s: str) -> bool:
    """
    Check if a string is lower_snake.

    Args:
      s (str): Candidate string.

    Returns:
      bool: True when s matches ``^[a-z][a-z0-9_]*$``.
    """
    return bool(_LOWER_SNAKE_RE.match(s))


def is_dunder(s: str) -> bool:
    """Return True for names of the form ``__x__``."""
    return len(s) > 4 and s.startswith("__") and s.endswith("__")


def is_field_name(name: Any, policy: NamePolicy = NamePolicy.PYTHON) -> bool:
    """
    Check whether `name` is usable as a field name under `policy`.

    Args:
      name (Any): Candidate name; anything that is not a `str` is rejected.
      policy (NamePolicy): Identifier policy to apply.

    Returns:
      bool: True when the name is valid.
    """
    if not isinstance(name, str):
        return False
    if not name.isidentifier() or keyword.iskeyword(name) or is_dunder(name):
        return False
    if policy is NamePolicy.LOWER_SNAKE:
        return is_lower_snake(name)
    return True


def assert_field_name(name: Any, policy: NamePolicy = NamePolicy.PYTHON) -> str:
    """
    Validate a field name, returning it unchanged.

    Args:
      name (Any): Candidate name.
      policy (NamePolicy): Identifier policy to apply.

    Returns:
      str: The validated name.

    Raises:
      InvalidFieldName: If the name is not valid under `policy`.
    """
    if not is_field_name(name, policy):
        if policy is NamePolicy.LOWER_SNAKE and isinstance(name, str):
            raise InvalidFieldName(
                f"a field name must be a lower_snake identifier, got {name!r}"
            )
        raise InvalidFieldName(f"a field name must be a valid identifier, got {name!r}")
    return name


def name_policy_from_value(s: str | NamePolicy) -> NamePolicy:
    """
    Parse a policy token into a NamePolicy.

    Args:
      s (str | NamePolicy): "python" or "lower_snake" (case-insensitive), or a member.

    Returns:
      NamePolicy: Parsed policy.

    Raises:
      ValueError: If the token is not a known policy.
    """
    if isinstance(s, NamePolicy):
        return s
    token = (s or "").strip().lower()
    allowed = {p.value for p in NamePolicy}
    if token not in allowed:
        raise ValueError(f"name policy must be one of {sorted(allowed)} (got {s!r})")
    return NamePolicy(token)
