"""
Per-block schema accumulator.

SchemaState collects validated fields in declaration order. It is append-only while
ACCUMULATING and read-only once FINALIZED; the transition happens exactly once.

Notes:
    - Duplicate detection is the declaration validator's job; `append` trusts its input.
    - A SchemaState belongs to the block that created it and is never shared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .declaration import MISSING
from .errors import SchemaStateError
from .typing import TypeExpr

__all__ = [
    "BlockState",
    "AccumulatedField",
    "SchemaState",
]

logger = logging.getLogger(__name__)


class BlockState(Enum):
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


@dataclass(frozen=True, slots=True)
class AccumulatedField:
    """
    A validated, resolved field.

    Attributes:
        name (str): Field name.
        default (Any): Default value, or MISSING.
        declared_type (TypeExpr): Type as written.
        type (TypeExpr): Effective type (declared or widened).
        enforced (bool): Whether construction requires the field.
    """

    name: str
    default: Any
    declared_type: TypeExpr
    type: TypeExpr
    enforced: bool

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def nullable(self) -> bool:
        return not self.has_default and not self.enforced


class SchemaState:
    """Ordered, append-only field list for one declaration block."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._fields: list[AccumulatedField] = []
        self._names: set[str] = set()
        self._required: list[str] = []
        self._state = BlockState.ACCUMULATING

    @property
    def state(self) -> BlockState:
        return self._state

    @property
    def finalized(self) -> bool:
        return self._state is BlockState.FINALIZED

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[AccumulatedField]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def append(
        self,
        name: str,
        default: Any,
        type_: TypeExpr,
        enforced: bool,
        *,
        declared_type: TypeExpr = MISSING,
    ) -> AccumulatedField:
        """
        Push one field onto the ordered list; enforced names also join the required set.

        Raises:
            SchemaStateError: If the state is already finalized.
        """
        if self.finalized:
            raise SchemaStateError(f"{self.name}: cannot append {name!r} after finalize")
        fld = AccumulatedField(
            name=name,
            default=default,
            declared_type=type_ if declared_type is MISSING else declared_type,
            type=type_,
            enforced=enforced,
        )
        self._fields.append(fld)
        self._names.add(name)
        if enforced:
            self._required.append(name)
        logger.debug("%s: appended field %r (enforced=%s)", self.name, name, enforced)
        return fld

    def finalize(self) -> tuple[AccumulatedField, ...]:
        """
        Freeze the state and return the final field sequence.

        Raises:
            SchemaStateError: If called twice.
        """
        if self.finalized:
            raise SchemaStateError(f"{self.name}: already finalized")
        self._state = BlockState.FINALIZED
        logger.debug("%s: finalized with %d field(s)", self.name, len(self._fields))
        return tuple(self._fields)

    def fields(self) -> tuple[AccumulatedField, ...]:
        """
        Return the finalized field sequence.

        Raises:
            SchemaStateError: If the state is still accumulating.
        """
        if not self.finalized:
            raise SchemaStateError(f"{self.name}: cannot emit while accumulating")
        return tuple(self._fields)

    def required(self) -> frozenset[str]:
        """Return the enforced names; same state rule as `fields`."""
        if not self.finalized:
            raise SchemaStateError(f"{self.name}: cannot emit while accumulating")
        return frozenset(self._required)
