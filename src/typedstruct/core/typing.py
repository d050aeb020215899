"""
Lightweight typing aliases used across the declaration pipeline.

This module contains no runtime logic and is zero-IO.

Notes:
    - TypeExpr is deliberately `Any`: declared types are opaque tokens (type objects,
      typing constructs, or annotation strings) that the compiler stores and re-emits
      without interpreting them.
    - Keep the surface small and stable to avoid churn in dependents.

Examples:
    >>> from typedstruct.core.typing import JsonDict
    >>> def payload() -> JsonDict:
    ...     return {"a": 1}
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "TypeExpr",
    "JsonDict",
]

# Opaque type annotation token; never inspected by the core.
TypeExpr = Any

# Convenient JSON-like mapping alias for descriptor and document boundaries.
JsonDict = dict[str, Any]
