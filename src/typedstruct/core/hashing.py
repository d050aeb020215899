"""
Canonical JSON serialization and hashing helpers for struct descriptors.

Provides a single canonical JSON policy and SHA-256 helpers so descriptor files and
schema fingerprints are stable across runs and consumers. This module is zero-IO and
uses only the Python standard library.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Hashing is performed over the UTF-8 encoded canonical JSON string.
    - Field order inside a descriptor is carried by explicit lists, so sorting keys
      does not lose declaration order.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

__all__ = [
    "json_dumps_canonical",
    "hash_mapping",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sort_keys=True, compact separators,
        and ensure_ascii=False.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _sha256_hexdigest(s: str) -> str:
    """Compute SHA-256 hex digest of a UTF-8 string."""
    h = hashlib.sha256()
    h.update(s.encode("utf-8"))
    return h.hexdigest()


def hash_mapping(obj: Mapping[str, Any]) -> str:
    """
    Compute a stable hash for a mapping by hashing its canonical JSON.

    Args:
        obj (Mapping[str, Any]): JSON-serializable mapping.

    Returns:
        str: SHA-256 hex digest over the canonical JSON serialization.

    Examples:
        >>> hash_mapping({"a": 1, "b": 2}) == hash_mapping({"b": 2, "a": 1})
        True
    """
    return _sha256_hexdigest(json_dumps_canonical(dict(obj)))
