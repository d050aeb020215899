"""
Atomic writers for struct descriptors.

Notes
- Atomicity: tmp write -> fsync -> os.replace (same directory, so same filesystem).
- Descriptor bundles are JSON: {"version": int, "structs": [descriptor, ...]}.
- With indent=None the payload is canonical JSON (see typedstruct.core.hashing).
"""

from __future__ import annotations

import contextlib
import json
import os
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from typedstruct.core.constants import DESCRIPTOR_FORMAT_VERSION
from typedstruct.core.descriptor import StructDescriptor, describe, schema_hash
from typedstruct.core.emitter import Schema
from typedstruct.core.hashing import json_dumps_canonical

from .errors import IoWriteError

__all__ = [
    "write_text_atomic",
    "descriptor_bundle",
    "write_descriptors",
]


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def write_text_atomic(path: str | os.PathLike[str], text: str) -> dict[str, Any]:
    """
    Atomically write a small text/JSON payload.

    Args:
        path: Final destination path.
        text: UTF-8 text.

    Returns:
        dict: {"path": str, "bytes": int, "created_at": ISO8601}

    Raises:
        IoWriteError: If any step fails; the tmp file is removed best-effort.
    """
    final = Path(path)
    tmp = final.with_name(final.name + ".tmp")
    payload = text.encode("utf-8")
    try:
        final.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "wb") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, final)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise IoWriteError(f"failed to write {final}: {exc}") from exc
    return {"path": str(final), "bytes": len(payload), "created_at": _utc_now_iso()}


def descriptor_bundle(schemas: Iterable[Schema | StructDescriptor]) -> dict[str, Any]:
    """JSON-ready bundle of descriptors, each with its schema hash."""
    structs: list[dict[str, Any]] = []
    for s in schemas:
        desc = s if isinstance(s, StructDescriptor) else describe(s)
        entry = desc.to_dict()
        entry["hash"] = schema_hash(desc)
        structs.append(entry)
    return {"version": DESCRIPTOR_FORMAT_VERSION, "structs": structs}


def write_descriptors(
    path: str | os.PathLike[str],
    schemas: Iterable[Schema | StructDescriptor],
    *,
    indent: int | None = None,
) -> dict[str, Any]:
    """
    Write a descriptor bundle atomically.

    Args:
        path: Destination JSON path.
        schemas: Schemas or descriptors to include, in order.
        indent: JSON indent; None writes canonical compact JSON.

    Returns:
        dict: write stats plus {"structs": int}.
    """
    bundle = descriptor_bundle(schemas)
    if indent is None:
        text = json_dumps_canonical(bundle)
    else:
        text = json.dumps(bundle, indent=indent, ensure_ascii=False)
    st = write_text_atomic(path, text + "\n")
    st["structs"] = len(bundle["structs"])
    return st
