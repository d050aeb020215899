from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import CompilerSettings
from .core.descriptor import describe, schema_hash
from .core.emitter import Schema
from .core.errors import SchemaError
from .io.errors import IoError
from .io.read import load_schemas
from .io.write import write_descriptors


def _configure(settings: CompilerSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load(path: str, settings: CompilerSettings) -> dict[str, Schema] | None:
    try:
        return load_schemas(Path(path), settings)
    except (SchemaError, IoError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return None


def _print_schema(schema: Schema) -> None:
    """Print keys, effective types, defaults and required markers of one struct."""
    desc = describe(schema)
    print(f"{schema.name}  ({len(schema)} field(s), hash={schema_hash(desc)[:12]})")
    if not len(schema):
        print("  (no fields)")
        return
    width = max(len(k) for k in desc.fields)
    type_width = max(len(t) for t in desc.fields.values())
    for key, type_text in desc.fields.items():
        marker = "required" if key in schema.required else ""
        print(
            f"  {key:<{width}}  {type_text:<{type_width}}  default={desc.defaults[key]!r}  {marker}".rstrip()
        )


def _cmd_describe(argv: list[str], settings: CompilerSettings) -> int:
    p = argparse.ArgumentParser(prog="describe", description="Describe compiled structs.")
    p.add_argument("path", type=str, help="Declaration document (.yaml/.yml/.json/.toml).")
    p.add_argument("--struct", type=str, default=None, help="Only describe this struct.")
    args = p.parse_args(argv)

    schemas = _load(args.path, settings)
    if schemas is None:
        return 2
    if args.struct is not None:
        if args.struct not in schemas:
            print(f"[ERROR] no struct named {args.struct!r} in {args.path}", file=sys.stderr)
            return 2
        schemas = {args.struct: schemas[args.struct]}
    for schema in schemas.values():
        _print_schema(schema)
    return 0


def _cmd_export(argv: list[str], settings: CompilerSettings) -> int:
    p = argparse.ArgumentParser(prog="export", description="Export struct descriptors as JSON.")
    p.add_argument("path", type=str, help="Declaration document (.yaml/.yml/.json/.toml).")
    p.add_argument("--out", type=str, required=True, help="Destination JSON file.")
    args = p.parse_args(argv)

    schemas = _load(args.path, settings)
    if schemas is None:
        return 2
    try:
        st = write_descriptors(args.out, schemas.values(), indent=settings.descriptor_indent)
    except IoError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    print(f"[INFO] Wrote {st['structs']} descriptor(s) to {st['path']}")
    for schema in schemas.values():
        print(f"[INFO] {schema.name}: {schema_hash(schema)}")
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="typedstruct", description="typedstruct compiler CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("describe")
    sub.add_parser("export")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    load_dotenv(Path(".env"))
    settings = CompilerSettings.load()
    _configure(settings)
    cmd, rest = argv[0], argv[1:]
    if cmd == "describe":
        code = _cmd_describe(rest, settings)
    elif cmd == "export":
        code = _cmd_export(rest, settings)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
