"""
Configuration for the typedstruct compiler front-ends.

Defines CompilerSettings, a frozen dataclass carrying the knobs the document loader and
the CLI pass into declaration blocks. Defaults are sourced from typedstruct.core.constants.

Source of truth
- typedstruct.core.constants.DEFAULT_STRICT_OPTIONS, DEFAULT_NAME_POLICY, ENV_PREFIX

Import DAG discipline
- Depends only on stdlib and typedstruct.core.
- typedstruct.core never imports this module; builders take plain arguments.

Notes
- Precedence: environment > TOML > defaults.
- TOML search: ./typedstruct.toml ([compiler] table or top-level keys), then
  ./pyproject.toml under [tool.typedstruct].
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from typedstruct.core.constants import DEFAULT_NAME_POLICY, DEFAULT_STRICT_OPTIONS, ENV_PREFIX
from typedstruct.core.grammar import NamePolicy

__all__ = [
    "CompilerSettings",
]

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class CompilerSettings:
    """
    Runtime settings for declaration blocks built by the loader and CLI.

    Attributes:
        strict_options (bool): Reject unrecognized field option keys (UnknownOptionError)
            instead of ignoring them with a warning.
        name_policy (str): "python" or "lower_snake" identifier policy for field names.
        log_level (str): Level name for the CLI's logging.basicConfig.
        descriptor_indent (int | None): JSON indent for exported descriptors; None writes
            canonical compact JSON.

    Examples:
        >>> CompilerSettings(strict_options=True).policy
        <NamePolicy.PYTHON: 'python'>
    """

    strict_options: bool = DEFAULT_STRICT_OPTIONS
    name_policy: str = DEFAULT_NAME_POLICY
    log_level: str = "WARNING"
    descriptor_indent: int | None = None

    @property
    def policy(self) -> NamePolicy:
        return NamePolicy(self.name_policy)

    def builder_options(self) -> dict[str, Any]:
        """Keyword arguments for SchemaBuilder / typedstruct / typed_struct."""
        return {"strict_options": self.strict_options, "name_policy": self.policy}

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(
        cls, base: CompilerSettings, cfg: dict[str, Any] | None
    ) -> CompilerSettings:
        """Apply a loose config mapping onto CompilerSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "strict_options" in cfg:
            s = replace(s, strict_options=_bool(cfg["strict_options"]))

        if "name_policy" in cfg and isinstance(cfg["name_policy"], str):
            policy = cfg["name_policy"].strip().lower()
            if policy in {p.value for p in NamePolicy}:
                s = replace(s, name_policy=policy)

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        if "descriptor_indent" in cfg:
            raw = cfg["descriptor_indent"]
            if raw is None or (isinstance(raw, str) and raw.strip().lower() in {"", "none"}):
                s = replace(s, descriptor_indent=None)
            else:
                try:
                    s = replace(s, descriptor_indent=int(raw))
                except (TypeError, ValueError):
                    pass

        return s

    @classmethod
    def from_env(
        cls, base: CompilerSettings | None = None, prefix: str = ENV_PREFIX
    ) -> CompilerSettings:
        """
        Build CompilerSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - TYPEDSTRUCT_STRICT_OPTIONS (1/0/true/false/yes/no/on/off)
            - TYPEDSTRUCT_NAME_POLICY ("python" | "lower_snake")
            - TYPEDSTRUCT_LOG_LEVEL
            - TYPEDSTRUCT_DESCRIPTOR_INDENT
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("strict_options", "name_policy", "log_level", "descriptor_indent"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> CompilerSettings:
        """
        Build CompilerSettings from a TOML file.

        Search order when `path` is None:
            1) ./typedstruct.toml (with either a [compiler] table or direct keys)
            2) ./pyproject.toml under [tool.typedstruct]

        Returns defaults if no file is present or a file cannot be parsed.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logging.getLogger(__name__).warning("could not read %s: %s", p, exc)
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "typedstruct.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("typedstruct") if isinstance(tool, dict) else None
            elif isinstance(data.get("compiler"), dict):
                cfg = data["compiler"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> CompilerSettings:
        """
        Load CompilerSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults.

        Returns:
            CompilerSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
