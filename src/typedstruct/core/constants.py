"""
typedstruct core defaults.

Defines the option keys, naming policies, and descriptor format version consumed by the
declaration pipeline and downstream IO layers. This module is zero-IO and uses only the
Python standard library.

Notes:
    - typedstruct.config.CompilerSettings sources its defaults from here.
    - Changes to DESCRIPTOR_FORMAT_VERSION change every schema hash; bump deliberately.
"""

from __future__ import annotations

__all__ = [
    "OPTION_DEFAULT",
    "OPTION_ENFORCE",
    "RECOGNIZED_OPTIONS",
    "DEFAULT_NAME_POLICY",
    "DEFAULT_STRICT_OPTIONS",
    "DESCRIPTOR_FORMAT_VERSION",
    "ENV_PREFIX",
]

OPTION_DEFAULT: str = "default"
OPTION_ENFORCE: str = "enforce"

# The only option keys a field declaration understands.
RECOGNIZED_OPTIONS: frozenset[str] = frozenset({OPTION_DEFAULT, OPTION_ENFORCE})

# "python" accepts any non-keyword, non-dunder identifier; "lower_snake" is stricter.
DEFAULT_NAME_POLICY: str = "python"

# Unrecognized option keys are ignored (with a warning) unless strict.
DEFAULT_STRICT_OPTIONS: bool = False

DESCRIPTOR_FORMAT_VERSION: int = 1

ENV_PREFIX: str = "TYPEDSTRUCT_"
