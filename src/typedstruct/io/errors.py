"""
Custom exceptions for the typedstruct.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in typedstruct.io.
- Keep typedstruct.core as the source of truth for declaration errors (see typedstruct.core.errors).

Source of truth and boundaries
- typedstruct.core.errors.InvalidFieldName / DuplicateFieldError / UnknownOptionError are raised
  by the declaration pipeline and propagate through the loader unchanged.
- typedstruct.io raises Io* errors for document and filesystem concerns:
  - IoConfigError: invalid or unsupported configuration or file format.
  - IoDeclarationError: a declaration document is malformed (shape, not naming).
  - IoWriteError: atomic write path failed (tmp write/fsync/rename).

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in typedstruct.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from typedstruct.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when IO configuration is invalid or unsupported.

    Examples:
        - Unknown declaration file suffix
    """


class IoDeclarationError(IoError):
    """
    Raised when a declaration document does not have the expected shape.

    Examples:
        - Missing top-level ``structs`` mapping
        - A field entry without ``name`` or ``type``
        - An unparseable YAML/JSON/TOML document
    """


class IoWriteError(IoError):
    """
    Raised when a write operation fails to complete atomically.

    Notes:
        The write path is tmp file → fsync → os.replace(tmp, final). Failures at any step
        surface as IoWriteError (with best-effort cleanup of the tmp file).
    """
