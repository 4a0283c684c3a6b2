"""Exception hierarchy for protogen.

All exceptions inherit from :class:`ProtogenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`protogen.exit_codes`.
The top-level error handler in :func:`protogen.app.main` catches
``ProtogenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    ProtogenError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- ConfigError            (exit 3)
    |   +-- LayoutError        (exit 3)
    +-- EmptyGroupError        (exit 4)
    +-- FilesystemError        (exit 5)
    +-- CompilerError          (exit 6)
    +-- ArtifactNotFoundError  (exit 7)
    +-- DocumentParseError     (exit 8)
"""

from __future__ import annotations

from typing import Optional

from protogen.exit_codes import (
    EXIT_ARTIFACT_NOT_FOUND,
    EXIT_COMPILER_FAILURE,
    EXIT_CONFIG_ERROR,
    EXIT_DOCUMENT_PARSE_ERROR,
    EXIT_FILESYSTEM_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_INVARIANT_VIOLATION,
)


class ProtogenError(Exception):
    """Base exception for all protogen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`protogen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ProtogenError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(ProtogenError):
    """Raised for configuration problems (invalid JSON, bad values, unknown modes)."""

    exit_code = EXIT_CONFIG_ERROR


class LayoutError(ConfigError):
    """Raised when a source path does not contain the sentinel directory.

    The input tree does not follow the expected ``.../proto/...`` convention,
    so no package identity can be derived for it.
    """


class EmptyGroupError(ProtogenError):
    """Raised when a declaration is requested for an empty file group."""

    exit_code = EXIT_INVARIANT_VIOLATION


class FilesystemError(ProtogenError):
    """Raised when walking, reading, writing, renaming, or copying files fails."""

    exit_code = EXIT_FILESYSTEM_ERROR


class CompilerError(ProtogenError):
    """Raised when the schema compiler exits non-zero or cannot be started.

    The compiler's own stderr is the primary diagnostic; this exception only
    records which invocation failed.

    Args:
        message: Human-readable error description.
        returncode: The compiler's exit status, or ``None`` when the process
            could not be started at all.
    """

    exit_code = EXIT_COMPILER_FAILURE

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class ArtifactNotFoundError(ProtogenError):
    """Raised when the compiler succeeded but the expected document is missing."""

    exit_code = EXIT_ARTIFACT_NOT_FOUND


class DocumentParseError(ProtogenError):
    """Raised when a generated document is not a valid YAML mapping."""

    exit_code = EXIT_DOCUMENT_PARSE_ERROR
