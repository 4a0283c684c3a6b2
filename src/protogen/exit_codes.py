"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~protogen.exceptions.ProtogenError` subclass.
CI steps that wrap protogen can inspect the exit code to tell a broken
source layout apart from a failing compiler without parsing stderr.

Example::

    $ protogen
    $ echo $?
    6   # EXIT_COMPILER_FAILURE -- protoc rejected one of the sources
"""

EXIT_SUCCESS = 0
"""The run completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_CONFIG_ERROR = 3
"""The configuration or the source tree layout is invalid."""

EXIT_INVARIANT_VIOLATION = 4
"""An internal invariant was broken (e.g. an empty file group)."""

EXIT_FILESYSTEM_ERROR = 5
"""A filesystem operation (walk, read, write, rename, copy) failed."""

EXIT_COMPILER_FAILURE = 6
"""The schema compiler exited non-zero or could not be started."""

EXIT_ARTIFACT_NOT_FOUND = 7
"""The compiler succeeded but did not produce the expected document."""

EXIT_DOCUMENT_PARSE_ERROR = 8
"""A generated document could not be parsed."""
