"""protogen -- Generate OpenAPI documents and Go stubs from ``.proto`` trees.

This package discovers ``.proto`` files grouped by directory, derives a Go
package identity for every group from its position below the ``proto``
sentinel directory, appends an ``option go_package`` directive to files that
lack one, and drives ``protoc`` over each group.

Typical workflow::

    protogen                       # copy /input, inject, generate into /output
    protogen scan ./schemas        # list the declarations that would be built

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: Configuration precedence resolution and XDG paths.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes for each failure class.
    output: stderr diagnostics with Rich support.
    fsutil: Source tree replication helpers.
    workflow: End-to-end generation run.
"""

__version__ = "0.1.0"
