"""Idempotent ``option go_package`` injection into ``.proto`` sources.

``protoc-gen-go`` refuses sources without a Go import path, and the trees fed
to protogen usually carry none. Each file of a declaration gets one directive
line derived from the declaration's package identity::

    option go_package = "/proto_billing_v1";

A file that already mentions ``option go_package`` on any line is left
byte-for-byte unchanged, so re-running over a processed tree is a no-op.
"""

from __future__ import annotations

import os
from typing import Iterable

from protogen.exceptions import FilesystemError
from protogen.models import Declaration

DIRECTIVE_MARKER = "option go_package"
DIRECTIVE_TEMPLATE = '\noption go_package = "{path}";\n'


def format_directive(package_name: str) -> str:
    """Return the text appended for *package_name*, leading blank line included."""
    return DIRECTIVE_TEMPLATE.format(path="/" + package_name)


def has_directive(lines: Iterable[str], marker: str = DIRECTIVE_MARKER) -> bool:
    """Return True if any line contains *marker*."""
    return any(marker in line for line in lines)


def inject_directive(
    path: str | os.PathLike[str],
    package_name: str,
    marker: str = DIRECTIVE_MARKER,
) -> bool:
    """Append the directive to *path* unless it already has one.

    The file must already exist. It is opened once for update; the existing
    lines are read from the start and the directive is written at the end
    with a single ``write`` call, so an interrupted run leaves either the
    original content or one complete line. Bytes that are not valid UTF-8
    are carried through untouched.

    Args:
        path: Source file to update.
        package_name: Declaration identity used as the directive value.
        marker: Substring whose presence means a directive already exists.

    Returns:
        ``True`` if the file was modified, ``False`` if it already had a
        directive.

    Raises:
        FilesystemError: If the file cannot be opened, read, or written.
    """
    try:
        with open(path, "r+", encoding="utf-8", errors="surrogateescape") as f:
            if has_directive(f, marker):
                return False
            f.seek(0, os.SEEK_END)
            f.write(format_directive(package_name))
    except OSError as exc:
        raise FilesystemError(f"Failed to add go_package option to {path}: {exc}") from exc
    return True


def inject_directives(
    declarations: Iterable[Declaration],
    marker: str = DIRECTIVE_MARKER,
) -> int:
    """Inject directives into every member of every declaration.

    Returns:
        Number of files that were modified.
    """
    modified = 0
    for declaration in declarations:
        for file in declaration.files:
            if inject_directive(file, declaration.package_name, marker):
                modified += 1
    return modified
