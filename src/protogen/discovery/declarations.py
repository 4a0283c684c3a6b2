"""Turn scanned file groups into :class:`~protogen.models.Declaration` objects."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from protogen.discovery.paths import DEFAULT_SENTINEL, package_identity_for
from protogen.exceptions import EmptyGroupError
from protogen.models import Declaration


def build_declaration(
    files: Sequence[Path],
    sentinel: str = DEFAULT_SENTINEL,
) -> Declaration:
    """Build the declaration for one directory's files.

    The identity is computed from the first file only; callers guarantee
    that all files share a directory.

    Raises:
        EmptyGroupError: If *files* is empty.
        LayoutError: If the files do not live below a *sentinel* directory.
    """
    if not files:
        raise EmptyGroupError("Unexpected end of input: empty source file group")

    package_name, folder = package_identity_for(files[0], sentinel)
    return Declaration(package_name=package_name, folder=folder, files=tuple(files))


def build_declarations(
    groups: Mapping[Path, Sequence[Path]],
    sentinel: str = DEFAULT_SENTINEL,
) -> list[Declaration]:
    """Build one declaration per group, in the mapping's iteration order.

    The first malformed group aborts the whole batch.
    """
    return [build_declaration(files, sentinel) for files in groups.values()]
