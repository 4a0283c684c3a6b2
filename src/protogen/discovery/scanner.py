"""Filesystem scanner grouping ``.proto`` files by directory.

Walks a source tree with :func:`os.walk`, pruning vendored subtrees, and
returns one entry per directory that directly contains source files. The
result feeds :func:`~protogen.discovery.declarations.build_declarations`.

Walk errors are never swallowed: the first :class:`OSError` aborts the scan
with :class:`~protogen.exceptions.FilesystemError` and no partial mapping
is returned.

See :class:`SourceScanner` for the main entry point.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional

import pathspec

from protogen.exceptions import FilesystemError


def _raise_walk_error(exc: OSError) -> None:
    """``os.walk`` error hook: abort the walk on the first failure."""
    raise FilesystemError(f"Failed to scan {exc.filename}: {exc.strerror or exc}") from exc


class SourceScanner:
    """Group source files by their immediate containing directory.

    Any directory named exactly *vendor_dir* is skipped together with its
    whole subtree, at any depth including the root. Optional
    gitignore-style *exclude_patterns* (compiled with :mod:`pathspec`) are
    matched against root-relative directory paths and prune the same way.

    Args:
        extension: File suffix identifying source files.
        vendor_dir: Directory name whose subtrees are never scanned.
        exclude_patterns: Extra directory patterns to prune, e.g.
            ``["third_party/", "**/testdata"]``.
    """

    def __init__(
        self,
        extension: str = ".proto",
        vendor_dir: str = "vendor",
        exclude_patterns: Optional[Iterable[str]] = None,
    ) -> None:
        self.extension = extension
        self.vendor_dir = vendor_dir
        patterns = list(exclude_patterns or [])
        self._exclude_spec: pathspec.PathSpec | None = (
            pathspec.PathSpec.from_lines("gitwildmatch", patterns) if patterns else None
        )

    def scan(self, root: str | os.PathLike[str]) -> dict[Path, list[Path]]:
        """Walk *root* and map every source directory to its files.

        Args:
            root: Directory to scan.

        Returns:
            Mapping of absolute, normalised directory path to the sorted
            list of source files directly inside it. Keys are inserted in
            sorted order so iteration is reproducible across runs.

        Raises:
            FilesystemError: If *root* is not a directory or any directory
                cannot be listed.
        """
        root_path = Path(os.path.abspath(root))
        if not root_path.is_dir():
            raise FilesystemError(f"Source directory not found: {root_path}")

        groups: dict[Path, list[Path]] = {}
        if root_path.name == self.vendor_dir:
            return groups

        for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
            current = Path(dirpath)
            # Prune in place so os.walk never descends into skipped trees.
            dirnames[:] = sorted(
                d for d in dirnames if not self._is_skipped(root_path, current / d)
            )

            matches = sorted(
                current / name
                for name in filenames
                if name.endswith(self.extension) and (current / name).is_file()
            )
            if matches:
                groups[current] = matches

        return dict(sorted(groups.items()))

    def _is_skipped(self, root: Path, directory: Path) -> bool:
        if directory.name == self.vendor_dir:
            return True
        if self._exclude_spec is None:
            return False
        relative = directory.relative_to(root).as_posix() + "/"
        return self._exclude_spec.match_file(relative)
