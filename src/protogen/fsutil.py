"""Filesystem helpers: tree replication and directory creation.

:func:`copy_tree` replicates the mounted source tree into the scratch work
directory before any directive is injected, preserving file modes and, when
the process is allowed to, ownership. Every failure is raised as
:class:`~protogen.exceptions.FilesystemError`.
"""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

from protogen.exceptions import FilesystemError


def exists(path: str | os.PathLike[str]) -> bool:
    """Return True if *path* exists (broken symlinks included)."""
    return os.path.lexists(path)


def create_if_not_exists(path: str | os.PathLike[str], mode: int = 0o755) -> None:
    """Create *path* and any missing parents.

    Raises:
        FilesystemError: If the directory cannot be created.
    """
    if exists(path):
        return
    try:
        os.makedirs(path, mode=mode, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Failed to create directory '{path}': {exc}") from exc


def recreate_dir(path: str | os.PathLike[str], mode: int = 0o755) -> None:
    """Remove *path* recursively, then create it again empty.

    Raises:
        FilesystemError: If the removal or creation fails.
    """
    try:
        if os.path.islink(path) or os.path.isfile(path):
            os.remove(path)
        elif os.path.isdir(path):
            shutil.rmtree(path)
    except OSError as exc:
        raise FilesystemError(f"Failed to clear directory '{path}': {exc}") from exc
    create_if_not_exists(path, mode)


def copy_tree(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Copy the contents of *src* into *dest*, preserving modes and ownership.

    Directories are recursed into, symlinks are recreated as symlinks, and
    regular files are copied byte for byte. After each entry is written its
    owner is set to the source's (skipped when the process lacks permission,
    as for a non-root user) and, except for symlinks, its mode bits too.

    Raises:
        FilesystemError: If *src* cannot be listed or any entry fails to copy.
    """
    src_path = Path(src)
    dest_path = Path(dest)
    create_if_not_exists(dest_path)

    try:
        entries = sorted(os.scandir(src_path), key=lambda e: e.name)
    except OSError as exc:
        raise FilesystemError(f"Failed to read directory '{src_path}': {exc}") from exc

    for entry in entries:
        source = src_path / entry.name
        target = dest_path / entry.name
        try:
            info = os.lstat(source)
            if stat.S_ISLNK(info.st_mode):
                copy_symlink(source, target)
            elif stat.S_ISDIR(info.st_mode):
                create_if_not_exists(target)
                copy_tree(source, target)
            else:
                shutil.copyfile(source, target)

            _chown(target, info)
            if not stat.S_ISLNK(info.st_mode):
                os.chmod(target, stat.S_IMODE(info.st_mode))
        except OSError as exc:
            raise FilesystemError(f"Failed to copy '{source}' to '{target}': {exc}") from exc


def copy_symlink(source: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Recreate the symlink *source* at *dest* with the same target."""
    link = os.readlink(source)
    if exists(dest):
        os.remove(dest)
    os.symlink(link, dest)


def _chown(target: Path, info: os.stat_result) -> None:
    if not hasattr(os, "lchown"):
        return
    try:
        os.lchown(target, info.st_uid, info.st_gid)
    except PermissionError:
        # Only root may give files away; copies stay owned by the caller.
        pass
