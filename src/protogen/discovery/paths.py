"""Derive Go package identities from ``.proto`` file locations.

A source tree follows the convention ``<base folder>/proto/<sub>/<dirs>``.
The *sentinel* segment (``proto`` by default) splits a file's directory into
two parts:

* the **package identity** -- the sentinel and every segment below it,
  joined with underscores (``proto_billing_v1``); it becomes the
  ``go_package`` value and is the same for every file of a directory;
* the **base folder** -- everything above the sentinel, joined with slashes;
  it is passed to the compiler as an include path so imports written as
  ``proto/...`` resolve.

Example::

    >>> package_identity_for("a/proto/x/one.proto")
    ('proto_x', 'a')
"""

from __future__ import annotations

import os
from pathlib import PurePath

from protogen.exceptions import LayoutError

DEFAULT_SENTINEL = "proto"


def package_identity_for(
    filename: str | os.PathLike[str],
    sentinel: str = DEFAULT_SENTINEL,
) -> tuple[str, str]:
    """Return ``(package_identity, base_folder)`` for a source file.

    The rightmost directory segment equal to *sentinel* is used, so a tree
    nested inside another ``proto`` directory still resolves to the innermost
    package.

    Args:
        filename: Path to a ``.proto`` file. Only its directory is inspected.
        sentinel: Directory name anchoring the identity.

    Returns:
        The underscore-joined identity and the slash-joined base folder.
        The base folder is ``""`` when the sentinel is the first segment of
        a relative path.

    Raises:
        LayoutError: If no directory segment equals *sentinel*.
    """
    directory = os.path.dirname(os.fspath(filename))
    parts = PurePath(directory).as_posix().split("/")

    for i in range(len(parts) - 1, -1, -1):
        if parts[i] == sentinel:
            return "_".join(parts[i:]), "/".join(parts[:i])

    raise LayoutError(
        f"No '{sentinel}' directory in path of {os.fspath(filename)}: "
        f"sources must live below a '{sentinel}/' folder"
    )
