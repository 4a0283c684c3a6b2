"""Read generated OpenAPI documents and drop the degenerate ones.

``protoc-gen-openapi`` emits a document for every source, including files
that declare messages but no service. Those documents have an empty
``info.title``; protogen deletes them instead of leaving placeholders in the
output tree.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from protogen.exceptions import DocumentParseError, FilesystemError
from protogen.models import OpenAPIDocument


def load_document(path: str | os.PathLike[str]) -> OpenAPIDocument:
    """Parse the YAML document at *path* into an :class:`OpenAPIDocument`.

    Raises:
        FilesystemError: If the file cannot be read.
        DocumentParseError: If the content is not UTF-8 or not a YAML
            mapping, or if its ``info`` block has the wrong shape.
    """
    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Failed to read document {file_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise DocumentParseError(f"Document {file_path} is not valid UTF-8: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise DocumentParseError(f"Invalid YAML in {file_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DocumentParseError(
            f"Document {file_path} must be a YAML mapping (got {type(data).__name__})"
        )
    # `info:` with no body parses as None.
    if data.get("info") is None:
        data = {**data, "info": {}}

    try:
        return OpenAPIDocument.model_validate(data)
    except ValidationError as exc:
        raise DocumentParseError(f"Unexpected info block in {file_path}: {exc}") from exc


def remove_without_title(path: str | os.PathLike[str]) -> bool:
    """Delete the document at *path* if its ``info.title`` is empty or absent.

    Returns:
        ``True`` if the file was deleted, ``False`` if it was kept.

    Raises:
        FilesystemError: If the file cannot be read or removed.
        DocumentParseError: If the document cannot be parsed.
    """
    document = load_document(path)
    if document.has_title:
        return False

    try:
        os.remove(path)
    except OSError as exc:
        raise FilesystemError(f"Failed to remove untitled document {path}: {exc}") from exc
    return True
