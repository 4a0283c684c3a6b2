"""Canonical Pydantic models shared across all protogen modules.

The models fall into three groups:

**Configuration** -- :class:`OutputMode` and :class:`GeneratorConfig`, the
settings every stage of a run reads.

**Discovery output** -- :class:`Declaration`, one generation unit per
directory of ``.proto`` files.

**Generation output** -- :class:`DocumentInfo` / :class:`OpenAPIDocument`
(the slice of a generated OpenAPI document that protogen inspects) and
:class:`GenerationReport`.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class OutputMode(str, enum.Enum):
    """Compiler output modes.

    ``OPENAPI`` is *document mode*: one OpenAPI document per source file,
    relocated and filtered after generation. ``GO`` is *stub mode*: Go message
    and gRPC service stubs written straight into the stub directory.
    """

    OPENAPI = "openapi"
    GO = "go"

    @property
    def is_document(self) -> bool:
        return self is OutputMode.OPENAPI


class GeneratorConfig(BaseModel):
    """Effective configuration for one generation run.

    Built by :func:`~protogen.config.resolve_config` from defaults, the
    project-local ``protogen.json``, ``PROTOGEN_*`` environment variables,
    and CLI flags. The defaults match the container layout the tool is
    normally run in (sources mounted at ``/input``, results collected from
    ``/output``).
    """

    model_config = ConfigDict(extra="forbid")

    input_dir: Optional[Path] = Field(
        default=Path("/input"),
        description="Pristine source tree, copied into work_dir before scanning",
    )
    work_dir: Path = Field(
        default=Path("/generator"),
        description="Scratch copy that is scanned and mutated",
    )
    output_dir: Path = Field(
        default=Path("/output"),
        description="Root that replaces work_dir in document output paths",
    )
    stub_dir: Path = Field(
        default=Path("/output/gen"),
        description="Stub-mode output root, wiped before every run",
    )
    modes: list[OutputMode] = Field(default_factory=lambda: [OutputMode.OPENAPI])
    sentinel: str = Field(
        default="proto", description="Directory name anchoring package identities"
    )
    vendor_dir: str = Field(default="vendor", description="Directory name never scanned")
    exclude: list[str] = Field(
        default_factory=list,
        description="Extra gitignore-style directory patterns to skip",
    )
    extension: str = ".proto"
    compiler: str = "protoc"
    system_include: Path = Path("/usr/local/include")
    document_name: str = Field(
        default="openapi.yaml",
        description="Fixed file name the OpenAPI plugin writes",
    )
    document_extension: str = ".yaml"
    directive_marker: str = "option go_package"


# --- Discovery ---


class Declaration(BaseModel):
    """All ``.proto`` files of one directory, ready for generation.

    ``package_name`` and ``folder`` are derived from ``files[0]`` by
    :func:`~protogen.discovery.paths.package_identity_for`; every member of
    the group lives in the same directory and would yield the same values.

    Example::

        Declaration(
            package_name="proto_x",
            folder="a",
            files=(Path("a/proto/x/one.proto"), Path("a/proto/x/two.proto")),
        )
    """

    model_config = ConfigDict(frozen=True)

    package_name: str
    folder: str
    files: tuple[Path, ...] = Field(min_length=1)

    @property
    def include_path(self) -> str:
        """The base folder as a compiler include path (``.`` when empty)."""
        return self.folder or "."


# --- Generation ---


class DocumentInfo(BaseModel):
    """The ``info`` object of an OpenAPI document."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: Optional[str] = None
    version: Optional[str] = None


class OpenAPIDocument(BaseModel):
    """The fields of a generated OpenAPI document that protogen checks."""

    model_config = ConfigDict(extra="ignore")

    info: DocumentInfo = Field(default_factory=DocumentInfo)

    @property
    def has_title(self) -> bool:
        return bool(self.info.title)


class GenerationReport(BaseModel):
    """Counters accumulated over one run, printed by the CLI on success."""

    declarations: int = 0
    injected: int = 0
    invocations: int = 0
    documents: list[Path] = Field(default_factory=list)
    discarded: list[Path] = Field(default_factory=list)
