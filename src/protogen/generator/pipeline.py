"""Run the compiler over every declaration and post-process its output.

Two output policies exist, one per :class:`~protogen.models.OutputMode`:

* **Document mode** (``openapi``) -- one compiler call per source file. The
  OpenAPI plugin always writes a file named ``openapi.yaml`` (it has no
  ``paths=source_relative`` option), so protogen points it at a fresh
  temporary directory for each call, moves the result to
  ``<output_dir>/<path relative to work_dir>.yaml``, and deletes it again if
  the document has no ``info.title``.
* **Stub mode** (``go``) -- one compiler call per declaration with all of its
  files. The stub directory is wiped and recreated before the first call so
  nothing from a previous run survives; the Go plugins lay out their own
  output under it from the injected ``go_package`` paths.

Execution is strictly sequential and stops at the first error.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from protogen.exceptions import ArtifactNotFoundError, FilesystemError
from protogen.fsutil import create_if_not_exists, exists, recreate_dir
from protogen.generator.compiler import Compiler
from protogen.generator.documents import remove_without_title
from protogen.models import Declaration, GenerationReport, GeneratorConfig, OutputMode
from protogen.output import debug, info


class GenerationPipeline:
    """Generate artifacts for a list of declarations.

    Args:
        config: Effective run configuration (paths, modes, compiler).
        compiler: Compiler wrapper; built from *config* when omitted.

    Example::

        pipeline = GenerationPipeline(config)
        report = pipeline.run(declarations)
    """

    def __init__(self, config: GeneratorConfig, compiler: Optional[Compiler] = None) -> None:
        self.config = config
        self.compiler = compiler or Compiler(config.compiler, config.system_include)

    def run(
        self,
        declarations: Iterable[Declaration],
        report: Optional[GenerationReport] = None,
    ) -> GenerationReport:
        """Generate every configured mode for every declaration.

        Args:
            declarations: Declarations to process, in order.
            report: Report to accumulate into; a fresh one is created when
                omitted.

        Returns:
            The report with invocation and document counters filled in.

        Raises:
            CompilerError: On the first failing compiler invocation.
            ArtifactNotFoundError: If document mode finds no output file.
            FilesystemError: On any rename, removal, or mkdir failure.
            DocumentParseError: If a generated document is not valid YAML.
        """
        report = report or GenerationReport()
        declarations = list(declarations)

        if OutputMode.GO in self.config.modes:
            self.prepare_stub_dir()

        for declaration in declarations:
            debug(f"Generating {declaration.package_name} ({len(declaration.files)} files)")
            for mode in self.config.modes:
                if mode.is_document:
                    for source in declaration.files:
                        self.generate_document(source, declaration, report)
                else:
                    self.generate_stubs(declaration, report)

        return report

    def prepare_stub_dir(self) -> None:
        """Remove the stub directory and recreate it empty."""
        debug(f"Clearing stub directory {self.config.stub_dir}")
        recreate_dir(self.config.stub_dir)

    def document_path_for(self, source: str | os.PathLike[str]) -> Path:
        """Return the final document path for *source*.

        The work directory prefix is replaced by the output directory and the
        source suffix by the document extension. A source outside the work
        directory keeps its own path with only the suffix replaced.
        """
        source_path = Path(os.path.abspath(source))
        work_dir = Path(os.path.abspath(self.config.work_dir))
        try:
            relative = source_path.relative_to(work_dir)
        except ValueError:
            target = source_path
        else:
            target = Path(self.config.output_dir) / relative
        return target.with_suffix(self.config.document_extension)

    def generate_document(
        self,
        source: Path,
        declaration: Declaration,
        report: GenerationReport,
    ) -> Optional[Path]:
        """Generate, relocate, and filter the OpenAPI document for *source*.

        Returns:
            The final document path, or ``None`` if it was discarded for
            having no title.
        """
        output_file = self.document_path_for(source)

        # Sibling documents may already sit in the final directory, one of them
        # possibly named like the plugin's fixed output file.
        with tempfile.TemporaryDirectory(prefix="protogen-") as scratch:
            self.compiler.run([source], declaration.include_path, OutputMode.OPENAPI, scratch)
            report.invocations += 1
            self.relocate(Path(scratch) / self.config.document_name, output_file)

        if remove_without_title(output_file):
            info(f"Skipped {source.name}: generated document has no title")
            report.discarded.append(output_file)
            return None

        report.documents.append(output_file)
        return output_file

    def generate_stubs(self, declaration: Declaration, report: GenerationReport) -> None:
        """Generate Go stubs for all files of *declaration* in one call."""
        self.compiler.run(
            declaration.files,
            declaration.include_path,
            OutputMode.GO,
            self.config.stub_dir,
        )
        report.invocations += 1

    def relocate(self, generated: Path, output_file: Path) -> None:
        """Move the compiler's fixed-name output to *output_file*.

        Raises:
            ArtifactNotFoundError: If *generated* does not exist.
            FilesystemError: If the rename fails.
        """
        if not exists(generated):
            raise ArtifactNotFoundError(f"Expected generated document not found: {generated}")
        create_if_not_exists(output_file.parent)
        try:
            shutil.move(generated, output_file)
        except OSError as exc:
            raise FilesystemError(
                f"Failed to move {generated} to {output_file}: {exc}"
            ) from exc
