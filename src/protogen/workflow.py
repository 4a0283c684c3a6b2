"""End-to-end generation run.

:func:`run` chains the stages in order and stops at the first error:

1. replicate ``input_dir`` into ``work_dir`` (:func:`~protogen.fsutil.copy_tree`)
2. scan ``work_dir`` for source groups
3. build one declaration per group
4. inject ``option go_package`` directives
5. generate artifacts for every configured output mode

All errors are :class:`~protogen.exceptions.ProtogenError` subclasses and
propagate unchanged to the caller.
"""

from __future__ import annotations

import os

from protogen.discovery import SourceScanner, build_declarations
from protogen.fsutil import copy_tree
from protogen.generator import GenerationPipeline, inject_directives
from protogen.models import Declaration, GenerationReport, GeneratorConfig
from protogen.output import debug, info, warning


def discover(config: GeneratorConfig, root: str | os.PathLike[str] | None = None) -> list[Declaration]:
    """Scan *root* (default ``config.work_dir``) and return its declarations."""
    scanner = SourceScanner(
        extension=config.extension,
        vendor_dir=config.vendor_dir,
        exclude_patterns=config.exclude,
    )
    groups = scanner.scan(root if root is not None else config.work_dir)
    debug(f"Found {len(groups)} source directories")
    return build_declarations(groups, config.sentinel)


def run(config: GeneratorConfig, copy_input: bool = True) -> GenerationReport:
    """Run the whole generation workflow for *config*.

    Args:
        config: Effective configuration.
        copy_input: Replicate ``input_dir`` into ``work_dir`` first. Ignored
            when ``input_dir`` is unset or is the work directory itself.

    Returns:
        A :class:`GenerationReport` describing what was produced.
    """
    if copy_input and config.input_dir is not None:
        source = os.path.abspath(config.input_dir)
        target = os.path.abspath(config.work_dir)
        if source != target:
            info(f"Copying {source} to {target}")
            copy_tree(source, target)

    declarations = discover(config)
    report = GenerationReport(declarations=len(declarations))
    if not declarations:
        warning(f"No {config.extension} files found under {config.work_dir}")

    report.injected = inject_directives(declarations, config.directive_marker)
    debug(f"Added go_package option to {report.injected} files")

    modes = ", ".join(m.value for m in config.modes)
    info(f"Generating {modes} for {len(declarations)} packages")
    return GenerationPipeline(config).run(declarations, report)
