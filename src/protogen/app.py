"""Typer application and CLI entry point for protogen.

Running ``protogen`` with no sub-command performs a full generation run with
the resolved configuration, which is how the tool is invoked inside its
container. The ``generate`` sub-command does the same with per-run
overrides, and ``scan`` lists the declarations a run would build without
touching any file.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Known failures exit with the code of their
:class:`~protogen.exceptions.ProtogenError`; anything else is written to a
crash log under the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from protogen import __version__
from protogen.exceptions import ProtogenError
from protogen.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="protogen",
    help="Generate OpenAPI documents and Go stubs from .proto source trees.",
    invoke_without_command=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"protogen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output, including compiler command lines."
    ),
) -> None:
    """Generate OpenAPI documents and Go stubs from .proto source trees.

    Without a sub-command, runs the full generation with the configuration
    resolved from ``protogen.json`` and ``PROTOGEN_*`` variables.
    """
    from protogen.output import OutputFormat, OutputManager, set_output

    output = OutputManager(
        format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)

    if ctx.invoked_subcommand is None:
        _run_generation({}, copy_input=True)


@app.command("generate")
def generate_command(
    input_dir: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Source tree to copy into the work directory."
    ),
    work_dir: Optional[Path] = typer.Option(
        None, "--work-dir", "-w", help="Scratch directory that is scanned and modified."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Root directory for OpenAPI documents."
    ),
    stub_dir: Optional[Path] = typer.Option(
        None, "--stub-dir", help="Root directory for Go stubs (wiped before generation)."
    ),
    modes: Optional[list[str]] = typer.Option(
        None, "--mode", "-m", help="Output mode: openapi or go. Repeatable."
    ),
    compiler: Optional[str] = typer.Option(
        None, "--compiler", help="Schema compiler executable."
    ),
    system_include: Optional[Path] = typer.Option(
        None, "--system-include", help="Include path for well-known types."
    ),
    skip_copy: bool = typer.Option(
        False, "--skip-copy", help="Use the work directory as-is, without copying the input."
    ),
) -> None:
    """Copy, annotate, and compile every .proto group.

    Example::

        protogen generate --input ./api --work-dir /tmp/gen --output ./docs
        protogen generate --mode openapi --mode go
    """
    overrides: dict[str, Any] = {
        "input_dir": input_dir,
        "work_dir": work_dir,
        "output_dir": output_dir,
        "stub_dir": stub_dir,
        "modes": modes or None,
        "compiler": compiler,
        "system_include": system_include,
    }
    _run_generation(overrides, copy_input=not skip_copy)


@app.command("scan")
def scan_command(
    root: Optional[Path] = typer.Argument(
        None, help="Directory to scan (defaults to the configured work directory)."
    ),
) -> None:
    """List the declarations found under ROOT without modifying anything."""
    from protogen.config import resolve_config
    from protogen.output import info, print_table
    from protogen.workflow import discover

    try:
        config = resolve_config()
        declarations = discover(config, root)
    except ProtogenError as exc:
        _fail(exc)

    rows = [
        [d.package_name, d.folder, str(len(d.files))]
        for d in declarations
    ]
    print_table(["package", "folder", "files"], rows, title="Declarations")
    info(f"{len(declarations)} declarations")


def _run_generation(overrides: dict[str, Any], copy_input: bool) -> None:
    """Resolve configuration, run the workflow, and report the outcome."""
    from protogen.config import resolve_config
    from protogen.output import success
    from protogen.workflow import run

    try:
        config = resolve_config(overrides)
        report = run(config, copy_input=copy_input)
    except ProtogenError as exc:
        _fail(exc)

    success(
        f"Generated {len(report.documents)} documents from {report.declarations} packages "
        f"({report.invocations} compiler runs, {len(report.discarded)} untitled documents removed)"
    )


def _fail(exc: ProtogenError) -> NoReturn:
    from protogen.output import error

    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from protogen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``protogen`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from protogen.output import error

        if isinstance(exc, ProtogenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
