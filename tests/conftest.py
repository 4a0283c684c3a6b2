"""Shared test fixtures for protogen.

Provides reusable fixtures for building ``.proto`` trees, creating isolated
configurations, managing output state, and standing in for ``protoc``.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path
from typing import Callable, Optional
from unittest.mock import patch

import pytest

from protogen.models import GeneratorConfig, OutputMode
from protogen.output import OutputFormat, OutputManager, reset_output, set_output


PROTO_SOURCE = textwrap.dedent("""\
    syntax = "proto3";

    package widgets.v1;

    service WidgetService {
      rpc GetWidget(GetWidgetRequest) returns (Widget);
    }
""")


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Source trees
# ---------------------------------------------------------------------------


@pytest.fixture
def write_proto() -> Callable[..., Path]:
    """Return a helper that writes a ``.proto`` file, creating parent dirs."""

    def _write(path: Path, content: str = PROTO_SOURCE) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Clears all PROTOGEN_* environment variables, points XDG_DATA_HOME into
    tmp_path, and changes the working directory to tmp_path so no real
    ``protogen.json`` is picked up.
    """
    for var in [
        "PROTOGEN_INPUT_DIR",
        "PROTOGEN_WORK_DIR",
        "PROTOGEN_OUTPUT_DIR",
        "PROTOGEN_STUB_DIR",
        "PROTOGEN_MODES",
        "PROTOGEN_COMPILER",
        "PROTOGEN_SYSTEM_INCLUDE",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config(tmp_path: Path) -> GeneratorConfig:
    """A configuration rooted entirely inside tmp_path."""
    return GeneratorConfig(
        input_dir=tmp_path / "input",
        work_dir=tmp_path / "work",
        output_dir=tmp_path / "output",
        stub_dir=tmp_path / "output" / "gen",
        modes=[OutputMode.OPENAPI],
        system_include=tmp_path / "include",
    )


# ---------------------------------------------------------------------------
# Fake compiler
# ---------------------------------------------------------------------------


class FakeProtoc:
    """Stand-in for ``subprocess.run`` that mimics protoc's plugins.

    ``--openapi_out=DIR`` writes ``DIR/openapi.yaml`` whose title comes from
    :attr:`titles` (keyed by source file name, default ``"Widget API"``).
    ``--go_out=DIR`` writes one ``<name>.pb.go`` per source into ``DIR``.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.titles: dict[str, Optional[str]] = {}
        self.returncode = 0
        self.skip_output = False
        self.before_call: Optional[Callable[[list[str]], None]] = None

    def __call__(self, args: list[str], *a, **kw) -> subprocess.CompletedProcess:
        self.calls.append(list(args))
        if self.before_call is not None:
            self.before_call(list(args))
        if self.returncode != 0 or self.skip_output:
            return subprocess.CompletedProcess(args, self.returncode)

        sources = [arg for arg in args[1:] if not arg.startswith("-")]
        for arg in args:
            if arg.startswith("--openapi_out="):
                out_dir = Path(arg.split("=", 1)[1])
                title = self.titles.get(Path(sources[0]).name, "Widget API")
                if title is None:
                    body = 'openapi: 3.0.3\ninfo:\n  version: "1.0"\npaths: {}\n'
                else:
                    body = (
                        "openapi: 3.0.3\n"
                        f'info:\n  title: "{title}"\n  version: "1.0"\n'
                        "paths: {}\n"
                    )
                (out_dir / "openapi.yaml").write_text(body, encoding="utf-8")
            elif arg.startswith("--go_out="):
                out_dir = Path(arg.split("=", 1)[1])
                for source in sources:
                    (out_dir / (Path(source).stem + ".pb.go")).write_text("package x\n")
        return subprocess.CompletedProcess(args, 0)


@pytest.fixture
def fake_protoc() -> FakeProtoc:
    """Patch the compiler's ``subprocess.run`` with a :class:`FakeProtoc`."""
    fake = FakeProtoc()
    with patch("protogen.generator.compiler.subprocess.run", side_effect=fake):
        yield fake


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
