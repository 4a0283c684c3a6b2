"""Thin wrapper around the ``protoc`` schema compiler.

The compiler is a black box: protogen builds its argument vector, runs it
with the parent's stdout/stderr so operators see protoc's own diagnostics,
and turns a non-zero exit into :class:`~protogen.exceptions.CompilerError`.
There is no timeout and no retry; a failing source fails the same way on
every attempt.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Sequence

from protogen.exceptions import CompilerError
from protogen.models import OutputMode
from protogen.output import debug


def output_flags(mode: OutputMode, out_dir: str | os.PathLike[str]) -> list[str]:
    """Return the ``--*_out`` flags selecting *mode*, all pointing at *out_dir*."""
    target = os.fspath(out_dir)
    if mode is OutputMode.OPENAPI:
        return [f"--openapi_out={target}"]
    return [f"--go_out={target}", f"--go-grpc_out={target}"]


class Compiler:
    """Runs ``protoc`` invocations for the generation pipeline.

    Args:
        executable: Compiler binary name or path.
        system_include: Include directory holding the well-known types
            (``google/protobuf/*.proto``).
    """

    def __init__(
        self,
        executable: str = "protoc",
        system_include: str | os.PathLike[str] = "/usr/local/include",
    ) -> None:
        self.executable = executable
        self.system_include = Path(system_include)

    def build_args(
        self,
        sources: Sequence[str | os.PathLike[str]],
        include_path: str,
        mode: OutputMode,
        out_dir: str | os.PathLike[str],
    ) -> list[str]:
        """Return the full argument vector for one invocation.

        Order: system include, declaration include, output flags, sources.
        """
        return [
            self.executable,
            f"-I{self.system_include}",
            f"-I{include_path}",
            *output_flags(mode, out_dir),
            *(os.fspath(s) for s in sources),
        ]

    def run(
        self,
        sources: Sequence[str | os.PathLike[str]],
        include_path: str,
        mode: OutputMode,
        out_dir: str | os.PathLike[str],
    ) -> None:
        """Invoke the compiler and block until it exits.

        Raises:
            CompilerError: If the compiler is missing or exits non-zero.
        """
        args = self.build_args(sources, include_path, mode, out_dir)
        debug(f"Running: {' '.join(args)}")

        try:
            result = subprocess.run(args)
        except FileNotFoundError as exc:
            raise CompilerError(f"Compiler not found: {self.executable}") from exc

        if result.returncode != 0:
            raise CompilerError(
                f"{self.executable} exited with status {result.returncode} "
                f"for {', '.join(os.fspath(s) for s in sources)}",
                returncode=result.returncode,
            )
