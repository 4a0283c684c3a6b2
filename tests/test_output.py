"""Tests for protogen.output -- stream discipline and formats."""

from __future__ import annotations

import json

import pytest

from protogen.output import OutputFormat, OutputManager, get_output, reset_output, set_output


class TestDiagnostics:
    def test_info_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).info("hello")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hello" in captured.err

    def test_quiet_suppresses_info_not_errors(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        out.info("hidden")
        out.success("hidden")
        out.error("boom")
        captured = capsys.readouterr()
        assert "hidden" not in captured.err
        assert "Error: boom" in captured.err

    def test_debug_only_when_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("quiet")
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("loud")
        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "[debug] loud" in err

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        OutputManager(format=OutputFormat.PLAIN).warning("careful")
        assert "Warning: careful" in capsys.readouterr().err


class TestTables:
    def test_plain_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN).print_table(["a", "b"], [["1", "2"]])
        assert capsys.readouterr().out == "a\tb\n1\t2\n"

    def test_json_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.JSON).print_table(["a", "b"], [["1", "2"]])
        assert json.loads(capsys.readouterr().out) == [{"a": "1", "b": "2"}]


class TestGlobal:
    def test_set_and_reset(self) -> None:
        manager = OutputManager(format=OutputFormat.PLAIN)
        set_output(manager)
        assert get_output() is manager
        reset_output()
        assert get_output() is not manager
