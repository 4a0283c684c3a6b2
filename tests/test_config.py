"""Tests for protogen.config -- precedence resolution and XDG paths."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from protogen.config import (
    get_data_dir,
    load_env_config,
    load_project_config,
    resolve_config,
)
from protogen.exceptions import ConfigError
from protogen.models import OutputMode


def _write_project(directory: Path, data: object) -> None:
    (directory / "protogen.json").write_text(json.dumps(data), encoding="utf-8")


class TestDefaults:
    def test_defaults(self, isolated_env: Path) -> None:
        config = resolve_config()

        assert config.input_dir == Path("/input")
        assert config.work_dir == Path("/generator")
        assert config.output_dir == Path("/output")
        assert config.modes == [OutputMode.OPENAPI]
        assert config.sentinel == "proto"
        assert config.vendor_dir == "vendor"
        assert config.compiler == "protoc"
        assert config.system_include == Path("/usr/local/include")
        assert config.document_name == "openapi.yaml"


class TestProjectConfig:
    def test_missing_file(self, isolated_env: Path) -> None:
        assert load_project_config() is None

    def test_loaded(self, isolated_env: Path) -> None:
        _write_project(isolated_env, {"work_dir": "/tmp/gen", "modes": ["go"]})

        config = resolve_config()

        assert config.work_dir == Path("/tmp/gen")
        assert config.modes == [OutputMode.GO]

    def test_invalid_json(self, isolated_env: Path) -> None:
        (isolated_env / "protogen.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid project config"):
            resolve_config()

    def test_not_an_object(self, isolated_env: Path) -> None:
        _write_project(isolated_env, ["openapi"])
        with pytest.raises(ConfigError, match="JSON object"):
            resolve_config()

    def test_unknown_key_rejected(self, isolated_env: Path) -> None:
        _write_project(isolated_env, {"wrok_dir": "/tmp"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_unknown_mode_rejected(self, isolated_env: Path) -> None:
        _write_project(isolated_env, {"modes": ["swagger"]})
        with pytest.raises(ConfigError):
            resolve_config()


class TestEnvironment:
    def test_modes_split(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROTOGEN_MODES", "openapi, go")
        assert load_env_config() == {"modes": ["openapi", "go"]}

    def test_empty_input_disables_copy(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROTOGEN_INPUT_DIR", "")
        assert resolve_config().input_dir is None

    def test_env_overrides_project(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_project(isolated_env, {"output_dir": "/from/project", "compiler": "protoc-3"})
        monkeypatch.setenv("PROTOGEN_OUTPUT_DIR", "/from/env")

        config = resolve_config()

        assert config.output_dir == Path("/from/env")
        assert config.compiler == "protoc-3"


class TestOverrides:
    def test_cli_overrides_env(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROTOGEN_WORK_DIR", "/from/env")

        config = resolve_config({"work_dir": Path("/from/cli")})

        assert config.work_dir == Path("/from/cli")

    def test_none_overrides_ignored(self, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROTOGEN_COMPILER", "/opt/protoc")

        config = resolve_config({"compiler": None, "modes": None})

        assert config.compiler == "/opt/protoc"
        assert config.modes == [OutputMode.OPENAPI]


class TestDataDir:
    def test_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("protogen.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

        result = get_data_dir()

        assert result == tmp_path / "xdg" / "protogen"
        assert result.is_dir()

    def test_non_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("protogen.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_data_dir() == tmp_path / ".protogen"
