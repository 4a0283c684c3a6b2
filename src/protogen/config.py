"""Configuration resolution with XDG paths and precedence rules.

This module builds the :class:`~protogen.models.GeneratorConfig` used by a
run:

* **Project config** -- an optional ``protogen.json`` in the working
  directory, holding any subset of the ``GeneratorConfig`` fields.
* **Environment** -- ``PROTOGEN_*`` variables, see :data:`ENV_VARS`.
* **CLI flags** -- passed to :func:`resolve_config` as ``overrides``.
* **Data directory** -- XDG-compliant location for crash logs, see
  :func:`get_data_dir`.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from protogen.exceptions import ConfigError
from protogen.models import GeneratorConfig

_APP_NAME = "protogen"
_PROJECT_CONFIG_FILENAME = "protogen.json"

ENV_VARS: dict[str, str] = {
    "PROTOGEN_INPUT_DIR": "input_dir",
    "PROTOGEN_WORK_DIR": "work_dir",
    "PROTOGEN_OUTPUT_DIR": "output_dir",
    "PROTOGEN_STUB_DIR": "stub_dir",
    "PROTOGEN_MODES": "modes",
    "PROTOGEN_COMPILER": "compiler",
    "PROTOGEN_SYSTEM_INCLUDE": "system_include",
}
"""Environment variable name to :class:`GeneratorConfig` field."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/protogen/`` (default
    ``~/.local/share/protogen/``). Elsewhere: ``~/.protogen/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Layers ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``protogen.json`` from *directory* (default: the working directory).

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or not an object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


def load_env_config() -> dict[str, Any]:
    """Collect configuration values from ``PROTOGEN_*`` environment variables.

    ``PROTOGEN_MODES`` is a comma-separated list (``openapi,go``). An empty
    ``PROTOGEN_INPUT_DIR`` disables the input copy.
    """
    values: dict[str, Any] = {}
    for var, field in ENV_VARS.items():
        raw = os.environ.get(var)
        if raw is None:
            continue
        if field == "modes":
            values[field] = [m.strip() for m in raw.split(",") if m.strip()]
        elif field == "input_dir" and not raw:
            values[field] = None
        else:
            values[field] = raw
    return values


# --- Precedence resolution ---


def resolve_config(overrides: Optional[dict[str, Any]] = None) -> GeneratorConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``overrides``; ``None`` values are ignored)
        2. Environment variables (``PROTOGEN_*``)
        3. Project config (``./protogen.json``)
        4. Defaults

    Raises:
        ConfigError: If any layer is malformed or the merged values fail
            validation.
    """
    merged: dict[str, Any] = {}

    project = load_project_config()
    if project is not None:
        merged.update(project)

    merged.update(load_env_config())

    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return GeneratorConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
