"""Configuration discovery and loading.

Lookup order for a project directory:

1. ``.versionrc.json`` or ``.versionrc`` (JSON, camelCase keys)
2. ``[tool.semrel-py]`` in ``pyproject.toml``
3. Built-in defaults
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from semrel_py.config.models import SemrelConfig
from semrel_py.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_NAME = "semrel-py"
VERSIONRC_NAMES = (".versionrc.json", ".versionrc")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"pyproject.toml not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}", details=str(e)) from e


def load_versionrc(path: Path) -> dict[str, Any]:
    """Load a JSON ``.versionrc`` file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not a JSON object
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in {path}", details=str(e)) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"Expected a JSON object in {path}")
    return data


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Search upwards from ``start`` for a pyproject.toml.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def extract_tool_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.semrel-py]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_NAME, {})


def parse_config(data: dict[str, Any], source: str = "<config>") -> SemrelConfig:
    """Validate raw configuration data.

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        return SemrelConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {source}", details=str(e)) from e


def load_config(path: Path | None = None) -> SemrelConfig:
    """Load configuration for the project at ``path``.

    ``path`` may be a project directory or an explicit config file
    (``pyproject.toml`` or a ``.versionrc`` JSON file).

    Raises:
        ConfigNotFoundError: If an explicit config file does not exist
        ConfigValidationError: If the configuration is invalid
    """
    project = path or Path.cwd()

    if not project.is_dir():
        if project.name == "pyproject.toml":
            data = extract_tool_config(load_pyproject_toml(project))
        else:
            data = load_versionrc(project)
        logger.debug("Loaded configuration from %s", project)
        return parse_config(data, str(project))

    for name in VERSIONRC_NAMES:
        candidate = project / name
        if candidate.is_file():
            logger.debug("Loaded configuration from %s", candidate)
            return parse_config(load_versionrc(candidate), str(candidate))

    try:
        pyproject_path = find_pyproject_toml(project)
    except ConfigNotFoundError:
        logger.debug("No configuration found under %s, using defaults", project)
        return SemrelConfig()

    data = extract_tool_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded configuration from %s", pyproject_path)
    return parse_config(data, str(pyproject_path))
