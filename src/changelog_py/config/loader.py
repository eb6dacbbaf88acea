"""Configuration discovery and loading.

Search order:

0. ``CHANGELOG_PY_CONFIG`` environment variable (explicit file path)
1. ``changelog-py.json`` / ``.changelog-py.json`` in the start directory
2. ``[tool.changelog-py]`` in the start directory's ``pyproject.toml``
3. The same files at the git repository root
4. Built-in defaults
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from changelog_py.config.models import ChangelogPyConfig
from changelog_py.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHANGELOG_PY_CONFIG"
CONFIG_FILENAMES = ("changelog-py.json", ".changelog-py.json")
PYPROJECT_TOOL_KEY = "changelog-py"


@dataclass(frozen=True, slots=True)
class ConfigResult:
    """A loaded configuration and where it came from."""

    config: ChangelogPyConfig
    config_path: Path | None
    is_default: bool


def load_config(start: Path | None = None) -> ConfigResult:
    """Load the configuration for the project at ``start``.

    Args:
        start: Directory to search from, defaults to the current directory

    Returns:
        Loaded configuration with its source

    Raises:
        ConfigNotFoundError: If the environment variable names a missing file
        ConfigValidationError: If a configuration file is invalid
    """
    start_dir = (start or Path.cwd()).resolve()

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = (start_dir / env_path).resolve()
        if not explicit.is_file():
            raise ConfigNotFoundError(
                f"Config file from {CONFIG_ENV_VAR} not found: {explicit}",
                hint=f"Fix or unset the {CONFIG_ENV_VAR} environment variable.",
            )
        return _load_file(explicit)

    result = _find_config_in_dir(start_dir)
    if result is not None:
        return result

    git_root = get_git_root(start_dir)
    if git_root is not None and git_root != start_dir:
        result = _find_config_in_dir(git_root)
        if result is not None:
            return result

    logger.debug("No configuration found from %s, using defaults", start_dir)
    return ConfigResult(config=ChangelogPyConfig(), config_path=None, is_default=True)


def _find_config_in_dir(directory: Path) -> ConfigResult | None:
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return _load_file(candidate)

    pyproject = directory / "pyproject.toml"
    if pyproject.is_file():
        section = extract_tool_config(load_pyproject_toml(pyproject))
        if section is not None:
            return ConfigResult(
                config=validate_config(section, pyproject),
                config_path=pyproject,
                is_default=False,
            )

    return None


def _load_file(path: Path) -> ConfigResult:
    if path.suffix == ".toml":
        data = extract_tool_config(load_pyproject_toml(path)) or {}
    else:
        data = load_json_config(path)
    logger.debug("Loaded configuration from %s", path)
    return ConfigResult(config=validate_config(data, path), config_path=path, is_default=False)


def load_json_config(path: Path) -> dict[str, Any]:
    """Read a JSON configuration file.

    Raises:
        ConfigValidationError: If the file is not a JSON object
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigValidationError(
            f"Invalid JSON in config file {path}: {e.msg} (line {e.lineno})",
            hint=f"Check the JSON syntax of {path.name}.",
        ) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Config file {path} must contain a JSON object.",
            hint=f"Wrap the settings in {path.name} in {{ ... }}.",
        )
    return data


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigValidationError: If the TOML is malformed
    """
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(
            f"Invalid TOML in {path}: {e}",
            hint="Check the TOML syntax.",
        ) from e


def extract_tool_config(pyproject: dict[str, Any]) -> dict[str, Any] | None:
    """Return the ``[tool.changelog-py]`` table, or None if absent."""
    section = pyproject.get("tool", {}).get(PYPROJECT_TOOL_KEY)
    return section if isinstance(section, dict) else None


def validate_config(data: dict[str, Any], source: Path | None = None) -> ChangelogPyConfig:
    """Validate raw settings into a ChangelogPyConfig.

    Raises:
        ConfigValidationError: Listing every invalid field
    """
    try:
        return ChangelogPyConfig.model_validate(data)
    except ValidationError as e:
        issues = [
            f"{'.'.join(str(part) for part in err['loc']) or '(root)'}: {err['msg']}"
            for err in e.errors()
        ]
        where = f" in {source}" if source else ""
        raise ConfigValidationError(
            f"Invalid configuration{where}:",
            issues=issues,
            hint="Correct the fields listed above.",
        ) from e


def get_git_root(start: Path) -> Path | None:
    """Top-level directory of the git repository containing ``start``."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=True,
            cwd=start,
        )
    except (FileNotFoundError, subprocess.CalledProcessError):
        return None

    root = result.stdout.strip()
    return Path(root).resolve() if root else None


def dump_config(config: ChangelogPyConfig) -> str:
    """Serialize a configuration as the JSON written by ``init``."""
    return json.dumps(config.model_dump(by_alias=True), indent=2) + "\n"
