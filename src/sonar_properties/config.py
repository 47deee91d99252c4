"""Configuration loader for a generation run.

Reads the global analysis settings from a JSON or YAML file and validates
its structure. Recognised keys (camelCase, as written by the build
integration):

- ``outputDir`` (required) – directory holding ProjectInfo.json files and
  receiving the generated outputs
- ``projectKey``, ``projectName``, ``projectVersion``
- ``targetVersion`` – version of the analysis server, gates list quoting
- ``workingDirectory`` – directory the scanner is invoked from
- ``projectBaseDir`` – explicit root base directory
- ``settings`` – mapping or list of ``{id, value}`` global settings
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml

from .models import AnalysisConfig, Property

DEFAULT_CONFIG_PATH = Path("sonar-analysis.yml")
CONFIG_PATH_ENV_VAR = "SONAR_PROPERTIES_CONFIG"

_STRING_KEYS = {
    "projectKey": "project_key",
    "projectName": "project_name",
    "projectVersion": "project_version",
    "targetVersion": "target_version",
    "workingDirectory": "working_directory",
    "projectBaseDir": "project_base_dir",
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


def _resolve_config_path(path: Path | str | None = None) -> Path:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. SONAR_PROPERTIES_CONFIG environment variable
    3. Default path (sonar-analysis.yml in the current directory)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_PATH


def _parse(config_path: Path, content: str) -> Any:
    if config_path.suffix.lower() == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc


def _parse_settings(raw: Any) -> tuple[Property, ...]:
    if raw is None:
        return ()
    if isinstance(raw, list) and not all(isinstance(entry, dict) for entry in raw):
        raise ConfigError("'settings' entries must be objects with 'id' and 'value'")
    if not isinstance(raw, (dict, list)):
        raise ConfigError("'settings' must be a mapping or an array")
    try:
        return Property.from_pairs(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid setting: {exc}") from exc


def config_from_dict(data: Any, base_dir: Path | None = None) -> AnalysisConfig:
    """Validate ``data`` and build an AnalysisConfig.

    Relative ``outputDir``/``workingDirectory``/``projectBaseDir`` values are
    resolved against ``base_dir`` when given.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be an object")

    output_dir = data.get("outputDir")
    if not output_dir or not isinstance(output_dir, str):
        raise ConfigError("Configuration is missing required 'outputDir' field")

    kwargs: dict[str, Any] = {"output_dir": output_dir}
    for key, attr in _STRING_KEYS.items():
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, (int, float)) and key in {"projectVersion", "targetVersion"}:
            value = str(value)
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' must be a string")
        kwargs[attr] = value

    if base_dir is not None:
        for attr in ("output_dir", "working_directory", "project_base_dir"):
            if attr in kwargs and not os.path.isabs(kwargs[attr]):
                kwargs[attr] = str((base_dir / kwargs[attr]).resolve())

    kwargs["global_settings"] = _parse_settings(data.get("settings"))
    return AnalysisConfig(**kwargs)


def load_config(path: Path | str | None = None) -> AnalysisConfig:
    """Load and validate the analysis configuration.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    return config_from_dict(_parse(config_path, content), base_dir=config_path.resolve().parent)


def parse_setting_arg(text: str) -> Property:
    """Parse a ``key=value`` command line setting."""
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise ConfigError(f"Invalid setting '{text}', expected key=value")
    return Property(id=key.strip(), value=value)
