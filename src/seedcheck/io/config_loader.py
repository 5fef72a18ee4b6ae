"""Battery config file loader (JSON or YAML)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from seedcheck.config.schema import BatteryConfig
from seedcheck.utils.exceptions import ConfigError


def load_yaml(path: Path) -> Any:
    """Load and parse a YAML file.

    Args:
        path: Absolute or relative path to the YAML file.

    Returns:
        Parsed YAML content (typically a dict).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with open(path) as f:
        return yaml.safe_load(f)


def load_battery_file(path: Path) -> BatteryConfig:
    """Load a battery config from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        ConfigError: If the file type is unsupported or its content does not
            describe a valid battery.
    """
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = load_yaml(path)
        elif suffix == ".json":
            return BatteryConfig.model_validate_json(path.read_text())
        else:
            raise ConfigError(f"Unsupported config file type: {path.suffix!r}")
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping at the top level")
        return BatteryConfig.model_validate(data)
    except (ValidationError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid battery config in {path}: {exc}") from exc
