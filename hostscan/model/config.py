"""Scanner configuration."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ValidationError

from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".hostscan" / "config.yaml"

# Environment variable -> config field
ENV_OVERRIDES = {
    "HOSTSCAN_KUBECTL": "kubectl",
    "HOSTSCAN_LOGIN_COMMAND": "login_command",
    "HOSTSCAN_PRESETS_DIR": "presets_dir",
}


class ConfigError(ValueError):
    """Raised when the configuration file cannot be used."""


class ScannerConfig(BaseModel):
    """Tool names and locations used by the scanner."""

    kubectl: str = "kubectl"
    login_command: str = "login"
    presets_dir: Path = Path(".")
    output_dir: Path = Path(".")


def _read_file(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(
    config_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> ScannerConfig:
    """Load configuration.

    Lookup order for the file is the explicit ``config_path``, then
    ``HOSTSCAN_CONFIG``, then ``~/.hostscan/config.yaml``. An explicitly
    requested file must exist; the default location is optional. Environment
    overrides are applied on top of the file values.
    """
    env = os.environ if environ is None else environ

    explicit = config_path or env.get("HOSTSCAN_CONFIG")
    path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH

    values: Dict[str, Any] = {}
    if path.is_file():
        values.update(_read_file(path))
        logger.debug(f"Loaded config from {path}")
    elif explicit:
        raise ConfigError(f"config file not found: {path}")

    for var, field in ENV_OVERRIDES.items():
        if env.get(var):
            values[field] = env[var]

    try:
        return ScannerConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
