"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.quantum/config.yaml)
  3. Project config   (./quantum.yaml, searched upward)
  4. Environment variables (QUANTUM_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from quantum_cache.config.defaults import get_defaults
from quantum_cache.config.schema import Settings
from quantum_cache.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".quantum" / "config.yaml"
_PROJECT_CONFIG_NAME = "quantum.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "QUANTUM_CACHE_DIR": "cache_dir",
    "QUANTUM_CACHE_ATOMIC_WRITES": "cache_atomic_writes",
    "QUANTUM_LOG_LEVEL": "log_level",
}

_BOOL_KEYS = {"cache_atomic_writes"}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments, only when explicitly set
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def load_settings(**runtime_overrides: Any) -> Settings:
    """Merge all config sources and validate the known keys."""
    config = load_config_hierarchy(**runtime_overrides)
    known = {k: v for k, v in config.items() if k in Settings.model_fields}
    try:
        return Settings(**known)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for quantum.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read QUANTUM_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    if key in _BOOL_KEYS:
        return value.strip().lower() in _TRUTHY
    return value
