"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Settings defaults    : in config/settings.py
#   2. config/config.yaml   : static defaults checked into the repo
#   3. .env file            : local developer overrides (not committed)
#   4. Environment vars     : set at deploy time
#
# The YAML file is grouped into sections; _flatten maps each section key
# onto a Settings field:
#
#   cache:
#     max_size_mb: 128      ->  cache_max_size_mb
#     entry_ttl: 5m         ->  cache_entry_ttl
#   provider:
#     request_timeout: 2s   ->  request_timeout
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from sentiment_gateway.config.settings import Settings
from sentiment_gateway.utils.errors import ConfigurationError

# Section name -> prefix prepended to each key in that section.
_SECTION_PREFIXES = {
    "app": "app_",
    "cache": "cache_",
    "provider": "",
    "logging": "log_",
}


def load_settings(path: str = "config/config.yaml", **overrides: Any) -> Settings:
    """Build Settings from the YAML file, the environment, and *overrides*.

    Args:
        path: Path to the YAML configuration file.  A missing file is fine.
        overrides: Explicit values (e.g. from CLI flags); they win over
            every other source.

    Returns:
        Fully resolved settings.

    Raises:
        ConfigurationError: If the YAML is malformed or a value is invalid.
    """
    yaml_values = _flatten(_read_yaml(Path(path)))

    try:
        env_settings = Settings()
        # Only fields that the environment actually supplied may beat YAML.
        env_values = env_settings.model_dump(include=env_settings.model_fields_set)
        return Settings(**{**yaml_values, **env_values, **overrides})
    except ValueError as exc:
        raise ConfigurationError(message=f"Invalid configuration: {exc}") from exc


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        with open(config_path) as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(message=f"Malformed config file {config_path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigurationError(message=f"Config file {config_path} must contain a mapping")
    return loaded


def _flatten(yaml_config: dict[str, Any]) -> dict[str, Any]:
    """Map sectioned YAML keys onto flat Settings field names."""
    flat: dict[str, Any] = {}
    for section, values in yaml_config.items():
        if section in _SECTION_PREFIXES and isinstance(values, dict):
            prefix = _SECTION_PREFIXES[section]
            for key, value in values.items():
                flat[f"{prefix}{key}"] = value
        else:
            flat[section] = values
    return flat
