"""Configuration management: TOML config at ~/.config/mccomplete/config.toml."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import tomli_w

from mccomplete.core.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

_DEFAULT_CONFIG: dict[str, Any] = {
    "data": {
        # Empty paths fall back to the bundled sample data
        "commands_path": "",
        "registries_path": "",
    },
    "logging": {
        "level": "WARNING",
    },
    "repl": {
        "prompt": "> ",
        "history": True,
    },
}

_TRUE_WORDS = {"1", "true", "yes", "y", "on"}
_FALSE_WORDS = {"0", "false", "no", "n", "off"}


def get_config_dir() -> Path:
    """Return the config directory, creating it if needed."""
    config_dir = Path(os.environ.get("MCCOMPLETE_CONFIG_DIR", "~/.config/mccomplete")).expanduser()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Return the path to the config TOML file."""
    return get_config_dir() / "config.toml"


def get_history_path() -> Path:
    """Return the path to the REPL history file."""
    return get_config_dir() / "history"


def load_config() -> dict[str, Any]:
    """Load configuration from TOML file, returning defaults if not found."""
    config_path = get_config_path()
    if not config_path.exists():
        return _deep_copy_dict(_DEFAULT_CONFIG)
    try:
        with open(config_path, "rb") as f:
            user_config = tomllib.load(f)
        return _merge_config(_deep_copy_dict(_DEFAULT_CONFIG), user_config)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config: {e}") from e


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to TOML file."""
    config_path = get_config_path()
    try:
        with open(config_path, "wb") as f:
            tomli_w.dump(config, f)
    except (OSError, TypeError) as e:
        raise ConfigError(f"Failed to save config: {e}") from e


def update_config(**updates: Any) -> dict[str, Any]:
    """Load config, apply nested updates, save, and return the result.

    Usage: update_config(data={"commands_path": "/srv/commands.json"}, logging={"level": "DEBUG"})
    """
    config = load_config()
    for section, values in updates.items():
        if section not in config:
            config[section] = {}
        if isinstance(values, dict):
            config[section].update(values)
        else:
            config[section] = values
    save_config(config)
    return config


def set_value(dotted_key: str, raw_value: str) -> dict[str, Any]:
    """Set a single ``section.key`` setting from its string form and save.

    The value is coerced to the type of the built-in default, so only known
    settings can be addressed.
    """
    section, _, key = dotted_key.partition(".")
    if not key or key not in _DEFAULT_CONFIG.get(section, {}):
        raise ConfigError(f"Unknown setting: {dotted_key}")
    value = _coerce(raw_value, _DEFAULT_CONFIG[section][key], dotted_key)
    return update_config(**{section: {key: value}})


def _coerce(raw_value: str, default: Any, dotted_key: str) -> Any:
    """Convert a string to the type of ``default``."""
    if isinstance(default, bool):
        lowered = raw_value.strip().lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise ConfigError(f"{dotted_key} expects a boolean, got {raw_value!r}")
    if isinstance(default, int):
        try:
            return int(raw_value)
        except ValueError as e:
            raise ConfigError(f"{dotted_key} expects an integer, got {raw_value!r}") from e
    return raw_value


def _merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_config(base[key], value)
        else:
            base[key] = value
    return base


def _deep_copy_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Simple deep copy for nested dicts of simple types."""
    result: dict[str, Any] = {}
    for k, v in d.items():
        if isinstance(v, dict):
            result[k] = _deep_copy_dict(v)
        else:
            result[k] = v
    return result
