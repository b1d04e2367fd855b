# -*- coding: utf-8 -*-
"""Settings persistence and validation."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from eyescreen.constants import API_KEY_PLACEHOLDER, DEFAULT_SETTINGS_FILE
from eyescreen.utils.file_utils import read_env_file, read_json_file, write_json_file


DEFAULT_CONFIG: dict[str, Any] = {
    "api_keys": {"gemini": API_KEY_PLACEHOLDER},
    "analysis": {
        "model": "gemini-2.5-flash",
        "base_url": "https://generativelanguage.googleapis.com/v1beta",
        "timeout_seconds": 60.0,
    },
    "upload": {"max_size_mb": 10},
    "ui": {"loading_message_interval_ms": 2000},
}

# Checked in order; the first non-empty value wins.
API_KEY_ENV_NAMES = ("GEMINI_API_KEY", "API_KEY")


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default config."""
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(config: dict[str, Any], env_values: Mapping[str, str]) -> dict[str, Any]:
    """Take the Gemini key from the environment when one is set."""
    merged = deepcopy(config)
    for name in API_KEY_ENV_NAMES:
        key = str(env_values.get(name, "")).strip()
        if key:
            merged.setdefault("api_keys", {})
            merged["api_keys"]["gemini"] = key
            break
    return merged


def resolve_api_key(config: dict[str, Any]) -> str:
    """Return the usable Gemini key, or an empty string when none is configured."""
    key = str(config.get("api_keys", {}).get("gemini", "")).strip()
    if key == API_KEY_PLACEHOLDER:
        return ""
    return key


def validate_config(config: dict[str, Any]) -> None:
    """Validate the fields the analyzer and the GUI rely on."""
    analysis = config.get("analysis", {})
    model = analysis.get("model")
    if not isinstance(model, str) or not model.strip():
        raise ConfigError("analysis.model must be a non-empty string")

    base_url = analysis.get("base_url")
    if not isinstance(base_url, str) or not base_url.startswith(("http://", "https://")):
        raise ConfigError("analysis.base_url must be an http(s) URL")

    timeout = analysis.get("timeout_seconds")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or not (1 <= float(timeout) <= 600):
        raise ConfigError("analysis.timeout_seconds must be a number in range 1..600")

    max_size = config.get("upload", {}).get("max_size_mb")
    if isinstance(max_size, bool) or not isinstance(max_size, (int, float)) or float(max_size) <= 0:
        raise ConfigError("upload.max_size_mb must be a positive number")

    interval = config.get("ui", {}).get("loading_message_interval_ms")
    if isinstance(interval, bool) or not isinstance(interval, int) or not (100 <= interval <= 60000):
        raise ConfigError("ui.loading_message_interval_ms must be an int in range 100..60000")


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Load config from JSON, merge into defaults and apply key overrides.

    Keys from the process environment win over a ``.env`` file that sits next
    to the settings file.
    """
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    env_values: dict[str, str] = read_env_file(config_path.parent / ".env")
    process_env = os.environ if environ is None else environ
    env_values.update({name: process_env[name] for name in API_KEY_ENV_NAMES if process_env.get(name)})

    if not config_path.exists():
        return _apply_env_overrides(get_default_config(), env_values)

    try:
        loaded = read_json_file(config_path)
    except (ValueError, OSError) as exc:
        raise ConfigError(f"Cannot read settings file {config_path}: {exc}") from exc
    merged = _deep_merge(get_default_config(), loaded)
    merged = _apply_env_overrides(merged, env_values)
    validate_config(merged)
    return merged


def _strip_api_keys(config: dict[str, Any]) -> dict[str, Any]:
    """Replace real API keys with the placeholder before writing to disk."""
    config_copy = deepcopy(config)
    api_keys = config_copy.get("api_keys", {})
    for name, value in list(api_keys.items()):
        if value and value != API_KEY_PLACEHOLDER:
            api_keys[name] = API_KEY_PLACEHOLDER
    return config_copy


def save_config(config: dict[str, Any], path: str | Path | None = None) -> Path:
    """Validate and save config as JSON without real API keys.

    Keys belong in the environment or a .env file, not in settings.json.
    """
    validate_config(config)
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    write_json_file(config_path, _strip_api_keys(config))
    return config_path
