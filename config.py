import json
import os
from typing import Any, Dict

CONFIG_PATH = "config.json"

# Default configuration values
DEFAULT_CONFIG = {
    # SoundCloud app (https://soundcloud.com/you/apps)
    "soundcloud_client_id": "",
    "soundcloud_client_secret": "",
    "soundcloud_redirect_uri": "http://127.0.0.1:8888/callback",

    # Logging
    "log_level": "INFO",
    "log_file": "",
}

# Validation rules for config fields
CONFIG_SCHEMA = {
    "soundcloud_client_id": {"type": str, "required": True},
    "soundcloud_client_secret": {"type": str, "required": True, "secret": True},
    "soundcloud_redirect_uri": {"type": str, "required": True, "prefix": ("http://", "https://")},

    "log_level": {"type": str, "required": False, "choices": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    "log_file": {"type": str, "required": False},
}


def load_config() -> Dict[str, Any]:
    """Load configuration from file, applying defaults for missing fields."""
    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file {CONFIG_PATH} not found.")

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        config = json.load(f)

    # Apply defaults for missing fields
    for key, value in DEFAULT_CONFIG.items():
        if key not in config:
            config[key] = value

    return config


def save_config(config: Dict[str, Any]) -> bool:
    """Save configuration to file."""
    try:
        with open(CONFIG_PATH, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        raise IOError(f"Failed to save config: {e}") from e


def validate_config(config: Dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate configuration against schema.
    Returns (is_valid, list_of_errors).
    """
    errors = []

    for key, rules in CONFIG_SCHEMA.items():
        # Check required fields
        if rules.get("required", False) and key not in config:
            errors.append(f"Missing required field: {key}")
            continue

        if key not in config:
            continue

        value = config[key]

        # Type check
        expected_type = rules.get("type")
        if expected_type and not isinstance(value, expected_type):
            errors.append(f"Field '{key}' must be {expected_type.__name__}, got {type(value).__name__}")
            continue

        # Required strings must also be non-empty
        if rules.get("required", False) and isinstance(value, str) and not value.strip():
            errors.append(f"Field '{key}' must not be empty")
            continue

        # Choices check
        if "choices" in rules and value not in rules["choices"]:
            errors.append(f"Field '{key}' must be one of {rules['choices']}, got '{value}'")

        # URL scheme check
        if "prefix" in rules and isinstance(value, str) and not value.startswith(rules["prefix"]):
            errors.append(f"Field '{key}' must start with one of {list(rules['prefix'])}, got '{value}'")

    return len(errors) == 0, errors


def update_config(key: str, value: Any) -> tuple[bool, str]:
    """
    Update a single config field with validation.
    Returns (success, message).
    """
    config = load_config()

    # Check if key is valid
    if key not in CONFIG_SCHEMA:
        return False, f"Unknown config key: {key}"

    # Validate only the field being changed; other fields may still be unset.
    _, errors = validate_config({key: value})
    errors = [e for e in errors if f"'{key}'" in e]
    if errors:
        return False, f"Validation failed: {', '.join(errors)}"

    config[key] = value
    save_config(config)

    shown = "********" if CONFIG_SCHEMA[key].get("secret") else value
    return True, f"Updated '{key}' to '{shown}'"


def reset_to_defaults() -> tuple[bool, str]:
    """Reset configuration to default values."""
    try:
        save_config(DEFAULT_CONFIG.copy())
        return True, "Configuration reset to defaults"
    except IOError as e:
        return False, f"Failed to reset config: {e}"


def get_config_value(key: str, default: Any = None) -> Any:
    """Get a single config value with optional default."""
    try:
        config = load_config()
        return config.get(key, default)
    except (OSError, json.JSONDecodeError):
        return default
