import questionary
from config import (
    load_config, validate_config, update_config, reset_to_defaults,
    CONFIG_SCHEMA
)
from utils.logger import log_error, log_success


def config_menu(config: dict) -> dict:
    """
    Display the configuration menu and handle user selections.
    Returns the potentially updated config dict.
    """
    while True:
        choice = questionary.select(
            "⚙️ Config Menu — What would you like to do?",
            choices=[
                "View current config",
                "Update a setting",
                "Reset to defaults",
                "Validate configuration",
                "Back"
            ]
        ).ask()

        if choice == "View current config":
            view_config(config)

        elif choice == "Update a setting":
            config = update_setting_menu(config)

        elif choice == "Reset to defaults":
            config = reset_config_menu(config)

        elif choice == "Validate configuration":
            validate_config_menu(config)

        elif choice == "Back" or choice is None:
            break

    return config


def format_config_value(key: str, value) -> str:
    """Render a config value for display, hiding secrets."""
    if CONFIG_SCHEMA.get(key, {}).get("secret"):
        return "********" if value else "(not set)"
    if value == "":
        return "(not set)"
    return str(value)


def view_config(config: dict):
    """Display the current configuration in a readable format."""
    print("\n" + "=" * 50)
    print("📋 Current Configuration")
    print("=" * 50)

    categories = {
        "SoundCloud App": ["soundcloud_client_id", "soundcloud_client_secret", "soundcloud_redirect_uri"],
        "Logging": ["log_level", "log_file"],
    }

    for category, keys in categories.items():
        print(f"\n{category}:")
        for key in keys:
            if key in config:
                print(f"  {key}: {format_config_value(key, config[key])}")

    print("\n" + "=" * 50)
    input("\nPress Enter to continue...")


def update_setting_menu(config: dict) -> dict:
    """Menu to update individual settings."""
    editable_keys = list(CONFIG_SCHEMA.keys())
    editable_keys.append("Back")

    key = questionary.select(
        "Select setting to update:",
        choices=editable_keys
    ).ask()

    if key == "Back" or key is None:
        return config

    schema = CONFIG_SCHEMA.get(key, {})
    current_value = config.get(key, "")

    print(f"\nCurrent value: {format_config_value(key, current_value)}")

    if "choices" in schema:
        new_value = questionary.select(
            f"Select new value for {key}:",
            choices=schema["choices"]
        ).ask()

    elif schema.get("secret"):
        new_value = questionary.password(f"Enter new value for {key}:").ask()

    else:
        new_value = questionary.text(
            f"Enter new value for {key}:",
            default=str(current_value)
        ).ask()

    if new_value is None:
        return config

    success, message = update_config(key, new_value)

    if success:
        log_success(message)
        config[key] = new_value
    else:
        log_error(message)

    return config


def reset_config_menu(config: dict) -> dict:
    """Menu to reset configuration to defaults."""
    confirm = questionary.confirm(
        "⚠️ Reset all settings to defaults? This cannot be undone.",
        default=False
    ).ask()

    if confirm:
        success, message = reset_to_defaults()

        if success:
            log_success(message)
            config = load_config()
        else:
            log_error(message)

    return config


def validate_config_menu(config: dict):
    """Validate the current configuration and show any errors."""
    is_valid, errors = validate_config(config)

    print("\n" + "=" * 50)
    print("🔍 Configuration Validation")
    print("=" * 50)

    if is_valid:
        log_success("Configuration is valid! ✓")
    else:
        log_error("Configuration has errors:")
        for error in errors:
            print(f"  ✗ {error}")

    print("=" * 50)
    input("\nPress Enter to continue...")
