import json
from config import load_config, validate_config
from utils.logger import setup_logging, apply_logging_config, log_info, log_warning, log_error
from menus.main_menu import main_menu
from menus.connect_menu import connect_menu
from menus.config_menu import config_menu

if __name__ == "__main__":
    setup_logging()

    try:
        config = load_config()
    except FileNotFoundError as e:
        log_error(f"Config file not found: {e}")
        log_error("Please create config.json with your SoundCloud app credentials.")
        exit(1)
    except json.JSONDecodeError as e:
        log_error(f"Config file contains invalid JSON: {e}")
        exit(1)

    apply_logging_config(config)

    is_valid, errors = validate_config(config)
    if not is_valid:
        for error in errors:
            log_warning(error)

    client = None

    try:
        while True:
            choice = main_menu()

            # Connect Menu
            if choice == "Connect Menu":
                client = connect_menu(config, client)

            # Config Menu
            elif choice == "Config Menu":
                config = config_menu(config)
                apply_logging_config(config)
                # Credentials may have changed; start a fresh session.
                if client is not None:
                    client.close()
                client = None

            # Exit
            elif choice == "Exit" or choice is None:
                log_info("Exiting program...")
                break

            else:
                log_error("Invalid choice.")
    finally:
        if client is not None:
            client.close()
