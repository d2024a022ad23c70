import questionary


def main_menu():
    """Displays the main menu and returns the selected option."""
    return questionary.select(
        "🎵 SoundCloud Connect — Main Menu",
        choices=[
            "Connect Menu",
            "Config Menu",
            "Exit",
        ],
    ).ask()
