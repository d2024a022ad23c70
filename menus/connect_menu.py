import webbrowser
from typing import Optional

import questionary

from soundcloud_api.auth import (
    check_soundcloud_credentials,
    client_from_config,
    extract_code_from_redirect_url,
    soundcloud_app_setup_instructions,
)
from soundcloud_api.client import SoundCloudClient, mask_token
from soundcloud_api.errors import RequestFailed
from utils.logger import log_info, log_warning, log_error, log_success


def _soundcloud_setup_help(config: dict) -> None:
    creds = check_soundcloud_credentials(config)
    log_info("\n" + "=" * 72)
    log_info("SOUNDCLOUD APP SETUP")
    log_info("=" * 72)
    log_info(soundcloud_app_setup_instructions(redirect_uri=creds.get("redirect_uri") or ""))
    log_info("")
    log_info("Current config status:")
    log_info(f"- soundcloud_client_id: {creds.get('client_id') or 'NOT SET'}")
    log_info(f"- soundcloud_client_secret: {'SET' if creds.get('has_client_secret') else 'NOT SET'}")
    log_info(f"- soundcloud_redirect_uri: {creds.get('redirect_uri') or 'NOT SET'}")
    log_info("")
    if not creds.get("ok"):
        log_warning(creds.get("message") or "SoundCloud credentials are incomplete.")
    else:
        log_info(creds.get("message") or "SoundCloud credentials look OK.")
    log_info("=" * 72 + "\n")


def _ensure_client(config: dict, client: Optional[SoundCloudClient]) -> Optional[SoundCloudClient]:
    if client is not None:
        return client
    try:
        return client_from_config(config)
    except ValueError as e:
        log_warning(str(e))
        _soundcloud_setup_help(config)
        return None


def session_status(client: Optional[SoundCloudClient]) -> str:
    if client is None or not client.access_token:
        return "Not connected."
    return f"Connected | Access token: {mask_token(client.access_token)}"


def _soundcloud_authorize(client: SoundCloudClient) -> None:
    """Show the authorize URL and exchange the code pasted back from the redirect."""
    auth_url = client.get_authorize_url()

    log_info("\n" + "=" * 72)
    log_info("SOUNDCLOUD AUTHORIZATION")
    log_info("=" * 72)
    log_info("1) A browser window will open (or you can copy/paste the URL).")
    log_info("2) After approving, SoundCloud will redirect you to your redirect_uri.")
    log_info("3) Copy the FULL redirect URL from the browser and paste it back here.")
    log_info("")
    log_info(f"Authorize URL:\n{auth_url}")
    log_info("=" * 72)

    if questionary.confirm("Open the authorize URL in your default browser?", default=True).ask():
        if not webbrowser.open(auth_url):
            log_warning("Could not open a browser. Copy the URL above instead.")

    pasted = questionary.text(
        "Paste the full redirect URL (preferred) OR just the code=... value:"
    ).ask()
    pasted = (pasted or "").strip()
    if not pasted:
        log_warning("No redirect URL / code provided. Cancelling authorization.")
        return

    if "http://" in pasted or "https://" in pasted:
        parsed = extract_code_from_redirect_url(pasted)
        if parsed.get("error"):
            detail = parsed.get("error_description") or parsed.get("error")
            log_error(f"SoundCloud returned an error: {detail}")
            return
        code = parsed.get("code", "")
    else:
        # Assume user pasted the raw code.
        code = pasted

    if not code:
        log_error("Could not find an authorization code. Paste the full redirect URL that contains ?code=...")
        return

    try:
        response = client.get_access_token(code)
    except RequestFailed as e:
        log_error(f"SoundCloud authorization failed: {e.message}")
        return

    if client.access_token:
        log_success("SoundCloud authorization successful.")
    else:
        log_warning(f"SoundCloud did not return an access token: {response}")


def _soundcloud_login(client: SoundCloudClient) -> None:
    """Log in with a SoundCloud username and password."""
    username = (questionary.text("SoundCloud username or email:").ask() or "").strip()
    if not username:
        log_warning("No username provided. Cancelling login.")
        return

    password = questionary.password("SoundCloud password:").ask() or ""
    if not password:
        log_warning("No password provided. Cancelling login.")
        return

    try:
        response = client.login_using_credentials(username, password)
    except RequestFailed as e:
        log_error(f"SoundCloud login failed: {e.message}")
        return

    if client.access_token:
        log_success(f"Logged in to SoundCloud as {username}.")
    else:
        log_warning(f"SoundCloud did not return an access token: {response}")


def _soundcloud_whoami(client: SoundCloudClient) -> None:
    if not client.access_token:
        log_warning("Not connected. Authorize or log in first.")
        return

    try:
        me = client.me()
    except RequestFailed as e:
        log_error(f"Could not fetch SoundCloud profile: {e.message}")
        return

    if isinstance(me, dict):
        log_info(f"Username: {me.get('username', '?')} | Permalink: {me.get('permalink_url', '?')}")
        log_info(f"Tracks: {me.get('track_count', 0)} | Followers: {me.get('followers_count', 0)}")
    else:
        log_info(str(me))


def connect_menu(config: dict, client: Optional[SoundCloudClient] = None) -> Optional[SoundCloudClient]:
    """
    Display the SoundCloud connect menu.
    Returns the client holding the current session (None if config is incomplete).
    """
    client = _ensure_client(config, client)
    if client is None:
        return None

    while True:
        log_info("")
        log_info("SoundCloud status: " + session_status(client))

        choice = questionary.select(
            "☁️ SoundCloud — What would you like to do?",
            choices=[
                "Authorize in browser (OAuth code)",
                "Log in with username & password",
                "Show my profile",
                "Show authorize URL only",
                "SoundCloud app setup help",
                "Back",
            ],
        ).ask()

        if choice == "Authorize in browser (OAuth code)":
            _soundcloud_authorize(client)

        elif choice == "Log in with username & password":
            _soundcloud_login(client)

        elif choice == "Show my profile":
            _soundcloud_whoami(client)

        elif choice == "Show authorize URL only":
            log_info(client.get_authorize_url())

        elif choice == "SoundCloud app setup help":
            _soundcloud_setup_help(config)

        elif choice == "Back" or choice is None:
            break

    return client
