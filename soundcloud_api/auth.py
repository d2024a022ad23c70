import logging
import urllib.parse
from typing import Any, Dict, Optional

import httpx

from .client import SoundCloudClient

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"


def _config_str(config: Dict[str, Any], key: str) -> str:
    return str((config or {}).get(key, "") or "").strip()


def check_soundcloud_credentials(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate SoundCloud app config fields and return a structured status dict.

    The client secret is reported only as present/missing.
    """

    client_id = _config_str(config, "soundcloud_client_id")
    client_secret = _config_str(config, "soundcloud_client_secret")
    redirect_uri = _config_str(config, "soundcloud_redirect_uri")

    missing = []
    if not client_id:
        missing.append("soundcloud_client_id")
    if not client_secret:
        missing.append("soundcloud_client_secret")
    if not redirect_uri:
        missing.append("soundcloud_redirect_uri")

    status = {
        "ok": not missing,
        "client_id": client_id,
        "has_client_secret": bool(client_secret),
        "redirect_uri": redirect_uri,
        "missing": missing,
    }

    if missing:
        status["message"] = (
            f"Missing {', '.join(missing)} in config.json.\n"
            "See soundcloud_app_setup_instructions() for where to find these values."
        )
    else:
        status["message"] = "SoundCloud credentials look OK."

    return status


def soundcloud_app_setup_instructions(*, redirect_uri: str = DEFAULT_REDIRECT_URI) -> str:
    """Return user-facing setup instructions for registering a SoundCloud app."""

    redirect_uri = str(redirect_uri or "").strip() or DEFAULT_REDIRECT_URI
    return (
        "SoundCloud app setup:\n"
        "1) Go to https://soundcloud.com/you/apps\n"
        "2) Register a new app (or open an existing one)\n"
        f"3) Set its Redirect URI to: {redirect_uri}\n"
        "4) Copy the Client ID into config.json as soundcloud_client_id\n"
        "5) Copy the Client Secret into config.json as soundcloud_client_secret\n\n"
        "Notes:\n"
        "- The Redirect URI must match *exactly* what the app is registered with.\n"
        "- Keep the client secret out of version control.\n"
    )


def client_from_config(config: Dict[str, Any], *, http_client: Optional[httpx.Client] = None) -> SoundCloudClient:
    """Build a SoundCloudClient from config.json values."""

    status = check_soundcloud_credentials(config)
    if not status["ok"]:
        raise ValueError(status["message"])

    logger.debug("Creating SoundCloud client for client_id=%s", status["client_id"])
    return SoundCloudClient(
        status["client_id"],
        _config_str(config, "soundcloud_client_secret"),
        status["redirect_uri"],
        http_client=http_client,
    )


def extract_code_from_redirect_url(redirect_url: str) -> Dict[str, str]:
    """Parse a redirect URL and return {"code": ..., "state": ...} (missing keys omitted).

    OAuth errors show up as "error" / "error_description".
    """

    parsed = urllib.parse.urlparse(str(redirect_url or "").strip())
    qs = urllib.parse.parse_qs(parsed.query)
    out: Dict[str, str] = {}
    for key in ("code", "state", "error", "error_description"):
        if qs.get(key):
            out[key] = str(qs[key][0])
    return out
