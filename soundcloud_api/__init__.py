"""SoundCloud OAuth + API client.

Used by menus/connect_menu.py for the interactive connect / login flow.
"""

from .auth import client_from_config, extract_code_from_redirect_url
from .client import ClientCredentials, SoundCloudClient
from .errors import RequestFailed, SoundCloudError

__all__ = [
    "ClientCredentials",
    "SoundCloudClient",
    "RequestFailed",
    "SoundCloudError",
    "client_from_config",
    "extract_code_from_redirect_url",
]
