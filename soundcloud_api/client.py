import logging
import urllib.parse
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import httpx

from .errors import RequestFailed

logger = logging.getLogger(__name__)

SOUNDCLOUD_HOST = "soundcloud.com"
CONNECT_PATH = "connect"
TOKEN_PATH = "oauth2/token"


@dataclass(frozen=True)
class ClientCredentials:
    """Application credentials registered with SoundCloud."""

    client_id: str
    client_secret: str
    redirect_uri: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
        }


def build_request_params(
    credentials: ClientCredentials,
    fields: Optional[Dict[str, Any]] = None,
    *,
    exclude: Iterable[str] = (),
) -> Dict[str, str]:
    """Merge call fields over the credentials, then drop the excluded keys.

    Key order is client_id, client_secret, redirect_uri, then new fields.
    A field that overwrites a credential keeps the credential's position.
    """

    params = credentials.to_dict()
    params.update({str(k): str(v) for k, v in (fields or {}).items()})
    for key in exclude:
        params.pop(key, None)
    return params


def build_request_url(path: str, params: Optional[Dict[str, str]] = None) -> str:
    """Return the SoundCloud URL for ``path``.

    ``connect`` paths live on the bare web host and carry their parameters in
    the query string; everything else goes to the ``api.`` host with no query.
    """

    is_connect = CONNECT_PATH in path
    url = "https://"
    url += "" if is_connect else "api."
    url += f"{SOUNDCLOUD_HOST}/{path}"

    if is_connect and params:
        url = f"{url}?{urllib.parse.urlencode(params)}"

    return url


def build_api_url(path: str) -> str:
    """Return the ``api.`` host URL for a resource path, with no query string."""

    return f"https://api.{SOUNDCLOUD_HOST}/{path.lstrip('/')}"


def mask_token(token: Optional[str]) -> str:
    if not token:
        return "<none>"
    token = str(token)
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}...{token[-4:]}"


class SoundCloudClient:
    """Thin SoundCloud OAuth + API client.

    One instance holds one session: the access token obtained by
    ``login_using_credentials`` or ``get_access_token`` is sent as
    ``Authorization: OAuth <token>`` on every later call. Instances are not
    meant to be shared between threads.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        *,
        http_client: Optional[httpx.Client] = None,
    ):
        self.credentials = ClientCredentials(
            client_id=str(client_id),
            client_secret=str(client_secret),
            redirect_uri=str(redirect_uri),
        )

        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=30.0, follow_redirects=False)
        self.headers: Dict[str, str] = {"Accept": "application/json"}

        self._access_token: Optional[str] = None
        self.request_params: Dict[str, str] = {}
        self.request_url: str = ""

    # -----------------
    # Session
    # -----------------

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    def set_access_token(self, token: str) -> None:
        self._access_token = token
        self.headers["Authorization"] = f"OAuth {token}"

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "SoundCloudClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -----------------
    # OAuth
    # -----------------

    def get_authorize_url(self) -> str:
        """Return the browser URL where the user grants access to this app."""

        self._build_request(
            {
                "scope": "non-expiring",
                "display": "popup",
                "response_type": "code",
            },
            exclude=("client_secret",),
        )
        self._build_request_url(CONNECT_PATH)
        return self.request_url

    def login_using_credentials(self, username: str, password: str) -> Dict[str, Any]:
        """Exchange a SoundCloud username/password for an access token."""

        self._build_request(
            {
                "username": username,
                "password": password,
                "grant_type": "password",
            },
            exclude=("redirect_uri",),
        )
        self._build_request_url(TOKEN_PATH)
        return self._request_token()

    def get_access_token(self, code: str, grant_type: str = "authorization_code") -> Dict[str, Any]:
        """Exchange the ``code`` from the OAuth redirect for an access token."""

        self._build_request(
            {
                "grant_type": grant_type,
                "code": code,
            }
        )
        self._build_request_url(TOKEN_PATH)
        return self._request_token()

    # -----------------
    # Resources
    # -----------------

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET an API resource such as ``me`` or ``tracks/123``."""

        self._build_request(params, exclude=("client_secret", "redirect_uri"))
        self.request_url = build_api_url(path)
        return self._do_request("GET")

    def me(self) -> Any:
        return self.get("me")

    # -----------------
    # HTTP helpers
    # -----------------

    def _build_request(self, fields: Optional[Dict[str, Any]], *, exclude: Iterable[str] = ()) -> None:
        self.request_params = build_request_params(self.credentials, fields, exclude=exclude)

    def _build_request_url(self, path: str) -> None:
        self.request_url = build_request_url(path, self.request_params)

    def _request_token(self) -> Dict[str, Any]:
        response = self._do_request("POST")

        token = response.get("access_token") if isinstance(response, dict) else None
        if token:
            self.set_access_token(str(token))
            logger.info("SoundCloud access token acquired (%s)", mask_token(token))
        else:
            logger.warning("SoundCloud token response did not include an access_token")

        return response

    def _do_request(self, method: str) -> Any:
        """Send the pending request and return the parsed JSON body.

        GET sends the parameters as a query string, anything else as a form
        body. Every failure is raised as RequestFailed.
        """

        method = method.upper()
        body_param = "params" if method == "GET" else "data"
        options: Dict[str, Any] = {
            body_param: dict(self.request_params),
            "headers": dict(self.headers),
        }

        logger.debug("SoundCloud %s %s", method, self.request_url)

        try:
            resp = self._http.request(method, self.request_url, **options)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug("SoundCloud %s %s failed: %s", method, self.request_url, e)
            raise RequestFailed(str(e)) from e

        if not resp.content:
            return {}

        try:
            return resp.json()
        except ValueError as e:
            raise RequestFailed(f"SoundCloud response was not JSON (HTTP {resp.status_code}): {resp.text}") from e
