"""Client handles for the Hue Bridge API.

Two handle types exist:

- UnauthenticatedClient: transport only. Can read the bridge config and run
  the registration bootstrap. Resource calls raise NotRegistered.
- BridgeClient: transport plus a Credential. Every CLIP v2 request carries
  the hue-application-key header.

Both are immutable once built and can be shared between threads for
read-only use.
"""

import requests

from core.errors import (
    InvalidResponse,
    NotFound,
    NotRegistered,
    ServerError,
    TransportError,
)
from core.transport import ClientConfig, build_session
from models.bridge import BridgeInfo
from models.types import Credential

APPLICATION_KEY_HEADER = 'hue-application-key'
CLIP_V2_PREFIX = '/clip/v2'
CONFIG_ENDPOINT = '/api/0/config'


def collect_errors(body: dict) -> list[str]:
    """Return every error description found in a response envelope.

    CLIP v2 replies use an `errors` list; some firmware (and older docs) use
    `error`, sometimes as a single object. Both are accepted.
    """
    descriptions = []
    for key in ('errors', 'error'):
        value = body.get(key)
        if not value:
            continue
        if isinstance(value, dict):
            value = [value]
        if not isinstance(value, list):
            raise InvalidResponse(f"Unexpected '{key}' member in response: {value!r}")
        for item in value:
            if isinstance(item, dict):
                descriptions.append(item.get('description', 'Unknown error'))
            else:
                descriptions.append(str(item))
    return descriptions


def envelope_data(body: dict) -> list[dict]:
    """Extract the data items from an envelope, errors taking precedence."""
    if not isinstance(body, dict):
        raise InvalidResponse(f"Unexpected response envelope: {body!r}")

    errors = collect_errors(body)
    if errors:
        raise ServerError(errors[0], errors)

    data = body.get('data') or []
    if not isinstance(data, list):
        raise InvalidResponse(f"Unexpected 'data' member in response: {data!r}")
    return data


class _Client:
    """Shared transport plumbing for both handle types."""

    authenticated = False

    def __init__(self, config: ClientConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session if session is not None else build_session(config)

    def _send(self, method: str, path: str, payload: dict | list | None = None,
              headers: dict | None = None) -> requests.Response:
        url = self.config.url(path)
        try:
            return self.session.request(method, url, json=payload, headers=headers,
                                        timeout=self.config.timeout)
        except requests.exceptions.SSLError as e:
            raise TransportError(f"TLS error talking to bridge at {self.config.base_url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Connection error talking to bridge at {self.config.base_url}: {e}") from e

    @staticmethod
    def _decode(response: requests.Response):
        """Decode a JSON body, failing on HTTP errors first."""
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise TransportError(f"Bridge returned HTTP {response.status_code}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponse(f"Bridge returned invalid JSON: {e}") from e

    def fetch_bridge_info(self) -> BridgeInfo:
        """Read the bridge's unauthenticated config (name, SW version, ...)."""
        response = self._send('GET', CONFIG_ENDPOINT)
        return BridgeInfo.from_dict(self._decode(response))


class UnauthenticatedClient(_Client):
    """Handle without an application key.

    Only bridge config reads and registration are allowed. Use register()
    to obtain a BridgeClient.
    """

    def request(self, method: str, path: str, payload: dict | None = None) -> dict:
        raise NotRegistered()

    def register(self, app_name: str, token: str | None = None) -> 'BridgeClient':
        """Run the registration bootstrap and return an authenticated client.

        With `token`, the existing application key is accepted without
        pairing. Without it, the bridge's link button must have been pressed
        within the last 30 seconds or PairingRejected is raised.
        """
        from core.auth import Bootstrap

        return Bootstrap(self).run(app_name, token=token)


class BridgeClient(_Client):
    """Authenticated handle for CLIP v2 resource requests."""

    authenticated = True

    def __init__(self, config: ClientConfig, credential: Credential,
                 session: requests.Session | None = None):
        if credential is None or not credential.token:
            raise NotRegistered("Bridge client requires a non-empty application key")
        super().__init__(config, session)
        self.credential = credential

    @property
    def app_name(self) -> str:
        return self.credential.app_name

    @property
    def token(self) -> str:
        return self.credential.token

    def request(self, method: str, path: str, payload: dict | None = None) -> dict:
        """Make a request to the CLIP v2 API and return the response envelope.

        Args:
            method: HTTP method (GET, PUT, POST, DELETE)
            path: Path below /clip/v2, e.g. /resource/light
            payload: JSON body for PUT/POST

        Returns:
            The decoded {data, errors} envelope

        Raises:
            NotFound: bridge answered 404
            ServerError: envelope carried one or more errors
            TransportError: connection, TLS or HTTP failure without an envelope
        """
        if not self.credential.token:
            raise NotRegistered()

        headers = {APPLICATION_KEY_HEADER: self.credential.token}
        response = self._send(method, f"{CLIP_V2_PREFIX}{path}", payload, headers=headers)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code == 404:
            errors = collect_errors(body) if isinstance(body, dict) else []
            raise NotFound(path.rsplit('/', 1)[-1], errors[0] if errors else None)

        # Envelope errors take precedence over the HTTP status
        if isinstance(body, dict):
            errors = collect_errors(body)
            if errors:
                raise ServerError(errors[0], errors)

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise TransportError(f"Bridge returned HTTP {response.status_code}: {e}") from e

        if not isinstance(body, dict):
            raise InvalidResponse(f"Unexpected response from {path}: {response.text[:200]}")
        return body


def build_client(config: ClientConfig, credential: Credential | None = None,
                 session: requests.Session | None = None) -> BridgeClient | UnauthenticatedClient:
    """Build a client handle.

    Without a credential the handle is unauthenticated and only registration
    is possible.
    """
    if credential is None:
        return UnauthenticatedClient(config, session)
    return BridgeClient(config, credential, session)
