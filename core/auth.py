"""
Registration bootstrap for the Hue Bridge.

Takes an unauthenticated client through three states:

    unchecked -> version_verified -> ready

The version check reads the bridge config and rejects firmware older than
MINIMUM_BRIDGE_VERSION. From version_verified, either an existing application
key is accepted as-is, or a pairing request is sent and the key the bridge
issues is captured. Pairing only succeeds within 30 seconds of the link
button being pressed; the bootstrap never retries on its own.
"""

from core.client import BridgeClient, UnauthenticatedClient
from core.errors import (
    ConfigurationError,
    InvalidResponse,
    NotRegistered,
    PairingRejected,
    UnsupportedBridgeVersion,
)
from core.version import MINIMUM_BRIDGE_VERSION, parse_version
from models.bridge import BridgeInfo
from models.types import Credential

UNCHECKED = 'unchecked'
VERSION_VERIFIED = 'version_verified'
READY = 'ready'

PAIRING_ENDPOINT = '/api'

# Bridge error type for "link button not pressed"
LINK_BUTTON_NOT_PRESSED = 101

# The bridge rejects longer devicetype values
MAX_APP_NAME_LENGTH = 40


def validate_app_name(app_name: str) -> str:
    """Check an application name is usable as a pairing devicetype."""
    if not app_name or not isinstance(app_name, str) or not app_name.strip():
        raise ConfigurationError("Application name is required")
    if len(app_name) > MAX_APP_NAME_LENGTH:
        raise ConfigurationError(f"Application name '{app_name}' is longer than {MAX_APP_NAME_LENGTH} characters")
    return app_name


def parse_pairing_response(app_name: str, body) -> Credential:
    """Turn the bridge's pairing reply into a Credential.

    The reply is a list of {"success": {...}} / {"error": {...}} objects.
    Every element is inspected and the first error found wins.

    Raises:
        PairingRejected: any element carries an error
        InvalidResponse: reply is not a list or has no usable success entry
    """
    if not isinstance(body, list) or not body:
        raise InvalidResponse(f"Unexpected pairing response: {body!r}")

    for item in body:
        if isinstance(item, dict) and item.get('error') is not None:
            error = item['error'] if isinstance(item['error'], dict) else {}
            raise PairingRejected(error.get('description', 'Unknown error'), error.get('type'))

    for item in body:
        success = item.get('success') if isinstance(item, dict) else None
        if isinstance(success, dict) and success.get('username'):
            return Credential(
                app_name=app_name,
                token=success['username'],
                client_key=success.get('clientkey'),
            )

    raise InvalidResponse(f"Pairing response has no username: {body!r}")


class Bootstrap:
    """Stateful registration handshake for one unauthenticated client."""

    def __init__(self, client: UnauthenticatedClient, minimum_version: int = MINIMUM_BRIDGE_VERSION):
        self.client = client
        self.minimum_version = minimum_version
        self.state = UNCHECKED
        self.bridge_info: BridgeInfo | None = None
        self.credential: Credential | None = None

    def verify_version(self) -> BridgeInfo:
        """Fetch the bridge config and check its firmware version.

        Raises:
            UnsupportedBridgeVersion: firmware older than minimum_version
            InvalidVersionFormat: swversion is not numeric
        """
        info = self.client.fetch_bridge_info()
        version = parse_version(info.firmware_version)
        if version < self.minimum_version:
            raise UnsupportedBridgeVersion(version, self.minimum_version)

        self.bridge_info = info
        self.state = VERSION_VERIFIED
        return info

    def _require_verified(self):
        if self.state == UNCHECKED:
            raise ConfigurationError("Bridge version not verified; call verify_version() first")

    def use_token(self, app_name: str, token: str) -> Credential:
        """Accept an application key registered earlier. No request is made."""
        self._require_verified()
        if not token:
            raise ConfigurationError("Application key must not be empty")

        self.credential = Credential(app_name=app_name, token=token)
        self.state = READY
        return self.credential

    def pair(self, app_name: str) -> Credential:
        """Ask the bridge for a new application key.

        Raises:
            PairingRejected: bridge refused, typically because the link
                button was not pressed. State stays version_verified.
        """
        self._require_verified()
        validate_app_name(app_name)

        payload = {'devicetype': app_name, 'generateclientkey': True}
        response = self.client._send('POST', PAIRING_ENDPOINT, payload)
        credential = parse_pairing_response(app_name, self.client._decode(response))

        self.credential = credential
        self.state = READY
        return credential

    def authenticated_client(self) -> BridgeClient:
        """Return the authenticated handle. Only valid once ready."""
        if self.state != READY or self.credential is None:
            raise NotRegistered(f"Bootstrap is {self.state}, not {READY}")
        return BridgeClient(self.client.config, self.credential, session=self.client.session)

    def run(self, app_name: str, token: str | None = None) -> BridgeClient:
        """Version check, then accept `token` or pair, then build the client."""
        if self.state == UNCHECKED:
            self.verify_version()

        if token:
            self.use_token(app_name, token)
        else:
            self.pair(app_name)

        return self.authenticated_client()
