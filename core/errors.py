"""Error types raised by the Hue bridge client.

Every failure surfaces as a subclass of HueBridgeError so callers can catch
the whole family in one place, or pick out the cases they can act on
(PairingRejected after a button press, NotFound for a stale light id).
"""


class HueBridgeError(Exception):
    """Base class for all bridge client errors."""


class ConfigurationError(HueBridgeError):
    """Bad client configuration (URL, CA file, missing app name...)."""


class InvalidCertificate(ConfigurationError):
    """Supplied trust material is not a usable PEM certificate."""


class UnsupportedBridgeVersion(HueBridgeError):
    """Bridge firmware is older than the minimum this client supports.

    Not retryable: the bridge needs a firmware update.
    """

    def __init__(self, reported: int, minimum: int):
        self.reported = reported
        self.minimum = minimum
        super().__init__(f"Hue Bridge SW version {reported} is smaller than {minimum}")


class InvalidVersionFormat(HueBridgeError):
    """Bridge reported a firmware version that is not an unsigned integer."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid bridge SW version: {value!r}")


class PairingRejected(HueBridgeError):
    """Bridge refused the pairing request.

    Usually error type 101, "link button not pressed". The caller should ask
    the user to press the button and run the bootstrap again.
    """

    def __init__(self, description: str, error_type: int | None = None):
        self.description = description
        self.error_type = error_type
        super().__init__(description)


class NotRegistered(HueBridgeError):
    """Resource call attempted without an application key."""

    def __init__(self, message: str = "Client is not registered with the bridge"):
        super().__init__(message)


class NotFound(HueBridgeError):
    """Requested resource does not exist on the bridge."""

    def __init__(self, resource_id: str, description: str | None = None):
        self.resource_id = resource_id
        self.description = description
        super().__init__(description or f"Resource '{resource_id}' not found")


class ServerError(HueBridgeError):
    """Bridge reported an application-level error in a response envelope.

    `description` is the first reported error; `errors` holds every error
    description found in the envelope.
    """

    def __init__(self, description: str, errors: list[str] | None = None):
        self.description = description
        self.errors = errors if errors is not None else [description]
        super().__init__(description)


class TransportError(HueBridgeError):
    """Network or TLS failure talking to the bridge."""


class InvalidResponse(TransportError):
    """Bridge reply could not be decoded or had an unexpected shape."""
