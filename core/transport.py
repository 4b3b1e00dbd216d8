"""Transport configuration for talking to a Hue bridge.

Holds the bridge URL and TLS trust settings, and builds the requests.Session
every client handle uses. Hue bridges present a certificate signed by the
Signify root CA whose CN is the bridge id rather than the host name, so two
knobs are exposed:

- trust_material: PEM bytes of the root CA to trust instead of the default
  bundle
- tls_policy: ENFORCE_HOSTNAME (default) or ACCEPT_ANY_HOSTNAME, an explicit
  opt-in for bridges reached by IP or local DNS name
"""

import ssl
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from requests.certs import where as default_ca_bundle

from core.errors import ConfigurationError, InvalidCertificate

ENFORCE_HOSTNAME = 'enforce-hostname'
ACCEPT_ANY_HOSTNAME = 'accept-any-hostname'
TLS_POLICIES = (ENFORCE_HOSTNAME, ACCEPT_ANY_HOSTNAME)


def load_ca_pem(path: str | Path) -> bytes:
    """Read a PEM encoded CA certificate from disk."""
    try:
        return Path(path).expanduser().read_bytes()
    except OSError as e:
        raise ConfigurationError(f"Failed to read CA certificate {path}: {e}") from e


def create_ssl_context(trust_material: bytes | None = None,
                       tls_policy: str = ENFORCE_HOSTNAME) -> ssl.SSLContext:
    """Build an SSL context trusting `trust_material` (or the default CA bundle).

    Raises:
        InvalidCertificate: if trust_material is not PEM certificate data
    """
    if trust_material is None:
        context = ssl.create_default_context(cafile=default_ca_bundle())
    else:
        try:
            pem = trust_material.decode('ascii')
        except (UnicodeDecodeError, AttributeError) as e:
            raise InvalidCertificate(f"CA certificate is not PEM data: {e}") from e

        # load_verify_locations() treats anything without a PEM header as DER
        if '-----BEGIN CERTIFICATE-----' not in pem:
            raise InvalidCertificate("CA certificate is not PEM data: no BEGIN CERTIFICATE block")

        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        try:
            context.load_verify_locations(cadata=pem)
        except (ssl.SSLError, ValueError) as e:
            raise InvalidCertificate(f"Failed to parse CA certificate: {e}") from e

    if tls_policy == ACCEPT_ANY_HOSTNAME:
        context.check_hostname = False

    return context


class BridgeTLSAdapter(HTTPAdapter):
    """HTTPAdapter that verifies against a custom SSL context."""

    def __init__(self, ssl_context: ssl.SSLContext, check_hostname: bool = True, **kwargs):
        # HTTPAdapter.__init__ calls init_poolmanager(), so set these first
        self.ssl_context = ssl_context
        self.check_hostname = check_hostname
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        kwargs['ssl_context'] = self.ssl_context
        if not self.check_hostname:
            # urllib3 re-checks the hostname itself unless told not to
            kwargs['assert_hostname'] = False
        return super().init_poolmanager(*args, **kwargs)


@dataclass(frozen=True)
class ClientConfig:
    """Bridge URL and TLS trust policy. Validated on construction.

    Args:
        base_url: Bridge URL, e.g. https://192.168.1.20 (trailing slash optional)
        trust_material: PEM encoded root CA certificate bytes
        tls_policy: ENFORCE_HOSTNAME or ACCEPT_ANY_HOSTNAME
        timeout: Per-request timeout in seconds, None for no timeout
    """
    base_url: str
    trust_material: bytes | None = None
    tls_policy: str = ENFORCE_HOSTNAME
    timeout: float | None = None

    def __post_init__(self):
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ConfigurationError("Bridge URL is required")

        base_url = self.base_url.strip().rstrip('/')
        parsed = urlparse(base_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ConfigurationError(f"Invalid bridge URL: '{self.base_url}'. Expected http(s)://host")
        object.__setattr__(self, 'base_url', base_url)

        if self.tls_policy not in TLS_POLICIES:
            raise ConfigurationError(f"Invalid TLS policy: '{self.tls_policy}'. Expected one of {TLS_POLICIES}")

        if self.trust_material is not None:
            if parsed.scheme != 'https':
                raise ConfigurationError("A CA certificate requires an https:// bridge URL")
            # Parse now so a bad certificate fails at configuration time
            create_ssl_context(self.trust_material, self.tls_policy)

    @classmethod
    def from_options(cls, base_url: str, ca_pem_path: str | Path | None = None,
                     accept_any_hostname: bool = False, timeout: float | None = None) -> 'ClientConfig':
        """Build from user-facing options (CA file path, hostname toggle)."""
        trust_material = load_ca_pem(ca_pem_path) if ca_pem_path else None
        policy = ACCEPT_ANY_HOSTNAME if accept_any_hostname else ENFORCE_HOSTNAME
        return cls(base_url=base_url, trust_material=trust_material, tls_policy=policy, timeout=timeout)

    def url(self, path: str) -> str:
        """Join an endpoint path onto the bridge URL."""
        return f"{self.base_url}/{path.lstrip('/')}"


def build_session(config: ClientConfig) -> requests.Session:
    """Create the requests.Session used for every call to the bridge."""
    session = requests.Session()

    if config.trust_material is not None or config.tls_policy == ACCEPT_ANY_HOSTNAME:
        context = create_ssl_context(config.trust_material, config.tls_policy)
        adapter = BridgeTLSAdapter(context, check_hostname=config.tls_policy == ENFORCE_HOSTNAME)
        session.mount('https://', adapter)

    return session
