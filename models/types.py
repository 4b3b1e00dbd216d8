"""Type definitions for the Hue bridge client.

This module provides the credential type held by an authenticated client and
TypedDict definitions for data persisted to the user config file.
"""

from dataclasses import dataclass
from typing import TypedDict


@dataclass(frozen=True)
class Credential:
    """Application identity issued by the bridge.

    Either supplied by the caller (an application registered earlier) or
    captured from a successful pairing exchange.
    """
    app_name: str
    token: str
    client_key: str | None = None


class StoredCredentials(TypedDict, total=False):
    """Contents of the user config file (~/.hue_bridge/config.json)."""
    bridge_url: str
    app_name: str
    api_token: str
    client_key: str
    ca_pem_path: str
    tls_policy: str
