"""Core functionality for the Hue bridge client.

This package contains:
- transport: ClientConfig and TLS session setup
- client: UnauthenticatedClient and BridgeClient handles
- auth: Registration bootstrap (version check, pairing)
- lights: LightClient for the light resource
- version: Bridge firmware version gate
- config: Settings resolution and credential persistence
- errors: Error types
"""
