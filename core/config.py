"""Configuration management for the Hue bridge CLI.

This module handles:
- Resolving settings from command line options, environment variables and
  the user config file (in that priority order)
- Saving credentials after a successful registration
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path

import click

from core.transport import ACCEPT_ANY_HOSTNAME, ClientConfig
from models.types import Credential, StoredCredentials

# User configuration file location
USER_CONFIG_FILE = Path.home() / '.hue_bridge' / 'config.json'

DEFAULT_APP_NAME = 'hue_bridge#cli'

ENV_BRIDGE_URL = 'HUE_BRIDGE_URL'
ENV_CA_PEM_PATH = 'HUE_BRIDGE_PEM_PATH'
ENV_API_TOKEN = 'HUE_BRIDGE_REGISTERED_USERNAME'
ENV_APP_NAME = 'HUE_BRIDGE_APP_NAME'
ENV_ACCEPT_ANY_HOSTNAME = 'HUE_BRIDGE_ACCEPT_ANY_HOSTNAME'

TRUTHY = ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class Settings:
    """Resolved connection settings."""
    bridge_url: str | None = None
    ca_pem_path: str | None = None
    accept_any_hostname: bool = False
    app_name: str = DEFAULT_APP_NAME
    api_token: str | None = None
    client_key: str | None = None

    def client_config(self) -> ClientConfig:
        """Build the transport config. Raises ConfigurationError if invalid."""
        return ClientConfig.from_options(
            self.bridge_url,
            ca_pem_path=self.ca_pem_path,
            accept_any_hostname=self.accept_any_hostname,
        )

    def credential(self) -> Credential | None:
        """Credential for an already registered app, if a token is known."""
        if not self.api_token:
            return None
        return Credential(app_name=self.app_name, token=self.api_token, client_key=self.client_key)


def load_user_config(config_file: Path | None = None) -> StoredCredentials:
    """Load saved settings from the user config file.

    Returns:
        Dict of stored values, empty if the file is missing or unreadable
    """
    config_file = config_file or USER_CONFIG_FILE
    try:
        if not config_file.exists():
            return {}

        with open(config_file, 'r') as f:
            config = json.load(f)

        if not isinstance(config, dict):
            click.echo(f"Warning: Ignoring {config_file}: expected a JSON object", err=True)
            return {}

        # Only keep non-empty string values
        return {k: v for k, v in config.items() if isinstance(v, str) and v}

    except (json.JSONDecodeError, IOError) as e:
        click.echo(f"Warning: Failed to load config from {config_file}: {e}", err=True)
        return {}


def save_credentials(bridge_url: str, credential: Credential, ca_pem_path: str | None = None,
                     tls_policy: str | None = None,
                     config_file: Path | None = None) -> bool:
    """Save bridge URL and application credentials to the user config file.

    Creates the config directory if it doesn't exist and sets secure
    file permissions (600 - user read/write only).

    Returns:
        True if saved successfully, False otherwise
    """
    config_file = config_file or USER_CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)

        # Keep unrelated keys from an existing file
        config = {}
        if config_file.exists():
            try:
                with open(config_file, 'r') as f:
                    config = json.load(f)
            except (json.JSONDecodeError, IOError):
                config = {}
            if not isinstance(config, dict):
                config = {}

        config['bridge_url'] = bridge_url
        config['app_name'] = credential.app_name
        config['api_token'] = credential.token
        if credential.client_key:
            config['client_key'] = credential.client_key
        if tls_policy:
            config['tls_policy'] = tls_policy
        if ca_pem_path:
            config['ca_pem_path'] = str(ca_pem_path)

        with open(config_file, 'w') as f:
            json.dump(config, f, indent=2)

        os.chmod(config_file, 0o600)

        return True

    except (IOError, OSError) as e:
        click.echo(f"Error: Failed to save config to {config_file}: {e}", err=True)
        return False


def resolve_settings(bridge_url: str | None = None, ca_pem_path: str | None = None,
                     accept_any_hostname: bool = False, app_name: str | None = None,
                     api_token: str | None = None, environ: dict | None = None,
                     config_file: Path | None = None) -> Settings:
    """Resolve settings using the priority system.

    Priority order for each value:
    1. Explicit argument (command line option)
    2. Environment variable
    3. User config file (~/.hue_bridge/config.json)
    4. Default
    """
    environ = os.environ if environ is None else environ
    stored = load_user_config(config_file)

    def pick(explicit, env_name, stored_key):
        if explicit:
            return explicit
        if environ.get(env_name):
            return environ[env_name]
        return stored.get(stored_key)

    if not accept_any_hostname:
        accept_any_hostname = (environ.get(ENV_ACCEPT_ANY_HOSTNAME, '').strip().lower() in TRUTHY
                               or stored.get('tls_policy') == ACCEPT_ANY_HOSTNAME)

    resolved_url = pick(bridge_url, ENV_BRIDGE_URL, 'bridge_url')
    resolved_token = pick(api_token, ENV_API_TOKEN, 'api_token')

    # A stored client key only belongs to the stored token
    client_key = stored.get('client_key') if resolved_token == stored.get('api_token') else None

    return Settings(
        bridge_url=resolved_url,
        ca_pem_path=pick(ca_pem_path, ENV_CA_PEM_PATH, 'ca_pem_path'),
        accept_any_hostname=accept_any_hostname,
        app_name=pick(app_name, ENV_APP_NAME, 'app_name') or DEFAULT_APP_NAME,
        api_token=resolved_token,
        client_key=client_key,
    )
