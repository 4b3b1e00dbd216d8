"""
Setup commands for the Hue bridge CLI.

Contains the Click group class with typo suggestions, plus the commands that
work without an application key: register, check-version and setup.
"""

import click

from core.auth import Bootstrap, LINK_BUTTON_NOT_PRESSED
from core.client import build_client
from core.config import USER_CONFIG_FILE, Settings, save_credentials
from core.errors import PairingRejected
from core.version import MINIMUM_BRIDGE_VERSION, is_supported
from commands.helpers import fail, handle_bridge_errors, pass_settings
from models.utils import similarity_score


class SuggestingGroup(click.Group):
    """Group that suggests similar commands when a command name is mistyped."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' in str(e):
                cmd_name = args[0] if args else ''
                suggestions = self._get_suggestions(ctx, cmd_name)

                if suggestions:
                    error_msg = f"No such command '{cmd_name}'.\n\n"
                    error_msg += click.style("Did you mean one of these?\n", fg='yellow')
                    for suggestion in suggestions:
                        error_msg += click.style(f"  • {suggestion}\n", fg='green')
                    raise click.UsageError(error_msg, ctx=ctx)
            raise

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Get command suggestions based on similarity."""
        if not cmd_name:
            return []

        suggestions = []
        for command in self.list_commands(ctx):
            cmd_obj = self.get_command(ctx, command)
            if cmd_obj and not cmd_obj.hidden:
                score = similarity_score(cmd_name, command)
                if score > 0:
                    suggestions.append((score, command))

        suggestions.sort(reverse=True, key=lambda x: x[0])
        return [cmd for score, cmd in suggestions[:max_suggestions]]


def _mask(token: str | None) -> str:
    if not token:
        return click.style('✗ Not configured', fg='yellow')
    return f"{token[:4]}…{token[-4:]}" if len(token) > 12 else '****'


@click.command(name='register')
@click.option('--attempts', default=3, show_default=True, type=click.IntRange(1, 10),
              help='How many times to try while waiting for the link button')
@click.option('--save/--no-save', default=True, help=f'Save credentials to {USER_CONFIG_FILE}')
@pass_settings
@handle_bridge_errors
def register_command(settings: Settings, attempts: int, save: bool):
    """Register this application with the bridge (link button pairing).

    Requires the user to press the physical link button on the Hue bridge
    to authorise the application.

    \b
    Examples:
      hue-bridge --url https://192.168.1.20 --accept-any-hostname register
      hue-bridge --app-name "kitchen#pi" register --no-save
    """
    config = settings.client_config()
    bootstrap = Bootstrap(build_client(config))

    info = bootstrap.verify_version()
    click.secho(f"✓ Found bridge {info.name} ({info.bridge_id}), SW version {info.firmware_version}", fg='green')

    credential = None
    for attempt in range(1, attempts + 1):
        click.echo()
        click.secho("╔═══════════════════════════════════════════════════════╗", fg='yellow', bold=True)
        click.secho("║  Press the LINK BUTTON on your Hue Bridge             ║", fg='yellow', bold=True)
        click.secho("║  You have 30 seconds after pressing the button        ║", fg='yellow', bold=True)
        click.secho("╚═══════════════════════════════════════════════════════╝", fg='yellow', bold=True)
        click.echo()

        click.pause("Press Enter when ready...")
        click.echo(f"Registering '{settings.app_name}'... (attempt {attempt}/{attempts})")

        try:
            credential = bootstrap.pair(settings.app_name)
            break
        except PairingRejected as e:
            if e.error_type == LINK_BUTTON_NOT_PRESSED and attempt < attempts:
                click.secho("✗ Link button not pressed. Please try again.", fg='red')
                continue
            if e.error_type == LINK_BUTTON_NOT_PRESSED:
                fail(f"Failed after {attempts} attempts. Press the link button before pressing Enter.")
            fail(f"Bridge rejected registration: {e.description}")

    click.echo()
    click.secho("✓ Successfully created application key!", fg='green', bold=True)
    click.echo(f"  App:    {credential.app_name}")
    click.echo(f"  Key:    {credential.token}")
    if credential.client_key:
        click.echo(f"  Client: {credential.client_key}")

    if not save:
        click.echo()
        click.echo("Not saved. Export it for later use:")
        click.echo(f"  export HUE_BRIDGE_REGISTERED_USERNAME={credential.token}")
        return

    if save_credentials(config.base_url, credential, ca_pem_path=settings.ca_pem_path,
                        tls_policy=config.tls_policy):
        click.secho(f"✓ Configuration saved to {USER_CONFIG_FILE}", fg='green')
    else:
        click.secho("✗ Failed to save configuration", fg='red')
        click.echo(f"\nSet HUE_BRIDGE_REGISTERED_USERNAME={credential.token} to use this key.")


@click.command(name='check-version')
@pass_settings
@handle_bridge_errors
def check_version_command(settings: Settings):
    """Show bridge details and check the firmware is supported."""
    client = build_client(settings.client_config())
    info = client.fetch_bridge_info()

    click.echo()
    click.secho("=== Hue Bridge ===", fg='cyan', bold=True)
    click.echo()
    click.echo(f"  Name:        {info.name}")
    click.echo(f"  Bridge ID:   {info.bridge_id}")
    click.echo(f"  Model:       {info.model_id}")
    click.echo(f"  MAC:         {info.mac}")
    click.echo(f"  API version: {info.api_version}")
    click.echo(f"  SW version:  {info.firmware_version}")
    if info.factory_new:
        click.secho("  Factory new: yes", fg='yellow')
    click.echo()

    if is_supported(info.firmware_version, MINIMUM_BRIDGE_VERSION):
        click.secho(f"✓ Supported (minimum {MINIMUM_BRIDGE_VERSION})", fg='green')
    else:
        fail(f"Unsupported: SW version must be at least {MINIMUM_BRIDGE_VERSION}. Update the bridge firmware.")


@click.command(name='setup')
@pass_settings
def setup_command(settings: Settings):
    """Show the resolved configuration.

    Configuration sources (priority order):
    1. Command line options
    2. Environment (HUE_BRIDGE_URL, HUE_BRIDGE_PEM_PATH,
       HUE_BRIDGE_REGISTERED_USERNAME, HUE_BRIDGE_APP_NAME,
       HUE_BRIDGE_ACCEPT_ANY_HOSTNAME)
    3. Local config file (~/.hue_bridge/config.json)
    """
    not_set = click.style('✗ Not configured', fg='yellow')

    click.echo()
    click.secho("=== Hue Bridge Configuration ===", fg='cyan', bold=True)
    click.echo()
    click.echo(f"  Bridge URL:  {settings.bridge_url or not_set}")
    click.echo(f"  CA cert:     {settings.ca_pem_path or 'default trust store'}")
    click.echo(f"  Hostnames:   {'any accepted' if settings.accept_any_hostname else 'verified'}")
    click.echo(f"  App name:    {settings.app_name}")
    click.echo(f"  App key:     {_mask(settings.api_token)}")
    click.echo(f"  Config file: {USER_CONFIG_FILE}")
    click.echo()

    if not settings.api_token:
        click.echo("Run 'register' to pair with the bridge.")
