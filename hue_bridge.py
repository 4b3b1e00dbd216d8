#!/usr/bin/env python3
"""
Hue Bridge CLI
Register with a Philips Hue bridge and control its lights over CLIP v2.
"""

import click

from core.config import resolve_settings
from commands.setup import SuggestingGroup, register_command, check_version_command, setup_command
from commands.inspection import list_lights_command, show_light_command
from commands.control import power_command, brightness_command, colour_temp_command, dim_command


@click.group(
    cls=SuggestingGroup,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 120
    }
)
@click.version_option(version='0.1.0', prog_name='Hue Bridge')
@click.option('--url', 'bridge_url', help='Bridge URL, e.g. https://192.168.1.20 (env: HUE_BRIDGE_URL)')
@click.option('--ca-pem', 'ca_pem_path', type=click.Path(dir_okay=False),
              help='Bridge root CA certificate in PEM format (env: HUE_BRIDGE_PEM_PATH)')
@click.option('--accept-any-hostname', is_flag=True,
              help='Do not verify the certificate hostname (env: HUE_BRIDGE_ACCEPT_ANY_HOSTNAME)')
@click.option('--app-name', help='Application name used for registration (env: HUE_BRIDGE_APP_NAME)')
@click.option('--token', 'api_token', help='Existing application key (env: HUE_BRIDGE_REGISTERED_USERNAME)')
@click.pass_context
def cli(ctx, bridge_url, ca_pem_path, accept_any_hostname, app_name, api_token):
    """Hue Bridge CLI - Register with your Philips Hue bridge and control lights.

Settings: options → environment → local config (~/.hue_bridge/config.json)
Run 'register' for first-time pairing or 'setup' to check configuration.

Use 'COMMAND -h' or 'COMMAND --help' for detailed help on a specific command."""
    ctx.obj = resolve_settings(
        bridge_url=bridge_url,
        ca_pem_path=ca_pem_path,
        accept_any_hostname=accept_any_hostname,
        app_name=app_name,
        api_token=api_token,
    )


# Register setup commands
cli.add_command(setup_command)
cli.add_command(register_command)
cli.add_command(check_version_command)

# Register inspection commands
cli.add_command(list_lights_command)
cli.add_command(show_light_command)

# Register control commands
cli.add_command(power_command)
cli.add_command(brightness_command)
cli.add_command(colour_temp_command)
cli.add_command(dim_command)


if __name__ == '__main__':
    cli()
