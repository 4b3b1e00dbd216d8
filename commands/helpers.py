"""
Helper functions shared by the CLI commands.

- pass_settings: inject the resolved Settings into a command
- handle_bridge_errors: turn client errors into a red message and exit code 1
- get_light_client: bootstrap an authenticated LightClient from settings
- resolve_light: find a light by id or name, suggesting close names
"""

import functools

import click

from core.client import build_client
from core.config import Settings
from core.errors import HueBridgeError
from core.lights import LightClient, match_by_name
from models.light import LightResource
from models.utils import find_similar_strings

pass_settings = click.make_pass_decorator(Settings)


def fail(message: str):
    """Print an error and exit with status 1."""
    click.secho(f"✗ {message}", fg='red', err=True)
    raise click.exceptions.Exit(1)


def handle_bridge_errors(func):
    """Report HueBridgeError raised by a command instead of a traceback."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HueBridgeError as e:
            fail(str(e))
    return wrapper


def get_light_client(settings: Settings) -> LightClient:
    """Bootstrap an authenticated client (version check + stored key)."""
    if not settings.api_token:
        fail("No application key configured. Run 'register' first "
             "or set HUE_BRIDGE_REGISTERED_USERNAME.")

    client = build_client(settings.client_config())
    return LightClient(client.register(settings.app_name, token=settings.api_token))


def resolve_light(lights: LightClient, light_ref: str) -> LightResource:
    """Find a light by id, or by name (case-insensitive).

    Exits with suggestions of similar names if nothing matches.
    """
    all_lights = lights.list()

    for light in all_lights:
        if light.id == light_ref:
            return light

    light = match_by_name(all_lights, light_ref)
    if light is not None:
        return light

    click.secho(f"Error: Light '{light_ref}' not found.", fg='red', err=True)
    suggestions = find_similar_strings(light_ref, [light.display_name for light in all_lights], limit=3)
    if suggestions:
        click.echo(click.style("Did you mean one of these?", fg='yellow'), err=True)
        for suggestion in suggestions:
            click.echo(click.style(f"  • {suggestion}", fg='green'), err=True)
    raise click.exceptions.Exit(1)
