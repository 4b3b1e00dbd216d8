"""
Inspection commands for lights.

- list: all lights with their current state
- show: full details of one light
"""

import json

import click

from core.config import Settings
from commands.helpers import get_light_client, handle_bridge_errors, pass_settings, resolve_light
from models.utils import format_light_state


@click.command(name='list')
@click.option('--json', 'as_json', is_flag=True, help='Print raw CLIP v2 JSON')
@pass_settings
@handle_bridge_errors
def list_lights_command(settings: Settings, as_json: bool):
    """List all lights and their current state."""
    lights = get_light_client(settings).list()

    if as_json:
        click.echo(json.dumps([light.to_dict() for light in lights], indent=2))
        return

    if not lights:
        click.echo("No lights found.")
        return

    click.echo(f"\nAvailable lights ({len(lights)}):\n")
    for light in lights:
        name = light.display_name or 'Unnamed'
        click.echo(f"  • {name}: {format_light_state(light)}")
        click.echo(click.style(f"    {light.id}", dim=True))


@click.command(name='show')
@click.argument('light_ref')
@click.option('--json', 'as_json', is_flag=True, help='Print raw CLIP v2 JSON')
@pass_settings
@handle_bridge_errors
def show_light_command(settings: Settings, light_ref: str, as_json: bool):
    """Show details of a light, by id or name.

    \b
    Examples:
      hue-bridge show "Desk lamp"
      hue-bridge show 235eb2fc-98de-4462-850b-f255d9a39995 --json
    """
    lights = get_light_client(settings)
    light = lights.get(resolve_light(lights, light_ref).id)

    if as_json:
        click.echo(json.dumps(light.to_dict(), indent=2))
        return

    click.echo()
    click.secho(f"=== {light.display_name or 'Unnamed'} ===", fg='cyan', bold=True)
    click.echo()
    click.echo(f"  ID:          {light.id}")
    click.echo(f"  Archetype:   {light.archetype or 'Unknown'}")
    if light.owner:
        click.echo(f"  Owner:       {light.owner.rtype} {light.owner.rid}")
    click.echo(f"  State:       {click.style('ON', fg='green') if light.on else click.style('OFF', fg='red')}")
    if light.brightness is not None:
        click.echo(f"  Brightness:  {light.brightness:.1f}%")
    if light.color_temperature:
        click.echo(f"  Colour temp: {light.color_temperature} mirek (~{1_000_000 // light.color_temperature} K)")
    if light.pending_dimming_action:
        click.echo(f"  Dimming:     {light.pending_dimming_action}")
    click.echo()
