"""
Control commands for direct manipulation of lights.

Includes power, brightness, colour temperature and relative dimming.
"""

import click

from core.config import Settings
from commands.helpers import get_light_client, handle_bridge_errors, pass_settings, resolve_light
from models.light import DIMMING_ACTIONS, LightUpdate


def _apply(settings: Settings, light_ref: str, update: LightUpdate) -> str:
    """Send an update to the named light and return its display name."""
    lights = get_light_client(settings)
    light = resolve_light(lights, light_ref)
    lights.set(light.id, update)
    return light.display_name or light.id


@click.command(name='power')
@click.argument('light_ref')
@click.option('--on/--off', default=True, help='Turn light on or off')
@pass_settings
@handle_bridge_errors
def power_command(settings: Settings, light_ref: str, on: bool):
    """Turn a light ON or OFF.

    \b
    Examples:
      hue-bridge power "Bedroom" --on
      hue-bridge power "Bedroom" --off
    """
    name = _apply(settings, light_ref, LightUpdate(on=on))
    click.echo(f"✓ {name} turned {'ON' if on else 'OFF'}")


@click.command(name='brightness')
@click.argument('light_ref')
@click.argument('brightness', type=click.FloatRange(0, 100))
@pass_settings
@handle_bridge_errors
def brightness_command(settings: Settings, light_ref: str, brightness: float):
    """Set brightness of a light (0-100%).

    \b
    Examples:
      hue-bridge brightness "Bedroom" 80
      hue-bridge brightness "Bedroom" 12.5
    """
    name = _apply(settings, light_ref, LightUpdate(on=True, brightness=brightness))
    click.echo(f"✓ {name} brightness set to {brightness:g}%")


@click.command(name='colour-temp')
@click.argument('light_ref')
@click.argument('mirek', type=click.IntRange(153, 500))
@pass_settings
@handle_bridge_errors
def colour_temp_command(settings: Settings, light_ref: str, mirek: int):
    """Set colour temperature of a light (153-500 mirek).

    \b
    Examples:
      hue-bridge colour-temp "Bedroom" 366
      hue-bridge colour-temp "Desk lamp" 153
    """
    name = _apply(settings, light_ref, LightUpdate(on=True, color_temperature=mirek))
    click.echo(f"✓ {name} colour temperature set to {mirek} mirek")


@click.command(name='dim')
@click.argument('light_ref')
@click.argument('action', type=click.Choice(DIMMING_ACTIONS))
@click.option('--step', type=click.FloatRange(0, 100), help='Brightness change in percent')
@pass_settings
@handle_bridge_errors
def dim_command(settings: Settings, light_ref: str, action: str, step: float | None):
    """Start or stop dimming a light up or down.

    \b
    Examples:
      hue-bridge dim "Bedroom" up --step 20
      hue-bridge dim "Bedroom" stop
    """
    update = LightUpdate(dimming_action=action, brightness_delta=step)
    name = _apply(settings, light_ref, update)
    click.echo(f"✓ {name} dimming {action}")
