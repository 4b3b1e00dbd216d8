"""Light resource models for the CLIP v2 API.

LightResource is a read snapshot of one light. LightUpdate is the partial
representation sent with PUT; only the members that are set end up on the
wire.
"""

from dataclasses import dataclass

from core.errors import InvalidResponse

RESOURCE_TYPE = 'light'

# Valid values for dimming_delta.action and color_temperature_delta.action
DIMMING_ACTIONS = ('up', 'down', 'stop')


@dataclass(frozen=True)
class ResourceIdentifier:
    """Reference to another bridge resource (rid + rtype)."""
    rid: str
    rtype: str

    @classmethod
    def from_dict(cls, data: dict) -> 'ResourceIdentifier':
        return cls(rid=data['rid'], rtype=data['rtype'])

    def to_dict(self) -> dict:
        return {'rid': self.rid, 'rtype': self.rtype}


@dataclass(frozen=True)
class LightResource:
    """Snapshot of a light as reported by the bridge.

    `brightness` is None for lights without a dimming service (plugs), and
    `color_temperature` is None when the light has no colour temperature or
    the current mirek value is not valid.
    """
    id: str
    display_name: str
    archetype: str
    on: bool
    brightness: float | None = None
    color_temperature: int | None = None
    pending_dimming_action: str | None = None
    owner: ResourceIdentifier | None = None

    @classmethod
    def from_dict(cls, data: dict) -> 'LightResource':
        """Parse a light object from a response envelope's data array."""
        if not isinstance(data, dict):
            raise InvalidResponse(f"Unexpected light resource: {data!r}")

        resource_type = data.get('type', RESOURCE_TYPE)
        if resource_type != RESOURCE_TYPE:
            raise InvalidResponse(f"Expected a light resource, got type {resource_type!r}")

        try:
            metadata = data['metadata']
            dimming = data.get('dimming')
            colour_temp = data.get('color_temperature') or {}
            dimming_delta = data.get('dimming_delta') or {}
            owner = data.get('owner')

            brightness = dimming.get('brightness') if dimming else None
            action = dimming_delta.get('action')
            if action is not None and action not in DIMMING_ACTIONS:
                raise InvalidResponse(f"Unknown dimming action: {action!r}")

            return cls(
                id=data['id'],
                display_name=metadata['name'],
                archetype=metadata.get('archetype', ''),
                on=bool(data['on']['on']),
                brightness=float(brightness) if brightness is not None else None,
                color_temperature=colour_temp.get('mirek'),
                pending_dimming_action=action,
                owner=ResourceIdentifier.from_dict(owner) if owner else None,
            )
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise InvalidResponse(f"Malformed light resource: {e}") from e

    def to_dict(self) -> dict:
        """Serialise to the CLIP v2 wire format."""
        data = {
            'id': self.id,
            'type': RESOURCE_TYPE,
            'metadata': {'name': self.display_name, 'archetype': self.archetype},
            'on': {'on': self.on},
        }
        if self.owner is not None:
            data['owner'] = self.owner.to_dict()
        if self.brightness is not None:
            data['dimming'] = {'brightness': self.brightness}
        if self.color_temperature is not None:
            data['color_temperature'] = {'mirek': self.color_temperature}
        if self.pending_dimming_action is not None:
            data['dimming_delta'] = {'action': self.pending_dimming_action}
        return data

    def to_update(self) -> 'LightUpdate':
        """Full writable state of this light as a LightUpdate."""
        return LightUpdate(
            on=self.on,
            brightness=self.brightness,
            color_temperature=self.color_temperature,
            display_name=self.display_name or None,
        )


@dataclass(frozen=True)
class LightUpdate:
    """Partial light state for a PUT request."""
    on: bool | None = None
    brightness: float | None = None
    color_temperature: int | None = None
    dimming_action: str | None = None
    brightness_delta: float | None = None
    color_temperature_action: str | None = None
    mirek_delta: int | None = None
    display_name: str | None = None

    def __post_init__(self):
        if self.brightness is not None and not 0 <= self.brightness <= 100:
            raise ValueError(f"Invalid brightness: {self.brightness}. Must be 0-100")
        if self.dimming_action is not None and self.dimming_action not in DIMMING_ACTIONS:
            raise ValueError(f"Invalid dimming action: '{self.dimming_action}'. Expected one of {DIMMING_ACTIONS}")
        if self.color_temperature_action is not None and self.color_temperature_action not in DIMMING_ACTIONS:
            raise ValueError(f"Invalid colour temperature action: '{self.color_temperature_action}'. "
                             f"Expected one of {DIMMING_ACTIONS}")
        if self.brightness_delta is not None and self.dimming_action is None:
            raise ValueError("brightness_delta requires dimming_action")
        if self.mirek_delta is not None and self.color_temperature_action is None:
            raise ValueError("mirek_delta requires color_temperature_action")

    def is_empty(self) -> bool:
        return not self.to_dict()

    def to_dict(self) -> dict:
        """Serialise only the members that are set."""
        data = {}
        if self.display_name is not None:
            data['metadata'] = {'name': self.display_name}
        if self.on is not None:
            data['on'] = {'on': self.on}
        if self.brightness is not None:
            data['dimming'] = {'brightness': self.brightness}
        if self.color_temperature is not None:
            data['color_temperature'] = {'mirek': self.color_temperature}
        if self.dimming_action is not None:
            data['dimming_delta'] = {'action': self.dimming_action}
            if self.brightness_delta is not None:
                data['dimming_delta']['brightness_delta'] = self.brightness_delta
        if self.color_temperature_action is not None:
            data['color_temperature_delta'] = {'action': self.color_temperature_action}
            if self.mirek_delta is not None:
                data['color_temperature_delta']['mirek_delta'] = self.mirek_delta
        return data
