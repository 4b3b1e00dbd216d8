"""Light resource access over CLIP v2.

Every call is a fresh request; nothing is cached. Results keep the bridge's
ordering.
"""

from urllib.parse import quote

from core.client import BridgeClient, UnauthenticatedClient, envelope_data
from core.errors import NotFound
from models.light import LightResource, LightUpdate

LIGHT_ENDPOINT = '/resource/light'


def light_path(light_id: str) -> str:
    """Endpoint path for one light.

    Raises:
        NotFound: id is empty or would address a different path
    """
    if not isinstance(light_id, str) or light_id.strip() in ('', '.', '..') or '/' in light_id:
        raise NotFound(light_id, f"Invalid light id: {light_id!r}")
    return f"{LIGHT_ENDPOINT}/{quote(light_id, safe='')}"


def match_by_name(lights: list[LightResource], name: str) -> LightResource | None:
    """First light whose name matches `name` (case-insensitive)."""
    wanted = name.lower()
    for light in lights:
        if light.display_name.lower() == wanted:
            return light
    return None


class LightClient:
    """List, read and update lights through a client handle."""

    def __init__(self, client: BridgeClient | UnauthenticatedClient):
        self.client = client

    def list(self) -> list[LightResource]:
        """Get all lights with their current state."""
        body = self.client.request('GET', LIGHT_ENDPOINT)
        return [LightResource.from_dict(item) for item in envelope_data(body)]

    def get(self, light_id: str) -> LightResource:
        """Get a single light by id.

        Raises:
            NotFound: bridge has no light with this id
        """
        body = self.client.request('GET', light_path(light_id))
        data = envelope_data(body)
        if not data:
            raise NotFound(light_id)
        light = LightResource.from_dict(data[0])
        if light.id != light_id:
            raise NotFound(light_id, f"Bridge returned light '{light.id}' when asked for '{light_id}'")
        return light

    def set(self, light_id: str, payload: LightUpdate | LightResource | dict) -> dict:
        """Update a light with a partial or full representation.

        Args:
            light_id: Light resource id
            payload: LightUpdate (partial), LightResource (full writable
                state) or a raw CLIP v2 dict

        Returns:
            The raw response envelope; its data lists the updated resources
        """
        if isinstance(payload, LightResource):
            payload = payload.to_update()
        if isinstance(payload, LightUpdate):
            if payload.is_empty():
                raise ValueError("Light update has no fields set")
            payload = payload.to_dict()

        body = self.client.request('PUT', light_path(light_id), payload)
        envelope_data(body)
        return body

    def find_by_name(self, name: str) -> LightResource | None:
        """Get a light by name (case-insensitive)."""
        return match_by_name(self.list(), name)
