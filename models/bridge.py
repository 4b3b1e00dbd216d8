"""Bridge configuration snapshot returned by the unauthenticated config endpoint."""

from dataclasses import dataclass

from core.errors import InvalidResponse


@dataclass(frozen=True)
class BridgeInfo:
    """Basic bridge details from `GET /api/0/config`."""
    name: str
    datastore_version: str
    firmware_version: str
    api_version: str
    mac: str
    bridge_id: str
    factory_new: bool
    model_id: str

    @classmethod
    def from_dict(cls, data: dict) -> 'BridgeInfo':
        """Build from the bridge's JSON reply (v1 field names)."""
        if not isinstance(data, dict):
            raise InvalidResponse(f"Unexpected bridge config response: {data!r}")

        try:
            return cls(
                name=data['name'],
                datastore_version=data['datastoreversion'],
                firmware_version=data['swversion'],
                api_version=data['apiversion'],
                mac=data['mac'],
                bridge_id=data['bridgeid'],
                factory_new=bool(data['factorynew']),
                model_id=data['modelid'],
            )
        except KeyError as e:
            raise InvalidResponse(f"Bridge config response missing field {e}") from e

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'datastoreversion': self.datastore_version,
            'swversion': self.firmware_version,
            'apiversion': self.api_version,
            'mac': self.mac,
            'bridgeid': self.bridge_id,
            'factorynew': self.factory_new,
            'modelid': self.model_id,
        }
