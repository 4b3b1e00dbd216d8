"""Pytest configuration and fixtures for Hue bridge client tests."""

import json

import pytest
import requests
from pathlib import Path
from unittest.mock import MagicMock

from core.client import BridgeClient, UnauthenticatedClient
from core.transport import ClientConfig
from models.types import Credential

BRIDGE_URL = 'https://bridge.local'


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_response():
    """Factory building real requests.Response objects with a JSON body."""
    def _make(body=None, status_code=200, text=None):
        response = requests.Response()
        response.status_code = status_code
        response.url = BRIDGE_URL
        response.encoding = 'utf-8'
        if text is not None:
            response._content = text.encode('utf-8')
        elif body is not None:
            response._content = json.dumps(body).encode('utf-8')
        else:
            response._content = b''
        return response
    return _make


@pytest.fixture
def bridge_config():
    """ClientConfig for a bridge with default TLS settings."""
    return ClientConfig(base_url=BRIDGE_URL)


@pytest.fixture
def mock_session():
    """Stand-in for requests.Session; set request.return_value per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def credential():
    return Credential(app_name='hue_bridge#tests', token='test-token-123')


@pytest.fixture
def unauthenticated_client(bridge_config, mock_session):
    return UnauthenticatedClient(bridge_config, session=mock_session)


@pytest.fixture
def bridge_client(bridge_config, credential, mock_session):
    return BridgeClient(bridge_config, credential, session=mock_session)


@pytest.fixture
def bridge_config_body():
    """Reply of GET /api/0/config on a current bridge."""
    return {
        'name': 'Philips hue',
        'datastoreversion': '163',
        'swversion': '1962097030',
        'apiversion': '1.62.0',
        'mac': 'ec:b5:fa:00:00:01',
        'bridgeid': 'ECB5FAFFFE000001',
        'factorynew': False,
        'replacesbridgeid': None,
        'modelid': 'BSB002',
        'starterkitid': '',
    }


@pytest.fixture
def light_body():
    """One light object as returned in a CLIP v2 envelope."""
    return {
        'id': '235eb2fc-98de-4462-850b-f255d9a39995',
        'id_v1': '/lights/3',
        'type': 'light',
        'owner': {'rid': '6b2f1c1e-0b0a-4b52-9a57-4a5d5a8f6e11', 'rtype': 'device'},
        'metadata': {'name': 'Desk lamp', 'archetype': 'sultan_bulb'},
        'on': {'on': True},
        'dimming': {'brightness': 54.33, 'min_dim_level': 0.2},
        'color_temperature': {'mirek': 366, 'mirek_valid': True,
                              'mirek_schema': {'mirek_minimum': 153, 'mirek_maximum': 454}},
        'mode': 'normal',
    }


@pytest.fixture
def plug_body():
    """A smart plug: a light without dimming or colour temperature."""
    return {
        'id': '9a3e6f0c-1d2b-4c5e-8f70-112233445566',
        'type': 'light',
        'metadata': {'name': 'Hallway plug', 'archetype': 'plug'},
        'on': {'on': False},
    }
