"""Tests for the registration bootstrap in core/auth.py

The bridge is simulated with a mocked session returning canned replies in
order: first the config endpoint, then the pairing endpoint.
"""

import pytest

from core.auth import (
    LINK_BUTTON_NOT_PRESSED,
    READY,
    UNCHECKED,
    VERSION_VERIFIED,
    Bootstrap,
    parse_pairing_response,
    validate_app_name,
)
from core.client import BridgeClient
from core.errors import (
    ConfigurationError,
    InvalidResponse,
    InvalidVersionFormat,
    NotRegistered,
    PairingRejected,
    UnsupportedBridgeVersion,
)
from core.version import MINIMUM_BRIDGE_VERSION


def _methods(mock_session):
    """HTTP methods of every request sent through the session."""
    return [c[0][0] for c in mock_session.request.call_args_list]


class TestVersionCheck:
    """unchecked -> version_verified"""

    def test_supported_version(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        mock_session.request.return_value = make_response(bridge_config_body)
        bootstrap = Bootstrap(unauthenticated_client)

        info = bootstrap.verify_version()

        assert bootstrap.state == VERSION_VERIFIED
        assert bootstrap.bridge_info is info
        assert info.bridge_id == 'ECB5FAFFFE000001'

    def test_old_firmware_is_fatal(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        bridge_config_body['swversion'] = '1941132080'
        mock_session.request.return_value = make_response(bridge_config_body)
        bootstrap = Bootstrap(unauthenticated_client)

        with pytest.raises(UnsupportedBridgeVersion) as exc_info:
            bootstrap.run('my-app')

        assert exc_info.value.reported == 1941132080
        assert exc_info.value.minimum == MINIMUM_BRIDGE_VERSION
        assert bootstrap.state == UNCHECKED
        assert _methods(mock_session) == ['GET']

    def test_non_numeric_firmware(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        bridge_config_body['swversion'] = '1.62.0'
        mock_session.request.return_value = make_response(bridge_config_body)
        bootstrap = Bootstrap(unauthenticated_client)

        with pytest.raises(InvalidVersionFormat):
            bootstrap.verify_version()
        assert bootstrap.state == UNCHECKED

    def test_malformed_config(self, unauthenticated_client, mock_session, make_response):
        mock_session.request.return_value = make_response({'name': 'Philips hue'})
        with pytest.raises(InvalidResponse, match='missing field'):
            Bootstrap(unauthenticated_client).verify_version()

    def test_custom_minimum(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        mock_session.request.return_value = make_response(bridge_config_body)
        with pytest.raises(UnsupportedBridgeVersion):
            Bootstrap(unauthenticated_client, minimum_version=1962097031).verify_version()


class TestExistingToken:
    """version_verified -> ready without pairing."""

    def test_token_skips_pairing(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        mock_session.request.return_value = make_response(bridge_config_body)
        bootstrap = Bootstrap(unauthenticated_client)

        client = bootstrap.run('my-app', token='existing-key')

        assert bootstrap.state == READY
        assert isinstance(client, BridgeClient)
        assert client.token == 'existing-key'
        assert client.app_name == 'my-app'
        assert 'POST' not in _methods(mock_session)
        assert mock_session.request.call_count == 1

    def test_use_token_before_version_check(self, unauthenticated_client, mock_session):
        bootstrap = Bootstrap(unauthenticated_client)
        with pytest.raises(ConfigurationError, match='not verified'):
            bootstrap.use_token('my-app', 'existing-key')
        mock_session.request.assert_not_called()

    def test_empty_token_rejected(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        mock_session.request.return_value = make_response(bridge_config_body)
        bootstrap = Bootstrap(unauthenticated_client)
        bootstrap.verify_version()

        with pytest.raises(ConfigurationError):
            bootstrap.use_token('my-app', '')
        assert bootstrap.state == VERSION_VERIFIED


class TestPairing:
    """version_verified -> ready via link button pairing."""

    def test_success(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        mock_session.request.side_effect = [
            make_response(bridge_config_body),
            make_response([{'success': {'username': 'abc', 'clientkey': 'CLIENTKEY0123'}}]),
        ]
        bootstrap = Bootstrap(unauthenticated_client)

        client = bootstrap.run('my-app')

        assert bootstrap.state == READY
        assert bootstrap.credential.token == 'abc'
        assert bootstrap.credential.client_key == 'CLIENTKEY0123'
        assert client.token == 'abc'

        method, url = mock_session.request.call_args_list[1][0]
        assert (method, url) == ('POST', 'https://bridge.local/api')
        assert mock_session.request.call_args_list[1][1]['json'] == {
            'devicetype': 'my-app',
            'generateclientkey': True,
        }

    def test_link_button_not_pressed(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        mock_session.request.side_effect = [
            make_response(bridge_config_body),
            make_response([{'error': {'type': 101, 'address': '', 'description': 'link button not pressed'}}]),
        ]
        bootstrap = Bootstrap(unauthenticated_client)

        with pytest.raises(PairingRejected) as exc_info:
            bootstrap.run('my-app')

        assert exc_info.value.description == 'link button not pressed'
        assert exc_info.value.error_type == LINK_BUTTON_NOT_PRESSED
        assert bootstrap.state == VERSION_VERIFIED
        assert bootstrap.credential is None

    def test_retry_after_rejection(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        """Caller presses the button and pairs again without a second version check."""
        mock_session.request.side_effect = [
            make_response(bridge_config_body),
            make_response([{'error': {'type': 101, 'description': 'link button not pressed'}}]),
            make_response([{'success': {'username': 'abc'}}]),
        ]
        bootstrap = Bootstrap(unauthenticated_client)

        with pytest.raises(PairingRejected):
            bootstrap.run('my-app')
        client = bootstrap.run('my-app')

        assert client.token == 'abc'
        assert _methods(mock_session) == ['GET', 'POST', 'POST']

    def test_pair_before_version_check(self, unauthenticated_client, mock_session):
        with pytest.raises(ConfigurationError):
            Bootstrap(unauthenticated_client).pair('my-app')
        mock_session.request.assert_not_called()

    def test_client_before_ready(self, unauthenticated_client):
        with pytest.raises(NotRegistered):
            Bootstrap(unauthenticated_client).authenticated_client()

    def test_register_shortcut(self, unauthenticated_client, mock_session, make_response, bridge_config_body):
        """UnauthenticatedClient.register runs the whole bootstrap and shares its session."""
        mock_session.request.side_effect = [
            make_response(bridge_config_body),
            make_response([{'success': {'username': 'abc'}}]),
        ]

        client = unauthenticated_client.register('my-app')

        assert isinstance(client, BridgeClient)
        assert client.session is mock_session
        assert client.config is unauthenticated_client.config


class TestParsePairingResponse:
    """Every element of the reply is inspected."""

    def test_first_error_wins_over_success(self):
        body = [
            {'success': {'username': 'abc'}},
            {'error': {'type': 7, 'description': 'invalid value'}},
        ]
        with pytest.raises(PairingRejected, match='invalid value'):
            parse_pairing_response('my-app', body)

    def test_first_of_several_errors(self):
        body = [
            {'error': {'type': 101, 'description': 'link button not pressed'}},
            {'error': {'type': 7, 'description': 'invalid value'}},
        ]
        with pytest.raises(PairingRejected, match='link button not pressed'):
            parse_pairing_response('my-app', body)

    def test_clientkey_optional(self):
        credential = parse_pairing_response('my-app', [{'success': {'username': 'abc'}}])
        assert credential.token == 'abc'
        assert credential.client_key is None
        assert credential.app_name == 'my-app'

    @pytest.mark.parametrize('body', [[], {}, None, [{}], [{'success': {}}], ['oops']])
    def test_unusable_reply(self, body):
        with pytest.raises(InvalidResponse):
            parse_pairing_response('my-app', body)


class TestValidateAppName:

    def test_valid(self):
        assert validate_app_name('hue_bridge#cli') == 'hue_bridge#cli'

    @pytest.mark.parametrize('name', ['', '   ', None])
    def test_required(self, name):
        with pytest.raises(ConfigurationError, match='required'):
            validate_app_name(name)

    def test_too_long(self):
        with pytest.raises(ConfigurationError, match='longer than'):
            validate_app_name('x' * 41)
