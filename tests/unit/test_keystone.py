import httpx
import json
import pytest
from unittest.mock import patch

from zun_provider.services.keystone import KeystoneSession
from zun_provider.services.zun_client import (
    ZunAuthenticationError,
    ZunClientError,
    create_zun_client,
)

CATALOG = [
    {
        "type": "identity",
        "endpoints": [{"interface": "public", "region_id": "RegionOne", "url": "http://keystone.test/v3"}],
    },
    {
        "type": "container",
        "endpoints": [
            {"interface": "internal", "region_id": "RegionOne", "url": "http://zun-internal.test:9517/v1"},
            {"interface": "public", "region_id": "RegionTwo", "url": "http://zun-two.test:9517/v1"},
            {"interface": "public", "region_id": "RegionOne", "url": "http://zun.test:9517/v1/"},
        ],
    },
]

AUTH_CONFIG = {
    "auth_url": "http://keystone.test:5000",
    "username": "demo",
    "password": "secret",
    "project_name": "demo",
    "project_id": None,
    "user_domain_name": "Default",
    "project_domain_name": "Default",
    "region_name": "RegionOne",
    "interface": "public",
    "zun_api_version": "1.32",
}


def _session(handler, **overrides) -> KeystoneSession:
    config = {**AUTH_CONFIG, **overrides}
    return KeystoneSession(client=httpx.Client(transport=httpx.MockTransport(handler)), **config)


def _token_handler(captured=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured["url"] = str(request.url)
            captured["body"] = json.loads(request.content)
        return httpx.Response(
            201,
            headers={"X-Subject-Token": "gAAAA-token"},
            json={"token": {"catalog": CATALOG}},
        )

    return handler


class TestKeystoneSession:
    """Tests for KeystoneSession"""

    def test_authenticate_posts_password_auth(self):
        captured = {}
        session = _session(_token_handler(captured))

        token = session.authenticate()

        assert token == "gAAAA-token"
        assert captured["url"] == "http://keystone.test:5000/v3/auth/tokens"
        user = captured["body"]["auth"]["identity"]["password"]["user"]
        assert user == {"name": "demo", "domain": {"name": "Default"}, "password": "secret"}
        assert captured["body"]["auth"]["scope"]["project"] == {
            "name": "demo",
            "domain": {"name": "Default"},
        }

    def test_project_id_scopes_by_id(self):
        captured = {}
        session = _session(_token_handler(captured), project_id="p-123")

        session.authenticate()

        assert captured["body"]["auth"]["scope"]["project"] == {"id": "p-123"}

    def test_rejected_credentials(self):
        session = _session(lambda request: httpx.Response(401, json={"error": {"code": 401}}))

        with pytest.raises(ZunAuthenticationError):
            session.authenticate()

    def test_endpoint_for_region_and_interface(self):
        session = _session(_token_handler())
        session.authenticate()

        assert session.endpoint_for("container", "RegionOne", "public") == "http://zun.test:9517/v1"
        assert session.endpoint_for("container", "RegionOne", "internal") == "http://zun-internal.test:9517/v1"

    def test_missing_endpoint_raises(self):
        session = _session(_token_handler())
        session.authenticate()

        with pytest.raises(ZunClientError, match="RegionThree"):
            session.endpoint_for("container", "RegionThree", "public")


def test_create_zun_client_uses_catalog_endpoint():
    session = _session(_token_handler())

    client = create_zun_client(AUTH_CONFIG, session=session)

    assert client.endpoint == "http://zun.test:9517/v1"
    assert client.client.headers["X-Auth-Token"] == "gAAAA-token"


def test_create_zun_client_builds_session_from_config():
    with patch("zun_provider.services.keystone.KeystoneSession") as session_cls:
        session_cls.return_value.authenticate.return_value = "tok"
        session_cls.return_value.endpoint_for.return_value = "http://zun.test:9517/v1"

        client = create_zun_client(AUTH_CONFIG)

    session_cls.assert_called_once_with(**AUTH_CONFIG)
    session_cls.return_value.endpoint_for.assert_called_once_with(
        "container", region_name="RegionOne", interface="public"
    )
    assert client.endpoint == "http://zun.test:9517/v1"
