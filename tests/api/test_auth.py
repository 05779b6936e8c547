"""Caller identification tests."""

from unittest.mock import MagicMock

import falcon.asgi
from falcon.testing import TestClient
from keycloak.exceptions import KeycloakError

from accessgate.infrastructure.auth.keycloak_provider import KeycloakProvider, OIDCUser
from accessgate.interfaces.api.middleware.auth import AuthMiddleware


class WhoAmIResource:
    async def on_get(self, req, resp) -> None:
        user = req.context.user
        resp.media = {"user_id": user.user_id if user else None}


def _client(keycloak=None) -> TestClient:
    app = falcon.asgi.App(middleware=[AuthMiddleware(keycloak)])
    app.add_route("/whoami", WhoAmIResource())
    return TestClient(app)


def test_header_identity_without_keycloak() -> None:
    client = _client()
    assert client.simulate_get("/whoami", headers={"X-Actor-Id": "u-1"}).json == {"user_id": "u-1"}
    assert client.simulate_get("/whoami").json == {"user_id": None}


def test_bearer_token_with_keycloak() -> None:
    keycloak = MagicMock()
    keycloak.decode_token.return_value = OIDCUser(user_id="kc-1", email="a@b.c", username="a")
    client = _client(keycloak)
    result = client.simulate_get("/whoami", headers={"Authorization": "Bearer tok"})
    assert result.json == {"user_id": "kc-1"}
    keycloak.decode_token.assert_called_once_with("tok")


def test_header_ignored_when_keycloak_configured() -> None:
    keycloak = MagicMock()
    keycloak.decode_token.return_value = None
    client = _client(keycloak)
    result = client.simulate_get(
        "/whoami", headers={"Authorization": "Bearer bad", "X-Actor-Id": "u-1"}
    )
    assert result.json == {"user_id": None}


def test_keycloak_provider_introspection() -> None:
    provider = KeycloakProvider("http://kc.local", "portal", "accessgate-api", "secret")
    provider._keycloak = MagicMock()
    provider._keycloak.introspect.return_value = {
        "active": True,
        "sub": "kc-1",
        "email": "a@b.c",
        "preferred_username": "alice",
    }
    assert provider.decode_token("tok") == OIDCUser("kc-1", "a@b.c", "alice")

    provider._keycloak.introspect.return_value = {"active": False}
    assert provider.decode_token("tok") is None

    provider._keycloak.introspect.side_effect = KeycloakError("down")
    assert provider.decode_token("tok") is None
