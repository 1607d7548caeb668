"""Unit tests for KeycloakPolicyClient using an httpx mock transport."""

from __future__ import annotations

import json
from unittest.mock import create_autospec
from uuid import UUID

import httpx
import pytest

from shared_kernel.authorization.exceptions import PolicyServiceError
from shared_kernel.authorization.keycloak import KeycloakPolicyClient
from shared_kernel.authorization.observability import AuthorizationProbe

BASE = "https://sso.example.com"
TOKEN_ENDPOINT = f"{BASE}/auth/realms/dev/protocol/openid-connect/token"
CLIENTS_ENDPOINT = f"{BASE}/auth/admin/realms/dev/clients"
CLIENT_UUID = "c0ffee00-0000-0000-0000-000000000001"
POLICY_PATH = (
    f"/auth/admin/realms/dev/clients/{CLIENT_UUID}/authz/resource-server/policy/p-1"
)
ALICE = UUID("a1111111-1111-1111-1111-111111111111")

POLICY_DOC = {
    "id": "p-1",
    "name": "space-collaborators",
    "type": "user",
    "logic": "POSITIVE",
    "decisionStrategy": "UNANIMOUS",
    "config": {"users": f'["{ALICE}"]'},
}


class FakeKeycloak:
    """Records requests and serves canned Keycloak responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_status = 200
        self.clients: list[dict] = [{"id": CLIENT_UUID, "clientId": "platform"}]
        self.policy_status = 200
        self.update_status = 204

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/openid-connect/token"):
            if self.token_status != 200:
                return httpx.Response(self.token_status)
            return httpx.Response(200, json={"access_token": "pat-1"})
        if path == "/auth/admin/realms/dev/clients":
            return httpx.Response(200, json=self.clients)
        if path == POLICY_PATH and request.method == "GET":
            if self.policy_status != 200:
                return httpx.Response(self.policy_status)
            return httpx.Response(200, json=POLICY_DOC)
        if path == POLICY_PATH and request.method == "PUT":
            return httpx.Response(self.update_status)
        return httpx.Response(404)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def keycloak() -> FakeKeycloak:
    return FakeKeycloak()


@pytest.fixture
def mock_probe():
    return create_autospec(AuthorizationProbe, instance=True)


@pytest.fixture
def client(keycloak: FakeKeycloak, mock_probe) -> KeycloakPolicyClient:
    return KeycloakPolicyClient(
        token_endpoint=TOKEN_ENDPOINT,
        clients_endpoint=CLIENTS_ENDPOINT,
        client_id="platform",
        client_secret="secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(keycloak)),
        probe=mock_probe,
    )


class TestGetPolicy:
    """Tests for get_policy."""

    @pytest.mark.asyncio
    async def test_returns_policy_and_protection_token(self, client, keycloak):
        """The policy comes back with the token used to read it."""
        policy, token = await client.get_policy("p-1")

        assert token == "pat-1"
        assert policy.id == "p-1"
        assert policy.member_ids() == [ALICE]

    @pytest.mark.asyncio
    async def test_uses_client_credentials_grant(self, client, keycloak):
        """The token request authenticates as the confidential client."""
        await client.get_policy("p-1")

        token_request = keycloak.requests[0]
        form = dict(
            pair.split("=") for pair in token_request.content.decode().split("&")
        )
        assert form["grant_type"] == "client_credentials"
        assert form["client_id"] == "platform"
        assert form["client_secret"] == "secret"

    @pytest.mark.asyncio
    async def test_sends_protection_token_as_bearer(self, client, keycloak):
        """Policy reads are authorized with the protection token."""
        await client.get_policy("p-1")

        (policy_request,) = keycloak.calls("GET", POLICY_PATH)
        assert policy_request.headers["Authorization"] == "Bearer pat-1"

    @pytest.mark.asyncio
    async def test_client_lookup_is_cached(self, client, keycloak):
        """The internal client ID is resolved once per client instance."""
        await client.get_policy("p-1")
        await client.get_policy("p-1")

        assert len(keycloak.calls("GET", "/auth/admin/realms/dev/clients")) == 1
        assert len(keycloak.calls("GET", POLICY_PATH)) == 2

    @pytest.mark.asyncio
    async def test_token_failure_raises(self, client, keycloak, mock_probe):
        """A rejected client credentials grant fails the fetch."""
        keycloak.token_status = 401

        with pytest.raises(PolicyServiceError):
            await client.get_policy("p-1")

        mock_probe.policy_fetch_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_unregistered_client_raises(self, client, keycloak):
        """An unknown client ID fails the fetch."""
        keycloak.clients = []

        with pytest.raises(PolicyServiceError):
            await client.get_policy("p-1")

    @pytest.mark.asyncio
    async def test_missing_policy_raises(self, client, keycloak):
        """A 404 for the policy fails the fetch."""
        keycloak.policy_status = 404

        with pytest.raises(PolicyServiceError):
            await client.get_policy("p-1")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, mock_probe):
        """Network failures surface as PolicyServiceError."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = KeycloakPolicyClient(
            token_endpoint=TOKEN_ENDPOINT,
            clients_endpoint=CLIENTS_ENDPOINT,
            client_id="platform",
            client_secret="secret",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)),
            probe=mock_probe,
        )

        with pytest.raises(PolicyServiceError):
            await client.get_policy("p-1")

        mock_probe.connection_failed.assert_called_once()


class TestUpdatePolicy:
    """Tests for update_policy."""

    @pytest.mark.asyncio
    async def test_puts_full_document_with_same_token(self, client, keycloak):
        """The whole policy is written back under the fetch's token."""
        policy, token = await client.get_policy("p-1")
        policy.remove_user(ALICE)

        await client.update_policy(policy, token)

        (put_request,) = keycloak.calls("PUT", POLICY_PATH)
        assert put_request.headers["Authorization"] == "Bearer pat-1"
        body = json.loads(put_request.content)
        assert body["id"] == "p-1"
        assert body["decisionStrategy"] == "UNANIMOUS"
        assert body["config"]["users"] == "[]"

    @pytest.mark.asyncio
    async def test_rejected_token_raises(self, client, keycloak, mock_probe):
        """A 401 on update fails without retrying."""
        policy, token = await client.get_policy("p-1")
        keycloak.update_status = 401

        with pytest.raises(PolicyServiceError):
            await client.update_policy(policy, token)

        assert len(keycloak.calls("PUT", POLICY_PATH)) == 1
        mock_probe.policy_update_failed.assert_called_once()
        mock_probe.policy_updated.assert_not_called()

    @pytest.mark.asyncio
    async def test_records_update(self, client, mock_probe):
        """A successful write is recorded with the new member count."""
        policy, token = await client.get_policy("p-1")

        await client.update_policy(policy, token)

        mock_probe.policy_updated.assert_called_once_with(
            policy_id="p-1", member_count=1
        )
