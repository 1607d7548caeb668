"""Unit tests for KeycloakEntitlementChecker using an httpx mock transport."""

from __future__ import annotations

import json
from unittest.mock import create_autospec

import httpx
import pytest
from jose import jwt

from shared_kernel.authorization.exceptions import EntitlementError
from shared_kernel.authorization.keycloak import KeycloakEntitlementChecker
from shared_kernel.authorization.observability import AuthorizationProbe

ENDPOINT = "https://sso.example.com/auth/realms/dev/authz/entitlement/platform"
SPACE = "6b0f7c1e-4d2a-4f0e-9b1a-2c3d4e5f6a7b"


def _token(permissions: list[dict] | None = None) -> str:
    claims: dict = {"sub": "caller"}
    if permissions is not None:
        claims["authorization"] = {"permissions": permissions}
    return jwt.encode(claims, "test-key", algorithm="HS256")


@pytest.fixture
def mock_probe():
    return create_autospec(AuthorizationProbe, instance=True)


def _checker(handler, probe) -> KeycloakEntitlementChecker:
    return KeycloakEntitlementChecker(
        entitlement_endpoint=ENDPOINT,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        probe=probe,
    )


class TestIsAuthorized:
    """Tests for is_authorized."""

    @pytest.mark.asyncio
    async def test_grants_when_rpt_names_resource(self, mock_probe):
        """An RPT carrying the space grants access."""
        rpt = _token([{"resource_set_name": SPACE, "scopes": []}])

        checker = _checker(
            lambda request: httpx.Response(200, json={"rpt": rpt}), mock_probe
        )

        assert await checker.is_authorized("caller-token", SPACE) is True
        mock_probe.entitlement_checked.assert_called_once_with(
            resource=SPACE, granted=True
        )

    @pytest.mark.asyncio
    async def test_accepts_rsname_claim(self, mock_probe):
        """Newer servers name the resource with rsname."""
        rpt = _token([{"rsname": SPACE}])

        checker = _checker(
            lambda request: httpx.Response(200, json={"rpt": rpt}), mock_probe
        )

        assert await checker.is_authorized("caller-token", SPACE) is True

    @pytest.mark.asyncio
    async def test_denies_when_rpt_names_other_resource(self, mock_probe):
        """An RPT for a different resource does not grant this one."""
        rpt = _token([{"resource_set_name": "some-other-space"}])

        checker = _checker(
            lambda request: httpx.Response(200, json={"rpt": rpt}), mock_probe
        )

        assert await checker.is_authorized("caller-token", SPACE) is False

    @pytest.mark.parametrize("status_code", [401, 403])
    @pytest.mark.asyncio
    async def test_denies_on_rejection(self, status_code, mock_probe):
        """The server refusing an entitlement is a denial, not an error."""
        checker = _checker(lambda request: httpx.Response(status_code), mock_probe)

        assert await checker.is_authorized("caller-token", SPACE) is False
        mock_probe.entitlement_checked.assert_called_once_with(
            resource=SPACE, granted=False
        )

    @pytest.mark.asyncio
    async def test_unexpected_status_raises(self, mock_probe):
        """Server errors cannot be evaluated."""
        checker = _checker(lambda request: httpx.Response(502), mock_probe)

        with pytest.raises(EntitlementError):
            await checker.is_authorized("caller-token", SPACE)

        mock_probe.entitlement_check_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_unreadable_rpt_raises(self, mock_probe):
        """A non-JWT RPT cannot be evaluated."""
        checker = _checker(
            lambda request: httpx.Response(200, json={"rpt": "not-a-jwt"}),
            mock_probe,
        )

        with pytest.raises(EntitlementError):
            await checker.is_authorized("caller-token", SPACE)

    @pytest.mark.parametrize("body", [["unexpected"], "rpt", {"rpt": 42}])
    @pytest.mark.asyncio
    async def test_unexpected_body_shape_raises(self, body, mock_probe):
        """A 200 body that is not an object with a string rpt cannot be evaluated."""
        checker = _checker(lambda request: httpx.Response(200, json=body), mock_probe)

        with pytest.raises(EntitlementError):
            await checker.is_authorized("caller-token", SPACE)

        mock_probe.entitlement_check_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_unexpected_authorization_claim_raises(self, mock_probe):
        """An RPT whose authorization claim is not an object cannot be evaluated."""
        rpt = jwt.encode({"authorization": ["x"]}, "test-key", algorithm="HS256")

        checker = _checker(
            lambda request: httpx.Response(200, json={"rpt": rpt}), mock_probe
        )

        with pytest.raises(EntitlementError):
            await checker.is_authorized("caller-token", SPACE)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, mock_probe):
        """Network failures cannot be evaluated."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        checker = _checker(refuse, mock_probe)

        with pytest.raises(EntitlementError):
            await checker.is_authorized("caller-token", SPACE)

        mock_probe.connection_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_caller_token_claims_are_not_trusted(self, mock_probe):
        """A caller token claiming the permission is still checked remotely."""
        forged = _token([{"resource_set_name": SPACE}])
        requests: list[httpx.Request] = []

        def deny(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(401)

        checker = _checker(deny, mock_probe)

        assert await checker.is_authorized(forged, SPACE) is False
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_requests_permission_for_resource(self, mock_probe):
        """The caller's token and the space are sent to the endpoint."""
        requests: list[httpx.Request] = []

        def deny(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(403)

        checker = _checker(deny, mock_probe)
        await checker.is_authorized("caller-token", SPACE)

        (request,) = requests
        assert str(request.url) == ENDPOINT
        assert request.headers["Authorization"] == "Bearer caller-token"
        assert json.loads(request.content) == {
            "permissions": [{"resource_set_name": SPACE}]
        }
