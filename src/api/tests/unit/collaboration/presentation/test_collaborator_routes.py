"""Unit tests for collaborator HTTP routes."""

from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from collaboration.application.value_objects import CollaboratorPage, RequestContext
from collaboration.domain.aggregates import Identity, UserProfile
from collaboration.domain.value_objects import IdentityId
from collaboration.ports.exceptions import (
    IdentityNotFoundError,
    InvalidIdentityIdError,
    OrphanedPolicyMemberError,
    PolicyUpdateError,
    SpaceOwnerRemovalError,
    SpaceResourceNotFoundError,
    UnauthorizedError,
)

SPACE_ID = "22222222-2222-4222-8222-222222222222"
BASE = f"/spaces/{SPACE_ID}/collaborators"


@pytest.fixture
def mock_service():
    """Mock CollaboratorService for testing."""
    service = AsyncMock()
    service.list_collaborators = AsyncMock(
        return_value=CollaboratorPage(items=[], total_count=0, offset=0, limit=0)
    )
    return service


@pytest.fixture
def request_context():
    return RequestContext(access_token="caller-token", identity_id="caller")


@pytest.fixture
def app(mock_service, request_context):
    from fastapi import FastAPI

    from collaboration.dependencies.authentication import get_request_context
    from collaboration.dependencies.collaborator import get_collaborator_service
    from collaboration.presentation import routes

    app = FastAPI()
    app.dependency_overrides[get_collaborator_service] = lambda: mock_service
    app.dependency_overrides[get_request_context] = lambda: request_context
    app.include_router(routes.router)
    return app


@pytest.fixture
def test_client(app):
    return TestClient(app)


class TestListCollaboratorsRoute:
    """Tests for GET /spaces/{space_id}/collaborators."""

    def test_renders_identities_with_paging(self, test_client, mock_service):
        identity_id = UUID("33333333-3333-4333-8333-333333333333")
        mock_service.list_collaborators.return_value = CollaboratorPage(
            items=[
                Identity(
                    id=IdentityId(value=identity_id),
                    username="ada",
                    provider_type="kc",
                    registration_completed=True,
                    user=UserProfile(full_name="Ada", email="ada@example.com"),
                )
            ],
            total_count=3,
            offset=1,
            limit=1,
        )

        response = test_client.get(BASE, params={"page[offset]": "1", "page[limit]": "1"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["meta"] == {"totalCount": 3}
        (resource,) = body["data"]
        assert resource["type"] == "identities"
        assert resource["id"] == str(identity_id)
        assert resource["attributes"]["identityID"] == str(identity_id)
        assert resource["attributes"]["fullName"] == "Ada"
        assert resource["attributes"]["registrationCompleted"] is True
        assert body["links"]["next"].endswith(
            f"{BASE}?page[offset]=2&page[limit]=1"
        )
        assert body["links"]["prev"].endswith(f"{BASE}?page[offset]=0&page[limit]=1")

    def test_passes_parsed_paging_params(self, test_client, mock_service):
        test_client.get(BASE, params={"page[offset]": "40", "page[limit]": "abc"})

        kwargs = mock_service.list_collaborators.call_args.kwargs
        assert str(kwargs["space_id"]) == SPACE_ID
        assert kwargs["page_offset"] == 40
        assert kwargs["page_limit"] is None

    def test_listing_needs_no_token(self, app, mock_service):
        """The list endpoint is public."""
        from collaboration.dependencies.authentication import get_request_context

        app.dependency_overrides.pop(get_request_context)

        response = TestClient(app).get(BASE)

        assert response.status_code == status.HTTP_200_OK

    def test_invalid_space_id_returns_400(self, test_client, mock_service):
        response = test_client.get("/spaces/not-a-uuid/collaborators")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_service.list_collaborators.assert_not_called()

    def test_unknown_space_returns_404(self, test_client, mock_service):
        mock_service.list_collaborators.side_effect = SpaceResourceNotFoundError(
            SPACE_ID
        )

        response = test_client.get(BASE)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_orphaned_member_returns_500(self, test_client, mock_service):
        mock_service.list_collaborators.side_effect = OrphanedPolicyMemberError(
            str(uuid4())
        )

        response = test_client.get(BASE)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

    def test_unexpected_error_returns_500(self, test_client, mock_service):
        mock_service.list_collaborators.side_effect = RuntimeError("boom")

        response = test_client.get(BASE)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Failed to list collaborators"


class TestAddCollaboratorRoutes:
    """Tests for POST routes."""

    def test_add_single(self, test_client, mock_service, request_context):
        identity_id = str(uuid4())

        response = test_client.post(f"{BASE}/{identity_id}")

        assert response.status_code == status.HTTP_200_OK
        mock_service.add_collaborator.assert_awaited_once()
        args = mock_service.add_collaborator.call_args.args
        assert args[0] == request_context
        assert str(args[1]) == SPACE_ID
        assert args[2] == identity_id

    def test_add_batch_keeps_null_entries(self, test_client, mock_service):
        first = str(uuid4())

        response = test_client.post(
            BASE,
            json={"data": [{"type": "identities", "id": first}, None]},
        )

        assert response.status_code == status.HTTP_200_OK
        args = mock_service.add_collaborators.call_args.args
        assert args[2] == [first, None]

    def test_add_batch_with_null_data(self, test_client, mock_service):
        response = test_client.post(BASE, json={"data": None})

        assert response.status_code == status.HTTP_200_OK
        args = mock_service.add_collaborators.call_args.args
        assert args[2] is None

    def test_add_batch_without_body_is_noop(self, test_client, mock_service):
        response = test_client.post(BASE)

        assert response.status_code == status.HTTP_200_OK
        mock_service.add_collaborators.assert_not_called()

    def test_unauthorized_returns_401(self, test_client, mock_service):
        mock_service.add_collaborator.side_effect = UnauthorizedError(
            "User not among space collaborators"
        )

        response = test_client.post(f"{BASE}/{uuid4()}")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_identity_returns_400(self, test_client, mock_service):
        mock_service.add_collaborator.side_effect = InvalidIdentityIdError("junk")

        response = test_client.post(f"{BASE}/junk")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_identity_returns_404(self, test_client, mock_service):
        mock_service.add_collaborator.side_effect = IdentityNotFoundError("x")

        response = test_client.post(f"{BASE}/{uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_failure_returns_500(self, test_client, mock_service):
        mock_service.add_collaborator.side_effect = PolicyUpdateError("down")

        response = test_client.post(f"{BASE}/{uuid4()}")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

    def test_missing_token_returns_401(self, app, mock_service):
        from collaboration.dependencies.authentication import get_request_context

        app.dependency_overrides.pop(get_request_context)

        response = TestClient(app).post(f"{BASE}/{uuid4()}")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        mock_service.add_collaborator.assert_not_called()


class TestRemoveCollaboratorRoutes:
    """Tests for DELETE routes."""

    def test_remove_single(self, test_client, mock_service):
        identity_id = str(uuid4())

        response = test_client.delete(f"{BASE}/{identity_id}")

        assert response.status_code == status.HTTP_200_OK
        assert mock_service.remove_collaborator.call_args.args[2] == identity_id

    def test_remove_batch(self, test_client, mock_service):
        first, second = str(uuid4()), str(uuid4())

        response = test_client.request(
            "DELETE",
            BASE,
            json={"data": [{"id": first}, {"id": second}]},
        )

        assert response.status_code == status.HTTP_200_OK
        assert mock_service.remove_collaborators.call_args.args[2] == [first, second]

    def test_owner_removal_returns_400(self, test_client, mock_service):
        mock_service.remove_collaborator.side_effect = SpaceOwnerRemovalError()

        response = test_client.delete(f"{BASE}/{uuid4()}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Space owner" in response.json()["detail"]
