"""Unit tests for the application entry point."""

from fastapi import status
from fastapi.testclient import TestClient

from main import app


class TestApplication:
    """Tests for the FastAPI application wiring."""

    def test_health(self):
        response = TestClient(app).get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}

    def test_collaborator_routes_registered(self):
        paths = {route.path for route in app.routes}

        assert "/spaces/{space_id}/collaborators" in paths
        assert "/spaces/{space_id}/collaborators/{identity_id}" in paths
