"""Tests for application-wide error rendering."""

from fastapi.testclient import TestClient

from photo_drive.auth.session_store import SessionStore
from photo_drive.server.main import create_app

from conftest import FakeIdentityProvider, make_config


class TestErrorRendering:
    """Tests for the shape of request-level errors."""

    def setup_method(self):
        self.app = create_app(
            config=make_config(),
            identity_provider=FakeIdentityProvider(),
            session_store=SessionStore(),
        )

        @self.app.get("/api/items")
        def list_items(limit: int):
            return {"limit": limit}

        self.client = TestClient(self.app)

    def test_validation_error_is_400_message(self):
        response = self.client.get("/api/items", params={"limit": "many"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid request: query.limit"}

    def test_missing_parameter_is_400_message(self):
        response = self.client.get("/api/items")

        assert response.status_code == 400
        assert set(response.json()) == {"message"}

    def test_unknown_route_keeps_message_shape(self):
        response = self.client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}
