"""
Test suite for the user HTTP API and caller identity resolution.

System role: Verification of account endpoints and X-User-Id handling
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from flowshare.api.deps.dependencies import get_user_service
from flowshare.api.main import create_app
from flowshare.core.exceptions import ValidationError
from flowshare.core.roles import Role
from flowshare.models.user import UserDocument

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def alice() -> UserDocument:
    return UserDocument(id="u1", email="alice@example.com", role=Role.EDITOR, created_at=NOW)


@pytest.fixture
def mock_user_service(alice) -> AsyncMock:
    service = AsyncMock()
    service.get_user.side_effect = lambda user_id: alice if user_id == "u1" else None
    return service


@pytest.fixture
def client(mock_user_service) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    return TestClient(app)


class TestIdentity:
    """Caller identity comes from the X-User-Id header."""

    def test_missing_header_is_unauthorized(self, client) -> None:
        response = client.get("/api/v1/users/me")

        assert response.status_code == 401

    def test_unknown_user_is_unauthorized(self, client) -> None:
        response = client.get("/api/v1/users/me", headers={"X-User-Id": "u9"})

        assert response.status_code == 401

    def test_diagram_routes_require_identity(self, client) -> None:
        response = client.get("/api/v1/diagrams")

        assert response.status_code == 401


class TestUsers:
    """POST /users, GET/PATCH /users/me."""

    def test_get_me(self, client) -> None:
        response = client.get("/api/v1/users/me", headers={"X-User-Id": "u1"})

        assert response.status_code == 200
        assert response.json()["email"] == "alice@example.com"

    def test_register(self, client, mock_user_service) -> None:
        mock_user_service.register_user.return_value = UserDocument(
            id="u2", email="bob@example.com", role=Role.VIEWER, created_at=NOW
        )

        response = client.post(
            "/api/v1/users",
            json={"email": "bob@example.com", "role": "viewer"},
            headers={"X-User-Id": "u2"},
        )

        assert response.status_code == 201
        assert response.json()["role"] == "viewer"
        mock_user_service.register_user.assert_awaited_once_with(
            "u2", "bob@example.com", role=Role.VIEWER, display_name=None
        )

    def test_register_duplicate(self, client, mock_user_service) -> None:
        mock_user_service.register_user.side_effect = ValidationError(
            "Email is already registered", field="email"
        )

        response = client.post(
            "/api/v1/users", json={"email": "alice@example.com"}, headers={"X-User-Id": "u3"}
        )

        assert response.status_code == 400

    def test_update_display_name(self, client, mock_user_service, alice) -> None:
        mock_user_service.update_display_name.return_value = alice.model_copy(
            update={"display_name": "Alice"}
        )

        response = client.patch(
            "/api/v1/users/me", json={"display_name": "Alice"}, headers={"X-User-Id": "u1"}
        )

        assert response.status_code == 200
        assert response.json()["display_name"] == "Alice"
        mock_user_service.update_display_name.assert_awaited_once_with("u1", "Alice")
