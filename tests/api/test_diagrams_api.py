"""
Test suite for the diagram HTTP API.

Services are replaced through dependency_overrides; the tests check
routing, payload mapping and domain error -> status code translation.

System role: Verification of the diagram management HTTP API
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from flowshare.api.deps.dependencies import (
    get_current_user,
    get_session_factory,
    get_workspace_service,
)
from flowshare.api.main import create_app
from flowshare.core.exceptions import (
    DiagramNotFoundError,
    NoAccessError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    UserNotFoundError,
    ValidationError,
)
from flowshare.core.roles import Role
from flowshare.models.diagram import AccessEntry, Diagram, DiagramSummary
from flowshare.models.user import UserDocument

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
HEADERS = {"X-User-Id": "u1"}


def make_diagram(**overrides) -> Diagram:
    fields = {
        "id": "d1",
        "title": "Flow",
        "description": None,
        "owner_id": "u1",
        "owner_email": "owner@example.com",
        "access": {"u1": AccessEntry(role=Role.EDITOR, email="owner@example.com", added_at=NOW)},
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return Diagram(**fields)


@pytest.fixture
def current_user() -> UserDocument:
    return UserDocument(id="u1", email="owner@example.com", role=Role.EDITOR, created_at=NOW)


@pytest.fixture
def mock_workspace() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_session() -> MagicMock:
    """Open session stand-in holding diagram d1 with the editor role."""
    session = MagicMock()
    session.diagram = make_diagram()
    session.role = Role.EDITOR
    session.save_info = AsyncMock()
    session.save_content = AsyncMock()
    session.share = AsyncMock()
    session.revoke_access = AsyncMock()
    return session


@pytest.fixture
def mock_sessions(mock_session) -> MagicMock:
    factory = MagicMock()
    factory.open = AsyncMock(return_value=mock_session)
    return factory


@pytest.fixture
def client(current_user, mock_workspace, mock_sessions) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_workspace_service] = lambda: mock_workspace
    app.dependency_overrides[get_session_factory] = lambda: mock_sessions
    return TestClient(app)


class TestListAndCreate:
    """GET/POST /diagrams."""

    def test_list_diagrams(self, client, mock_workspace) -> None:
        mock_workspace.list_diagrams.return_value = [
            DiagramSummary(
                id="d1",
                title="Flow",
                description=None,
                owner_id="u1",
                owner_email="owner@example.com",
                role=Role.EDITOR,
                is_owner=True,
                node_count=2,
                edge_count=1,
                created_at=NOW,
                updated_at=NOW,
            )
        ]

        response = client.get("/api/v1/diagrams", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data[0]["role"] == "editor"
        assert data[0]["node_count"] == 2
        mock_workspace.list_diagrams.assert_awaited_once_with("u1")

    def test_create_diagram(self, client, mock_workspace, current_user) -> None:
        mock_workspace.create_diagram.return_value = make_diagram(title="New")

        response = client.post(
            "/api/v1/diagrams", json={"title": "New", "description": "Desc"}, headers=HEADERS
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "New"
        assert data["can_edit"] is True
        mock_workspace.create_diagram.assert_awaited_once_with(
            current_user, title="New", description="Desc"
        )

    def test_create_diagram_empty_title_rejected_by_schema(self, client) -> None:
        response = client.post("/api/v1/diagrams", json={"title": ""}, headers=HEADERS)

        assert response.status_code == 422

    def test_viewer_account_cannot_create(self, client, mock_workspace) -> None:
        mock_workspace.create_diagram.side_effect = PermissionDeniedError(
            "create diagram", role="viewer"
        )

        response = client.post("/api/v1/diagrams", json={"title": "New"}, headers=HEADERS)

        assert response.status_code == 403


class TestOpenDiagram:
    """GET /diagrams/{id}."""

    def test_open_returns_role(self, client, mock_sessions, mock_session) -> None:
        mock_session.role = Role.VIEWER

        response = client.get("/api/v1/diagrams/d1", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "viewer"
        assert data["can_edit"] is False
        mock_sessions.open.assert_awaited_once_with("d1", "u1")

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (DiagramNotFoundError("d1"), 404),
            (NoAccessError("d1", "u1"), 403),
            (
                StorageError(
                    "Document store get failed",
                    operation="get",
                    cause=OperationalError("SELECT", {}, Exception("down")),
                ),
                503,
            ),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_open_errors(self, client, mock_sessions, error, status_code) -> None:
        mock_sessions.open.side_effect = error

        response = client.get("/api/v1/diagrams/d1", headers=HEADERS)

        assert response.status_code == status_code


class TestEditing:
    """PUT /diagrams/{id} and PUT /diagrams/{id}/content."""

    def test_update_info(self, client, mock_session) -> None:
        response = client.put(
            "/api/v1/diagrams/d1", json={"title": "Renamed"}, headers=HEADERS
        )

        assert response.status_code == 200
        mock_session.save_info.assert_awaited_once_with("Renamed", None)

    def test_update_info_validation_error(self, client, mock_session) -> None:
        mock_session.save_info.side_effect = ValidationError("Title is required", field="title")

        response = client.put("/api/v1/diagrams/d1", json={"title": " "}, headers=HEADERS)

        assert response.status_code == 400
        assert response.json()["detail"] == "Title is required"

    def test_save_content(self, client, mock_session) -> None:
        payload = {
            "nodes": [
                {
                    "id": "node-1",
                    "type": "default",
                    "position": {"x": 250, "y": 100},
                    "data": {"label": "Start", "color": "#6366f1", "onLabelChange": "fn"},
                }
            ],
            "edges": [],
        }

        response = client.put("/api/v1/diagrams/d1/content", json=payload, headers=HEADERS)

        assert response.status_code == 200
        nodes, edges = mock_session.save_content.await_args.args
        assert nodes[0].data.label == "Start"
        assert "onLabelChange" not in nodes[0].data.model_dump()
        assert edges == []

    def test_viewer_save_is_forbidden(self, client, mock_session) -> None:
        mock_session.save_content.side_effect = PermissionDeniedError("save", role="viewer")

        response = client.put(
            "/api/v1/diagrams/d1/content", json={"nodes": [], "edges": []}, headers=HEADERS
        )

        assert response.status_code == 403


class TestDelete:
    """DELETE /diagrams/{id}."""

    def test_delete(self, client, mock_workspace) -> None:
        response = client.delete("/api/v1/diagrams/d1", headers=HEADERS)

        assert response.status_code == 204
        mock_workspace.delete_diagram.assert_awaited_once_with("u1", "d1")

    def test_delete_not_owner(self, client, mock_workspace) -> None:
        mock_workspace.delete_diagram.side_effect = PermissionDeniedError(
            "delete diagram", role="editor", diagram_id="d1"
        )

        response = client.delete("/api/v1/diagrams/d1", headers=HEADERS)

        assert response.status_code == 403


class TestAccess:
    """POST /diagrams/{id}/access and DELETE /diagrams/{id}/access/{user_id}."""

    def test_share(self, client, mock_session) -> None:
        response = client.post(
            "/api/v1/diagrams/d1/access",
            json={"email": "viewer@example.com", "role": "viewer"},
            headers=HEADERS,
        )

        assert response.status_code == 200
        mock_session.share.assert_awaited_once_with("viewer@example.com", Role.VIEWER)

    def test_share_unknown_user(self, client, mock_session) -> None:
        mock_session.share.side_effect = UserNotFoundError(email="ghost@example.com")

        response = client.post(
            "/api/v1/diagrams/d1/access", json={"email": "ghost@example.com"}, headers=HEADERS
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found with that email"

    def test_revoke(self, client, mock_session) -> None:
        response = client.delete("/api/v1/diagrams/d1/access/u2", headers=HEADERS)

        assert response.status_code == 200
        mock_session.revoke_access.assert_awaited_once_with("u2")

    def test_revoke_owner(self, client, mock_session) -> None:
        mock_session.revoke_access.side_effect = NotFoundError(
            "Owner access cannot be revoked", resource="access", resource_id="u1"
        )

        response = client.delete("/api/v1/diagrams/d1/access/u1", headers=HEADERS)

        assert response.status_code == 404
