"""
Test suite for DiagramRepository against an in-memory database.

Tests document mapping, ownership/sharing queries, full overwrites,
timestamp handling and storage error translation.

System role: Verification of diagram persistence
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from flowshare.application.services.diagram_repository import DiagramRepository, to_diagram
from flowshare.boundary.db.models.diagram_model import DiagramModel
from flowshare.core.exceptions import DiagramNotFoundError, StorageError
from flowshare.core.roles import Role
from flowshare.models.diagram import (
    AccessEntry,
    DiagramEdge,
    DiagramNode,
    NodeData,
    Position,
)


def node(node_id: str, label: str) -> DiagramNode:
    return DiagramNode(
        id=node_id,
        position=Position(x=1.5, y=2.5),
        data=NodeData(label=label, color="#10b981"),
    )


class TestCreate:
    """Test suite for DiagramRepository.create()."""

    @pytest.mark.asyncio
    async def test_create_seeds_owner_access(self, diagram_repository) -> None:
        diagram = await diagram_repository.create(
            "Architecture", "u1", "owner@example.com", description="Overview"
        )

        assert len(diagram.id) == 32
        assert diagram.title == "Architecture"
        assert diagram.nodes == []
        assert diagram.edges == []
        assert diagram.access["u1"].role is Role.EDITOR
        assert diagram.access["u1"].email == "owner@example.com"
        assert diagram.created_at.tzinfo is not None
        assert diagram.created_at == diagram.updated_at

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, diagram_repository) -> None:
        assert await diagram_repository.get("missing") is None


class TestListForUser:
    """Test suite for DiagramRepository.list_for_user()."""

    @pytest.mark.asyncio
    async def test_owned_first_then_shared(self, diagram_repository) -> None:
        shared = await diagram_repository.create("Shared", "u2", "other@example.com")
        owned = await diagram_repository.create("Mine", "u1", "owner@example.com")
        await diagram_repository.create("Private", "u3", "third@example.com")
        await diagram_repository.update_access(
            shared.id,
            {
                **shared.access,
                "u1": AccessEntry(role=Role.VIEWER, email="owner@example.com"),
            },
        )

        diagrams = await diagram_repository.list_for_user("u1")

        assert [d.id for d in diagrams] == [owned.id, shared.id]

    @pytest.mark.asyncio
    async def test_unknown_user_sees_nothing(self, diagram_repository) -> None:
        await diagram_repository.create("Mine", "u1", "owner@example.com")

        assert await diagram_repository.list_for_user("u9") == []


class TestUpdates:
    """Test suite for the full-overwrite update operations."""

    @pytest.mark.asyncio
    async def test_content_round_trip(self, diagram_repository) -> None:
        created = await diagram_repository.create("Flow", "u1", "owner@example.com")
        nodes = [node("node-1", "Start"), node("node-2", "End")]
        edges = [
            DiagramEdge(
                id="xy-edge__node-1-node-2",
                source="node-1",
                target="node-2",
                type="smoothstep",
                animated=True,
                style={"stroke": "var(--accent-primary)", "strokeWidth": 2},
            )
        ]

        await diagram_repository.update_content(created.id, nodes, edges)
        reloaded = await diagram_repository.get(created.id)

        assert reloaded.nodes == nodes
        assert reloaded.edges == edges
        assert reloaded.updated_at >= created.updated_at

    @pytest.mark.asyncio
    async def test_update_info_overwrites_both_fields(self, diagram_repository) -> None:
        created = await diagram_repository.create(
            "Flow", "u1", "owner@example.com", description="Old"
        )

        updated = await diagram_repository.update_info(created.id, "Renamed")

        assert updated.title == "Renamed"
        assert updated.description is None

    @pytest.mark.asyncio
    async def test_update_access_replaces_map(self, diagram_repository) -> None:
        created = await diagram_repository.create("Flow", "u1", "owner@example.com")

        updated = await diagram_repository.update_access(
            created.id,
            {"u2": AccessEntry(role=Role.VIEWER, email="viewer@example.com")},
        )

        assert list(updated.access) == ["u2"]

    @pytest.mark.asyncio
    async def test_update_missing_diagram(self, diagram_repository) -> None:
        with pytest.raises(DiagramNotFoundError):
            await diagram_repository.update_info("missing", "Title")


class TestDelete:
    """Test suite for DiagramRepository.delete()."""

    @pytest.mark.asyncio
    async def test_delete_then_get_returns_none(self, diagram_repository) -> None:
        created = await diagram_repository.create("Flow", "u1", "owner@example.com")

        assert await diagram_repository.delete(created.id) is True
        assert await diagram_repository.get(created.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, diagram_repository) -> None:
        assert await diagram_repository.delete("missing") is False


class TestMapping:
    """Test suite for row -> Diagram mapping."""

    def test_absent_fields_default(self) -> None:
        model = DiagramModel(
            id="d1",
            title="Legacy",
            owner_id="u1",
            owner_email="owner@example.com",
        )
        model.nodes = None
        model.edges = None
        model.access = None

        diagram = to_diagram(model)

        assert diagram.nodes == []
        assert diagram.edges == []
        assert diagram.access == {}
        assert diagram.created_at.tzinfo is not None

    def test_naive_timestamps_read_as_utc(self) -> None:
        model = DiagramModel(
            id="d1",
            title="Legacy",
            owner_id="u1",
            owner_email="owner@example.com",
            nodes=[],
            edges=[],
            access={},
            created_at=datetime(2024, 1, 1, 8, 0),
            updated_at=datetime(2024, 1, 2, 8, 0),
        )

        diagram = to_diagram(model)

        assert diagram.created_at == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


class TestStorageErrors:
    """Store failures surface as StorageError with the cause kept."""

    @pytest.mark.asyncio
    async def test_read_failure_is_wrapped(self) -> None:
        db = AsyncMock()
        cause = OperationalError("SELECT", {}, Exception("database is locked"))
        repository = DiagramRepository(db=db)

        with patch(
            "flowshare.application.services.diagram_repository.diagram_crud.get_by_id",
            new=AsyncMock(side_effect=cause),
        ):
            with pytest.raises(StorageError) as exc_info:
                await repository.get("d1")

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.operation == "get"
        db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_write_failure_is_wrapped(self) -> None:
        db = AsyncMock()
        db.commit.side_effect = OperationalError("UPDATE", {}, Exception("disk I/O error"))
        repository = DiagramRepository(db=db)

        with patch(
            "flowshare.application.services.diagram_repository.diagram_crud.update_by_id",
            new=AsyncMock(return_value=object()),
        ):
            with pytest.raises(StorageError) as exc_info:
                await repository.update_info("d1", "Title")

        assert exc_info.value.operation == "update_info"
