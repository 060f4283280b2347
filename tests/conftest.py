"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, repositories/services bound to it,
sample users and diagrams
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import random
from datetime import datetime, timezone

import pytest

from flowshare.core.roles import Role
from flowshare.models.diagram import (
    AccessEntry,
    Diagram,
    DiagramEdge,
    DiagramNode,
    NodeData,
    Position,
)
from flowshare.models.user import UserDocument


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from flowshare.boundary.db.base import Base
    import flowshare.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def diagram_repository(test_async_db):
    """DiagramRepository bound to the in-memory database."""
    from flowshare.application.services import DiagramRepository

    return DiagramRepository(db=test_async_db)


@pytest.fixture
def user_service(test_async_db):
    """UserService bound to the in-memory database."""
    from flowshare.application.services import UserService

    return UserService(db=test_async_db)


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source for node placement."""
    return random.Random(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _node(node_id: str, label: str = "Node", x: float = 0, y: float = 0) -> DiagramNode:
    """Build a diagram node for tests."""
    return DiagramNode(
        id=node_id,
        position=Position(x=x, y=y),
        data=NodeData(label=label, color="#6366f1"),
    )


def _edge(source: str, target: str, edge_id: str | None = None) -> DiagramEdge:
    """Build a diagram edge for tests."""
    return DiagramEdge(id=edge_id or f"e-{source}-{target}", source=source, target=target)


@pytest.fixture
def owner() -> UserDocument:
    return UserDocument(
        id="u1",
        email="owner@example.com",
        role=Role.EDITOR,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_diagram(now) -> Diagram:
    """
    Diagram owned by u1, shared with u2 as viewer and u3 as editor.

    Returns:
        Diagram: Two nodes joined by one edge
    """
    return Diagram(
        id="d1",
        title="Architecture",
        description="System overview",
        owner_id="u1",
        owner_email="owner@example.com",
        nodes=[_node("node-1", "API"), _node("node-2", "DB", x=100)],
        edges=[_edge("node-1", "node-2")],
        access={
            "u1": AccessEntry(role=Role.EDITOR, email="owner@example.com", added_at=now),
            "u2": AccessEntry(role=Role.VIEWER, email="viewer@example.com", added_at=now),
            "u3": AccessEntry(role=Role.EDITOR, email="editor@example.com", added_at=now),
        },
        created_at=now,
        updated_at=now,
    )
