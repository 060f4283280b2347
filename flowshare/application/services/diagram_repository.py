"""
Diagram repository.

Typed access to diagram documents in the document store. Every write
commits on its own and refreshes updated_at. Store failures surface as
StorageError with the original exception kept as cause.

Dependencies: sqlalchemy, flowshare.boundary.db.CRUD, flowshare.models
System role: Diagram persistence use cases
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from flowshare.application.services.store_errors import guard_store
from flowshare.boundary.db.CRUD.diagram_crud import diagram_crud
from flowshare.boundary.db.base import utc_now
from flowshare.boundary.db.models.diagram_model import DiagramModel
from flowshare.core.exceptions import DiagramNotFoundError
from flowshare.core.roles import Role
from flowshare.models.diagram import AccessEntry, Diagram, DiagramEdge, DiagramNode

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None, fallback: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value is None:
        return fallback
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def dump_access(access: dict[str, AccessEntry]) -> dict[str, dict]:
    """Serialize an access map to its stored JSON form."""
    return {user_id: entry.model_dump(mode="json") for user_id, entry in access.items()}


def to_diagram(model: DiagramModel) -> Diagram:
    """
    Map a stored row to a Diagram.

    Missing containers become empty and missing timestamps read as now.
    """
    now = utc_now()
    return Diagram(
        id=model.id,
        title=model.title,
        description=model.description,
        owner_id=model.owner_id,
        owner_email=model.owner_email,
        nodes=model.nodes or [],
        edges=model.edges or [],
        access=model.access or {},
        created_at=_as_utc(model.created_at, now),
        updated_at=_as_utc(model.updated_at, now),
    )


class DiagramRepository:
    """Diagram document repository."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize repository with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create(
        self,
        title: str,
        owner_id: str,
        owner_email: str,
        description: str | None = None,
    ) -> Diagram:
        """
        Create an empty diagram owned by ``owner_id``.

        The owner is also recorded in the access map as editor.

        Args:
            title: Diagram title
            owner_id: Owner user id
            owner_email: Owner email
            description: Diagram description (optional)

        Returns:
            Diagram: Stored diagram with store-assigned id

        Raises:
            StorageError: If the store write fails
        """
        now = utc_now()
        access = {owner_id: AccessEntry(role=Role.EDITOR, email=owner_email, added_at=now)}

        async with guard_store(self.db, "create", owner_id=owner_id):
            model = await diagram_crud.create(
                self.db,
                title=title,
                description=description,
                owner_id=owner_id,
                owner_email=owner_email,
                nodes=[],
                edges=[],
                access=dump_access(access),
                created_at=now,
                updated_at=now,
            )
            await self.db.commit()

        logger.info(
            "Diagram created",
            extra={"diagram_id": model.id, "owner_id": owner_id},
        )
        return to_diagram(model)

    async def get(self, diagram_id: str) -> Diagram | None:
        """
        Fetch a diagram by id.

        Args:
            diagram_id: Diagram id

        Returns:
            Diagram if it exists, None otherwise

        Raises:
            StorageError: If the store read fails
        """
        async with guard_store(self.db, "get", diagram_id=diagram_id):
            model = await diagram_crud.get_by_id(self.db, diagram_id)
        return to_diagram(model) if model is not None else None

    async def list_for_user(self, user_id: str) -> list[Diagram]:
        """
        List diagrams a user owns, followed by diagrams shared with them.

        Args:
            user_id: User id

        Returns:
            list[Diagram]: Owned diagrams then shared ones, each oldest first
        """
        async with guard_store(self.db, "query", user_id=user_id):
            owned = await diagram_crud.get_by_owner(self.db, user_id)
            shared = await diagram_crud.get_shared_with(self.db, user_id)
        return [to_diagram(model) for model in [*owned, *shared]]

    async def update_content(
        self,
        diagram_id: str,
        nodes: list[DiagramNode],
        edges: list[DiagramEdge],
    ) -> Diagram:
        """Overwrite the node and edge lists of a diagram."""
        return await self._update(
            diagram_id,
            "update_content",
            nodes=[node.model_dump(mode="json") for node in nodes],
            edges=[edge.model_dump(mode="json") for edge in edges],
        )

    async def update_info(
        self,
        diagram_id: str,
        title: str,
        description: str | None = None,
    ) -> Diagram:
        """Replace title and description of a diagram."""
        return await self._update(
            diagram_id,
            "update_info",
            title=title,
            description=description,
        )

    async def update_access(
        self,
        diagram_id: str,
        access: dict[str, AccessEntry],
    ) -> Diagram:
        """Replace the whole access map of a diagram."""
        return await self._update(
            diagram_id,
            "update_access",
            access=dump_access(access),
        )

    async def delete(self, diagram_id: str) -> bool:
        """
        Delete a diagram.

        Args:
            diagram_id: Diagram id

        Returns:
            bool: True if a diagram was removed, False if none existed
        """
        async with guard_store(self.db, "delete", diagram_id=diagram_id):
            deleted = await diagram_crud.delete_by_id(self.db, diagram_id)
            await self.db.commit()

        if deleted:
            logger.info("Diagram deleted", extra={"diagram_id": diagram_id})
        return deleted

    async def _update(self, diagram_id: str, operation: str, **values) -> Diagram:
        """
        Merge ``values`` into a stored diagram and bump updated_at.

        Raises:
            DiagramNotFoundError: If no diagram has that id
            StorageError: If the store write fails
        """
        values["updated_at"] = utc_now()

        async with guard_store(self.db, operation, diagram_id=diagram_id):
            model = await diagram_crud.update_by_id(self.db, diagram_id, **values)
            if model is None:
                await self.db.rollback()
            else:
                await self.db.commit()

        if model is None:
            raise DiagramNotFoundError(diagram_id)

        logger.debug(
            "Diagram updated",
            extra={"diagram_id": diagram_id, "operation": operation},
        )
        return to_diagram(model)
