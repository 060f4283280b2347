"""
Workspace service.

Dashboard use cases: listing the diagrams a user can open, creating
new diagrams and deleting owned ones.

Dependencies: flowshare.application.services.diagram_repository, flowshare.core
System role: Diagram lifecycle use cases
"""

import logging

from flowshare.application.services.diagram_repository import DiagramRepository
from flowshare.core.exceptions import (
    DiagramNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from flowshare.core.roles import Role, resolve_role
from flowshare.models.diagram import Diagram, DiagramSummary
from flowshare.models.user import UserDocument

logger = logging.getLogger(__name__)


def summarize(diagram: Diagram, user_id: str) -> DiagramSummary:
    """Dashboard entry of ``diagram`` as seen by ``user_id``."""
    return DiagramSummary(
        id=diagram.id,
        title=diagram.title,
        description=diagram.description,
        owner_id=diagram.owner_id,
        owner_email=diagram.owner_email,
        role=resolve_role(diagram, user_id),
        is_owner=diagram.owner_id == user_id,
        node_count=len(diagram.nodes),
        edge_count=len(diagram.edges),
        created_at=diagram.created_at,
        updated_at=diagram.updated_at,
    )


class WorkspaceService:
    """Workspace service orchestrator."""

    def __init__(self, repository: DiagramRepository) -> None:
        """
        Initialize workspace service with the diagram repository.

        Args:
            repository: Diagram repository
        """
        self.repository = repository

    async def list_diagrams(self, user_id: str) -> list[DiagramSummary]:
        """
        List owned diagrams first, then the ones shared with the user.

        Args:
            user_id: Authenticated user

        Returns:
            list[DiagramSummary]: Dashboard entries
        """
        diagrams = await self.repository.list_for_user(user_id)
        return [summarize(diagram, user_id) for diagram in diagrams]

    async def create_diagram(
        self,
        owner: UserDocument,
        title: str,
        description: str | None = None,
    ) -> Diagram:
        """
        Create an empty diagram owned by ``owner``.

        Raises:
            PermissionDeniedError: If the account role is not editor
            ValidationError: If the title is blank
        """
        if owner.role != Role.EDITOR:
            raise PermissionDeniedError("create diagram", role=Role(owner.role).value)

        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required", field="title")

        return await self.repository.create(
            title,
            owner.id,
            owner.email,
            description=description,
        )

    async def delete_diagram(self, user_id: str, diagram_id: str) -> None:
        """
        Permanently delete a diagram. Only its owner may do so.

        Raises:
            DiagramNotFoundError: If the diagram does not exist
            PermissionDeniedError: If the user is not the owner
        """
        diagram = await self.repository.get(diagram_id)
        if diagram is None:
            raise DiagramNotFoundError(diagram_id)

        if diagram.owner_id != user_id:
            role = resolve_role(diagram, user_id)
            raise PermissionDeniedError(
                "delete diagram",
                role=role.value if role else None,
                diagram_id=diagram_id,
            )

        if not await self.repository.delete(diagram_id):
            raise DiagramNotFoundError(diagram_id)

        logger.info(
            "Diagram deleted by owner",
            extra={"diagram_id": diagram_id, "user_id": user_id},
        )
