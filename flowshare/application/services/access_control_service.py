"""
Access control service.

Grants and revokes per-user roles on a diagram. Only editors may change
the access map. The stored diagram is re-read right before each merge so
the update starts from the latest map, but there is no version check:
two concurrent changes can still overwrite each other.

Dependencies: flowshare.application.services.diagram_repository, flowshare.core
System role: Diagram sharing use cases
"""

import logging

from flowshare.application.services.diagram_repository import DiagramRepository
from flowshare.boundary.db.base import utc_now
from flowshare.core.exceptions import (
    DiagramNotFoundError,
    NotFoundError,
    PermissionDeniedError,
)
from flowshare.core.roles import Role, can_edit
from flowshare.models.diagram import AccessEntry, Diagram

logger = logging.getLogger(__name__)


class AccessControlService:
    """Diagram access map manager."""

    def __init__(self, repository: DiagramRepository) -> None:
        """
        Initialize access control with the diagram repository.

        Args:
            repository: Repository used to re-read and persist diagrams
        """
        self.repository = repository

    async def grant(
        self,
        diagram: Diagram,
        caller_role: Role | None,
        target_user_id: str,
        target_email: str,
        role: Role,
    ) -> Diagram:
        """
        Give ``target_user_id`` a role on the diagram, replacing any previous one.

        Args:
            diagram: Diagram as seen by the caller
            caller_role: Role the caller holds on the diagram
            target_user_id: User receiving the role
            target_email: Email recorded with the entry
            role: Role to grant

        Returns:
            Diagram: Diagram with the updated access map

        Raises:
            PermissionDeniedError: If the caller is not an editor
            DiagramNotFoundError: If the diagram no longer exists
            StorageError: If the store fails
        """
        self._require_editor("share", caller_role, diagram.id)

        current = await self._reload(diagram.id)
        access = dict(current.access)
        access[target_user_id] = AccessEntry(
            role=Role(role),
            email=target_email,
            added_at=utc_now(),
        )

        updated = await self.repository.update_access(diagram.id, access)
        logger.info(
            "Diagram access granted",
            extra={
                "diagram_id": diagram.id,
                "target_user_id": target_user_id,
                "role": Role(role).value,
            },
        )
        return updated

    async def revoke(
        self,
        diagram: Diagram,
        caller_role: Role | None,
        target_user_id: str,
    ) -> Diagram:
        """
        Remove the access entry of ``target_user_id``.

        Revoking a user without an entry stores the map unchanged.

        Raises:
            PermissionDeniedError: If the caller is not an editor
            NotFoundError: If the target is the diagram owner
            DiagramNotFoundError: If the diagram no longer exists
        """
        self._require_editor("revoke access", caller_role, diagram.id)

        current = await self._reload(diagram.id)
        if target_user_id == current.owner_id:
            raise NotFoundError(
                "Owner access cannot be revoked",
                resource="access",
                resource_id=target_user_id,
            )

        access = {
            user_id: entry
            for user_id, entry in current.access.items()
            if user_id != target_user_id
        }
        updated = await self.repository.update_access(diagram.id, access)
        logger.info(
            "Diagram access revoked",
            extra={
                "diagram_id": diagram.id,
                "target_user_id": target_user_id,
                "had_entry": target_user_id in current.access,
            },
        )
        return updated

    async def _reload(self, diagram_id: str) -> Diagram:
        current = await self.repository.get(diagram_id)
        if current is None:
            raise DiagramNotFoundError(diagram_id)
        return current

    @staticmethod
    def _require_editor(action: str, caller_role: Role | None, diagram_id: str) -> None:
        if not can_edit(caller_role):
            logger.warning(
                "Access change refused",
                extra={
                    "diagram_id": diagram_id,
                    "action": action,
                    "role": caller_role.value if caller_role else None,
                },
            )
            raise PermissionDeniedError(
                action,
                role=caller_role.value if caller_role else None,
                diagram_id=diagram_id,
            )
