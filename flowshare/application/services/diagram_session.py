"""
Diagram session controller.

One DiagramSession per diagram a user has open. Opening resolves the
user's role once; every gesture and write afterwards is gated on that
role, and content edits go through the session's edit buffer until an
explicit save.

Dependencies: flowshare.application.services, flowshare.core, flowshare.configs
System role: Edit/share orchestration for an open diagram
"""

import logging
import random
from typing import Callable, Sequence

from flowshare.application.services.access_control_service import AccessControlService
from flowshare.application.services.diagram_repository import DiagramRepository
from flowshare.application.services.user_service import UserService
from flowshare.configs.editor import EditorSettings
from flowshare.core.edit_buffer import EditBuffer
from flowshare.core.exceptions import (
    DiagramNotFoundError,
    NoAccessError,
    PermissionDeniedError,
    UserNotFoundError,
    ValidationError,
)
from flowshare.core.roles import Role, can_edit, resolve_role
from flowshare.models.changes import Connection, EdgeChange, NodeChange
from flowshare.models.diagram import Diagram, DiagramEdge, DiagramNode

logger = logging.getLogger(__name__)


class DiagramSession:
    """
    Open diagram for a single user.

    Attributes:
        user_id: User the session was opened for
        repository: Diagram repository used for every write
        user_lookup: Resolves share targets by email
        access_control: Access map manager
    """

    def __init__(
        self,
        diagram: Diagram,
        user_id: str,
        role: Role,
        repository: DiagramRepository,
        user_lookup: UserService,
        access_control: AccessControlService | None = None,
        settings: EditorSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._diagram = diagram
        self._role = role
        self.user_id = user_id
        self.repository = repository
        self.user_lookup = user_lookup
        self.access_control = access_control or AccessControlService(repository)
        self._buffer = EditBuffer(can_edit=can_edit(role), settings=settings, rng=rng)
        self._buffer.load(diagram.nodes, diagram.edges)

    @classmethod
    async def open(
        cls,
        repository: DiagramRepository,
        user_lookup: UserService,
        diagram_id: str,
        user_id: str,
        *,
        access_control: AccessControlService | None = None,
        settings: EditorSettings | None = None,
        rng: random.Random | None = None,
    ) -> "DiagramSession":
        """
        Load a diagram and resolve the caller's role on it.

        Args:
            repository: Diagram repository
            user_lookup: User lookup for sharing
            diagram_id: Diagram to open
            user_id: Authenticated user

        Returns:
            DiagramSession: Session with a clean edit buffer

        Raises:
            DiagramNotFoundError: If the diagram does not exist
            NoAccessError: If the user has no role on the diagram
        """
        diagram = await repository.get(diagram_id)
        if diagram is None:
            raise DiagramNotFoundError(diagram_id)

        role = resolve_role(diagram, user_id)
        if role is None:
            logger.warning(
                "Diagram open refused",
                extra={"diagram_id": diagram_id, "user_id": user_id},
            )
            raise NoAccessError(diagram_id, user_id)

        logger.info(
            "Diagram opened",
            extra={"diagram_id": diagram_id, "user_id": user_id, "role": role.value},
        )
        return cls(
            diagram,
            user_id,
            role,
            repository,
            user_lookup,
            access_control=access_control,
            settings=settings,
            rng=rng,
        )

    @property
    def diagram(self) -> Diagram:
        """Last diagram snapshot known to the session (not the buffer content)."""
        return self._diagram.model_copy(deep=True)

    @property
    def diagram_id(self) -> str:
        return self._diagram.id

    @property
    def role(self) -> Role:
        return self._role

    @property
    def can_edit(self) -> bool:
        return can_edit(self._role)

    @property
    def buffer(self) -> EditBuffer:
        return self._buffer

    @property
    def nodes(self) -> list[DiagramNode]:
        return self._buffer.nodes

    @property
    def edges(self) -> list[DiagramEdge]:
        return self._buffer.edges

    @property
    def is_dirty(self) -> bool:
        return self._buffer.is_dirty

    @property
    def label_change_handler(self) -> Callable[[str, str], bool] | None:
        """
        Relabel callback for the editing surface.

        None for viewers, so a read-only surface has nothing to wire up.
        The callback is handed out per render and never stored in node data.
        """
        return self.relabel if self.can_edit else None

    def _require_editor(self, action: str) -> None:
        if self.can_edit:
            return
        logger.warning(
            "Gesture refused for non-editor",
            extra={"diagram_id": self.diagram_id, "user_id": self.user_id, "action": action},
        )
        raise PermissionDeniedError(action, role=self._role.value, diagram_id=self.diagram_id)

    def apply_node_changes(self, changes: Sequence[NodeChange]) -> bool:
        self._require_editor("edit nodes")
        return self._buffer.apply_node_changes(changes)

    def apply_edge_changes(self, changes: Sequence[EdgeChange]) -> bool:
        self._require_editor("edit edges")
        return self._buffer.apply_edge_changes(changes)

    def connect(self, connection: Connection) -> bool:
        self._require_editor("connect nodes")
        return self._buffer.connect(connection)

    def add_node(self, color: str | None = None) -> DiagramNode | None:
        self._require_editor("add node")
        return self._buffer.add_node(color)

    def relabel(self, node_id: str, label: str) -> bool:
        self._require_editor("relabel node")
        return self._buffer.relabel(node_id, label)

    async def save(self) -> bool:
        """
        Persist the buffer's full graph.

        Returns:
            bool: True if a save happened, False if there was nothing to save

        Raises:
            PermissionDeniedError: If the session is read-only
            StorageError: If the store fails; the buffer stays dirty
        """
        self._require_editor("save")
        saved = await self._buffer.save(self._persist_content)
        if saved:
            logger.info(
                "Diagram saved",
                extra={
                    "diagram_id": self.diagram_id,
                    "user_id": self.user_id,
                    "node_count": len(self._diagram.nodes),
                    "edge_count": len(self._diagram.edges),
                },
            )
        return saved

    async def _persist_content(self, nodes: list[DiagramNode], edges: list[DiagramEdge]) -> None:
        self._diagram = await self.repository.update_content(self.diagram_id, nodes, edges)

    async def save_content(
        self,
        nodes: Sequence[DiagramNode],
        edges: Sequence[DiagramEdge],
    ) -> Diagram:
        """
        Overwrite the stored graph with explicit node and edge lists.

        The buffer is reloaded from the result, dropping unsaved edits.
        """
        self._require_editor("save")
        self._diagram = await self.repository.update_content(
            self.diagram_id, list(nodes), list(edges)
        )
        self._buffer.load(self._diagram.nodes, self._diagram.edges)
        return self.diagram

    async def save_info(self, title: str, description: str | None = None) -> Diagram:
        """
        Replace title and description.

        Raises:
            PermissionDeniedError: If the session is read-only
            ValidationError: If the title is blank
        """
        self._require_editor("edit diagram info")
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required", field="title")

        self._diagram = await self.repository.update_info(self.diagram_id, title, description)
        return self.diagram

    async def share(self, email: str, role: Role = Role.VIEWER) -> Diagram:
        """
        Grant a role to the account registered with ``email``.

        Args:
            email: Target account email
            role: Role to grant

        Returns:
            Diagram: Refreshed snapshot with the new access entry

        Raises:
            PermissionDeniedError: If the session is read-only
            ValidationError: If the email is blank
            UserNotFoundError: If no account has that email
        """
        self._require_editor("share")
        email = (email or "").strip()
        if not email:
            raise ValidationError("Email is required", field="email")

        target = await self.user_lookup.find_by_email(email)
        if target is None:
            raise UserNotFoundError(email=email)

        self._diagram = await self.access_control.grant(
            self._diagram, self._role, target.id, target.email, Role(role)
        )
        return self.diagram

    async def revoke_access(self, user_id: str) -> Diagram:
        """Remove a user's entry from the access map."""
        self._require_editor("revoke access")
        self._diagram = await self.access_control.revoke(self._diagram, self._role, user_id)
        return self.diagram


class DiagramSessionFactory:
    """Opens DiagramSessions sharing one repository and user lookup."""

    def __init__(
        self,
        repository: DiagramRepository,
        user_lookup: UserService,
        settings: EditorSettings | None = None,
    ) -> None:
        self.repository = repository
        self.user_lookup = user_lookup
        self.settings = settings
        self.access_control = AccessControlService(repository)

    async def open(self, diagram_id: str, user_id: str) -> DiagramSession:
        return await DiagramSession.open(
            self.repository,
            self.user_lookup,
            diagram_id,
            user_id,
            access_control=self.access_control,
            settings=self.settings,
        )
