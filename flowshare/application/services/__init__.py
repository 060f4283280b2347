"""Application services: diagram persistence, sharing, sessions, workspace and users."""

from flowshare.application.services.access_control_service import AccessControlService
from flowshare.application.services.diagram_repository import DiagramRepository
from flowshare.application.services.diagram_session import (
    DiagramSession,
    DiagramSessionFactory,
)
from flowshare.application.services.user_service import UserService
from flowshare.application.services.workspace_service import WorkspaceService

__all__ = [
    "AccessControlService",
    "DiagramRepository",
    "DiagramSession",
    "DiagramSessionFactory",
    "UserService",
    "WorkspaceService",
]
