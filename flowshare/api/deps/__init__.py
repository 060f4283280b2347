"""API dependencies."""

from flowshare.api.deps.dependencies import (
    get_authenticated_user_id,
    get_current_user,
    get_diagram_repository,
    get_session_factory,
    get_settings_dependency,
    get_user_service,
    get_workspace_service,
)

__all__ = [
    "get_authenticated_user_id",
    "get_current_user",
    "get_diagram_repository",
    "get_session_factory",
    "get_settings_dependency",
    "get_user_service",
    "get_workspace_service",
]
