"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: flowshare.configs, flowshare.application, flowshare.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from flowshare.application.services import (
    DiagramRepository,
    DiagramSessionFactory,
    UserService,
    WorkspaceService,
)
from flowshare.boundary.db import get_async_db
from flowshare.configs import Settings, get_settings
from flowshare.models.user import UserDocument

USER_ID_HEADER = "X-User-Id"


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_diagram_repository(db: AsyncSession = Depends(get_async_db)) -> DiagramRepository:
    """
    Get diagram repository instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DiagramRepository: Repository bound to the request session
    """
    return DiagramRepository(db=db)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    """
    Get user service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        UserService: User service instance
    """
    return UserService(db=db)


def get_workspace_service(
    repository: DiagramRepository = Depends(get_diagram_repository),
) -> WorkspaceService:
    """Get workspace service instance."""
    return WorkspaceService(repository=repository)


def get_session_factory(
    repository: DiagramRepository = Depends(get_diagram_repository),
    user_service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings_dependency),
) -> DiagramSessionFactory:
    """
    Get diagram session factory.

    Sessions opened through it share the request's repository and
    use the configured editor defaults.
    """
    return DiagramSessionFactory(
        repository=repository,
        user_lookup=user_service,
        settings=settings.editor,
    )


def get_authenticated_user_id(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """
    Identity asserted by the identity provider for this request.

    Raises:
        HTTPException(401): Header missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return x_user_id.strip()


async def get_current_user(
    user_id: str = Depends(get_authenticated_user_id),
    user_service: UserService = Depends(get_user_service),
) -> UserDocument:
    """
    Registered account of the calling identity.

    Raises:
        HTTPException(401): Identity has no account
    """
    user = await user_service.get_user(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )
    return user
