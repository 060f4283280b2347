"""
Diagram API endpoints.

Routes:
- GET /diagrams - List owned and shared diagrams
- POST /diagrams - Create new diagram
- GET /diagrams/{id} - Open diagram
- PUT /diagrams/{id} - Update title and description
- DELETE /diagrams/{id} - Delete diagram (owner only)
- PUT /diagrams/{id}/content - Save nodes and edges
- POST /diagrams/{id}/access - Share diagram by email
- DELETE /diagrams/{id}/access/{user_id} - Revoke a user's access

Every route acts as the user named by the X-User-Id header.

Dependencies: flowshare.application.services, flowshare.models
System role: Diagram management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from flowshare.api.deps.dependencies import (
    get_current_user,
    get_session_factory,
    get_workspace_service,
)
from flowshare.application.services import DiagramSessionFactory, WorkspaceService
from flowshare.core.roles import Role
from flowshare.models.diagram import (
    CreateDiagramRequest,
    DiagramResponse,
    DiagramSummary,
    SaveDiagramContentRequest,
    ShareDiagramRequest,
    UpdateDiagramInfoRequest,
)
from flowshare.models.user import UserDocument

from ..router_utils import handle_service_errors
from .diagram_responses import map_diagram_to_response, map_session_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagrams", tags=["diagrams"])


@router.get("", response_model=list[DiagramSummary])
@handle_service_errors
async def list_diagrams(
    current_user: UserDocument = Depends(get_current_user),
    workspace: WorkspaceService = Depends(get_workspace_service),
) -> list[DiagramSummary]:
    """
    List diagrams the caller owns, then those shared with them.

    Returns:
        list[DiagramSummary]: Dashboard entries
    """
    diagrams = await workspace.list_diagrams(current_user.id)
    logger.info(
        "Diagrams listed",
        extra={"user_id": current_user.id, "count": len(diagrams)},
    )
    return diagrams


@router.post("", response_model=DiagramResponse, status_code=201)
@handle_service_errors
async def create_diagram(
    request: CreateDiagramRequest,
    current_user: UserDocument = Depends(get_current_user),
    workspace: WorkspaceService = Depends(get_workspace_service),
) -> DiagramResponse:
    """
    Create an empty diagram owned by the caller.

    Raises:
        HTTPException(403): Account role is not editor
        HTTPException(400): Blank title
    """
    diagram = await workspace.create_diagram(
        current_user,
        title=request.title,
        description=request.description,
    )
    return map_diagram_to_response(diagram, Role.EDITOR)


@router.get("/{diagram_id}", response_model=DiagramResponse)
@handle_service_errors
async def get_diagram(
    diagram_id: str,
    current_user: UserDocument = Depends(get_current_user),
    sessions: DiagramSessionFactory = Depends(get_session_factory),
) -> DiagramResponse:
    """
    Open a diagram with the caller's resolved role.

    Raises:
        HTTPException(404): Diagram not found
        HTTPException(403): Caller has no access
    """
    session = await sessions.open(diagram_id, current_user.id)
    return map_session_to_response(session)


@router.put("/{diagram_id}", response_model=DiagramResponse)
@handle_service_errors
async def update_diagram_info(
    diagram_id: str,
    request: UpdateDiagramInfoRequest,
    current_user: UserDocument = Depends(get_current_user),
    sessions: DiagramSessionFactory = Depends(get_session_factory),
) -> DiagramResponse:
    """Replace title and description (editors only)."""
    session = await sessions.open(diagram_id, current_user.id)
    await session.save_info(request.title, request.description)
    return map_session_to_response(session)


@router.delete("/{diagram_id}", status_code=204)
@handle_service_errors
async def delete_diagram(
    diagram_id: str,
    current_user: UserDocument = Depends(get_current_user),
    workspace: WorkspaceService = Depends(get_workspace_service),
) -> Response:
    """
    Permanently delete a diagram.

    Raises:
        HTTPException(404): Diagram not found
        HTTPException(403): Caller is not the owner
    """
    await workspace.delete_diagram(current_user.id, diagram_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{diagram_id}/content", response_model=DiagramResponse)
@handle_service_errors
async def save_diagram_content(
    diagram_id: str,
    request: SaveDiagramContentRequest,
    current_user: UserDocument = Depends(get_current_user),
    sessions: DiagramSessionFactory = Depends(get_session_factory),
) -> DiagramResponse:
    """
    Overwrite the diagram graph with the given nodes and edges.

    The whole graph is replaced; concurrent saves are last-write-wins.
    """
    session = await sessions.open(diagram_id, current_user.id)
    await session.save_content(request.nodes, request.edges)

    logger.info(
        "Diagram content saved",
        extra={
            "diagram_id": diagram_id,
            "user_id": current_user.id,
            "node_count": len(request.nodes),
            "edge_count": len(request.edges),
        },
    )
    return map_session_to_response(session)


@router.post("/{diagram_id}/access", response_model=DiagramResponse)
@handle_service_errors
async def share_diagram(
    diagram_id: str,
    request: ShareDiagramRequest,
    current_user: UserDocument = Depends(get_current_user),
    sessions: DiagramSessionFactory = Depends(get_session_factory),
) -> DiagramResponse:
    """
    Grant a role to the account registered with an email.

    Raises:
        HTTPException(403): Caller is not an editor
        HTTPException(404): No account with that email
    """
    session = await sessions.open(diagram_id, current_user.id)
    await session.share(request.email, request.role)
    return map_session_to_response(session)


@router.delete("/{diagram_id}/access/{user_id}", response_model=DiagramResponse)
@handle_service_errors
async def revoke_diagram_access(
    diagram_id: str,
    user_id: str,
    current_user: UserDocument = Depends(get_current_user),
    sessions: DiagramSessionFactory = Depends(get_session_factory),
) -> DiagramResponse:
    """
    Remove a user's access entry.

    Raises:
        HTTPException(403): Caller is not an editor
        HTTPException(404): Target is the owner
    """
    session = await sessions.open(diagram_id, current_user.id)
    await session.revoke_access(user_id)
    return map_session_to_response(session)
