"""
Diagram response mapping utilities.

Builds DiagramResponse payloads from open sessions and freshly created
diagrams.

Dependencies: flowshare.models.diagram, flowshare.application.services
System role: Diagram response transformation
"""

from flowshare.application.services import DiagramSession
from flowshare.core.roles import Role, can_edit
from flowshare.models.diagram import Diagram, DiagramResponse


def map_diagram_to_response(diagram: Diagram, role: Role | None) -> DiagramResponse:
    """
    Attach the caller's role to a diagram.

    Args:
        diagram: Diagram document
        role: Role the caller holds on it

    Returns:
        DiagramResponse: Pydantic model for API response
    """
    return DiagramResponse(
        **diagram.model_dump(),
        role=role,
        can_edit=can_edit(role),
    )


def map_session_to_response(session: DiagramSession) -> DiagramResponse:
    """
    Transform an open session into the response for its diagram.

    The graph comes from the session snapshot, the role from the session.
    """
    return map_diagram_to_response(session.diagram, session.role)
