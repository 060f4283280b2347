"""
Diagram domain models and schemas.

Diagram document shape (nodes, edges, access map) plus the
request/response schemas of the diagram API.

Dependencies: pydantic, flowshare.core.roles
System role: Diagram data model and API contracts
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from flowshare.core.roles import Role


class Position(BaseModel):
    """Canvas coordinates of a node."""

    x: float
    y: float


class NodeData(BaseModel):
    """
    Persisted node payload.

    Only the label and color are stored. Anything else a caller passes
    (editing callbacks, view state) is dropped.
    """

    model_config = ConfigDict(extra="ignore")

    label: str
    color: str | None = None


class DiagramNode(BaseModel):
    """Typed node of a diagram."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str = "default"
    position: Position
    data: NodeData


class DiagramEdge(BaseModel):
    """Directed connection between two nodes, with style metadata."""

    model_config = ConfigDict(extra="ignore")

    id: str
    source: str
    target: str
    source_handle: str | None = None
    target_handle: str | None = None
    type: str | None = None
    animated: bool = False
    style: dict[str, Any] = Field(default_factory=dict)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AccessEntry(BaseModel):
    """Role granted to a user on a diagram."""

    role: Role
    email: str
    added_at: datetime = Field(default_factory=_utc_now)


class Diagram(BaseModel):
    """Diagram document as held by the repository."""

    id: str
    title: str
    description: str | None = None
    owner_id: str
    owner_email: str
    nodes: list[DiagramNode] = Field(default_factory=list)
    edges: list[DiagramEdge] = Field(default_factory=list)
    access: dict[str, AccessEntry] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class DiagramSummary(BaseModel):
    """Dashboard entry for a diagram the user owns or was shared."""

    id: str
    title: str
    description: str | None
    owner_id: str
    owner_email: str
    role: Role | None
    is_owner: bool
    node_count: int
    edge_count: int
    created_at: datetime
    updated_at: datetime


class CreateDiagramRequest(BaseModel):
    """Request schema for creating a new diagram."""

    title: str = Field(..., min_length=1, max_length=255, description="Diagram title")
    description: str | None = Field(None, max_length=4096, description="Diagram description")


class UpdateDiagramInfoRequest(BaseModel):
    """Request schema for editing title and description."""

    title: str = Field(..., min_length=1, max_length=255, description="Diagram title")
    description: str | None = Field(None, max_length=4096, description="Diagram description")


class SaveDiagramContentRequest(BaseModel):
    """Request schema for a full overwrite of the diagram graph."""

    nodes: list[DiagramNode] = Field(default_factory=list)
    edges: list[DiagramEdge] = Field(default_factory=list)


class ShareDiagramRequest(BaseModel):
    """Request schema for granting a role to another user."""

    email: str = Field(..., min_length=3, max_length=320, description="Email of the share target")
    role: Role = Field(default=Role.VIEWER, description="Role to grant")


class DiagramResponse(Diagram):
    """Response schema for a diagram opened by the caller."""

    role: Role | None
    can_edit: bool
