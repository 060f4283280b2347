"""
Graph change batch schemas.

Change events reported by the graph-editing surface: node changes,
edge changes and new connections. Discriminated on the ``type`` field.

Dependencies: pydantic, flowshare.models.diagram
System role: Editing surface -> edit buffer contract
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from flowshare.models.diagram import DiagramEdge, DiagramNode, Position


class NodePositionChange(BaseModel):
    """Node dragged to a new position."""

    type: Literal["position"] = "position"
    id: str
    position: Position | None = None
    dragging: bool | None = None


class NodeDimensionsChange(BaseModel):
    """Node measured or resized by the surface (view state only)."""

    type: Literal["dimensions"] = "dimensions"
    id: str
    dimensions: dict[str, float] | None = None
    resizing: bool | None = None


class NodeSelectionChange(BaseModel):
    """Node selected or deselected (view state only)."""

    type: Literal["select"] = "select"
    id: str
    selected: bool


class NodeRemoveChange(BaseModel):
    """Node deleted."""

    type: Literal["remove"] = "remove"
    id: str


class NodeAddChange(BaseModel):
    """Node inserted, optionally at a given index."""

    type: Literal["add"] = "add"
    item: DiagramNode
    index: int | None = None


class NodeReplaceChange(BaseModel):
    """Node replaced wholesale."""

    type: Literal["replace"] = "replace"
    id: str
    item: DiagramNode


NodeChange = Annotated[
    Union[
        NodePositionChange,
        NodeDimensionsChange,
        NodeSelectionChange,
        NodeRemoveChange,
        NodeAddChange,
        NodeReplaceChange,
    ],
    Field(discriminator="type"),
]


class EdgeSelectionChange(BaseModel):
    """Edge selected or deselected (view state only)."""

    type: Literal["select"] = "select"
    id: str
    selected: bool


class EdgeRemoveChange(BaseModel):
    """Edge deleted."""

    type: Literal["remove"] = "remove"
    id: str


class EdgeAddChange(BaseModel):
    """Edge inserted, optionally at a given index."""

    type: Literal["add"] = "add"
    item: DiagramEdge
    index: int | None = None


class EdgeReplaceChange(BaseModel):
    """Edge replaced wholesale."""

    type: Literal["replace"] = "replace"
    id: str
    item: DiagramEdge


EdgeChange = Annotated[
    Union[EdgeSelectionChange, EdgeRemoveChange, EdgeAddChange, EdgeReplaceChange],
    Field(discriminator="type"),
]


class Connection(BaseModel):
    """Connect gesture between two node handles."""

    source: str | None = None
    target: str | None = None
    source_handle: str | None = None
    target_handle: str | None = None


_node_changes_adapter = TypeAdapter(list[NodeChange])
_edge_changes_adapter = TypeAdapter(list[EdgeChange])


def parse_node_changes(raw: list[dict[str, Any]]) -> list[NodeChange]:
    """Validate a raw node change batch coming from the editing surface."""
    return _node_changes_adapter.validate_python(raw)


def parse_edge_changes(raw: list[dict[str, Any]]) -> list[EdgeChange]:
    """Validate a raw edge change batch coming from the editing surface."""
    return _edge_changes_adapter.validate_python(raw)
