"""
Domain models and API schemas.

Exports the diagram document shape, graph change events and user account models.
"""

from flowshare.models.changes import (
    Connection,
    EdgeChange,
    NodeChange,
    parse_edge_changes,
    parse_node_changes,
)
from flowshare.models.diagram import (
    AccessEntry,
    Diagram,
    DiagramEdge,
    DiagramNode,
    DiagramSummary,
    NodeData,
    Position,
)
from flowshare.models.user import UserDocument

__all__ = [
    "AccessEntry",
    "Connection",
    "Diagram",
    "DiagramEdge",
    "DiagramNode",
    "DiagramSummary",
    "EdgeChange",
    "NodeChange",
    "NodeData",
    "Position",
    "UserDocument",
    "parse_edge_changes",
    "parse_node_changes",
]
