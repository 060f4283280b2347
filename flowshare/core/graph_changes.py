"""
Graph change application.

Applies change batches from the editing surface to node and edge lists.
All functions are pure: they return new lists and never mutate their input.

Dependencies: flowshare.models
System role: Change-batch semantics for the edit buffer
"""

from typing import Callable, Sequence, TypeVar

from pydantic import BaseModel

from flowshare.models.changes import Connection, EdgeChange, NodeChange
from flowshare.models.diagram import DiagramEdge, DiagramNode

ItemT = TypeVar("ItemT", bound=BaseModel)


def _apply_changes(
    changes: Sequence[BaseModel],
    items: Sequence[ItemT],
    update: Callable[[ItemT, BaseModel], ItemT],
) -> list[ItemT]:
    """
    Apply add/remove/replace changes and delegate the rest to ``update``.

    Ids stay unique: an add carrying an existing id replaces that item in
    place, and a replace that would take another item's id is skipped.
    Changes referencing an unknown id are skipped.
    """
    result = [item.model_copy(deep=True) for item in items]

    def find(item_id: str) -> int | None:
        return next((i for i, item in enumerate(result) if item.id == item_id), None)

    for change in changes:
        if change.type == "add":
            item = change.item.model_copy(deep=True)
            existing = find(item.id)
            if existing is not None:
                result[existing] = item
            elif change.index is None:
                result.append(item)
            else:
                result.insert(change.index, item)
            continue

        index = find(change.id)
        if index is None:
            continue

        if change.type == "remove":
            del result[index]
        elif change.type == "replace":
            holder = find(change.item.id)
            if holder is not None and holder != index:
                continue
            result[index] = change.item.model_copy(deep=True)
        else:
            result[index] = update(result[index], change)

    return result


def _update_node(node: DiagramNode, change: BaseModel) -> DiagramNode:
    if change.type == "position" and change.position is not None:
        return node.model_copy(update={"position": change.position.model_copy()})
    # select / dimensions only affect what the surface draws
    return node


def _update_edge(edge: DiagramEdge, change: BaseModel) -> DiagramEdge:
    return edge


def apply_node_changes(
    changes: Sequence[NodeChange],
    nodes: Sequence[DiagramNode],
) -> list[DiagramNode]:
    """
    Apply a node change batch.

    Args:
        changes: Node changes reported by the editing surface
        nodes: Current nodes

    Returns:
        list[DiagramNode]: New node list
    """
    return _apply_changes(changes, nodes, _update_node)


def apply_edge_changes(
    changes: Sequence[EdgeChange],
    edges: Sequence[DiagramEdge],
) -> list[DiagramEdge]:
    """
    Apply an edge change batch.

    Args:
        changes: Edge changes reported by the editing surface
        edges: Current edges

    Returns:
        list[DiagramEdge]: New edge list
    """
    return _apply_changes(changes, edges, _update_edge)


def connection_edge_id(connection: Connection) -> str:
    """Deterministic id of the edge created by a connect gesture."""
    return (
        f"xy-edge__{connection.source}{connection.source_handle or ''}"
        f"-{connection.target}{connection.target_handle or ''}"
    )


def add_edge(
    connection: Connection,
    edges: Sequence[DiagramEdge],
    edge_type: str | None = None,
    animated: bool = False,
    style: dict | None = None,
) -> list[DiagramEdge]:
    """
    Append the edge described by a connect gesture.

    Connections missing an endpoint, and connections duplicating an
    existing edge (same endpoints and handles), leave the list unchanged.

    Args:
        connection: Connect gesture
        edges: Current edges
        edge_type: Edge type for the new edge
        animated: Whether the new edge is animated
        style: Style metadata for the new edge

    Returns:
        list[DiagramEdge]: New edge list
    """
    result = [edge.model_copy(deep=True) for edge in edges]
    if not connection.source or not connection.target:
        return result

    for edge in result:
        if (
            edge.source == connection.source
            and edge.target == connection.target
            and (edge.source_handle or None) == (connection.source_handle or None)
            and (edge.target_handle or None) == (connection.target_handle or None)
        ):
            return result

    result.append(
        DiagramEdge(
            id=connection_edge_id(connection),
            source=connection.source,
            target=connection.target,
            source_handle=connection.source_handle,
            target_handle=connection.target_handle,
            type=edge_type,
            animated=animated,
            style=dict(style or {}),
        )
    )
    return result
