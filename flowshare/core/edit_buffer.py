"""
Edit buffer for an open diagram.

Holds the working copy of a diagram's graph, tracks whether it differs
from the last persisted version and applies change batches coming from
the editing surface. Persistence is explicit: nothing leaves the buffer
until save() is called.

State machine:
    LOADING -> CLEAN            load()
    CLEAN   -> DIRTY            accepted change that alters nodes/edges
    DIRTY   -> SAVING           save()
    SAVING  -> CLEAN | DIRTY    persist succeeded (DIRTY if edits arrived meanwhile)
    SAVING  -> DIRTY            persist failed, nothing is rolled back

Dependencies: flowshare.core.graph_changes, flowshare.configs, flowshare.models
System role: Local edit state of one diagram session
"""

import enum
import logging
import random
import re
from typing import Any, Awaitable, Callable, Sequence

from flowshare.configs.editor import EditorSettings
from flowshare.core.exceptions import NotFoundError, ValidationError
from flowshare.core.graph_changes import add_edge, apply_edge_changes, apply_node_changes
from flowshare.models.changes import Connection, EdgeChange, NodeChange
from flowshare.models.diagram import DiagramEdge, DiagramNode, NodeData, Position

logger = logging.getLogger(__name__)

PersistFn = Callable[[list[DiagramNode], list[DiagramEdge]], Awaitable[Any]]

_NODE_ID_PATTERN = re.compile(r"^node-(\d+)")


class BufferState(str, enum.Enum):
    """Lifecycle of an edit buffer."""

    LOADING = "loading"
    CLEAN = "clean"
    DIRTY = "dirty"
    SAVING = "saving"


class NodeIdCounter:
    """
    Monotonic source of ``node-<n>`` identifiers.

    Seeded from the highest numeric suffix among existing node ids so
    reopened diagrams never reuse an id.
    """

    prefix = "node-"

    def __init__(self, next_value: int = 1) -> None:
        self._next = next_value

    @property
    def next_value(self) -> int:
        return self._next

    @staticmethod
    def _suffix(node_id: str) -> int | None:
        match = _NODE_ID_PATTERN.match(node_id)
        return int(match.group(1)) if match else None

    def seed(self, nodes: Sequence[DiagramNode]) -> None:
        """Reset the counter to one past the highest existing suffix."""
        suffixes = [s for s in (self._suffix(node.id) for node in nodes) if s is not None]
        self._next = max(suffixes, default=0) + 1

    def observe(self, nodes: Sequence[DiagramNode]) -> None:
        """Advance past ids that entered the graph without going through next_id()."""
        suffixes = [s for s in (self._suffix(node.id) for node in nodes) if s is not None]
        self._next = max(self._next, max(suffixes, default=0) + 1)

    def next_id(self) -> str:
        node_id = f"{self.prefix}{self._next}"
        self._next += 1
        return node_id


class EditBuffer:
    """
    In-memory working copy of a diagram graph.

    Every mutator checks ``can_edit`` before touching state. For a
    read-only buffer they are no-ops and return a falsy value, so a
    viewer never sees local drift from a rejected gesture.

    Attributes:
        can_edit: Whether the owning session resolved the editor role
        settings: Node/edge defaults (palette, spawn window, edge style)
    """

    def __init__(
        self,
        can_edit: bool,
        settings: EditorSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize an empty buffer in the LOADING state.

        Args:
            can_edit: Whether mutations are permitted
            settings: Editor defaults, EditorSettings() when omitted
            rng: Random source for new node placement
        """
        self.can_edit = can_edit
        self.settings = settings or EditorSettings()
        self._rng = rng or random.Random()
        self._nodes: list[DiagramNode] = []
        self._edges: list[DiagramEdge] = []
        self._state = BufferState.LOADING
        self._revision = 0
        self._counter = NodeIdCounter()

    @property
    def state(self) -> BufferState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        """True while the buffer holds edits not yet persisted."""
        return self._state is BufferState.DIRTY

    @property
    def is_ready(self) -> bool:
        return self._state is not BufferState.LOADING

    @property
    def revision(self) -> int:
        """Number of accepted content changes since the buffer was created."""
        return self._revision

    @property
    def nodes(self) -> list[DiagramNode]:
        return [node.model_copy(deep=True) for node in self._nodes]

    @property
    def edges(self) -> list[DiagramEdge]:
        return [edge.model_copy(deep=True) for edge in self._edges]

    @property
    def next_node_id(self) -> str:
        """Id the next add_node() call will assign (does not consume it)."""
        return f"{NodeIdCounter.prefix}{self._counter.next_value}"

    def snapshot(self) -> tuple[list[DiagramNode], list[DiagramEdge]]:
        """Deep copy of the current (nodes, edges)."""
        return self.nodes, self.edges

    def load(self, nodes: Sequence[DiagramNode], edges: Sequence[DiagramEdge]) -> None:
        """
        Seed the buffer from the persisted graph and mark it clean.

        Args:
            nodes: Persisted nodes
            edges: Persisted edges
        """
        self._nodes = [node.model_copy(deep=True) for node in nodes]
        self._edges = [edge.model_copy(deep=True) for edge in edges]
        self._counter.seed(self._nodes)
        self._state = BufferState.CLEAN
        logger.debug(
            "Edit buffer loaded",
            extra={"node_count": len(self._nodes), "edge_count": len(self._edges)},
        )

    def _accepts(self, action: str) -> bool:
        if not self.can_edit:
            logger.debug("Rejected gesture on read-only buffer", extra={"action": action})
            return False
        if self._state is BufferState.LOADING:
            logger.debug("Rejected gesture before load", extra={"action": action})
            return False
        return True

    def _commit(
        self,
        nodes: list[DiagramNode] | None = None,
        edges: list[DiagramEdge] | None = None,
    ) -> bool:
        changed = False
        if nodes is not None and nodes != self._nodes:
            self._nodes = nodes
            self._counter.observe(nodes)
            changed = True
        if edges is not None and edges != self._edges:
            self._edges = edges
            changed = True
        if changed:
            self._revision += 1
            self._state = BufferState.DIRTY
        return changed

    def apply_node_changes(self, changes: Sequence[NodeChange]) -> bool:
        """
        Apply a node change batch (move, add, delete, replace, select).

        Returns:
            bool: True if the persisted content changed
        """
        if not self._accepts("apply_node_changes"):
            return False
        return self._commit(nodes=apply_node_changes(changes, self._nodes))

    def apply_edge_changes(self, changes: Sequence[EdgeChange]) -> bool:
        """
        Apply an edge change batch (add, delete, replace, select).

        Returns:
            bool: True if the persisted content changed
        """
        if not self._accepts("apply_edge_changes"):
            return False
        return self._commit(edges=apply_edge_changes(changes, self._edges))

    def connect(self, connection: Connection) -> bool:
        """
        Add the edge described by a connect gesture, styled from settings.

        Returns:
            bool: True if an edge was added
        """
        if not self._accepts("connect"):
            return False
        edges = add_edge(
            connection,
            self._edges,
            edge_type=self.settings.edge_type,
            animated=self.settings.edge_animated,
            style=self.settings.edge_style,
        )
        return self._commit(edges=edges)

    def add_node(self, color: str | None = None) -> DiagramNode | None:
        """
        Append a new node with the next counter id.

        The node lands at a random point of the spawn window so that
        consecutive additions do not overlap exactly.

        Args:
            color: Palette color, the first palette entry when omitted

        Returns:
            DiagramNode | None: The created node, None for a read-only buffer

        Raises:
            ValidationError: If color is not part of the palette
        """
        if not self._accepts("add_node"):
            return None

        color = color or self.settings.default_color
        if color not in self.settings.node_palette:
            raise ValidationError(f"Unknown node color: {color}", field="color")

        offset = self.settings.spawn_offset
        node = DiagramNode(
            id=self._counter.next_id(),
            type=self.settings.node_type,
            position=Position(
                x=self.settings.spawn_origin_x + self._rng.random() * offset,
                y=self.settings.spawn_origin_y + self._rng.random() * offset,
            ),
            data=NodeData(label=self.settings.default_node_label, color=color),
        )
        self._commit(nodes=[*self._nodes, node])
        return node.model_copy(deep=True)

    def relabel(self, node_id: str, label: str) -> bool:
        """
        Change a node label. An unchanged label is a no-op.

        Returns:
            bool: True if the label changed

        Raises:
            NotFoundError: If no node has this id
        """
        if not self._accepts("relabel"):
            return False

        index = next((i for i, node in enumerate(self._nodes) if node.id == node_id), None)
        if index is None:
            raise NotFoundError(f"Node not found: {node_id}", resource="node", resource_id=node_id)

        node = self._nodes[index]
        if node.data.label == label:
            return False

        nodes = list(self._nodes)
        nodes[index] = node.model_copy(
            update={"data": node.data.model_copy(update={"label": label})}
        )
        return self._commit(nodes=nodes)

    async def save(self, persist: PersistFn) -> bool:
        """
        Persist the entire current graph through ``persist``.

        Only a dirty buffer is saved. There is no diff: the full node and
        edge lists are handed over, so concurrent saves of the same diagram
        overwrite each other.

        Args:
            persist: Coroutine function receiving (nodes, edges)

        Returns:
            bool: True if a save was performed

        Raises:
            Exception: Whatever persist raises; the buffer stays dirty
        """
        if not self.can_edit or self._state is not BufferState.DIRTY:
            return False

        nodes, edges = self.snapshot()
        revision = self._revision
        self._state = BufferState.SAVING
        try:
            await persist(nodes, edges)
        except Exception:
            self._state = BufferState.DIRTY
            raise

        if self._revision == revision:
            self._state = BufferState.CLEAN
        else:
            self._state = BufferState.DIRTY
        return True
