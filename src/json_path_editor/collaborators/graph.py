"""GraphIndex: in-memory node/edge model of the current document.

Satisfies the ``GraphCollaborator`` Protocol structurally.  On every rebuild
the document is laid out the way a node-graph view draws it:

- every map becomes one node with a row per entry; entries holding a map or
  sequence get a summary row (value = number of children) and an edge to the
  node(s) drawn for that child;
- sequences get no node of their own: each element is drawn as a child of
  the node that holds the sequence;
- a primitive element of a sequence (or a primitive document root) becomes a
  node with a single row that has no key.

Node ids are the display form of the node's path (``$["users"][0]``), so an
editor holding an id can find "its" node again after any rebuild that did not
move it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from json_path_editor.cache import ParseCache
from json_path_editor.codec import DecodeError
from json_path_editor.path import Step, format_path
from json_path_editor.tree.nodes import CONTAINER_TYPES, NodeType, classify

__all__ = ["GraphEdge", "GraphIndex", "GraphNode", "Row", "rows_for"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Row:
    """One line of a node.

    Attributes:
        key:   Map key of the entry; None for the single row of a leaf node.
        value: The primitive value, or the child count for container entries.
        type:  NodeType of the entry's actual value.
    """

    key: str | None
    value: Any
    type: NodeType


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A drawable node.  ``path`` addresses its value in the document."""

    id: str
    path: tuple[Step, ...]
    rows: tuple[Row, ...]


@dataclass(frozen=True, slots=True)
class GraphEdge:
    source: str
    target: str


def rows_for(value: Any) -> tuple[Row, ...]:
    """Return the rows a node for ``value`` displays.

    Maps give one keyed row per entry; sequences one row per element keyed by
    its index; primitives a single keyless row; ABSENT no rows.
    """
    node_type = classify(value)
    if node_type == NodeType.MAP:
        return tuple(_entry_row(k, v) for k, v in value.items())
    if node_type == NodeType.SEQUENCE:
        return tuple(_entry_row(str(i), v) for i, v in enumerate(value))
    if node_type is None:
        return ()
    return (Row(key=None, value=value, type=node_type),)


def _entry_row(key: str, value: Any) -> Row:
    node_type = classify(value)
    if node_type in CONTAINER_TYPES:
        return Row(key=key, value=len(value), type=node_type)
    return Row(key=key, value=value, type=node_type)


class GraphIndex:
    """Node/edge index rebuilt from the serialized document.

    Example::

        graph = GraphIndex()
        graph.rebuild('{"user": {"name": "Ada"}, "tags": ["x"]}')
        [n.id for n in graph.nodes]
        # ['$', '$["user"]', '$["tags"][0]']
        graph.find_node('$["user"]').rows
        # (Row(key='name', value='Ada', type=<NodeType.TEXT: 'text'>),)
    """

    def __init__(self, max_cache_size: int = 8) -> None:
        self._cache = ParseCache(max_size=max_cache_size)
        self._nodes: dict[str, GraphNode] = {}
        self._edges: list[GraphEdge] = []
        self._rebuilds = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[GraphNode, ...]:
        """All nodes, in document order."""
        return tuple(self._nodes.values())

    @property
    def edges(self) -> tuple[GraphEdge, ...]:
        return tuple(self._edges)

    @property
    def rebuild_count(self) -> int:
        """How many times ``rebuild`` or ``clear`` has run."""
        return self._rebuilds

    # ------------------------------------------------------------------
    # GraphCollaborator Protocol surface
    # ------------------------------------------------------------------

    def rebuild(self, text: str) -> None:
        """Replace the model with one laid out from ``text``.

        Blank or undecodable text yields an empty model.
        """
        self._rebuilds += 1
        self._nodes = {}
        self._edges = []
        if not text.strip():
            return
        try:
            document = self._cache.decode(text)
        except DecodeError as exc:
            logger.warning(f"Graph rebuild skipped, document does not decode: {exc}")
            return
        try:
            self._layout(document, (), None)
        except RecursionError:
            logger.warning("Graph rebuild skipped, document nests too deeply to lay out")
            self._nodes = {}
            self._edges = []
            return
        logger.debug(f"Graph rebuilt: {len(self._nodes)} nodes, {len(self._edges)} edges")

    def clear(self) -> None:
        self._rebuilds += 1
        self._nodes = {}
        self._edges = []

    def find_node(self, node_id: str) -> GraphNode | None:
        return self._nodes.get(node_id)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _layout(self, value: Any, path: tuple[Step, ...], parent_id: str | None) -> None:
        node_type = classify(value)

        if node_type == NodeType.SEQUENCE:
            for index, item in enumerate(value):
                self._layout(item, (*path, index), parent_id)
            return

        node = GraphNode(id=format_path(path), path=path, rows=rows_for(value))
        self._nodes[node.id] = node
        if parent_id is not None:
            self._edges.append(GraphEdge(source=parent_id, target=node.id))

        if node_type == NodeType.MAP:
            for key, child in value.items():
                if classify(child) in CONTAINER_TYPES:
                    self._layout(child, (*path, key), node.id)
