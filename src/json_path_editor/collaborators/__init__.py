"""Collaborators subpackage for json-path-editor.

In-memory reference implementations of the two collaborators a
``DocumentStore`` notifies:

- ``GraphIndex``: node/edge model of the document, looked up by stable id
- ``FileMirror``: mirrored file contents with loop-free feedback into the store

Both satisfy the Protocols in ``json_path_editor.protocols`` structurally;
applications may substitute their own.
"""

from json_path_editor.collaborators.file import FileMirror
from json_path_editor.collaborators.graph import (
    GraphEdge,
    GraphIndex,
    GraphNode,
    Row,
    rows_for,
)

__all__ = ["FileMirror", "GraphEdge", "GraphIndex", "GraphNode", "Row", "rows_for"]
