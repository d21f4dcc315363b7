"""json-path-editor - path-addressed, copy-on-write editing of JSON documents."""

from __future__ import annotations

from json_path_editor.algorithm import (
    EditorConfig,
    coerce_like,
    get_at_path,
    update_at_path,
)
from json_path_editor.api import get_value, update_text, update_value
from json_path_editor.collaborators import FileMirror, GraphIndex, GraphNode, Row
from json_path_editor.editor import EditMode, FieldEditor
from json_path_editor.path import Path, Step, format_path, is_path
from json_path_editor.result import ChangeKind, CommitResult
from json_path_editor.store import DocumentStore
from json_path_editor.tree import ABSENT, NodeType, classify, to_document

__version__: str = "0.1.0"
__all__: list[str] = [
    "ABSENT",
    "ChangeKind",
    "CommitResult",
    "DocumentStore",
    "EditMode",
    "EditorConfig",
    "FieldEditor",
    "FileMirror",
    "GraphIndex",
    "GraphNode",
    "NodeType",
    "Path",
    "Row",
    "Step",
    "classify",
    "coerce_like",
    "format_path",
    "get_at_path",
    "get_value",
    "is_path",
    "to_document",
    "update_at_path",
    "update_text",
    "update_value",
]
