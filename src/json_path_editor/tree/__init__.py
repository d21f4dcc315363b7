"""Tree subpackage for the document node model.

Re-exports the public API for the tree module:
- NodeType: StrEnum of the six node variants (MAP, SEQUENCE, TEXT, NUMBER, BOOLEAN, NULL)
- ABSENT: marker returned by reads that run off the document
- classify: maps a Python value to its NodeType
- DocumentBuilder / to_document: normalize Python input into a JSON-shaped tree
"""

from json_path_editor.tree.builder import DocumentBuilder, JsonValue, to_document
from json_path_editor.tree.nodes import (
    ABSENT,
    CONTAINER_TYPES,
    PRIMITIVE_TYPES,
    NodeType,
    classify,
)

__all__ = [
    "ABSENT",
    "CONTAINER_TYPES",
    "PRIMITIVE_TYPES",
    "DocumentBuilder",
    "JsonValue",
    "NodeType",
    "classify",
    "to_document",
]
