"""NodeType StrEnum, the ABSENT sentinel, and variant classification.

Provides the tagged-variant view of a JSON document used by the navigation
primitives: every Python value in a document is classified into exactly one
of six node types before it is read from or written into.
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import Any, Final

__all__ = ["ABSENT", "CONTAINER_TYPES", "PRIMITIVE_TYPES", "NodeType", "classify"]


class NodeType(StrEnum):
    """Enumeration of the six variants a document node can take.

    StrEnum values are the lowercased member names (Python 3.11+):
    - MAP      -> "map"      : JSON object (Python dict)
    - SEQUENCE -> "sequence" : JSON array (Python list)
    - TEXT     -> "text"     : JSON string
    - NUMBER   -> "number"   : JSON number (int or float)
    - BOOLEAN  -> "boolean"  : JSON true / false
    - NULL     -> "null"     : JSON null (Python None)
    """

    MAP = auto()
    SEQUENCE = auto()
    TEXT = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()


CONTAINER_TYPES: Final = frozenset({NodeType.MAP, NodeType.SEQUENCE})
PRIMITIVE_TYPES: Final = frozenset(
    {NodeType.TEXT, NodeType.NUMBER, NodeType.BOOLEAN, NodeType.NULL}
)


class _Absent:
    """Marker for "no value at this position".

    Distinct from ``None``, which is the JSON ``null`` leaf.  Falsy, and a
    singleton: always compare with ``is ABSENT``.
    """

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


def classify(value: Any) -> NodeType | None:
    """Return the NodeType variant of a document value.

    Returns None for values that are not part of the JSON data model
    (including ``ABSENT``).  bool MUST be checked before int because bool is a
    subclass of int in Python.
    """
    if isinstance(value, bool):
        return NodeType.BOOLEAN
    if value is None:
        return NodeType.NULL
    if isinstance(value, dict):
        return NodeType.MAP
    if isinstance(value, list):
        return NodeType.SEQUENCE
    if isinstance(value, str):
        return NodeType.TEXT
    if isinstance(value, (int, float)):
        return NodeType.NUMBER
    return None
