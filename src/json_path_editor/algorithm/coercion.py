"""Draft text conversion and type-preserving coercion for edited fields.

A field editor shows every primitive value as text and hands back text.  The
helpers here convert in both directions so that an edit keeps the field's
runtime type unless the user deliberately types a literal of another type:

    coerce_like(42, "17")      # 17
    coerce_like(42, "abc")     # 42     (not a number: original kept)
    coerce_like(True, " FALSE ")  # False
    coerce_like(None, "null")  # None
    coerce_like(None, "n/a")   # "n/a"  (null fields accept any text)
    coerce_like("x", "42")     # "42"   (text fields stay text)
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from json_path_editor.tree.nodes import CONTAINER_TYPES, PRIMITIVE_TYPES, NodeType, classify

if TYPE_CHECKING:
    from json_path_editor.collaborators.graph import Row

# ASCII decimal literals only: no digit separators, no other scripts' digits
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_DECIMAL_TEXT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

__all__ = [
    "coerce_like",
    "is_primitive",
    "parse_number",
    "primitive_only",
    "raw_seed_text",
    "to_draft_text",
]


def is_primitive(value: Any) -> bool:
    """Return True for text, number, boolean and null values."""
    return classify(value) in PRIMITIVE_TYPES


def primitive_only(value: Any) -> Any:
    """Return a map's primitive-valued entries; other values pass through.

    Nested maps and sequences are left out of the result, which is what a
    node view displays for a map.
    """
    if classify(value) != NodeType.MAP:
        return value
    return {k: v for k, v in value.items() if is_primitive(v)}


def to_draft_text(value: Any) -> str:
    """Render a primitive as the text a user edits.

    Uses JSON spelling for literals (``true``, ``false``, ``null``) and drops
    the ``.0`` of integral floats.  Text values are returned unquoted.
    """
    node_type = classify(value)
    if node_type == NodeType.BOOLEAN:
        return "true" if value else "false"
    if node_type == NodeType.NULL:
        return "null"
    if node_type == NodeType.NUMBER and isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def parse_number(text: str) -> int | float | None:
    """Parse ``text`` as a finite number; None if it is not one.

    Surrounding whitespace is ignored.  Only plain ASCII decimal spellings
    are numbers: ``"1_000"`` and non-ASCII digits are not.  Empty text, NaN
    and infinities are rejected because they have no JSON form.
    """
    stripped = text.strip()
    if _INTEGER_TEXT.fullmatch(stripped):
        try:
            return int(stripped)
        except ValueError:
            # Beyond the interpreter's int string conversion limit
            return None
    if not _DECIMAL_TEXT.fullmatch(stripped):
        return None
    number = float(stripped)
    return number if math.isfinite(number) else None


def coerce_like(original: Any, text: str) -> Any:
    """Convert edited ``text`` back toward the runtime type of ``original``.

    Args:
        original: The field's value before the edit.
        text:     The user's draft text.

    Returns:
        - number originals: the parsed number (int stays int when the text is
          integral, float stays float), else ``original``;
        - boolean originals: True/False for "true"/"false" (trimmed,
          case-insensitive), else ``original``;
        - null originals: None for "null" (trimmed, case-insensitive), else
          the text itself;
        - anything else: the text verbatim.
    """
    node_type = classify(original)

    if node_type == NodeType.NUMBER:
        number = parse_number(text)
        if number is None:
            return original
        if isinstance(original, float):
            return float(number)
        if isinstance(number, float) and number.is_integer():
            return int(number)
        return number

    if node_type == NodeType.BOOLEAN:
        literal = text.strip().lower()
        if literal == "true":
            return True
        if literal == "false":
            return False
        return original

    if node_type == NodeType.NULL:
        return None if text.strip().lower() == "null" else text

    return text


def raw_seed_text(rows: Iterable[Row] | None, indent: int = 2) -> str:
    """Build the initial raw-mode draft from a node's display rows.

    - no rows: ``"{}"``
    - a single row without a key: that row's value as draft text
    - otherwise: a pretty-printed object of the keyed rows whose values are
      primitives (container rows are summaries, not values, and are left out)
    """
    rows = list(rows or ())
    if not rows:
        return "{}"
    if len(rows) == 1 and not rows[0].key:
        return to_draft_text(rows[0].value)
    obj = {
        row.key: row.value
        for row in rows
        if row.key and row.type not in CONTAINER_TYPES
    }
    return json.dumps(obj, indent=indent, ensure_ascii=False)
