"""DocumentBuilder: normalizes arbitrary Python input into a JSON-shaped document.

Uses recursive dispatch to convert values handed to the store (user edits,
programmatic updates) into the plain Python types the navigation primitives
and the JSON codec understand:

- dict                 -> dict with text keys (int/float/bool keys are
                          stringified the way ``json.dumps`` does)
- list / tuple         -> list
- numpy.ndarray        -> list (via ``tolist()``)
- numpy scalar         -> the matching Python scalar (via ``item()``)
- str/int/float/bool/None -> unchanged

The input is never mutated.  A dict or list that already holds only plain
JSON values, with text keys, is returned as the same object, so a value
assembled from the store's own tree keeps sharing its unedited subtrees.
Only containers that needed a change somewhere below them are rebuilt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

__all__ = ["DocumentBuilder", "JsonValue", "to_document"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    # Same spelling json.dumps uses for non-string keys
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (int, float)):
        return repr(key) if isinstance(key, float) else str(key)
    raise TypeError(f"Unsupported document key type: {type(key)!r}")


@dataclass
class DocumentBuilder:
    """Converts Python values into plain JSON-shaped documents.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int, and numpy scalars are unwrapped before the
    built-in checks so ``np.bool_`` and ``np.int64`` land on bool and int.

    Example::
        builder = DocumentBuilder()
        builder.build({"scores": np.array([1, 2]), "ok": np.bool_(True)})
        # {"scores": [1, 2], "ok": True}
    """

    def build(self, value: Any) -> JsonValue:
        """Convert a Python value into a plain JSON-shaped value.

        Args:
            value: Any JSON-like value, possibly containing tuples or numpy
                scalars and arrays.

        Returns:
            A tree made only of dict, list, str, int, float, bool and None.
            Plain dicts and lists needing no change are returned by identity.

        Raises:
            TypeError: If value (or anything nested in it) has no JSON form.
        """
        if isinstance(value, np.generic):
            value = value.item()

        if isinstance(value, bool) or value is None:
            return value

        if isinstance(value, dict):
            built: dict[str, Any] = {}
            changed = type(value) is not dict
            for k, v in value.items():
                key = _key_text(k)
                item = self.build(v)
                changed = changed or key is not k or item is not v
                built[key] = item
            return built if changed else value

        if isinstance(value, (list, tuple)):
            items = [self.build(item) for item in value]
            if type(value) is list and all(a is b for a, b in zip(items, value)):
                return value
            return items

        if isinstance(value, np.ndarray):
            return [self.build(item) for item in value.tolist()]

        if isinstance(value, (str, int, float)):
            return value

        raise TypeError(f"Unsupported document value type: {type(value)!r}")


# Module-level builder (stateless, safe to share)
_builder = DocumentBuilder()


def to_document(value: Any) -> JsonValue:
    """Normalize ``value`` into a JSON-shaped tree (see DocumentBuilder)."""
    return _builder.build(value)
