"""Public API functions for json-path-editor.

This module provides the store-free, user-facing functions: get_value,
update_value, and update_text.  Each call is self-contained; update_text runs
a fresh DocumentStore per call to guarantee zero shared state between calls.
"""

from __future__ import annotations

from typing import Any

from json_path_editor.algorithm.config import EditorConfig
from json_path_editor.algorithm.navigation import get_at_path, update_at_path
from json_path_editor.path import Path
from json_path_editor.store import DocumentStore

__all__ = ["get_value", "update_text", "update_value"]


def get_value(document: Any, path: Path) -> Any:
    """Return the value at ``path`` in ``document``.

    Args:
        document: Any JSON-like value.
        path:     Sequence of field-name / index steps.

    Returns:
        The value reached, or ``ABSENT`` when the path does not resolve.
        Never raises.
    """
    return get_at_path(document, path)


def update_value(document: Any, path: Path, value: Any) -> Any:
    """Return a copy of ``document`` with ``value`` placed at ``path``.

    Only the nodes along ``path`` are copied; every other subtree is shared
    with ``document``, which is never mutated.

    Args:
        document: Any JSON-like value.
        path:     Sequence of steps.  An empty path replaces the document;
                  a path holding an invalid step returns ``document``.
        value:    The replacement value.

    Returns:
        The new document root.
    """
    return update_at_path(document, path, value)


def update_text(
    text: str,
    path: Path,
    value: Any,
    config: EditorConfig | None = None,
) -> str | None:
    """Apply one path edit to serialized document text.

    Args:
        text:   JSON document text.
        path:   Sequence of steps.
        value:  The replacement value (numpy values and tuples are normalized).
        config: Serialization settings.  Defaults to ``EditorConfig()``.

    Returns:
        The pretty-printed edited document, or None when ``text`` does not
        decode, ``path`` holds an invalid step, or ``value`` has no JSON form.
    """
    store = DocumentStore(config=config, max_cache_size=2)
    store.set(text)
    result = store.update_at_path(path, value)
    return result.text if result.committed else None
