"""Path navigation primitives: read and copy-on-write update.

Both functions are pure: they never mutate their inputs, never raise, and
dispatch on the node variant (see ``classify``) at every step.

Structural sharing
------------------
``update_at_path`` shallow-clones exactly the nodes on the path from the root
to the edited position.  Every other subtree of the result is the *same
object* as in the input document, so callers can detect unchanged branches
with an identity check::

    old = {"a": {"b": 1}, "c": [1, 2]}
    new = update_at_path(old, ["a", "b"], 2)
    new["c"] is old["c"]      # True
    new["a"] is old["a"]      # False (fresh clone on the edit path)

Writes through a missing, null, or leaf position do not fail: an empty map
is synthesized there and navigation continues, so an update can extend the
document with a new path.
"""

from __future__ import annotations

import logging
from typing import Any

from json_path_editor.path import Path, Step, as_index, is_path, is_step_sequence
from json_path_editor.tree.nodes import ABSENT, NodeType, classify

__all__ = ["get_at_path", "shallow_clone", "update_at_path"]

logger = logging.getLogger(__name__)


def _child(node: Any, step: Step) -> Any:
    """Return ``node``'s child at ``step``, or ABSENT."""
    node_type = classify(node)

    if node_type == NodeType.MAP:
        key = step if isinstance(step, str) else str(step)
        return node.get(key, ABSENT)

    if node_type == NodeType.SEQUENCE:
        index = as_index(step)
        if index is not None and index < len(node):
            return node[index]
        return ABSENT

    # Leaves and values outside the data model have no children
    return ABSENT


def _assign(node: dict[str, Any] | list[Any], step: Step, value: Any) -> None:
    """Set ``node[step] = value`` on a freshly cloned container."""
    if isinstance(node, dict):
        node[step if isinstance(step, str) else str(step)] = value
        return

    index = as_index(step)
    if index is None:
        # A JSON array cannot carry named members
        logger.debug(f"Dropping write of field {step!r} on a sequence node")
        return
    if index < len(node):
        node[index] = value
        return
    # Extending past the end leaves holes, which serialize as null
    node.extend([None] * (index - len(node)))
    node.append(value)


def shallow_clone(node: Any) -> dict[str, Any] | list[Any]:
    """Clone one level of ``node``.

    Sequences become a new list over the same elements, maps a new dict over
    the same values; anything else (leaf, null, ABSENT) becomes an empty map.
    """
    node_type = classify(node)
    if node_type == NodeType.SEQUENCE:
        return list(node)
    if node_type == NodeType.MAP:
        return dict(node)
    return {}


def get_at_path(document: Any, path: Path) -> Any:
    """Return the value at ``path`` inside ``document``, or ABSENT.

    Args:
        document: Any value (container, leaf, None, or ABSENT).
        path:     Sequence of steps.  The empty path returns ``document``.

    Returns:
        The value reached, or ``ABSENT`` when the path runs through a null or
        missing node, off the end of a container, into a leaf, or when the
        path itself is malformed.
    """
    if not is_path(path):
        return ABSENT
    cur = document
    for step in path:
        if cur is None or cur is ABSENT:
            return ABSENT
        cur = _child(cur, step)
    return cur


def update_at_path(document: Any, path: Path, new_value: Any) -> Any:
    """Return a new document with ``new_value`` placed at ``path``.

    Args:
        document:  The root value.  Never mutated.
        path:      Sequence of steps.  An empty path, or one that is not a
                   list or tuple, replaces the whole document.  A list or
                   tuple holding an invalid step leaves ``document`` as is.
        new_value: Value to place at ``path``.  Inserted by reference.

    Returns:
        The new root.  Nodes on the root-to-target path are fresh clones; all
        other nodes are shared with ``document``.
    """
    if not is_step_sequence(path) or len(path) == 0:
        return new_value
    if not is_path(path):
        logger.debug(f"Ignoring update at {path!r}: path holds an invalid step")
        return document

    root = shallow_clone(document)
    cur = root
    src = document

    for step in path[:-1]:
        child_src = _child(src, step)
        child = shallow_clone(child_src)
        _assign(cur, step, child)
        cur = child
        src = child_src

    _assign(cur, path[-1], new_value)
    return root
