"""Path addressing for nested documents.

A path is an ordered sequence of steps.  Each step is either a field name
(``str``) for map nodes or a non-negative index (``int``) for sequence nodes.
The empty path addresses the document root.

``format_path`` renders a path for display in bracketed index notation::

    format_path([])                      # '$'
    format_path(["users", 0, "name"])    # '$["users"][0]["name"]'

The display form is never parsed back into a path.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any, TypeAlias, TypeGuard

__all__ = [
    "Path",
    "Step",
    "as_index",
    "format_path",
    "is_path",
    "is_step",
    "is_step_sequence",
]

Step: TypeAlias = str | int
Path: TypeAlias = Sequence[Step]

# Canonical decimal index: "0" or a digit string without a leading zero
_INDEX_TEXT = re.compile(r"0|[1-9][0-9]*")


def is_step(step: Any) -> TypeGuard[Step]:
    """Return True if ``step`` is a text field name or a non-negative index."""
    if isinstance(step, bool):
        return False
    if isinstance(step, int):
        return step >= 0
    return isinstance(step, str)


def is_step_sequence(path: Any) -> bool:
    """Return True if ``path`` has the shape of a path: a list or tuple.

    A ``str`` is a Python sequence but never a path.  The steps themselves
    are not checked (see ``is_path``).
    """
    return isinstance(path, (list, tuple))


def is_path(path: Any) -> TypeGuard[Path]:
    """Return True if ``path`` is a well-formed path.

    A well-formed path is a list or tuple whose every step passes
    ``is_step``.
    """
    return is_step_sequence(path) and all(is_step(s) for s in path)


def as_index(step: Step) -> int | None:
    """Return the sequence index a step addresses, or None.

    Integer steps are indices; text steps are indices only when they spell a
    canonical decimal number ("3", not "03" or "+3").
    """
    if isinstance(step, int) and not isinstance(step, bool):
        return step if step >= 0 else None
    if isinstance(step, str) and _INDEX_TEXT.fullmatch(step):
        return int(step)
    return None


def format_path(path: Path | None) -> str:
    """Render ``path`` in display-only bracket notation rooted at ``$``."""
    if not path:
        return "$"
    segments = [
        str(step) if isinstance(step, int) and not isinstance(step, bool)
        else json.dumps(str(step), ensure_ascii=False)
        for step in path
    ]
    return "$[" + "][".join(segments) + "]"
