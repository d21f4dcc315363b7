"""algorithm subpackage: public API for path navigation and field coercion.

Provides the pure read/update primitives, the type-preserving coercion used
by field editors, and the shared editing configuration.  Import from this
module (not from sub-modules directly) to stay on the stable public interface.

Example::

    from json_path_editor.algorithm import get_at_path, update_at_path

    doc = {"users": [{"name": "Ada"}]}
    new = update_at_path(doc, ["users", 0, "name"], "Grace")
    get_at_path(new, ["users", 0, "name"])   # "Grace"
    get_at_path(doc, ["users", 0, "name"])   # "Ada" (input untouched)
"""

from __future__ import annotations

from json_path_editor.algorithm.coercion import (
    coerce_like,
    is_primitive,
    parse_number,
    primitive_only,
    raw_seed_text,
    to_draft_text,
)
from json_path_editor.algorithm.config import DEFAULT_READ_ONLY_KEYS, EditorConfig
from json_path_editor.algorithm.navigation import (
    get_at_path,
    shallow_clone,
    update_at_path,
)

__all__ = [
    "DEFAULT_READ_ONLY_KEYS",
    "EditorConfig",
    "coerce_like",
    "get_at_path",
    "is_primitive",
    "parse_number",
    "primitive_only",
    "raw_seed_text",
    "shallow_clone",
    "to_draft_text",
    "update_at_path",
]
