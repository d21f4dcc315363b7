"""FieldEditor: one edit session over one sub-value of the store's document.

An editor targets a path (and, when it was opened from a graph node, that
node's stable id and display rows).  It offers exactly one of two modes:

- STRUCTURED, when the sub-value is a map: one text draft per primitive
  entry.  Entries holding maps or sequences get no draft and are written back
  unchanged.  Read-only keys (``EditorConfig.read_only_keys``) are shown but
  always written back with their current value.
- RAW, for everything else: a single text draft seeded from the node's rows.

Saving coerces each structured draft back toward its field's original type
(see ``coerce_like``), or decodes the raw draft, and commits through
``DocumentStore.update_at_path``.  The editor subscribes to the store, so
after any committed change it re-reads its node from the graph collaborator
by id; the store notifies listeners only after the graph has been rebuilt.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from enum import StrEnum, auto
from typing import Any

from json_path_editor.algorithm.coercion import (
    coerce_like,
    is_primitive,
    primitive_only,
    raw_seed_text,
    to_draft_text,
)
from json_path_editor.algorithm.config import EditorConfig
from json_path_editor.codec import DecodeError, decode
from json_path_editor.collaborators.graph import GraphNode, Row, rows_for
from json_path_editor.path import Path, Step, format_path
from json_path_editor.protocols import GraphCollaborator
from json_path_editor.result import CommitResult
from json_path_editor.store import DocumentStore
from json_path_editor.tree.nodes import ABSENT, NodeType, classify

__all__ = ["EditMode", "FieldEditor"]

logger = logging.getLogger(__name__)


class EditMode(StrEnum):
    """How a FieldEditor presents its target value."""

    STRUCTURED = auto()
    RAW = auto()


class FieldEditor:
    """Edit session for the value at ``path`` in ``store``.

    Args:
        store:   The document store to read from and commit to.
        path:    Steps addressing the edited value.  Defaults to the root.
        graph:   Graph collaborator used to refresh the node after a commit.
                 Defaults to the store's graph.
        node_id: Stable id of the graph node this editor was opened from.
        rows:    Display rows of that node.  When omitted they are taken from
                 the graph node, or derived from the value itself.
        config:  Editing settings.  Defaults to the store's config.

    Example::

        editor = FieldEditor(store, ["user"])
        editor.begin_edit()
        editor.set_field_draft("age", "37")
        editor.save()
        store.read(["user", "age"])   # 37 (an int, like the original)
    """

    def __init__(
        self,
        store: DocumentStore,
        path: Path = (),
        *,
        graph: GraphCollaborator | None = None,
        node_id: str | None = None,
        rows: Iterable[Row] | None = None,
        config: EditorConfig | None = None,
    ) -> None:
        self._store = store
        self._graph = graph if graph is not None else store.graph
        self._config = config if config is not None else store.config
        self._path: tuple[Step, ...] = tuple(path)
        self._node_id = node_id
        self._rows: tuple[Row, ...] | None = tuple(rows) if rows is not None else None

        self.is_editing = False
        self.field_drafts: dict[str, str] = {}
        self.text_draft = ""
        self.last_error: str | None = None

        if self._rows is None:
            self._refresh_rows()
        self._reset_drafts()
        self._unsubscribe = store.subscribe(self._on_commit)

    @classmethod
    def from_node(
        cls,
        store: DocumentStore,
        node: GraphNode,
        graph: GraphCollaborator | None = None,
    ) -> FieldEditor:
        """Open an editor on a graph node."""
        return cls(store, node.path, graph=graph, node_id=node.id, rows=node.rows)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def path(self) -> tuple[Step, ...]:
        return self._path

    @property
    def node_id(self) -> str | None:
        return self._node_id

    @property
    def value(self) -> Any:
        """The current (committed) value at the editor's path, or ABSENT."""
        return self._store.read(self._path)

    @property
    def rows(self) -> tuple[Row, ...]:
        if self._rows is not None:
            return self._rows
        return rows_for(self.value)

    @property
    def mode(self) -> EditMode:
        if classify(self.value) == NodeType.MAP:
            return EditMode.STRUCTURED
        return EditMode.RAW

    @property
    def path_text(self) -> str:
        """Display form of the path, e.g. ``$["users"][0]``."""
        return format_path(self._path)

    @property
    def display_text(self) -> str:
        """What the view shows when not editing."""
        value = self.value
        if classify(value) == NodeType.MAP:
            return json.dumps(
                primitive_only(value),
                indent=self._config.indent,
                ensure_ascii=self._config.ensure_ascii,
            )
        return raw_seed_text(self.rows, indent=self._config.indent)

    def is_read_only(self, key: str) -> bool:
        return key in self._config.read_only_keys

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def begin_edit(self) -> None:
        self.is_editing = True

    def set_field_draft(self, key: str, text: str) -> None:
        """Change the draft of one structured field.

        Raises:
            ValueError: If ``key`` is read-only.
            KeyError: If ``key`` has no draft (not a primitive entry).
        """
        if self.is_read_only(key):
            msg = f"field {key!r} is read-only"
            raise ValueError(msg)
        if key not in self.field_drafts:
            raise KeyError(key)
        self.field_drafts[key] = text

    def set_text_draft(self, text: str) -> None:
        self.text_draft = text

    def cancel(self) -> None:
        """Discard all drafts and leave edit mode.  The store is not touched."""
        self._reset_drafts()
        self.is_editing = False

    def retarget(
        self,
        path: Path,
        node_id: str | None = None,
        rows: Iterable[Row] | None = None,
    ) -> None:
        """Point the editor at another value, discarding any drafts."""
        self._path = tuple(path)
        self._node_id = node_id
        self._rows = tuple(rows) if rows is not None else None
        self.is_editing = False
        if self._rows is None:
            self._refresh_rows()
        self._reset_drafts()

    def build_value(self) -> Any:
        """Assemble the value ``save`` would commit from the current drafts."""
        current = self.value
        if classify(current) == NodeType.MAP:
            next_obj = dict(current)
            for key, draft in self.field_drafts.items():
                if self.is_read_only(key):
                    continue
                original = current.get(key, ABSENT)
                if is_primitive(original):
                    next_obj[key] = coerce_like(original, draft)
            return next_obj

        self.last_error = None
        try:
            return decode(self.text_draft)
        except DecodeError as exc:
            # Non-blocking: the raw text itself is committed
            logger.warning(f"Draft for {self.path_text} is not JSON, saving as text: {exc}")
            self.last_error = str(exc)
            return self.text_draft

    def save(self) -> CommitResult:
        """Commit the drafts to the store and leave edit mode.

        Returns:
            The store's CommitResult.  When the store rejects the update the
            drafts are re-derived from the unchanged document.
        """
        value = self.build_value()
        self.is_editing = False
        result = self._store.update_at_path(self._path, value)
        if not result.committed:
            self._reset_drafts()
        return result

    def close(self) -> None:
        """Stop following store changes."""
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_commit(self, result: CommitResult) -> None:
        self._refresh_rows()
        if not self.is_editing:
            self._reset_drafts()

    def _refresh_rows(self) -> None:
        """Adopt the latest rows of this editor's graph node, if it has one."""
        if self._node_id is None or self._graph is None:
            return
        latest = self._graph.find_node(self._node_id)
        # A node that left the graph falls back to rows derived from the value
        self._rows = latest.rows if latest is not None else None

    def _reset_drafts(self) -> None:
        value = self.value
        if classify(value) == NodeType.MAP:
            self.field_drafts = {
                k: to_draft_text(v) for k, v in value.items() if is_primitive(v)
            }
            self.text_draft = ""
        else:
            self.field_drafts = {}
            self.text_draft = raw_seed_text(self.rows, indent=self._config.indent)
