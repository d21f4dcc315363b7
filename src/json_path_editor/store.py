"""DocumentStore: the single source of truth for the document under edit.

The store holds the current document as serialized text plus a ``loading``
flag, and is the only place the document changes.  It is an explicit,
injectable object: construct one per editing context and hand it to the
editors and views that need it.

Architecture:
- ``set`` stores text verbatim, then synchronously notifies the graph
  collaborator (rebuild) and the file collaborator (mirror, tagged
  ``skip_update`` so the mirror does not write back), then the subscribed
  listeners.  Listeners therefore always observe collaborators that are
  already up to date.
- ``update_at_path`` decodes the current text, applies the copy-on-write
  ``update_at_path`` primitive, re-serializes and calls ``set``.  It fails
  closed: a current text that does not decode, or a value with no JSON form,
  leaves the store and every collaborator untouched.
- Decoded documents are held in a per-store ``ParseCache``.  Each update
  seeds the cache with the tree it just built, so the tree returned by
  ``document()`` after an edit shares every unedited subtree with the tree
  returned before it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from json_path_editor.algorithm.config import EditorConfig
from json_path_editor.algorithm.navigation import get_at_path
from json_path_editor.algorithm.navigation import update_at_path as _update_at_path
from json_path_editor.cache import ParseCache
from json_path_editor.codec import DecodeError, encode
from json_path_editor.path import Path, is_path, is_step_sequence
from json_path_editor.protocols import FileCollaborator, GraphCollaborator
from json_path_editor.result import ChangeKind, CommitResult
from json_path_editor.tree.builder import to_document
from json_path_editor.tree.nodes import ABSENT

__all__ = ["DocumentStore", "Listener"]

logger = logging.getLogger(__name__)

Listener = Callable[[CommitResult], None]


class DocumentStore:
    """Holds the current serialized document and applies path edits to it.

    Example::

        from json_path_editor import DocumentStore, GraphIndex

        graph = GraphIndex()
        store = DocumentStore(graph=graph)
        store.set('{"a": {"b": 1, "c": "x"}}')
        result = store.update_at_path(["a", "b"], 2)
        result.committed          # True
        store.read(["a", "b"])    # 2
    """

    def __init__(
        self,
        graph: GraphCollaborator | None = None,
        file_mirror: FileCollaborator | None = None,
        config: EditorConfig | None = None,
        max_cache_size: int = 32,
    ) -> None:
        """Initialise the store with the empty document.

        Args:
            graph: Collaborator rebuilt on every change.  Optional.
            file_mirror: Collaborator mirroring the text on every change.  Optional.
            config: Editing settings.  Defaults to ``EditorConfig()``.
            max_cache_size: Maximum number of decoded documents kept in the
                per-store parse cache.  This is an infrastructure parameter,
                NOT part of ``EditorConfig``.
        """
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self._graph = graph
        self._file_mirror = file_mirror
        self._cache = ParseCache(max_size=max_cache_size)
        self._listeners: list[Listener] = []
        self._text: str = self._config.empty_document
        self._loading: bool = True

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def graph(self) -> GraphCollaborator | None:
        return self._graph

    @property
    def file_mirror(self) -> FileCollaborator | None:
        return self._file_mirror

    @property
    def loading(self) -> bool:
        """True until the first ``set`` or ``clear``."""
        return self._loading

    # ------------------------------------------------------------------
    # Store operations
    # ------------------------------------------------------------------

    def get(self) -> str:
        """Return the current serialized document."""
        return self._text

    def set(self, text: str) -> CommitResult:
        """Replace the document with ``text`` verbatim and notify collaborators.

        The text is not validated here; an undecodable text is stored as is
        (the graph collaborator shows an empty model, and later
        ``update_at_path`` calls are rejected until a valid text is set).
        """
        return self._commit(text, ChangeKind.SET, None, time.perf_counter())

    def clear(self) -> CommitResult:
        """Empty the document and reset both collaborators."""
        t0 = time.perf_counter()
        self._text = ""
        self._loading = False
        if self._graph is not None:
            self._graph.clear()
        if self._file_mirror is not None:
            self._file_mirror.set_contents("", skip_update=True)
        result = CommitResult(
            committed=True,
            kind=ChangeKind.CLEAR,
            text="",
            computation_time_ms=(time.perf_counter() - t0) * 1000.0,
        )
        self._publish(result)
        return result

    def update_at_path(self, path: Path, new_value: Any) -> CommitResult:
        """Place ``new_value`` at ``path`` and commit the resulting document.

        Args:
            path:      Steps from the root.  An empty path, or a value that is
                       not a list or tuple, replaces the whole document.  A
                       list or tuple holding an invalid step (a bool, a
                       negative int, anything but str or int) is rejected.
            new_value: Any JSON-like value; tuples and numpy values are
                       normalized first.  Plain values are adopted by
                       reference and must not be mutated afterwards.

        Returns:
            The ``CommitResult`` of the commit, or a result with
            ``committed=False`` and a ``reason`` when the update was rejected.
            Never raises for bad state.
        """
        t0 = time.perf_counter()
        if not is_step_sequence(path):
            steps: tuple[Any, ...] = ()
        elif not is_path(path):
            return self._reject(tuple(path), "path holds an invalid step", t0)
        else:
            steps = tuple(path)
        current = self._text or self._config.empty_document

        try:
            document = self._cache.decode(current)
        except DecodeError as exc:
            return self._reject(steps, f"current document does not decode: {exc}", t0)

        try:
            value = to_document(new_value)
        except (TypeError, RecursionError) as exc:
            return self._reject(steps, f"new value has no JSON form: {exc}", t0)

        updated = _update_at_path(document, steps, value)

        try:
            text = encode(updated, self._config)
        except (TypeError, ValueError, RecursionError) as exc:
            return self._reject(steps, f"updated document does not encode: {exc}", t0)

        self._cache.seed(text, updated)
        return self._commit(text, ChangeKind.UPDATE, steps, t0)

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def document(self) -> Any:
        """Return the decoded current document, or ABSENT if it does not decode.

        The returned tree is shared with the store's cache: treat it as
        read-only.
        """
        try:
            return self._cache.decode(self._text or self._config.empty_document)
        except DecodeError:
            return ABSENT

    def read(self, path: Path) -> Any:
        """Return the value at ``path`` in the current document, or ABSENT."""
        return get_at_path(self.document(), path)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the CommitResult of every committed change.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(
        self,
        text: str,
        kind: ChangeKind,
        path: tuple[Any, ...] | None,
        t0: float,
    ) -> CommitResult:
        self._text = text
        self._loading = False
        if self._graph is not None:
            self._graph.rebuild(text)
        if self._file_mirror is not None:
            self._file_mirror.set_contents(text, skip_update=True)
        result = CommitResult(
            committed=True,
            kind=kind,
            text=text,
            path=path,
            computation_time_ms=(time.perf_counter() - t0) * 1000.0,
        )
        self._publish(result)
        return result

    def _reject(self, path: tuple[Any, ...], reason: str, t0: float) -> CommitResult:
        logger.warning(f"Update at {path!r} rejected: {reason}")
        return CommitResult(
            committed=False,
            kind=ChangeKind.UPDATE,
            text=self._text,
            path=path,
            reason=reason,
            computation_time_ms=(time.perf_counter() - t0) * 1000.0,
        )

    def _publish(self, result: CommitResult) -> None:
        for listener in list(self._listeners):
            listener(result)
