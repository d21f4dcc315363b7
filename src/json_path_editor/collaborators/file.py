"""FileMirror: in-memory mirror of the persisted document file.

Satisfies the ``FileCollaborator`` Protocol structurally.  The mirror holds the
file contents the user sees in a text pane.  Changes coming *from* the store
arrive with ``skip_update=True`` and are only recorded; changes made to the
file itself (``skip_update=False``) are forwarded to ``on_update``, which is
how a hand-edited file flows back into the store without the two looping.
"""

from __future__ import annotations

from collections.abc import Callable

__all__ = ["FileMirror"]


class FileMirror:
    """Holds the mirrored file contents.

    Args:
        on_update: Called with the new contents whenever they change without
            ``skip_update``.  Typically ``store.set``.
        contents:  Initial contents.  Defaults to ``""``.

    Example::

        mirror = FileMirror()
        store = DocumentStore(file_mirror=mirror)   # store -> mirror, skip_update
        mirror.on_update = store.set
        mirror.set_contents('{"a": 1}')             # mirror -> store.set
    """

    def __init__(
        self,
        on_update: Callable[[str], object] | None = None,
        contents: str = "",
    ) -> None:
        self.on_update = on_update
        self._contents = contents

    @property
    def contents(self) -> str:
        return self._contents

    def set_contents(self, contents: str, skip_update: bool = False) -> None:
        """Replace the mirrored contents.

        Args:
            contents:    The new file text.
            skip_update: When True the change came from the store and is not
                forwarded back to it.
        """
        self._contents = contents
        if not skip_update and self.on_update is not None:
            self.on_update(contents)
