"""Collaborator Protocols for the document store.

The store notifies two external collaborators on every change.  Neither has
to inherit from anything: any object with conformant methods passes
``isinstance`` checks against these runtime-checkable Protocols.

Example::

    from json_path_editor.protocols import FileCollaborator

    class Recorder:
        def __init__(self) -> None:
            self.seen: list[str] = []

        def set_contents(self, contents: str, skip_update: bool = False) -> None:
            self.seen.append(contents)

    assert isinstance(Recorder(), FileCollaborator)  # True, structural conformance
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_path_editor.collaborators.graph import GraphNode

__all__ = ["FileCollaborator", "GraphCollaborator"]


@runtime_checkable
class GraphCollaborator(Protocol):
    """Structural protocol for the visual-graph collaborator.

    - ``rebuild`` receives the full serialized document after every ``set``
      and must tolerate ``""`` and ``"{}"``.
    - ``clear`` resets the model when the store is cleared.
    - ``find_node`` looks a node up by its stable identifier; editors use it to
      refresh their view after a commit.
    """

    def rebuild(self, text: str) -> None: ...

    def clear(self) -> None: ...

    def find_node(self, node_id: str) -> GraphNode | None: ...


@runtime_checkable
class FileCollaborator(Protocol):
    """Structural protocol for the persisted-file mirror.

    The store always passes ``skip_update=True`` so the mirror does not feed
    the same text back into the store.
    """

    def set_contents(self, contents: str, skip_update: bool = False) -> None: ...
