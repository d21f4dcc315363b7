"""CommitResult dataclass: the completion signal of a store write.

Every ``DocumentStore`` write returns one, and subscribed listeners receive
the same object once the graph and file collaborators have been updated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from json_path_editor.path import Step

__all__ = ["ChangeKind", "CommitResult"]


class ChangeKind(StrEnum):
    """Which store operation produced a CommitResult."""

    SET = auto()
    CLEAR = auto()
    UPDATE = auto()


@dataclass(frozen=True, slots=True)
class CommitResult:
    """Outcome of a ``set``, ``clear`` or ``update_at_path`` call.

    Attributes:
        committed: True when the store's text changed hands and collaborators
            were notified.  False only for a rejected ``update_at_path``.
        kind: The operation that produced this result.
        text: The store's text after the operation (unchanged on rejection).
        path: The edited path for updates; None for set and clear.
        reason: Why an update was rejected; None when committed.
        computation_time_ms: Wall-clock duration of the operation in milliseconds.
    """

    committed: bool
    kind: ChangeKind
    text: str
    path: tuple[Step, ...] | None = None
    reason: str | None = None
    computation_time_ms: float = 0.0
