"""EditorConfig: settings shared by the document store and field editors.

EditorConfig is a frozen (immutable) dataclass.  It governs behaviour only
(serialization format, the empty-document marker, read-only fields);
infrastructure sizing such as the parse-cache size stays a constructor
argument of ``DocumentStore``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["DEFAULT_READ_ONLY_KEYS", "EditorConfig"]

DEFAULT_READ_ONLY_KEYS: frozenset[str] = frozenset({"color"})


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for document editing.

    Attributes:
        indent: Spaces per indentation level when the store serializes a
            document (>= 0).  Defaults to 2.
        ensure_ascii: When True, non-ASCII characters are written as
            ``\\uXXXX`` escapes.  Default False (UTF-8 text is kept as is).
        empty_document: Text the store starts with and falls back to when its
            current text is empty.  Defaults to ``"{}"``.
        read_only_keys: Map keys a field editor shows but never writes back
            from a draft.  Defaults to ``{"color"}``.
    """

    indent: int = 2
    ensure_ascii: bool = False
    empty_document: str = "{}"
    read_only_keys: frozenset[str] = field(default=DEFAULT_READ_ONLY_KEYS)

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            msg = f"indent must be an int, got {type(self.indent).__name__}"
            raise TypeError(msg)
        if self.indent < 0:
            msg = f"indent must be >= 0, got {self.indent}"
            raise ValueError(msg)
        if not self.empty_document.strip():
            msg = "empty_document must not be blank"
            raise ValueError(msg)
        if isinstance(self.read_only_keys, str):
            msg = "read_only_keys must be a collection of keys, not a str"
            raise TypeError(msg)
        # Accept any iterable of keys; frozen, so bypass __setattr__
        object.__setattr__(self, "read_only_keys", frozenset(self.read_only_keys))
