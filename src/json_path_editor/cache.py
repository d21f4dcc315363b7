"""ParseCache: LRU-backed cache of decoded documents keyed by their text.

The store keeps its document serialized, but readers (field editors, views)
want the decoded tree.  Decoding on every read is wasteful, and worse, it
throws away structural sharing: two decodes of the same text are equal but
share no objects.  ``ParseCache`` hands out one decoded tree per text, and
the store seeds it with the tree it built on each update, so consecutive
versions of the document keep sharing their unedited subtrees.

Cached trees are shared between callers and must be treated as read-only.
Each ``ParseCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.

Example::

    cache = ParseCache(max_size=8)
    a = cache.decode('{"x": [1, 2]}')
    b = cache.decode('{"x": [1, 2]}')
    a is b            # True, decoded once
"""

from __future__ import annotations

from typing import Any

from cachetools import LRUCache

from json_path_editor.codec import decode

__all__ = ["ParseCache"]


class ParseCache:
    """LRU cache from document text to its decoded tree.

    Args:
        max_size: Maximum number of decoded documents held in memory.
            Defaults to 32.  When exceeded, the least-recently-used entry is
            silently evicted.
    """

    def __init__(self, max_size: int = 32) -> None:
        if max_size < 1:
            msg = f"max_size must be >= 1, got {max_size}"
            raise ValueError(msg)
        self._cache: LRUCache[str, Any] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Cache surface
    # ------------------------------------------------------------------

    def decode(self, text: str) -> Any:
        """Return the decoded tree for ``text``, decoding only on a miss.

        Raises:
            DecodeError: If ``text`` is not valid JSON.  Failures are not cached.
        """
        try:
            return self._cache[text]
        except KeyError:
            pass
        document = decode(text)
        self._cache[text] = document
        return document

    def seed(self, text: str, document: Any) -> None:
        """Record ``document`` as the decoded form of ``text``."""
        self._cache[text] = document

    def __contains__(self, text: object) -> bool:
        return text in self._cache

    def clear(self) -> None:
        """Drop every cached document."""
        self._cache.clear()
