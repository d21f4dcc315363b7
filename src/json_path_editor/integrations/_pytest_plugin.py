"""pytest plugin for json-path-editor.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_path_editor import DocumentStore, FileMirror, GraphIndex, format_path
from json_path_editor.path import Path, as_index
from json_path_editor.tree.nodes import CONTAINER_TYPES, NodeType, classify


@pytest.fixture
def document_store() -> DocumentStore:
    """Fixture that returns a fresh store wired to in-memory collaborators.

    Function-scoped: every test gets its own store, graph index and file
    mirror, reachable as ``document_store.graph`` and
    ``document_store.file_mirror``.

    Usage in tests::

        def test_edit(document_store):
            document_store.set('{"a": 1}')
            document_store.update_at_path(["a"], 2)
            assert document_store.read(["a"]) == 2
    """
    return DocumentStore(graph=GraphIndex(), file_mirror=FileMirror())


@pytest.fixture(scope="session")
def assert_shares_structure() -> Any:
    """Fixture that returns a callable structural-sharing asserter.

    The returned callable checks that ``after`` was produced from ``before`` by
    a copy-on-write edit at ``path``: every container on the path is a new
    object, and every subtree off the path is the very same object.

    Usage in tests::

        def test_update(assert_shares_structure):
            before = {"a": {"b": 1}, "c": [1]}
            after = update_at_path(before, ["a", "b"], 2)
            assert_shares_structure(before, after, ["a", "b"])

    Returns:
        A callable ``_assert(before, after, path) -> None`` that raises
        ``AssertionError`` naming the first offending position.
    """

    def _assert(before: Any, after: Any, path: Path) -> None:
        """Assert that ``after`` shares every subtree of ``before`` off ``path``.

        Raises:
            AssertionError: When a node on the path was reused, or a node off
                the path was copied.
        """
        steps = list(path)
        trail: list[Any] = []
        old, new = before, after
        while steps:
            where = format_path(trail)
            if old is not None and old is new and classify(old) in CONTAINER_TYPES:
                raise AssertionError(f"node on the edit path was not copied at {where}")
            step = steps.pop(0)
            if classify(new) == NodeType.MAP:
                step = step if isinstance(step, str) else str(step)
                for key, child in new.items():
                    if key == step or classify(old) != NodeType.MAP or key not in old:
                        continue
                    if child is not old[key] and classify(child) in CONTAINER_TYPES:
                        raise AssertionError(
                            f"subtree off the edit path was copied at {format_path([*trail, key])}"
                        )
                old = old.get(step) if classify(old) == NodeType.MAP else None
                new = new.get(step)
            elif classify(new) == NodeType.SEQUENCE:
                index = as_index(step)
                if index is None:
                    raise AssertionError(f"field step {step!r} addresses a sequence at {where}")
                for i, child in enumerate(new):
                    if i == index or classify(old) != NodeType.SEQUENCE or i >= len(old):
                        continue
                    if child is not old[i] and classify(child) in CONTAINER_TYPES:
                        raise AssertionError(
                            f"subtree off the edit path was copied at {format_path([*trail, i])}"
                        )
                old = old[index] if classify(old) == NodeType.SEQUENCE and index < len(old) else None
                new = new[index] if index < len(new) else None
            else:
                raise AssertionError(f"edit path leaves the document at {where}")
            trail.append(step)

    return _assert
