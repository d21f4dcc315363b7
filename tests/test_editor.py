"""Tests for FieldEditor: edit sessions over one sub-value of the document.

Covers:
- Mode selection (structured for maps, raw for everything else)
- Structured drafts: primitive entries only, JSON spellings, read-only keys
- Type-preserving save, container entries preserved, read-only values re-sent
- Raw drafts seeded from node rows; raw save with valid and invalid JSON
- Cancel and retarget discard drafts without touching the store
- Post-commit refresh of the node rows through the graph index
- Fail-closed store rejection leaves the session consistent
- View helpers (display_text, path_text)
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from json_path_editor import (
    DocumentStore,
    EditMode,
    EditorConfig,
    FieldEditor,
    GraphIndex,
)
from json_path_editor.collaborators.graph import Row
from json_path_editor.tree.nodes import NodeType

DOC = {
    "user": {
        "name": "Ada",
        "age": 36,
        "score": 9.5,
        "active": True,
        "nickname": None,
        "color": "#ff0000",
        "address": {"city": "London"},
        "langs": ["en", "fr"],
    },
    "tags": ["math", 7],
    "title": "people",
}


@pytest.fixture
def graph() -> GraphIndex:
    return GraphIndex()


@pytest.fixture
def store(graph: GraphIndex) -> DocumentStore:
    s = DocumentStore(graph=graph)
    s.set(json.dumps(DOC))
    return s


def user_editor(store: DocumentStore, graph: GraphIndex) -> FieldEditor:
    node = graph.find_node('$["user"]')
    assert node is not None
    return FieldEditor.from_node(store, node)


# ---------------------------------------------------------------------------
# Mode selection
# ---------------------------------------------------------------------------


class TestModeSelection:
    def test_map_is_structured(self, store: DocumentStore) -> None:
        assert FieldEditor(store, ["user"]).mode == EditMode.STRUCTURED

    @pytest.mark.parametrize("path", [["tags"], ["title"], ["user", "nickname"], ["missing"]])
    def test_everything_else_is_raw(self, store: DocumentStore, path: list[Any]) -> None:
        assert FieldEditor(store, path).mode == EditMode.RAW

    def test_root_map_is_structured(self, store: DocumentStore) -> None:
        assert FieldEditor(store).mode == EditMode.STRUCTURED


# ---------------------------------------------------------------------------
# Structured mode
# ---------------------------------------------------------------------------


class TestStructuredDrafts:
    def test_drafts_cover_primitive_entries_only(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        assert editor.field_drafts == {
            "name": "Ada",
            "age": "36",
            "score": "9.5",
            "active": "true",
            "nickname": "null",
            "color": "#ff0000",
        }

    def test_read_only_key(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        assert editor.is_read_only("color")
        assert not editor.is_read_only("name")

    def test_read_only_draft_cannot_be_set(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        with pytest.raises(ValueError, match="read-only"):
            editor.set_field_draft("color", "#000000")

    def test_container_entry_has_no_draft(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        with pytest.raises(KeyError):
            editor.set_field_draft("address", "{}")

    def test_not_editing_until_begin_edit(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        assert editor.is_editing is False
        editor.begin_edit()
        assert editor.is_editing is True


class TestStructuredSave:
    def test_types_are_preserved(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.begin_edit()
        editor.set_field_draft("age", "37")
        editor.set_field_draft("score", "10")
        editor.set_field_draft("active", "FALSE")
        editor.set_field_draft("name", "Grace")
        result = editor.save()

        assert result.committed
        user = store.read(["user"])
        assert user["age"] == 37 and type(user["age"]) is int
        assert user["score"] == 10.0 and type(user["score"]) is float
        assert user["active"] is False
        assert user["name"] == "Grace"

    def test_unparseable_number_keeps_original(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("age", "abc")
        editor.save()
        assert store.read(["user", "age"]) == 36

    def test_null_field_accepts_text(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("nickname", "Countess")
        editor.save()
        assert store.read(["user", "nickname"]) == "Countess"

    def test_null_field_stays_null(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("nickname", " NULL ")
        editor.save()
        assert store.read(["user", "nickname"]) is None

    def test_container_entries_preserved(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("name", "Grace")
        editor.save()
        assert store.read(["user", "address"]) == {"city": "London"}
        assert store.read(["user", "langs"]) == ["en", "fr"]

    def test_read_only_value_re_sent_unchanged(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        # Tamper with the draft directly, bypassing set_field_draft
        editor.field_drafts["color"] = "#000000"
        value = editor.build_value()
        assert value["color"] == "#ff0000"
        editor.save()
        assert store.read(["user", "color"]) == "#ff0000"

    def test_custom_read_only_keys(self, graph: GraphIndex) -> None:
        store = DocumentStore(graph=graph, config=EditorConfig(read_only_keys={"id"}))
        store.set('{"id": 1, "color": "red"}')
        editor = FieldEditor(store)
        editor.field_drafts["id"] = "2"
        editor.set_field_draft("color", "blue")
        editor.save()
        assert store.read([]) == {"id": 1, "color": "blue"}

    def test_save_leaves_edit_mode(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.begin_edit()
        editor.save()
        assert editor.is_editing is False

    def test_drafts_reflect_committed_values(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("age", "40.0")
        editor.save()
        assert editor.field_drafts["age"] == "40"

    def test_siblings_shared_after_save(self, store: DocumentStore) -> None:
        before = store.document()
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("name", "Grace")
        editor.save()
        after = store.document()
        assert after["tags"] is before["tags"]
        assert after["user"]["address"] is before["user"]["address"]

    def test_container_entries_keep_identity_after_save(self, store: DocumentStore) -> None:
        before = store.read(["user"])
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("age", "37")
        editor.save()
        after = store.read(["user"])
        assert after is not before
        assert after["langs"] is before["langs"]
        assert after["address"] is before["address"]


# ---------------------------------------------------------------------------
# Raw mode
# ---------------------------------------------------------------------------


class TestRawDrafts:
    def test_primitive_node_seeds_scalar_text(
        self, store: DocumentStore, graph: GraphIndex
    ) -> None:
        node = graph.find_node('$["tags"][1]')
        assert node is not None
        editor = FieldEditor.from_node(store, node)
        assert editor.mode == EditMode.RAW
        assert editor.text_draft == "7"

    def test_sequence_without_node_seeds_index_keyed_object(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["tags"])
        assert json.loads(editor.text_draft) == {"0": "math", "1": 7}

    def test_explicit_rows(self, store: DocumentStore) -> None:
        rows = [Row(key="a", value=1, type=NodeType.NUMBER)]
        editor = FieldEditor(store, ["tags"], rows=rows)
        assert json.loads(editor.text_draft) == {"a": 1}

    def test_missing_value_seeds_empty_object(self, store: DocumentStore) -> None:
        assert FieldEditor(store, ["missing"]).text_draft == "{}"


class TestRawSave:
    def test_valid_json_is_decoded(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["tags"])
        editor.set_text_draft('["a", {"b": 1}]')
        editor.save()
        assert store.read(["tags"]) == ["a", {"b": 1}]
        assert editor.last_error is None

    def test_scalar_edit_through_node(self, store: DocumentStore, graph: GraphIndex) -> None:
        node = graph.find_node('$["tags"][1]')
        assert node is not None
        editor = FieldEditor.from_node(store, node)
        editor.set_text_draft("8")
        editor.save()
        assert store.read(["tags", 1]) == 8

    def test_invalid_json_is_committed_as_text(
        self, store: DocumentStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        editor = FieldEditor(store, ["title"])
        editor.set_text_draft("not { json")
        with caplog.at_level("WARNING", logger="json_path_editor.editor"):
            result = editor.save()
        assert result.committed
        assert store.read(["title"]) == "not { json"
        assert editor.last_error is not None
        assert "not JSON" in caplog.text

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literal_is_committed_as_text(
        self, store: DocumentStore, literal: str
    ) -> None:
        editor = FieldEditor(store, ["title"])
        editor.set_text_draft(literal)
        result = editor.save()
        assert result.committed
        assert store.read(["title"]) == literal
        assert editor.last_error is not None

    def test_last_error_cleared_by_next_valid_save(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["title"])
        editor.set_text_draft("{bad")
        editor.save()
        editor.set_text_draft('"good"')
        editor.save()
        assert editor.last_error is None

    def test_raw_save_can_extend_document(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["new", "deep"])
        editor.set_text_draft("[1, 2]")
        editor.save()
        assert store.read(["new"]) == {"deep": [1, 2]}


# ---------------------------------------------------------------------------
# Cancel / retarget
# ---------------------------------------------------------------------------


class TestCancel:
    def test_cancel_restores_structured_drafts(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.begin_edit()
        editor.set_field_draft("name", "Grace")
        editor.cancel()
        assert editor.field_drafts["name"] == "Ada"
        assert editor.is_editing is False

    def test_cancel_restores_raw_draft(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["title"])
        seed = editor.text_draft
        editor.set_text_draft("changed")
        editor.cancel()
        assert editor.text_draft == seed

    def test_cancel_does_not_touch_store(self, store: DocumentStore) -> None:
        text = store.get()
        commits: list[Any] = []
        store.subscribe(commits.append)
        editor = FieldEditor(store, ["user"])
        editor.set_field_draft("name", "Grace")
        editor.cancel()
        assert store.get() == text
        assert commits == []


class TestRetarget:
    def test_retarget_switches_mode_and_drafts(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.begin_edit()
        editor.set_field_draft("name", "Grace")
        editor.retarget(["user", "address"])
        assert editor.is_editing is False
        assert editor.field_drafts == {"city": "London"}
        assert editor.path == ("user", "address")

    def test_retarget_to_raw(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.retarget(["title"])
        assert editor.mode == EditMode.RAW
        assert editor.field_drafts == {}
        assert editor.text_draft == "people"


# ---------------------------------------------------------------------------
# Refresh after commit
# ---------------------------------------------------------------------------


class TestRefresh:
    def test_rows_follow_the_graph_after_save(
        self, store: DocumentStore, graph: GraphIndex
    ) -> None:
        editor = user_editor(store, graph)
        editor.set_field_draft("name", "Grace")
        editor.save()
        rows = {row.key: row.value for row in editor.rows}
        assert rows["name"] == "Grace"

    def test_scalar_node_draft_follows_commit(
        self, store: DocumentStore, graph: GraphIndex
    ) -> None:
        node = graph.find_node('$["tags"][1]')
        assert node is not None
        editor = FieldEditor.from_node(store, node)
        editor.set_text_draft("99")
        editor.save()
        assert editor.text_draft == "99"
        assert editor.rows == (Row(key=None, value=99, type=NodeType.NUMBER),)

    def test_other_writers_refresh_idle_editor(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        store.update_at_path(["user", "name"], "Grace")
        assert editor.field_drafts["name"] == "Grace"

    def test_other_writers_keep_in_flight_drafts(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.begin_edit()
        editor.set_field_draft("name", "Mine")
        store.update_at_path(["user", "age"], 50)
        assert editor.field_drafts["name"] == "Mine"

    def test_node_removed_from_graph_falls_back_to_value_rows(
        self, store: DocumentStore, graph: GraphIndex
    ) -> None:
        node = graph.find_node('$["tags"][1]')
        assert node is not None
        editor = FieldEditor.from_node(store, node)
        store.update_at_path(["tags"], [])
        assert editor.rows == ()
        assert editor.text_draft == "{}"

    def test_closed_editor_stops_following(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.close()
        store.update_at_path(["user", "name"], "Grace")
        assert editor.field_drafts["name"] == "Ada"


class TestRejectedSave:
    def test_bad_store_state_resets_drafts(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user"])
        editor.begin_edit()
        editor.set_field_draft("name", "Grace")
        store.set("{not json")
        result = editor.save()
        assert result.committed is False
        assert store.get() == "{not json"
        assert editor.is_editing is False


# ---------------------------------------------------------------------------
# View helpers
# ---------------------------------------------------------------------------


class TestViewHelpers:
    def test_display_text_for_map_shows_primitives(self, store: DocumentStore) -> None:
        editor = FieldEditor(store, ["user", "address"])
        assert editor.display_text == '{\n  "city": "London"\n}'

    def test_display_text_for_user_omits_containers(self, store: DocumentStore) -> None:
        shown = json.loads(FieldEditor(store, ["user"]).display_text)
        assert "address" not in shown
        assert "langs" not in shown
        assert shown["name"] == "Ada"

    def test_display_text_for_scalar(self, store: DocumentStore) -> None:
        assert FieldEditor(store, ["title"]).display_text == "people"

    def test_path_text(self, store: DocumentStore) -> None:
        assert FieldEditor(store, ["tags", 1]).path_text == '$["tags"][1]'
        assert FieldEditor(store).path_text == "$"

    def test_node_id_kept(self, store: DocumentStore, graph: GraphIndex) -> None:
        assert user_editor(store, graph).node_id == '$["user"]'
