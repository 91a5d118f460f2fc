"""
Unit tests for HistoryStore - per-key linear undo/redo.
"""

import pytest
from wiredraw.controllers.history_store import HistoryIndexError, HistoryKeyError, HistoryStore


@pytest.fixture
def store():
    s = HistoryStore()
    s.initialize("w1", "A")
    return s


class TestInitialize:
    def test_new_key_has_single_state(self, store):
        assert store.list_states("w1") == ["A"]
        assert store.current_index("w1") == 0
        assert store.current("w1") == "A"
        assert not store.can_undo("w1")
        assert not store.can_redo("w1")

    def test_reinitialize_is_noop(self, store):
        store.push("w1", "B")
        assert store.initialize("w1", "Z") is False
        assert store.list_states("w1") == ["A", "B"]

    def test_keys_are_independent(self, store):
        store.initialize("w2", "X")
        store.push("w1", "B")
        assert store.list_states("w2") == ["X"]
        assert len(store) == 2
        assert "w2" in store

    def test_invalid_max_depth(self):
        with pytest.raises(ValueError):
            HistoryStore(max_depth=0)


class TestPushUndoRedo:
    def test_push_moves_cursor_to_end(self, store):
        store.push("w1", "B")
        store.push("w1", "C")
        assert store.current_index("w1") == 2
        assert store.current("w1") == "C"

    def test_undo_twice_then_redo(self, store):
        store.push("w1", "B")
        store.push("w1", "C")
        assert store.undo("w1") == "B"
        assert store.undo("w1") == "A"
        assert store.current_index("w1") == 0
        assert store.redo("w1") == "B"
        assert store.current_index("w1") == 1

    def test_push_after_undo_truncates_future(self, store):
        store.push("w1", "B")
        store.push("w1", "C")
        store.undo("w1")
        store.undo("w1")
        store.push("w1", "D")
        assert store.list_states("w1") == ["A", "D"]
        assert store.current_index("w1") == 1
        assert not store.can_redo("w1")

    def test_undo_at_start_stays(self, store):
        assert store.undo("w1") == "A"
        assert store.current_index("w1") == 0

    def test_redo_at_end_stays(self, store):
        store.push("w1", "B")
        assert store.redo("w1") == "B"
        assert store.current_index("w1") == 1

    def test_same_state_can_be_pushed_twice(self, store):
        store.push("w1", "A")
        assert store.get_state_count("w1") == 2

    def test_snapshots_are_not_copied(self, store):
        state = {"path": []}
        store.push("w1", state)
        assert store.current("w1") is state


class TestMaxDepth:
    def test_oldest_states_dropped(self):
        store = HistoryStore(max_depth=3)
        store.initialize("k", 0)
        for i in range(1, 6):
            store.push("k", i)
        assert store.list_states("k") == [3, 4, 5]
        assert store.current_index("k") == 2
        assert store.undo("k") == 4

    def test_unlimited_by_default(self, store):
        for i in range(500):
            store.push("w1", i)
        assert store.get_state_count("w1") == 501


class TestPopLatest:
    def test_removes_newest(self, store):
        store.push("w1", "B")
        assert store.pop_latest("w1") == "B"
        assert store.list_states("w1") == ["A"]
        assert store.current_index("w1") == 0

    def test_single_state_is_kept(self, store):
        assert store.pop_latest("w1") is None
        assert store.list_states("w1") == ["A"]

    def test_cursor_moves_to_new_last(self, store):
        store.push("w1", "B")
        store.push("w1", "C")
        store.undo("w1")
        store.undo("w1")
        store.pop_latest("w1")
        assert store.current_index("w1") == 1
        assert store.current("w1") == "B"


class TestRestore:
    def test_restore_jumps_cursor(self, store):
        store.push("w1", "B")
        store.push("w1", "C")
        assert store.restore("w1", 0) == "A"
        assert store.current_index("w1") == 0
        assert store.can_redo("w1")

    @pytest.mark.parametrize("index", [-1, 3, 1.0, "0", True, None])
    def test_out_of_range_raises(self, store, index):
        store.push("w1", "B")
        store.push("w1", "C")
        with pytest.raises(HistoryIndexError):
            store.restore("w1", index)
        assert store.current_index("w1") == 2

    def test_index_error_is_an_index_error(self, store):
        with pytest.raises(IndexError):
            store.restore("w1", 5)


class TestQueries:
    def test_list_states_returns_copy(self, store):
        states = store.list_states("w1")
        states.append("X")
        assert store.list_states("w1") == ["A"]

    def test_list_alias(self, store):
        store.push("w1", "B")
        assert store.list("w1") == store.list_states("w1") == ["A", "B"]

    def test_describe(self, store):
        store.push("w1", "B")
        store.undo("w1")
        assert store.describe("w1") == {"count": 2, "index": 0, "can_undo": False, "can_redo": True}


class TestUnknownKeys:
    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.push("nope", "X"),
            lambda s: s.pop_latest("nope"),
            lambda s: s.undo("nope"),
            lambda s: s.redo("nope"),
            lambda s: s.restore("nope", 0),
            lambda s: s.current("nope"),
            lambda s: s.current_index("nope"),
            lambda s: s.list_states("nope"),
            lambda s: s.can_undo("nope"),
            lambda s: s.can_redo("nope"),
            lambda s: s.get_state_count("nope"),
            lambda s: s.clear("nope"),
        ],
    )
    def test_operations_raise_key_error(self, store, call):
        with pytest.raises(HistoryKeyError):
            call(store)

    def test_error_message_names_key(self, store):
        with pytest.raises(KeyError) as exc_info:
            store.undo("ghost")
        assert str(exc_info.value) == 'Object with id "ghost" is not initialized.'
        assert exc_info.value.key == "ghost"


class TestClear:
    def test_clear_requires_reinitialize(self, store):
        store.push("w1", "B")
        store.clear("w1")
        assert "w1" not in store
        with pytest.raises(HistoryKeyError):
            store.push("w1", "C")
        assert store.initialize("w1", "fresh") is True
        assert store.list_states("w1") == ["fresh"]

    def test_clear_all(self, store):
        store.initialize("w2", "X")
        store.clear_all()
        assert len(store) == 0
        assert store.keys() == []
