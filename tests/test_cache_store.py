"""Tests for the cache state store: save/restore semantics and serialization."""

from __future__ import annotations

import json

import pytest

from geocoin.core.cache_store import STORE_FORMAT_VERSION, CacheStateStore
from geocoin.core.errors import MalformedPersistedState


class TestSaveRestore:
    def test_unknown_key_is_none(self):
        assert CacheStateStore().restore("3,4") is None

    def test_empty_entry_is_not_absent(self):
        store = CacheStateStore()
        store.save("3,4", [])
        assert store.restore("3,4") == []
        assert "3,4" in store

    def test_save_overwrites(self):
        store = CacheStateStore()
        store.save("3,4", ["3:4#1", "3:4#2"])
        store.save("3,4", ["3:4#1"])
        assert store.restore("3,4") == ["3:4#1"]

    def test_restore_is_repeatable(self):
        store = CacheStateStore()
        store.save("0,0", ["0:0#1"])
        assert store.restore("0,0") == ["0:0#1"]
        assert store.restore("0,0") == ["0:0#1"]
        assert len(store) == 1

    def test_saved_sequence_is_a_copy(self):
        store = CacheStateStore()
        tokens = ["1:1#1", "1:1#2"]
        store.save("1,1", tokens)
        tokens.pop()
        assert store.restore("1,1") == ["1:1#1", "1:1#2"]

    def test_restored_sequence_is_a_copy(self):
        store = CacheStateStore()
        store.save("1,1", ["1:1#1"])
        out = store.restore("1,1")
        out.append("junk")
        assert store.restore("1,1") == ["1:1#1"]

    def test_clear(self):
        store = CacheStateStore({"1,1": ["1:1#1"]})
        store.clear()
        assert len(store) == 0
        assert store.restore("1,1") is None


class TestSerialization:
    def test_round_trip(self):
        store = CacheStateStore()
        store.save("3,4", ["3:4#1"])
        store.save("-2,-9", [])
        store.save("10,0", ["10:0#3", "3:4#2", "10:0#1"])

        copy = CacheStateStore.deserialize(store.serialize())

        for key in store.keys():
            assert copy.restore(key) == store.restore(key)
        assert copy.restore("5,5") is None

    def test_document_shape(self):
        store = CacheStateStore({"3,4": ["3:4#1"]})
        doc = json.loads(store.serialize())
        assert doc == {"version": STORE_FORMAT_VERSION, "caches": {"3,4": ["3:4#1"]}}

    def test_missing_fields_read_as_empty(self):
        assert len(CacheStateStore.deserialize("{}")) == 0
        store = CacheStateStore.deserialize('{"caches": {"1,2": ["1:2#1"]}}')
        assert store.restore("1,2") == ["1:2#1"]

    def test_unknown_fields_ignored(self):
        text = '{"version": 1, "caches": {}, "player": {"name": "x"}}'
        assert len(CacheStateStore.deserialize(text)) == 0

    @pytest.mark.parametrize("text", [
        "",
        "not json",
        "[]",
        "null",
        '{"caches": ["3,4"]}',
        '{"caches": {"3,4": "3:4#1"}}',
        '{"caches": {"3,4": [1, 2]}}',
        '{"caches": {"three,four": []}}',
        '{"caches": {"3;4": ["3:4#1"]}}',
    ])
    def test_malformed_raises(self, text):
        with pytest.raises(MalformedPersistedState):
            CacheStateStore.deserialize(text)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            CacheStateStore.deserialize("{")
