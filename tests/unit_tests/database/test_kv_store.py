from datetime import datetime, timezone

from database.kv_store import SQLiteKeyValueStore


def test_get_returns_default_when_missing(kv_store):
    assert kv_store.get("messages", []) == []
    assert kv_store.get("messages") is None


def test_set_overwrites_whole_value(kv_store):
    kv_store.set("messages", [{"id": "1"}, {"id": "2"}])
    kv_store.set("messages", [{"id": "3"}])

    assert kv_store.get("messages") == [{"id": "3"}]


def test_values_survive_a_new_store_instance(kv_db_path):
    SQLiteKeyValueStore(kv_db_path).set("theme", "dark")

    assert SQLiteKeyValueStore(kv_db_path).get("theme") == "dark"


def test_datetimes_are_stored_as_iso_strings(kv_store):
    moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
    kv_store.set("when", {"at": moment})

    assert kv_store.get("when") == {"at": "2024-01-01T00:00:00+00:00"}


def test_keys_are_independent(kv_store):
    kv_store.set("messages", ["m"])
    kv_store.set("files", ["f"])

    assert kv_store.get("messages") == ["m"]
    assert kv_store.get("files") == ["f"]
