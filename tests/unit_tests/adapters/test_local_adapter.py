"""
Unit tests for the key-value store editor adapter.
The SQLite store stands in for browser storage; a fresh adapter on the same file is a page reload.
"""

import pytest

from database.kv_store import SQLiteKeyValueStore
from notes_api.adapters.local import LocalEditorAdapter
from notes_api.formatting import from_data_url
from notes_api.schemas import IncomingFile
from tests.consts import TEST_PDF_CONTENT, TEST_PDF_CONTENT_TYPE, TEST_PDF_NAME
from tests.fixtures.store_fakes import InMemoryKeyValueStore


@pytest.fixture
def adapter(kv_store):
    return LocalEditorAdapter(kv_store)


def reload(kv_db_path) -> LocalEditorAdapter:
    return LocalEditorAdapter(SQLiteKeyValueStore(kv_db_path))


class TestMessages:

    async def test_save_generates_id_and_timestamp(self, adapter):
        message = await adapter.save_message("  hello  ")

        assert message.content == "hello"
        assert message.id
        assert message.created_at.tzinfo is not None
        assert adapter.messages == [message]

    async def test_blank_text_is_not_saved(self, adapter, kv_store):
        assert await adapter.save_message("   ") is None
        assert adapter.messages == []
        assert kv_store.get("messages") is None

    async def test_every_change_is_written_through(self, adapter, kv_store):
        first = await adapter.save_message("first")
        second = await adapter.save_message("second")

        stored = kv_store.get("messages")
        assert [m["id"] for m in stored] == [second.id, first.id]

        await adapter.delete_message(first.id)
        assert [m["id"] for m in kv_store.get("messages")] == [second.id]

    async def test_delete_unknown_id_is_a_no_op(self, adapter):
        await adapter.save_message("only")
        assert await adapter.delete_message("missing") is True
        assert len(adapter.messages) == 1

    async def test_delete_all_confirmed(self, adapter, kv_db_path):
        for i in range(4):
            await adapter.save_message(f"message {i}")

        assert await adapter.delete_all_messages(lambda: True) is True
        assert adapter.messages == []
        assert reload(kv_db_path).messages == []

    async def test_delete_all_declined(self, adapter):
        await adapter.save_message("stays")
        assert await adapter.delete_all_messages(lambda: False) is False
        assert len(adapter.messages) == 1

    async def test_failed_write_changes_nothing(self):
        store = InMemoryKeyValueStore()
        adapter = LocalEditorAdapter(store)
        kept = await adapter.save_message("kept")
        store.fail_writes = True

        assert await adapter.save_message("lost") is None
        assert await adapter.delete_message(kept.id) is False
        assert await adapter.delete_all_messages(lambda: True) is False
        assert adapter.messages == [kept]


class TestFiles:

    async def test_upload_embeds_payload_as_data_url(self, adapter):
        (item,) = await adapter.upload_files(
            [IncomingFile(name=TEST_PDF_NAME, content_type=TEST_PDF_CONTENT_TYPE, data=TEST_PDF_CONTENT)]
        )

        assert item.size == len(TEST_PDF_CONTENT)
        assert item.type == TEST_PDF_CONTENT_TYPE
        assert from_data_url(item.url) == (TEST_PDF_CONTENT_TYPE, TEST_PDF_CONTENT)

    async def test_batch_is_prepended_as_a_whole_in_upload_order(self, adapter):
        await adapter.upload_files([IncomingFile("old.txt", "text/plain", b"old")])
        await adapter.upload_files([
            IncomingFile("a.txt", "text/plain", b"a"),
            IncomingFile("b.txt", "text/plain", b"b"),
        ])

        assert [f.name for f in adapter.files] == ["a.txt", "b.txt", "old.txt"]
        assert adapter.state.is_loading is False

    async def test_delete_file_removes_inline_payload(self, adapter, kv_db_path):
        keep, drop = await adapter.upload_files([
            IncomingFile("keep.txt", "text/plain", b"keep"),
            IncomingFile("drop.txt", "text/plain", b"drop"),
        ])

        assert await adapter.delete_file(drop.id) is True
        reloaded = reload(kv_db_path)
        assert [f.id for f in reloaded.files] == [keep.id]

    async def test_delete_unknown_file(self, adapter):
        assert await adapter.delete_file("missing") is False

    async def test_delete_all_files(self, adapter, kv_db_path):
        await adapter.upload_files([IncomingFile("a.txt", "text/plain", b"a")])

        assert await adapter.delete_all_files(lambda: False) is False
        assert len(adapter.files) == 1
        assert await adapter.delete_all_files(lambda: True) is True
        assert reload(kv_db_path).files == []

    async def test_failed_write_drops_the_batch(self):
        store = InMemoryKeyValueStore(fail_writes=True)
        adapter = LocalEditorAdapter(store)

        assert await adapter.upload_files([IncomingFile("a.txt", "text/plain", b"a")]) == []
        assert adapter.files == []


class TestPersistence:

    async def test_reload_reproduces_previous_session(self, adapter, kv_db_path):
        await adapter.save_message("one")
        two = await adapter.save_message("two")
        await adapter.save_message("three")
        await adapter.delete_message(two.id)
        await adapter.upload_files([IncomingFile("a.bin", "", b"\x00\xff")])

        reloaded = reload(kv_db_path)

        assert reloaded.messages == adapter.messages
        assert reloaded.files == adapter.files

    async def test_load_all_rereads_the_store(self, kv_store):
        first = LocalEditorAdapter(kv_store)
        second = LocalEditorAdapter(kv_store)
        await first.save_message("from another tab")

        assert second.messages == []
        await second.load_all()
        assert [m.content for m in second.messages] == ["from another tab"]

    def test_unreadable_store_starts_empty(self):
        adapter = LocalEditorAdapter(InMemoryKeyValueStore(fail_reads=True))
        assert adapter.messages == []
        assert adapter.files == []

    def test_malformed_records_are_skipped(self):
        store = InMemoryKeyValueStore()
        store.data["messages"] = [
            {"id": "1", "content": "ok", "created_at": "2024-01-01T00:00:00+00:00"},
            {"content": "no id"},
        ]
        store.data["files"] = "not a list"

        adapter = LocalEditorAdapter(store)

        assert [m.id for m in adapter.messages] == ["1"]
        assert adapter.files == []

    def test_custom_keys(self):
        store = InMemoryKeyValueStore()
        store.data["notes"] = [{"id": "n", "content": "x", "created_at": "2024-01-01T00:00:00+00:00"}]

        adapter = LocalEditorAdapter(store, messages_key="notes", files_key="attachments")

        assert [m.id for m in adapter.messages] == ["n"]
