import sqlite3

import pytest

from database.local import init_db
from notes_api.errors import RowStoreError


def test_init_db(db_path):
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
    tables = [row[0] for row in cursor.fetchall()]
    conn.close()
    assert "files" in tables
    assert "messages" in tables


def test_insert_one_assigns_id_and_timestamp(row_store):
    row = row_store.insert_one("messages", {"content": "hello", "id": "ignored"})

    assert row["content"] == "hello"
    assert row["id"] != "ignored"
    assert row["created_at"]


def test_insert_file_row(row_store):
    row = row_store.insert_one("files", {"name": "a.pdf", "size": 10, "type": "application/pdf", "url": "/v1/blobs/x.pdf"})

    (stored,) = row_store.select_all("files")
    assert stored == row


def test_select_all_newest_first(row_store):
    ids = [row_store.insert_one("messages", {"content": str(i)})["id"] for i in range(3)]

    assert [r["id"] for r in row_store.select_all("messages")] == list(reversed(ids))


def test_delete_by_id_and_ids(row_store):
    ids = [row_store.insert_one("messages", {"content": str(i)})["id"] for i in range(4)]

    row_store.delete_by_id("messages", ids[0])
    row_store.delete_by_ids("messages", ids[1:3])
    row_store.delete_by_ids("messages", [])
    row_store.delete_by_id("messages", "not-there")

    assert [r["id"] for r in row_store.select_all("messages")] == [ids[3]]


def test_unknown_table_is_rejected(row_store):
    with pytest.raises(RowStoreError):
        row_store.insert_one("users; DROP TABLE messages", {})
    with pytest.raises(RowStoreError):
        row_store.select_all("messages", order_by="content; --")


def test_missing_required_column_raises_row_store_error(row_store):
    with pytest.raises(RowStoreError):
        row_store.insert_one("messages", {})
