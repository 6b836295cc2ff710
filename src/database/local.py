"""SQLite row store for the messages and files tables."""
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from notes_api.errors import RowStoreError

logger = logging.getLogger(__name__)

# Columns the caller may set; id and created_at are always assigned here
TABLE_COLUMNS = {
    "messages": ("content",),
    "files": ("name", "size", "type", "url"),
}


def init_db(db_path: str = "notes.db") -> None:
    """Initialize database with all required tables."""
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS messages (
                id TEXT PRIMARY KEY,
                content TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS files (
                id TEXT PRIMARY KEY,
                name VARCHAR(255) NOT NULL,
                size INTEGER NOT NULL,
                type VARCHAR(255) NOT NULL DEFAULT '',
                url TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        ''')

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_messages_created_at ON messages(created_at)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_files_created_at ON files(created_at)')

        conn.commit()
    finally:
        conn.close()


class SQLiteRowStore:
    """Row store backed by a local SQLite file. Assigns ids and timestamps on insert."""

    def __init__(self, db_path: str = "notes.db"):
        self.db_path = db_path
        init_db(db_path)
        logger.info(f"SQLiteRowStore initialized at {db_path}")

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _check_table(self, table: str) -> None:
        if table not in TABLE_COLUMNS:
            raise RowStoreError(f"Unknown table: {table}")

    def insert_one(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored, including its id and created_at."""
        self._check_table(table)
        record = {column: row.get(column) for column in TABLE_COLUMNS[table]}
        record["id"] = str(uuid.uuid4())
        record["created_at"] = datetime.now(timezone.utc).isoformat()

        columns = ", ".join(record.keys())
        placeholders = ", ".join("?" for _ in record)
        conn = self._get_connection()
        try:
            conn.execute(
                f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
                tuple(record.values()),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to insert into {table}: {e}")
            raise RowStoreError(f"Insert into {table} failed: {e}") from e
        finally:
            conn.close()

        logger.debug(f"Inserted row {record['id']} into {table}")
        return record

    def select_all(self, table: str, order_by: str = "created_at") -> List[Dict[str, Any]]:
        """Return every row of ``table``, newest first."""
        self._check_table(table)
        if order_by not in TABLE_COLUMNS[table] + ("id", "created_at"):
            raise RowStoreError(f"Unknown column for {table}: {order_by}")

        conn = self._get_connection()
        try:
            cursor = conn.execute(f"SELECT * FROM {table} ORDER BY {order_by} DESC, rowid DESC")
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error(f"Failed to select from {table}: {e}")
            raise RowStoreError(f"Select from {table} failed: {e}") from e
        finally:
            conn.close()

    def delete_by_id(self, table: str, row_id: str) -> None:
        self.delete_by_ids(table, [row_id])

    def delete_by_ids(self, table: str, row_ids: Iterable[str]) -> None:
        """Delete every row whose id is in ``row_ids``. Unknown ids are ignored."""
        self._check_table(table)
        row_ids = list(row_ids)
        if not row_ids:
            return

        placeholders = ", ".join("?" for _ in row_ids)
        conn = self._get_connection()
        try:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id IN ({placeholders})", tuple(row_ids))
            conn.commit()
            logger.debug(f"Deleted {cursor.rowcount} row(s) from {table}")
        except sqlite3.Error as e:
            logger.error(f"Failed to delete from {table}: {e}")
            raise RowStoreError(f"Delete from {table} failed: {e}") from e
        finally:
            conn.close()
