"""
Persistent key-value store.
Keeps whole JSON documents under fixed string keys in a single SQLite table.
"""

import json
import logging
import sqlite3
from datetime import datetime
from typing import Any

from notes_api.errors import KeyValueStoreError

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore:
    """Key-value store whose values are JSON documents"""

    def __init__(self, db_path: str = "notes_kv.db"):
        self.db_path = db_path
        self.init_store()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _serialize_value(self, value: Any) -> str:
        def json_serializer(obj):
            if isinstance(obj, datetime):
                return obj.isoformat()
            raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

        return json.dumps(value, default=json_serializer)

    def init_store(self) -> None:
        conn = self._get_connection()
        try:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS kv_entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error initializing key-value store: {e}")
            raise KeyValueStoreError(f"Cannot initialize {self.db_path}: {e}") from e
        finally:
            conn.close()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default`` when nothing is stored."""
        conn = self._get_connection()
        try:
            row = conn.execute("SELECT value FROM kv_entries WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Failed to read key {key}: {e}")
            raise KeyValueStoreError(f"Read of {key} failed: {e}") from e
        finally:
            conn.close()

        if row is None:
            return default
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.error(f"Stored value for {key} is not valid JSON, using default")
            return default

    def set(self, key: str, value: Any) -> None:
        """Overwrite the value stored under ``key``."""
        document = self._serialize_value(value)
        conn = self._get_connection()
        try:
            conn.execute(
                '''
                INSERT INTO kv_entries (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
                ''',
                (key, document),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to write key {key}: {e}")
            raise KeyValueStoreError(f"Write of {key} failed: {e}") from e
        finally:
            conn.close()
        logger.debug(f"Stored {key}")
