"""Editor adapter backed by the persistent key-value store.

Both lists are stored whole under two fixed keys and rewritten on every
change, so the store is always the source of truth. File bytes travel
inside the records as base64 ``data:`` URLs.
"""
import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Protocol, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from notes_api.adapters.base import Confirm, EditorAdapter
from notes_api.errors import KeyValueStoreError
from notes_api.formatting import to_data_url
from notes_api.schemas import FileItem, IncomingFile, Message
from notes_api.utils.decorators import async_log_execution_time

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class LocalEditorAdapter(EditorAdapter):
    """Keeps messages and files in a key-value store under two fixed keys."""

    def __init__(self, kv_store: KeyValueStore, messages_key: str = "messages", files_key: str = "files"):
        super().__init__()
        self.kv_store = kv_store
        self.messages_key = messages_key
        self.files_key = files_key
        self._read_state()

    def _read_list(self, model: Type[ModelT], key: str) -> Optional[List[ModelT]]:
        try:
            records = self.kv_store.get(key, [])
        except KeyValueStoreError as e:
            logger.error(f"Failed to read {key}: {e}")
            return None
        if not isinstance(records, list):
            logger.error(f"Stored {key} is not a list, ignoring it")
            return []

        items = []
        for record in records:
            try:
                items.append(model.model_validate(record))
            except ValidationError as e:
                logger.error(f"Skipping malformed record under {key}: {e}")
        return items

    def _read_state(self) -> None:
        messages = self._read_list(Message, self.messages_key)
        if messages is not None:
            self.state.messages = messages
        files = self._read_list(FileItem, self.files_key)
        if files is not None:
            self.state.files = files

    def _write(self, key: str, items: Sequence[BaseModel]) -> bool:
        try:
            self.kv_store.set(key, [item.model_dump(mode="json") for item in items])
        except KeyValueStoreError as e:
            logger.error(f"Failed to write {key}: {e}")
            return False
        return True

    async def load_all(self) -> None:
        self.state.is_syncing = True
        try:
            self._read_state()
        finally:
            self.state.is_syncing = False

    async def save_message(self, content: str) -> Optional[Message]:
        text = content.strip()
        if not text:
            return None

        message = Message(
            id=str(uuid.uuid4()),
            content=text,
            created_at=datetime.now(timezone.utc),
        )
        updated = [message] + self.state.messages
        if not self._write(self.messages_key, updated):
            return None
        self.state.messages = updated
        return message

    async def delete_message(self, message_id: str) -> bool:
        updated = [m for m in self.state.messages if m.id != message_id]
        if not self._write(self.messages_key, updated):
            return False
        self.state.messages = updated
        return True

    async def delete_all_messages(self, confirm: Confirm) -> bool:
        if not confirm():
            return False
        if not self._write(self.messages_key, []):
            return False
        self.state.messages = []
        return True

    @async_log_execution_time
    async def upload_files(self, files: Sequence[IncomingFile]) -> List[FileItem]:
        encoded = []
        self.state.is_loading = True
        try:
            for incoming in files:
                url = await asyncio.to_thread(to_data_url, incoming.data, incoming.content_type)
                encoded.append(FileItem(
                    id=str(uuid.uuid4()),
                    name=incoming.name,
                    size=incoming.size,
                    type=incoming.content_type,
                    url=url,
                    created_at=datetime.now(timezone.utc),
                ))

            # The batch lands in one write, in upload order
            updated = encoded + self.state.files
            if not self._write(self.files_key, updated):
                return []
            self.state.files = updated
        finally:
            self.state.is_loading = False
        return encoded

    async def delete_file(self, file_id: str) -> bool:
        if self.find_file(file_id) is None:
            return False
        updated = [f for f in self.state.files if f.id != file_id]
        if not self._write(self.files_key, updated):
            return False
        self.state.files = updated
        return True

    async def delete_all_files(self, confirm: Confirm) -> bool:
        if not confirm():
            return False
        if not self._write(self.files_key, []):
            return False
        self.state.files = []
        return True
