"""Editor adapter backed by a hosted row store and blob store."""
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from notes_api.adapters.base import Confirm, EditorAdapter
from notes_api.errors import StoreError
from notes_api.formatting import storage_key_for, storage_key_from_url
from notes_api.schemas import FileItem, IncomingFile, Message
from notes_api.utils.decorators import async_log_execution_time

logger = logging.getLogger(__name__)

MESSAGES_TABLE = "messages"
FILES_TABLE = "files"

ModelT = TypeVar("ModelT", bound=BaseModel)


class RowStore(Protocol):
    def insert_one(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]: ...

    def select_all(self, table: str, order_by: str = "created_at") -> List[Dict[str, Any]]: ...

    def delete_by_id(self, table: str, row_id: str) -> None: ...

    def delete_by_ids(self, table: str, row_ids: Iterable[str]) -> None: ...


class BlobStore(Protocol):
    def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> None: ...

    def get_public_url(self, key: str) -> str: ...

    def remove(self, keys: Iterable[str]) -> None: ...


class RemoteEditorAdapter(EditorAdapter):
    """Messages and file metadata live in rows; file bytes live in a blob store."""

    def __init__(self, row_store: RowStore, blob_store: BlobStore):
        super().__init__()
        self.row_store = row_store
        self.blob_store = blob_store

    def _to_models(self, model: Type[ModelT], result: Any, table: str) -> Optional[List[ModelT]]:
        if isinstance(result, (StoreError, ValidationError)):
            logger.error(f"Failed to load {table}: {result}")
            return None
        if isinstance(result, BaseException):
            raise result
        try:
            return [model.model_validate(row) for row in result]
        except ValidationError as e:
            logger.error(f"Failed to load {table}: {e}")
            return None

    @async_log_execution_time
    async def load_all(self) -> None:
        self.state.is_syncing = True
        try:
            messages_result, files_result = await asyncio.gather(
                asyncio.to_thread(self.row_store.select_all, MESSAGES_TABLE),
                asyncio.to_thread(self.row_store.select_all, FILES_TABLE),
                return_exceptions=True,
            )
            messages = self._to_models(Message, messages_result, MESSAGES_TABLE)
            if messages is not None:
                self.state.messages = messages
            files = self._to_models(FileItem, files_result, FILES_TABLE)
            if files is not None:
                self.state.files = files
        finally:
            self.state.is_syncing = False

    async def save_message(self, content: str) -> Optional[Message]:
        text = content.strip()
        if not text:
            return None

        self.state.is_loading = True
        try:
            row = await asyncio.to_thread(self.row_store.insert_one, MESSAGES_TABLE, {"content": text})
            message = Message.model_validate(row)
        except (StoreError, ValidationError) as e:
            logger.error(f"Failed to save message: {e}")
            return None
        finally:
            self.state.is_loading = False

        self.state.messages.insert(0, message)
        return message

    async def delete_message(self, message_id: str) -> bool:
        try:
            await asyncio.to_thread(self.row_store.delete_by_id, MESSAGES_TABLE, message_id)
        except StoreError as e:
            logger.error(f"Failed to delete message {message_id}: {e}")
            return False

        self.state.messages = [m for m in self.state.messages if m.id != message_id]
        return True

    async def delete_all_messages(self, confirm: Confirm) -> bool:
        if not confirm():
            return False

        self.state.is_loading = True
        try:
            ids = [m.id for m in self.state.messages]
            await asyncio.to_thread(self.row_store.delete_by_ids, MESSAGES_TABLE, ids)
        except StoreError as e:
            logger.error(f"Failed to delete all messages: {e}")
            return False
        finally:
            self.state.is_loading = False

        self.state.messages = []
        return True

    async def _upload_one(self, incoming: IncomingFile) -> FileItem:
        key = storage_key_for(incoming.name)
        await asyncio.to_thread(self.blob_store.upload, key, incoming.data, incoming.content_type)
        url = self.blob_store.get_public_url(key)
        # A failed insert from here on leaves the blob orphaned
        row = await asyncio.to_thread(
            self.row_store.insert_one,
            FILES_TABLE,
            {
                "name": incoming.name,
                "size": incoming.size,
                "type": incoming.content_type,
                "url": url,
            },
        )
        return FileItem.model_validate(row)

    @async_log_execution_time
    async def upload_files(self, files: Sequence[IncomingFile]) -> List[FileItem]:
        created = []
        self.state.is_loading = True
        try:
            for incoming in files:
                try:
                    item = await self._upload_one(incoming)
                except (StoreError, ValidationError) as e:
                    logger.error(f"Upload error for {incoming.name}: {e}")
                    continue
                self.state.files.insert(0, item)
                created.append(item)
        finally:
            self.state.is_loading = False
        return created

    async def _remove_blobs(self, keys: List[str]) -> None:
        try:
            await asyncio.to_thread(self.blob_store.remove, keys)
        except StoreError as e:
            logger.error(f"Blob removal failed, continuing with row deletion: {e}")

    async def delete_file(self, file_id: str) -> bool:
        file = self.find_file(file_id)
        if file is None:
            return False

        key = storage_key_from_url(file.url)
        if key:
            await self._remove_blobs([key])

        try:
            await asyncio.to_thread(self.row_store.delete_by_id, FILES_TABLE, file.id)
        except StoreError as e:
            logger.error(f"Failed to delete file {file.id}: {e}")
            return False

        self.state.files = [f for f in self.state.files if f.id != file.id]
        return True

    async def delete_all_files(self, confirm: Confirm) -> bool:
        if not confirm():
            return False

        self.state.is_loading = True
        try:
            keys = [key for key in (storage_key_from_url(f.url) for f in self.state.files) if key]
            if keys:
                await self._remove_blobs(keys)

            ids = [f.id for f in self.state.files]
            await asyncio.to_thread(self.row_store.delete_by_ids, FILES_TABLE, ids)
        except StoreError as e:
            logger.error(f"Failed to delete all files: {e}")
            return False
        finally:
            self.state.is_loading = False

        self.state.files = []
        return True
