from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from notes_api.schemas import FileItem, IncomingFile, Message

Confirm = Callable[[], bool]


@dataclass
class EditorState:
    """What the page shows: both lists newest first, plus coarse progress flags."""
    messages: List[Message] = field(default_factory=list)
    files: List[FileItem] = field(default_factory=list)
    is_loading: bool = False
    is_syncing: bool = False


class EditorAdapter(ABC):
    """Translates editor actions into calls against a storage backend.

    Every mutation updates ``state`` only after the backend call succeeded.
    Failures are logged and leave ``state`` untouched.
    """

    def __init__(self):
        self.state = EditorState()

    @property
    def messages(self) -> List[Message]:
        return self.state.messages

    @property
    def files(self) -> List[FileItem]:
        return self.state.files

    def find_file(self, file_id: str) -> Optional[FileItem]:
        return next((f for f in self.state.files if f.id == file_id), None)

    @abstractmethod
    async def load_all(self) -> None:
        """Replace both lists with what the backend holds"""
        pass

    @abstractmethod
    async def save_message(self, content: str) -> Optional[Message]:
        """Save trimmed ``content`` and put it at the front of the list

        Args:
            content: Raw text from the input box

        Returns:
            The created message, or None when the text was blank or the save failed
        """
        pass

    @abstractmethod
    async def delete_message(self, message_id: str) -> bool:
        """Delete one message; returns whether the backend call succeeded"""
        pass

    @abstractmethod
    async def delete_all_messages(self, confirm: Confirm) -> bool:
        """Delete every listed message once ``confirm()`` agrees

        Returns:
            True when the list was cleared, False when declined or failed
        """
        pass

    @abstractmethod
    async def upload_files(self, files: Sequence[IncomingFile]) -> List[FileItem]:
        """Store each file in order; returns the items that were created"""
        pass

    @abstractmethod
    async def delete_file(self, file_id: str) -> bool:
        """Delete one file and its payload; returns whether it was removed"""
        pass

    @abstractmethod
    async def delete_all_files(self, confirm: Confirm) -> bool:
        """Delete every listed file once ``confirm()`` agrees"""
        pass
