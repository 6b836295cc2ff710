####################################
# --- Request/response schemas --- #
####################################

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class Message(BaseModel):
    """A saved note. Never mutated after creation."""
    id: str = Field(description="Unique identifier of the message.")
    content: str = Field(
        description="Trimmed, non-empty message text.",
        json_schema_extra={"example": "Buy milk"},
    )
    created_at: datetime = Field(description="When the message was created.")

    model_config = ConfigDict(extra="ignore")


class FileItem(BaseModel):
    """Metadata of an uploaded file plus a reference to its payload."""
    id: str = Field(description="Unique identifier of the file.")
    name: str = Field(
        description="Original file name.",
        json_schema_extra={"example": "report.pdf"},
    )
    size: int = Field(description="The size of the file in bytes.")
    type: str = Field("", description="Media type of the file, may be empty.")
    url: str = Field(
        description="Public URL of the stored blob, or a self-contained data: URL for locally stored files.",
    )
    created_at: datetime = Field(description="When the file was uploaded.")

    model_config = ConfigDict(extra="ignore")


@dataclass
class IncomingFile:
    """A file handed to an adapter for upload."""
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class SaveMessageRequest(BaseModel):
    """Request body for `POST /v1/messages`."""
    content: str = Field("", description="Text to save. Blank text is ignored.")


class MessageListResponse(BaseModel):
    """Response model for the message endpoints."""
    messages: List[Message]
    total_count: int = Field(description="Number of messages in the list")
    saved: Optional[Message] = Field(None, description="The message created by this call, if any")
    deleted: Optional[bool] = Field(None, description="Whether a delete call removed anything")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "messages": [
                    {
                        "id": "9b3c1b0e-6d0a-4a51-9a8e-2d1f4f1c2b3a",
                        "content": "Buy milk",
                        "created_at": "2024-01-01T00:00:00Z",
                    }
                ],
                "total_count": 1,
                "saved": None,
                "deleted": None,
            }
        }
    )


class FileListResponse(BaseModel):
    """Response model for the file endpoints."""
    files: List[FileItem]
    total_count: int = Field(description="Number of files in the list")
    uploaded: List[FileItem] = Field(default_factory=list, description="Files created by this call")
    deleted: Optional[bool] = Field(None, description="Whether a delete call removed anything")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "files": [
                    {
                        "id": "5d1e1c4a-3c54-4c0b-8d0f-7e2c9a5b4f11",
                        "name": "report.pdf",
                        "size": 52311,
                        "type": "application/pdf",
                        "url": "http://localhost:8000/v1/blobs/0f6c7e0e-1c7f-4d77-9c1a-1d2b3c4d5e6f.pdf",
                        "created_at": "2024-01-01T00:00:00Z",
                    }
                ],
                "total_count": 1,
                "uploaded": [],
                "deleted": None,
            }
        }
    )


class EditorStateResponse(BaseModel):
    """Response model for `GET /v1/state`."""
    messages: List[Message]
    files: List[FileItem]
    is_loading: bool
    is_syncing: bool


class ThemeResponse(BaseModel):
    """Response model for the theme endpoints."""
    is_dark: bool
    marker: str = Field(description="CSS class applied to the page root element")
