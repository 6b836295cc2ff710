from fastapi import (
    APIRouter,
    Depends,
    Path,
    Query,
    status
)

from notes_api.adapters.base import EditorAdapter
from notes_api.dependencies import get_editor
from notes_api.schemas import (
    EditorStateResponse,
    MessageListResponse,
    SaveMessageRequest,
)

router = APIRouter()


def _message_list(editor: EditorAdapter, **extra) -> MessageListResponse:
    return MessageListResponse(
        messages=editor.messages,
        total_count=len(editor.messages),
        **extra,
    )


@router.get("/state", response_model=EditorStateResponse)
async def get_state(editor: EditorAdapter = Depends(get_editor)):
    """Both lists, newest first, plus the loading indicators."""
    return EditorStateResponse(
        messages=editor.messages,
        files=editor.files,
        is_loading=editor.state.is_loading,
        is_syncing=editor.state.is_syncing,
    )


@router.post("/sync", response_model=EditorStateResponse)
async def sync(editor: EditorAdapter = Depends(get_editor)):
    """Reload both lists from the backing store."""
    await editor.load_all()
    return await get_state(editor)


@router.get("/messages", response_model=MessageListResponse)
async def list_messages(editor: EditorAdapter = Depends(get_editor)):
    return _message_list(editor)


@router.post("/messages", response_model=MessageListResponse, status_code=status.HTTP_200_OK)
async def save_message(body: SaveMessageRequest, editor: EditorAdapter = Depends(get_editor)):
    """
    Save a message.

    Blank text is ignored. When saving fails nothing changes and `saved` is null,
    so the page keeps the text in the input box.
    """
    saved = await editor.save_message(body.content)
    return _message_list(editor, saved=saved)


@router.delete("/messages/{message_id}", response_model=MessageListResponse)
async def delete_message(
    message_id: str = Path(..., description="Id of the message to delete"),
    editor: EditorAdapter = Depends(get_editor),
):
    deleted = await editor.delete_message(message_id)
    return _message_list(editor, deleted=deleted)


@router.delete("/messages", response_model=MessageListResponse)
async def delete_all_messages(
    confirm: bool = Query(False, description="Must be true; the page asks the user first"),
    editor: EditorAdapter = Depends(get_editor),
):
    """Delete every message. Without `confirm=true` nothing is deleted."""
    deleted = await editor.delete_all_messages(lambda: confirm)
    return _message_list(editor, deleted=deleted)
