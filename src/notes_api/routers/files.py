from typing import List
from urllib.parse import quote

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Path,
    Query,
    UploadFile,
    status
)
from fastapi.responses import FileResponse, RedirectResponse, Response

from notes_api.adapters.base import EditorAdapter
from notes_api.adapters.storage import FilesystemBlobStore
from notes_api.dependencies import get_editor
from notes_api.errors import BlobStoreError
from notes_api.formatting import from_data_url
from notes_api.schemas import FileListResponse, IncomingFile

router = APIRouter()


def _file_list(editor: EditorAdapter, **extra) -> FileListResponse:
    return FileListResponse(
        files=editor.files,
        total_count=len(editor.files),
        **extra,
    )


def _attachment_header(file_name: str) -> str:
    return f"attachment; filename*=UTF-8''{quote(file_name)}"


@router.get("/files", response_model=FileListResponse)
async def list_files(editor: EditorAdapter = Depends(get_editor)):
    return _file_list(editor)


@router.post("/files", response_model=FileListResponse)
async def upload_files(
    files: List[UploadFile] = File(..., description="One or more files to store"),
    editor: EditorAdapter = Depends(get_editor),
):
    """
    Upload a batch of files.

    Files are stored one at a time, in the order given. A file that fails is
    skipped and the rest of the batch still goes through; `uploaded` lists
    the files that made it.
    """
    incoming = [
        IncomingFile(
            name=upload.filename or "file",
            content_type=upload.content_type or "",
            data=await upload.read(),
        )
        for upload in files
    ]
    uploaded = await editor.upload_files(incoming)
    return _file_list(editor, uploaded=uploaded)


@router.get("/files/{file_id}/download")
async def download_file(
    file_id: str = Path(..., description="Id of the file to download"),
    editor: EditorAdapter = Depends(get_editor),
):
    """Send the file's bytes, or redirect to where its blob is served from."""
    file = editor.find_file(file_id)
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"File '{file_id}' not found"
        )

    if file.url.startswith("data:"):
        media_type, content = from_data_url(file.url)
        return Response(
            content=content,
            media_type=media_type,
            headers={"Content-Disposition": _attachment_header(file.name)},
        )
    return RedirectResponse(file.url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/blobs/{key}")
async def get_blob(
    key: str = Path(..., description="Storage key of the blob"),
    editor: EditorAdapter = Depends(get_editor),
):
    """Serve blobs kept by the file system blob store."""
    blob_store = getattr(editor, "blob_store", None)
    if not isinstance(blob_store, FilesystemBlobStore):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blobs are not served by this API")

    try:
        path = blob_store.path_for(key)
    except BlobStoreError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Blob '{key}' not found")
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Blob '{key}' not found")

    # Prefer the original name when the blob is still listed
    listed = next((f for f in editor.files if f.url.endswith(f"/{key}")), None)
    return FileResponse(
        path,
        media_type=(listed.type if listed and listed.type else None),
        filename=listed.name if listed else key,
    )


@router.delete("/files/{file_id}", response_model=FileListResponse)
async def delete_file(
    file_id: str = Path(..., description="Id of the file to delete"),
    editor: EditorAdapter = Depends(get_editor),
):
    deleted = await editor.delete_file(file_id)
    return _file_list(editor, deleted=deleted)


@router.delete("/files", response_model=FileListResponse)
async def delete_all_files(
    confirm: bool = Query(False, description="Must be true; the page asks the user first"),
    editor: EditorAdapter = Depends(get_editor),
):
    """Delete every file and its stored payload. Without `confirm=true` nothing is deleted."""
    deleted = await editor.delete_all_files(lambda: confirm)
    return _file_list(editor, deleted=deleted)
