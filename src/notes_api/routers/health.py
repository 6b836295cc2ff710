from fastapi import APIRouter, Depends

from notes_api.adapters.base import EditorAdapter
from notes_api.config.settings import Settings
from notes_api.dependencies import get_app_settings, get_editor

router = APIRouter()


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    editor: EditorAdapter = Depends(get_editor),
):
    """
    Health check endpoint for monitoring API status.

    Reports the deployment mode, which backend the editor runs on and whether
    a load is in flight.
    """
    health_status = {
        "status": "ok",
        "deployment_mode": settings.deployment_mode,
        "storage_backend": settings.storage_backend,
        "components": {
            "api": "ready",
            "editor": "syncing" if editor.state.is_syncing else "ready",
        },
    }

    if settings.storage_backend == "remote":
        health_status["row_store"] = settings.row_store
        health_status["blob_store"] = settings.blob_store

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )
    return health_status
