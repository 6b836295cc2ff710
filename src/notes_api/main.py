from contextlib import asynccontextmanager
from textwrap import dedent
import logging
import pydantic
from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware

from notes_api.errors import (
    handle_broad_exceptions,
    handle_pydantic_validation_errors,
)
from notes_api.adapters.factory import build_adapter, build_kv_store
from notes_api.routers.files import router as files_router
from notes_api.routers.messages import router as messages_router
from notes_api.routers.health import router as health_router
from notes_api.routers.page import router as page_router
from notes_api.routers.theme import router as theme_router
from notes_api.config.settings import Settings
from notes_api.theme import ThemeToggle

# Set up logging
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("loading messages and files")
    await app.state.editor.load_all()
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()

    app = FastAPI(
        title="Notes API",
        summary="Save short notes and files",
        version="v1",
        description=dedent(
            """\
        A note-and-file manager. Messages and files are kept either in a hosted
        row store plus blob bucket, or in a local persistent key-value store.

        | Helpful Links | Notes |
        | --- | --- |
        | [FastAPI Documentation](https://fastapi.tiangolo.com/) | |
        | [Editor page](/) | The page this API backs |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings

    logger.info(f"creating stores for the {settings.storage_backend} backend")
    kv_store = build_kv_store(settings)
    app.state.editor = build_adapter(settings, kv_store=kv_store)
    app.state.theme = ThemeToggle(kv_store, key=settings.theme_key)

    app.include_router(page_router, tags=["page"])
    app.include_router(messages_router, prefix="/v1", tags=["messages"])
    app.include_router(files_router, prefix="/v1", tags=["files"])
    app.include_router(theme_router, prefix="/v1", tags=["theme"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    app = create_app(settings)
    uvicorn.run(app, host="0.0.0.0", port=8000)
