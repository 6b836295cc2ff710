"""Error types raised by the stores and the FastAPI handlers that render errors."""
import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A call against a backing store failed."""


class RowStoreError(StoreError):
    """Insert, select or delete against the row store failed."""


class BlobStoreError(StoreError):
    """Upload or removal against the blob store failed."""


class KeyValueStoreError(StoreError):
    """Reading or writing the persistent key-value store failed."""


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [
                {
                    "msg": error["msg"],
                    "loc": [str(part) for part in error["loc"]],
                }
                for error in errors
            ]
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
