"""Timing decorator for the editor adapters' batch operations."""
import functools
import logging
import time
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def async_log_execution_time(func: F) -> F:
    """Log how long an awaited adapter operation took, including when it raised."""
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(f"{func.__qualname__} failed after {duration:.2f}s: {str(e)}")
            raise
        duration = time.perf_counter() - start_time
        logger.info(f"{func.__qualname__} completed in {duration:.2f}s")
        return result
    return cast(F, wrapper)
