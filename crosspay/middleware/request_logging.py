"""
Request logging middleware for FastAPI.

Logs method, path, status and duration of every API request.
"""

import logging
import time
from typing import Any, Callable

from fastapi import Request

logger = logging.getLogger(__name__)


async def request_logging_middleware(
    request: Request,
    call_next: Callable[[Request], Any]
) -> Any:
    """
    FastAPI middleware that times API requests.

    Args:
        request: FastAPI request
        call_next: Next middleware/callable in the chain

    Returns:
        Response from the next handler
    """
    if not request.url.path.startswith("/api/"):
        return await call_next(request)

    start_time = time.time()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"{request.method} {request.url.path} -> error ({duration_ms:.1f}ms)")
        raise

    duration_ms = (time.time() - start_time) * 1000
    logger.debug(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f}ms)"
    )
    return response
