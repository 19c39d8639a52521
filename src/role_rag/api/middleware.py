"""Request logging middleware."""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and latency for every request."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s - unhandled after %.1fms",
                method, path, (time.time() - start_time) * 1000,
            )
            raise

        logger.info(
            "%s %s - %d (%.1fms)",
            method, path, response.status_code, (time.time() - start_time) * 1000,
        )
        return response
