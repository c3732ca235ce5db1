"""
Global middleware.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status

from api.errors import InternalError, error_response

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # store and network failures end up here; details stay in the log
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message
            )
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response
