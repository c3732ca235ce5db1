"""
API error taxonomy and the handlers that render it as ``{"error": ...}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error whose message is safe to show to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data."


class ConflictError(ApiError):
    # duplicates are reported as 400, not 409
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class AuthenticationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required. Please log in to access this resource."


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token. Please ensure you are logged in."


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UpstreamError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to generate summary."


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def body_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Malformed request to %s: %s", request.url.path, exc.errors())
        return error_response(status.HTTP_400_BAD_REQUEST, InvalidRequestError.default_message)
