"""
FastAPI dependencies for authentication and shared services.

``get_current_user_id`` is the token gate used by protected routes:

* no ``Authorization`` header      -> 401 "authentication required"
* token expired                    -> 401 "log in again"
* token malformed or bad signature -> 403 "invalid token"
* otherwise the user id is stored on ``request.state.user_id``

The token is the second whitespace-delimited segment of the header; the
scheme segment before it is not checked.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AuthenticationError, ForbiddenError
from auth.jwt import TokenExpiredError, TokenInvalidError, TokenService
from config.settings import Settings
from core.summarizer import Summarizer
from database.session import get_db_session
from database.user_store import UserStore

logger = logging.getLogger(__name__)

TOKEN_EXPIRED_MESSAGE = "Token expired. Please log in again."


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_summarizer(request: Request) -> Summarizer:
    return request.app.state.summarizer


async def get_user_store(
    session: AsyncSession = Depends(get_db_session),
) -> UserStore:
    return UserStore(session)


def extract_token(authorization: str) -> Optional[str]:
    parts = authorization.split()
    return parts[1] if len(parts) > 1 else None


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """
    Extract and verify the token from the Authorization header.
    Returns the authenticated user id.
    """
    if not authorization:
        raise AuthenticationError()

    try:
        user_id = tokens.verify_token(extract_token(authorization))
    except TokenExpiredError:
        raise AuthenticationError(TOKEN_EXPIRED_MESSAGE) from None
    except TokenInvalidError as exc:
        logger.info("Rejected token on %s: %s", request.url.path, exc)
        raise ForbiddenError() from None

    request.state.user_id = user_id
    return user_id
