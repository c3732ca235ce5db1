"""
Auth API routes — login.

Route prefix: /api/v1/login
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from api.errors import AuthenticationError
from auth.dependencies import get_token_service, get_user_store
from auth.jwt import TokenService
from auth.password import verify_password
from database.user_store import UserStore
from utils.schemas import LoginRequest, TokenResponse
from utils.validators import validate_credentials_payload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid credentials"


@router.post("", response_model=TokenResponse)
async def login(
    payload: Dict[str, Any] = Body(...),
    store: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Login with email + password.

    Unknown email and wrong password get the same 401 so accounts
    cannot be enumerated.
    """
    req = validate_credentials_payload(LoginRequest, payload)

    user = await store.find_by_email(req.email)
    if user is None or not verify_password(req.password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = tokens.create_token(user.id)
    logger.info("Login: %s (%s)", user.name, user.id)
    return {"token": token}
