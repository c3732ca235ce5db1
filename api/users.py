"""
User management routes.

Route prefix: /api/v1/user
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from api.errors import ConflictError, NotFoundError
from auth.dependencies import get_settings, get_user_store
from auth.password import hash_password
from config.settings import Settings
from database.user_store import DuplicateEmailError, UserNotFoundError, UserStore
from utils.schemas import (
    MessageResponse,
    RegisterRequest,
    UpdateUserRequest,
    UserEnvelope,
    UserSummary,
)
from utils.validators import validate_credentials_payload, validate_or_first_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

USER_EXISTS = "User already exists"
EMAIL_IN_USE = "Email already in use by another user"
USER_NOT_FOUND = "User not found"

# ids live in a 32-bit integer column
MAX_USER_ID = 2**31 - 1


def _parse_user_id(raw: str) -> int:
    """Path ids are positive integers; anything else is an unknown user."""
    try:
        user_id = int(raw)
    except ValueError:
        raise UserNotFoundError(raw) from None
    if not 0 < user_id <= MAX_USER_ID:
        raise UserNotFoundError(raw)
    return user_id


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserEnvelope)
async def create_user(
    payload: Dict[str, Any] = Body(...),
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    req = validate_credentials_payload(RegisterRequest, payload)

    if await store.find_by_email(req.email) is not None:
        raise ConflictError(USER_EXISTS)

    try:
        user = await store.create(
            name=req.name,
            email=req.email,
            password_hash=hash_password(req.password, rounds=settings.bcrypt_rounds),
        )
    except DuplicateEmailError:
        raise ConflictError(USER_EXISTS) from None

    logger.info("Registered user %s (%s)", user.name, user.id)
    return {
        "message": "User created successfully",
        "user": UserSummary.model_validate(user),
    }


@router.get("", response_model=List[UserSummary])
async def list_users(store: UserStore = Depends(get_user_store)) -> List[UserSummary]:
    return await store.list_all()


@router.get("/{user_id}", response_model=UserSummary)
async def get_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> UserSummary:
    try:
        user = await store.find_by_id(_parse_user_id(user_id))
    except UserNotFoundError:
        user = None
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return UserSummary.model_validate(user)


@router.api_route("/{user_id}", methods=["PATCH", "PUT"], response_model=UserEnvelope)
async def update_user(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Partial update. The password is re-hashed only when supplied.

    An unknown id is not mapped to 404 here; it surfaces as a 500.
    """
    req = validate_or_first_error(UpdateUserRequest, payload)
    uid = _parse_user_id(user_id)

    if req.email:
        existing = await store.find_by_email(req.email)
        if existing is not None and existing.id != uid:
            raise ConflictError(EMAIL_IN_USE)

    fields: Dict[str, Any] = {"name": req.name, "email": req.email}
    if req.password:
        fields["password_hash"] = hash_password(req.password, rounds=settings.bcrypt_rounds)

    try:
        user = await store.update(uid, fields)
    except DuplicateEmailError:
        raise ConflictError(EMAIL_IN_USE) from None

    logger.info("Updated user %s", user.id)
    return {
        "message": "User updated successfully",
        "user": UserSummary.model_validate(user),
    }


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Delete a user. An unknown id surfaces as a 500, not a 404."""
    uid = _parse_user_id(user_id)
    await store.delete(uid)
    logger.info("Deleted user %s", uid)
    return {"message": "User deleted successfully"}
