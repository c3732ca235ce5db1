"""
User store — thin facade over the ``users`` table.

Every operation is atomic at the single-row level and runs inside the
caller's ``AsyncSession``; committing is the session owner's job.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from utils.schemas import UserSummary

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("name", "email", "password_hash")


class StoreError(Exception):
    """Base class for user store failures."""


class UserNotFoundError(StoreError):
    def __init__(self, user_id: Any):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class DuplicateEmailError(StoreError):
    def __init__(self, email: str):
        super().__init__(f"Email {email} already registered")
        self.email = email


class UserStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash)
        self.session.add(user)
        await self._flush(email)
        return user

    async def update(self, user_id: int, fields: Dict[str, Any]) -> User:
        """Apply ``fields`` to an existing user. ``None`` values are skipped."""
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        for key, value in fields.items():
            if key not in _UPDATABLE_FIELDS:
                raise ValueError(f"Field '{key}' cannot be updated")
            if value is not None:
                setattr(user, key, value)

        await self._flush(fields.get("email") or user.email)
        return user

    async def delete(self, user_id: int) -> None:
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        await self.session.delete(user)
        await self.session.flush()

    async def list_all(self) -> List[UserSummary]:
        result = await self.session.execute(
            select(User.id, User.email, User.name).order_by(User.id)
        )
        return [UserSummary.model_validate(row) for row in result.all()]

    async def _flush(self, email: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            logger.info("Unique constraint hit for %s: %s", email, exc.orig)
            raise DuplicateEmailError(email) from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"Flush failed: {exc}") from exc
