"""
JWT token creation and verification.

Tokens are compact HS256 JWTs carrying ``user_id``, ``iat`` and ``exp``.
The secret comes from ``Settings.jwt_secret`` (env var: ``JWT_SECRET``).

There is no refresh, rotation or revocation: expiry is the only way a
token stops being valid.
"""

from __future__ import annotations

import time
from typing import Optional

import jwt


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Signature is valid but ``exp`` has passed."""


class TokenInvalidError(TokenError):
    """Token is absent, malformed, or its signature does not verify."""


class TokenService:
    """Issues and verifies bearer tokens with a process-wide secret."""

    def __init__(self, secret: str, expiry_seconds: int = 3600, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._expiry_seconds = expiry_seconds
        self._algorithm = algorithm

    def create_token(self, user_id: int, now: Optional[int] = None) -> str:
        """Create a signed token containing ``user_id`` and expiry."""
        issued_at = int(time.time()) if now is None else now
        payload = {
            "user_id": user_id,
            "iat": issued_at,
            "exp": issued_at + self._expiry_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: Optional[str]) -> int:
        """
        Verify ``token`` and return the ``user_id`` it carries.

        Raises ``TokenExpiredError`` or ``TokenInvalidError``.
        """
        if not token:
            raise TokenInvalidError("token must be provided")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "user_id"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError(str(exc)) from exc
        return payload["user_id"]
