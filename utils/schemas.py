"""
Pydantic schemas for request bodies and responses.
"""

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email

EMAIL_MAX_LENGTH = 100


def _check_email(value: str) -> str:
    """
    Accept a bare address only and keep it exactly as sent.

    ``validate_email`` also accepts ``Name <addr>`` and surrounding
    whitespace, and normalizes the domain; none of that is allowed here.
    """
    if "<" in value or ">" in value or value != value.strip():
        raise ValueError("must be a bare email address")
    validate_email(value)
    return value


def _check_email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"must be at most {EMAIL_MAX_LENGTH} characters")
    return value


Email = Annotated[str, AfterValidator(_check_email)]
BoundedEmail = Annotated[Email, AfterValidator(_check_email_length)]


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str = Field(..., min_length=3, max_length=100)
    email: BoundedEmail
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    """No length check on the password at login, only at registration."""

    model_config = ConfigDict(strict=True)

    email: Email
    password: str


class UpdateUserRequest(BaseModel):
    """Partial update; unknown fields are ignored."""

    model_config = ConfigDict(strict=True, extra="ignore")

    name: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[BoundedEmail] = None
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def _password_min_length(cls, value: Optional[str]) -> Optional[str]:
        # an empty password means "leave unchanged"
        if value and len(value) < 6:
            raise ValueError("must be at least 6 characters")
        return value


class SummarizeRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    transcription: str = Field(..., min_length=1)


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserSummary(BaseModel):
    """Public view of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str


class UserEnvelope(BaseModel):
    message: str
    user: UserSummary


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class SummaryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_text: str = Field(..., alias="originalText")
    summary: str


class FieldError(BaseModel):
    field: str
    message: str

