"""
Request body validation against the pydantic schemas.
"""

from __future__ import annotations

import logging
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from api.errors import InvalidRequestError
from utils.schemas import FieldError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

GENERIC_MESSAGE = "Invalid request data."
EMAIL_FORMAT_MESSAGE = "Invalid email format."


class PayloadValidationError(Exception):
    """Body failed its schema; carries one ``FieldError`` per problem."""

    def __init__(self, errors: List[FieldError]):
        super().__init__("; ".join(e.message for e in errors))
        self.errors = errors

    @property
    def first_message(self) -> str:
        return self.errors[0].message if self.errors else GENERIC_MESSAGE

    def has_field(self, name: str) -> bool:
        return any(e.field == name for e in self.errors)


def _to_field_errors(exc: ValidationError) -> List[FieldError]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        msg = err["msg"].removeprefix("Value error, ")
        errors.append(FieldError(field=field, message=f'"{field}" {msg[:1].lower()}{msg[1:]}'))
    return errors


def validate_payload(schema: Type[M], payload: Any) -> M:
    """Validate ``payload`` against ``schema`` or raise ``PayloadValidationError``."""
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        errors = _to_field_errors(exc)
        logger.debug("%s rejected: %s", schema.__name__, errors)
        raise PayloadValidationError(errors) from exc


def validate_credentials_payload(schema: Type[M], payload: Any) -> M:
    """
    Validation for login and registration bodies.

    Email problems collapse to one friendly message, everything else to a
    generic one, so the response never says more than it needs to.
    """
    try:
        return validate_payload(schema, payload)
    except PayloadValidationError as exc:
        message = EMAIL_FORMAT_MESSAGE if exc.has_field("email") else GENERIC_MESSAGE
        raise InvalidRequestError(message) from exc


def validate_or_first_error(schema: Type[M], payload: Any) -> M:
    """Validation that surfaces the first field error's message."""
    try:
        return validate_payload(schema, payload)
    except PayloadValidationError as exc:
        raise InvalidRequestError(exc.first_message) from exc
