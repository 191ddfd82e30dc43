"""Shared schema pieces."""

from pydantic import BaseModel

from beancounter.core.errors import FieldError

# Digits and phone punctuation, 10 to 15 characters.
PHONE_PATTERN = r"^[0-9\-+() ]{10,15}$"


class ErrorResponse(BaseModel):
    detail: str
    errors: list[FieldError] = []
