"""Shared base for in-memory records."""

from datetime import date, datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict


def new_id(prefix: str) -> str:
    """Short prefixed identifier, e.g. ``cust-1a2b3c4d``."""
    return f"{prefix}-{uuid4().hex[:8]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    return utcnow().date()


class Record(BaseModel):
    """Mutable record held by the store; assignments are re-validated."""

    model_config = ConfigDict(validate_assignment=True)

    def apply_changes(self, changes: dict) -> None:
        """Assign ``changes`` all or nothing.

        The merged record is validated first, so a rejected field leaves every
        other field as it was.
        """
        merged = type(self).model_validate({**self.model_dump(), **changes})
        for field in changes:
            setattr(self, field, getattr(merged, field))
