"""Shift scheduling rules."""

import datetime as dt

from pydantic import BaseModel

from beancounter.core.errors import DomainInvariantError, FieldError, ValidationError
from beancounter.db.store import Store
from beancounter.models import Shift, ShiftStatus, Staff
from beancounter.models.mixins import new_id


class ShiftDraft(BaseModel):
    staff_id: str = ""
    date: dt.date | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    position: str = ""
    status: ShiftStatus = ShiftStatus.SCHEDULED
    notes: str | None = None


def validate_shift(store: Store, draft: ShiftDraft) -> list[FieldError]:
    errors: list[FieldError] = []
    if not draft.staff_id:
        errors.append(FieldError(field="staff_id", message="Staff member is required"))
    elif draft.staff_id not in store.staff:
        errors.append(FieldError(field="staff_id", message="Staff member not found"))
    if draft.date is None:
        errors.append(FieldError(field="date", message="Date is required"))
    if draft.start_time is None:
        errors.append(FieldError(field="start_time", message="Start time is required"))
    if draft.end_time is None:
        errors.append(FieldError(field="end_time", message="End time is required"))
    if not (draft.position or "").strip():
        errors.append(FieldError(field="position", message="Position is required"))

    if draft.start_time and draft.end_time and draft.end_time <= draft.start_time:
        errors.append(FieldError(field="end_time", message="End time must be after start time"))
    return errors


def build_shift(store: Store, draft: ShiftDraft, shift_id: str | None = None) -> Shift:
    errors = validate_shift(store, draft)
    if errors:
        raise ValidationError(errors, message="Invalid shift")
    return Shift(id=shift_id or new_id("shift"), **draft.model_dump())


def ensure_removable(store: Store, staff: Staff) -> None:
    """Staff with shifts still scheduled cannot be deleted."""
    pending = [s for s in store.shifts_for(staff.id) if s.status == ShiftStatus.SCHEDULED]
    if pending:
        raise DomainInvariantError(
            f"{staff.name} still has {len(pending)} scheduled shift(s)",
            [FieldError(field="shifts", message="Reassign or cancel scheduled shifts first")],
        )
