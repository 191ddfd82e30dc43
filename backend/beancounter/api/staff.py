"""Staff and shift scheduling endpoints."""

import datetime as dt
import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query

from beancounter.core.deps import get_store
from beancounter.db.store import Store
from beancounter.models import Shift, ShiftStatus, Staff, StaffStatus
from beancounter.models.mixins import new_id
from beancounter.schemas.staff import (
    ShiftListResponse,
    ShiftResponse,
    ShiftUpdate,
    StaffCreate,
    StaffListResponse,
    StaffResponse,
    StaffUpdate,
)
from beancounter.services.roster import ShiftDraft, build_shift, ensure_removable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff", tags=["staff"])
shifts_router = APIRouter(prefix="/shifts", tags=["shifts"])

NESTED_PATCHES = ("emergency_contact", "bank_details")


def _get_staff(store: Store, staff_id: str) -> Staff:
    staff = store.staff.get(staff_id)
    if not staff:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Staff member not found",
        )
    return staff


def _get_shift(store: Store, shift_id: str) -> Shift:
    shift = store.shifts.get(shift_id)
    if not shift:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shift not found",
        )
    return shift


def _ensure_unique_email(store: Store, email: str | None, exclude_id: str | None = None) -> None:
    if not email:
        return
    for other in store.staff.values():
        if other.id != exclude_id and other.email.lower() == email.lower():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Staff member with this email already exists",
            )


# ── Staff ──────────────────────────────────────────
@router.get("", response_model=StaffListResponse)
async def list_staff(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    search: str | None = None,
    department: str | None = None,
    status_filter: StaffStatus | None = None,
    store: Store = Depends(get_store),
):
    """List staff with pagination and optional filters."""
    items = list(store.staff.values())

    if search:
        needle = search.lower()
        items = [
            s for s in items
            if needle in s.name.lower() or needle in s.email.lower() or needle in s.position.lower()
        ]
    if department:
        items = [s for s in items if s.department.lower() == department.lower()]
    if status_filter:
        items = [s for s in items if s.status == status_filter]

    items.sort(key=lambda s: (s.last_name, s.first_name))
    offset = (page - 1) * size

    return StaffListResponse(
        items=[StaffResponse.model_validate(s) for s in items[offset:offset + size]],
        total=len(items),
        page=page,
        size=size,
    )


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(staff_id: str, store: Store = Depends(get_store)):
    return StaffResponse.model_validate(_get_staff(store, staff_id))


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(body: StaffCreate, store: Store = Depends(get_store)):
    _ensure_unique_email(store, body.email)

    staff = Staff(id=new_id("staff"), **body.model_dump())
    store.staff[staff.id] = staff

    logger.info("Added staff member %s (%s, %s)", staff.id, staff.name, staff.position)
    return StaffResponse.model_validate(staff)


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(staff_id: str, body: StaffUpdate, store: Store = Depends(get_store)):
    """Update a staff member; nested contact and bank patches merge into the record."""
    staff = _get_staff(store, staff_id)

    update_data = body.model_dump(exclude_unset=True)
    _ensure_unique_email(store, update_data.get("email"), exclude_id=staff.id)

    for field in NESTED_PATCHES:
        if field not in update_data:
            continue
        patch = update_data.pop(field)
        if patch is not None:
            update_data[field] = {**getattr(staff, field).model_dump(), **patch}

    staff.apply_changes(update_data)

    return StaffResponse.model_validate(staff)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_staff(staff_id: str, store: Store = Depends(get_store)):
    """Delete a staff member; rejected while shifts are still scheduled."""
    staff = _get_staff(store, staff_id)
    ensure_removable(store, staff)

    for shift in store.shifts_for(staff.id):
        del store.shifts[shift.id]
    del store.staff[staff.id]
    logger.info("Removed staff member %s", staff.id)


@router.get("/{staff_id}/shifts", response_model=ShiftListResponse)
async def list_staff_shifts(staff_id: str, store: Store = Depends(get_store)):
    staff = _get_staff(store, staff_id)
    items = sorted(store.shifts_for(staff.id), key=lambda s: (s.date, s.start_time))
    return ShiftListResponse(
        items=[ShiftResponse.model_validate(s) for s in items],
        total=len(items),
    )


# ── Shifts ─────────────────────────────────────────
@shifts_router.get("", response_model=ShiftListResponse)
async def list_shifts(
    staff_id: str | None = None,
    date: dt.date | None = None,
    status_filter: ShiftStatus | None = None,
    store: Store = Depends(get_store),
):
    """List shifts in schedule order."""
    items = list(store.shifts.values())
    if staff_id:
        items = [s for s in items if s.staff_id == staff_id]
    if date:
        items = [s for s in items if s.date == date]
    if status_filter:
        items = [s for s in items if s.status == status_filter]

    items.sort(key=lambda s: (s.date, s.start_time))
    return ShiftListResponse(
        items=[ShiftResponse.model_validate(s) for s in items],
        total=len(items),
    )


@shifts_router.get("/{shift_id}", response_model=ShiftResponse)
async def get_shift(shift_id: str, store: Store = Depends(get_store)):
    return ShiftResponse.model_validate(_get_shift(store, shift_id))


@shifts_router.post("", response_model=ShiftResponse, status_code=status.HTTP_201_CREATED)
async def create_shift(body: ShiftDraft, store: Store = Depends(get_store)):
    shift = build_shift(store, body)
    store.shifts[shift.id] = shift
    logger.info("Scheduled shift %s for %s on %s", shift.id, shift.staff_id, shift.date)
    return ShiftResponse.model_validate(shift)


@shifts_router.patch("/{shift_id}", response_model=ShiftResponse)
async def update_shift(shift_id: str, body: ShiftUpdate, store: Store = Depends(get_store)):
    shift = _get_shift(store, shift_id)

    draft = ShiftDraft(**shift.model_dump(exclude={"id"}))
    draft = draft.model_copy(update=body.model_dump(exclude_unset=True))
    updated = build_shift(store, draft, shift_id=shift.id)
    store.shifts[shift.id] = updated

    return ShiftResponse.model_validate(updated)


@shifts_router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(shift_id: str, store: Store = Depends(get_store)):
    shift = _get_shift(store, shift_id)
    del store.shifts[shift.id]
