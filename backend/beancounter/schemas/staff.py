"""Staff & shift schemas.

Updates are typed patches: nested ``emergency_contact`` and ``bank_details``
patches are merged field by field into the stored record.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from beancounter.models import ShiftStatus, StaffStatus
from beancounter.models.staff import BankDetails, EmergencyContact
from beancounter.schemas.common import PHONE_PATTERN


# ── Staff ──────────────────────────────────────────
class StaffCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    position: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    hire_date: dt.date
    status: StaffStatus = StaffStatus.ACTIVE
    address: str | None = None
    emergency_contact: EmergencyContact = Field(default_factory=EmergencyContact)
    bank_details: BankDetails = Field(default_factory=BankDetails)


class EmergencyContactPatch(BaseModel):
    name: str | None = None
    relationship: str | None = None
    phone: str | None = None


class BankDetailsPatch(BaseModel):
    account_name: str | None = None
    account_number: str | None = None
    bank_name: str | None = None


class StaffUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    position: str | None = Field(None, min_length=1)
    department: str | None = Field(None, min_length=1)
    hire_date: dt.date | None = None
    status: StaffStatus | None = None
    address: str | None = None
    emergency_contact: EmergencyContactPatch | None = None
    bank_details: BankDetailsPatch | None = None


class StaffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    name: str
    email: str
    phone: str
    position: str
    department: str
    hire_date: dt.date
    status: StaffStatus
    address: str | None
    emergency_contact: EmergencyContact
    bank_details: BankDetails


class StaffListResponse(BaseModel):
    items: list[StaffResponse]
    total: int
    page: int
    size: int


# ── Shifts ─────────────────────────────────────────
class ShiftUpdate(BaseModel):
    staff_id: str | None = None
    date: dt.date | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    position: str | None = None
    status: ShiftStatus | None = None
    notes: str | None = None


class ShiftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    staff_id: str
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    position: str
    status: ShiftStatus
    notes: str | None


class ShiftListResponse(BaseModel):
    items: list[ShiftResponse]
    total: int
