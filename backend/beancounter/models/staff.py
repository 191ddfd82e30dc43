"""Staff & Shift models."""

import datetime as dt
import enum

from pydantic import BaseModel, Field

from beancounter.models.mixins import Record, today


class StaffStatus(str, enum.Enum):
    ACTIVE = "active"
    ON_LEAVE = "on-leave"
    TERMINATED = "terminated"


class ShiftStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    MISSED = "missed"
    SICK_LEAVE = "sick-leave"
    VACATION = "vacation"


class EmergencyContact(BaseModel):
    name: str = ""
    relationship: str = ""
    phone: str = ""


class BankDetails(BaseModel):
    account_name: str = ""
    account_number: str = ""
    bank_name: str = ""


class Staff(Record):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    position: str
    department: str
    hire_date: dt.date = Field(default_factory=today)
    status: StaffStatus = StaffStatus.ACTIVE
    address: str | None = None
    emergency_contact: EmergencyContact = Field(default_factory=EmergencyContact)
    bank_details: BankDetails = Field(default_factory=BankDetails)

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Staff {self.name} ({self.position})>"


class Shift(Record):
    id: str
    staff_id: str
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    position: str
    status: ShiftStatus = ShiftStatus.SCHEDULED
    notes: str | None = None

    def __repr__(self) -> str:
        return f"<Shift {self.staff_id} {self.date} {self.start_time}-{self.end_time}>"
