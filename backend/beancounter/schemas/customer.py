"""Customer, loyalty transaction and feedback schemas."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from beancounter.core.errors import FieldError
from beancounter.models import (
    CustomerPreferences,
    CustomerStatus,
    FeedbackCategory,
    TransactionDraft,
    TransactionType,
)
from beancounter.models.mixins import today
from beancounter.schemas.common import PHONE_PATTERN


def _not_in_future(value: dt.date | None) -> dt.date | None:
    if value is not None and value > today():
        raise ValueError("Birthdate cannot be in the future")
    return value


# ── Customer ───────────────────────────────────────
class CustomerBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    address: str | None = None
    birthdate: dt.date | None = None
    status: CustomerStatus = CustomerStatus.NEW
    notes: str | None = None
    preferences: CustomerPreferences = Field(default_factory=CustomerPreferences)

    @field_validator("birthdate")
    @classmethod
    def check_birthdate(cls, value: dt.date | None) -> dt.date | None:
        return _not_in_future(value)


class CustomerCreate(CustomerBase):
    join_date: dt.date | None = None


class CustomerUpdate(BaseModel):
    """Profile fields only; points and spend belong to the loyalty ledger."""
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    address: str | None = None
    birthdate: dt.date | None = None
    status: CustomerStatus | None = None
    notes: str | None = None
    preferences: CustomerPreferences | None = None

    @field_validator("birthdate")
    @classmethod
    def check_birthdate(cls, value: dt.date | None) -> dt.date | None:
        return _not_in_future(value)


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    name: str
    email: str | None
    phone: str | None
    address: str | None
    birthdate: dt.date | None
    join_date: dt.date
    points: int
    total_spent: Decimal
    status: CustomerStatus
    notes: str | None
    preferences: CustomerPreferences


class CustomerListResponse(BaseModel):
    items: list[CustomerResponse]
    total: int
    page: int
    size: int


class PointsReconcileResponse(BaseModel):
    customer_id: str
    points: int
    total_spent: Decimal
    drift: int


# ── Loyalty transactions ───────────────────────────
class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    date: dt.date
    type: TransactionType
    order_id: str | None
    amount: Decimal
    points_earned: int
    points_redeemed: int
    notes: str | None


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    size: int


class ChangeTypeRequest(BaseModel):
    draft: TransactionDraft
    type: TransactionType


class DraftValidationResponse(BaseModel):
    valid: bool
    draft: TransactionDraft
    errors: list[FieldError]


# ── Feedback ───────────────────────────────────────
class FeedbackCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    customer_id: str = Field(..., min_length=1)
    date: dt.date = Field(default_factory=today)
    rating: int = Field(5, ge=1, le=5)
    comment: str = Field(..., min_length=1)
    category: FeedbackCategory = FeedbackCategory.OTHER
    resolved: bool = False
    response: str | None = None


class FeedbackUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    date: dt.date | None = None
    rating: int | None = Field(None, ge=1, le=5)
    comment: str | None = Field(None, min_length=1)
    category: FeedbackCategory | None = None
    resolved: bool | None = None
    response: str | None = None


class FeedbackResolve(BaseModel):
    response: str | None = None


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    date: dt.date
    rating: int
    comment: str
    category: FeedbackCategory
    resolved: bool
    response: str | None


class FeedbackListResponse(BaseModel):
    items: list[FeedbackResponse]
    total: int
