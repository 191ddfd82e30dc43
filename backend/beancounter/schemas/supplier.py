"""Supplier schemas for request/response."""

from pydantic import BaseModel, ConfigDict, Field

from beancounter.schemas.inventory import InventoryItemResponse

# Something@something.something; suppliers often use shared inboxes.
SUPPLIER_EMAIL_PATTERN = r"^\S+@\S+\.\S+$"


class SupplierBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    contact_person: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., pattern=SUPPLIER_EMAIL_PATTERN)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    preferred_payment_terms: str = Field("Net 30", min_length=1, description="e.g. Net 15, Net 30, Net 60")
    notes: str | None = None


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    contact_person: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, pattern=SUPPLIER_EMAIL_PATTERN)
    phone: str | None = Field(None, min_length=1)
    address: str | None = Field(None, min_length=1)
    preferred_payment_terms: str | None = Field(None, min_length=1)
    notes: str | None = None


class SupplierResponse(SupplierBase):
    model_config = ConfigDict(from_attributes=True)

    id: str


class SupplierListResponse(BaseModel):
    items: list[SupplierResponse]
    total: int
    page: int
    size: int


class SupplierInventoryResponse(BaseModel):
    items: list[InventoryItemResponse]
    total: int
