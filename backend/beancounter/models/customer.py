"""Customer, loyalty transaction and feedback models."""

import enum
import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from beancounter.models.mixins import Record, today


class CustomerStatus(str, enum.Enum):
    NEW = "new"
    REGULAR = "regular"
    VIP = "vip"


class TransactionType(str, enum.Enum):
    PURCHASE = "purchase"
    REFUND = "refund"
    POINTS_REDEMPTION = "points_redemption"
    POINTS_ADJUSTMENT = "points_adjustment"


class FeedbackCategory(str, enum.Enum):
    PRODUCT = "product"
    SERVICE = "service"
    AMBIANCE = "ambiance"
    PRICE = "price"
    OTHER = "other"


class CustomerPreferences(BaseModel):
    favorite_products: list[str] = Field(default_factory=list)
    milk_preference: str | None = None
    sugar_preference: str | None = None


class Customer(Record):
    id: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    birthdate: dt.date | None = None
    join_date: dt.date = Field(default_factory=today)
    # Owned by the loyalty ledger; never written by profile edits.
    points: int = Field(0, ge=0)
    total_spent: Decimal = Decimal("0.00")
    status: CustomerStatus = CustomerStatus.NEW
    notes: str | None = None
    preferences: CustomerPreferences = Field(default_factory=CustomerPreferences)

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Customer {self.name} points={self.points}>"


class TransactionDraft(BaseModel):
    """Unvalidated transaction as entered; checked by the type policy.

    ``points_earned`` left as ``None`` is derived from the amount for purchases.
    """

    customer_id: str = ""
    date: dt.date | None = None
    type: TransactionType = TransactionType.PURCHASE
    order_id: str | None = None
    amount: Decimal = Decimal("0.00")
    points_earned: int | None = None
    points_redeemed: int = 0
    notes: str | None = None


class CustomerTransaction(Record):
    id: str
    customer_id: str
    date: dt.date
    type: TransactionType
    order_id: str | None = None
    amount: Decimal
    points_earned: int = 0
    points_redeemed: int = 0
    notes: str | None = None

    @property
    def points_delta(self) -> int:
        return self.points_earned - self.points_redeemed

    def __repr__(self) -> str:
        return f"<CustomerTransaction {self.id} {self.type.value} delta={self.points_delta}>"


class CustomerFeedback(Record):
    id: str
    customer_id: str
    date: dt.date
    rating: int = Field(5, ge=1, le=5)
    comment: str
    category: FeedbackCategory = FeedbackCategory.OTHER
    resolved: bool = False
    response: str | None = None
