"""Supplier model."""

from beancounter.models.mixins import Record


class Supplier(Record):
    id: str
    name: str
    contact_person: str
    email: str
    phone: str
    address: str
    preferred_payment_terms: str = "Net 30"
    notes: str | None = None

    def __repr__(self) -> str:
        return f"<Supplier {self.id} {self.name}>"
