"""Product catalog model."""

from decimal import Decimal

from pydantic import Field

from beancounter.models.mixins import Record


class Product(Record):
    id: str
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0)
    category: str
    description: str | None = None
    image: str | None = None

    def __repr__(self) -> str:
        return f"<Product {self.id}: {self.name}>"
