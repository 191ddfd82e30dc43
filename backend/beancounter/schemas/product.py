"""Product catalog schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: Decimal
    category: str
    description: str | None
    image: str | None


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    categories: list[str]
