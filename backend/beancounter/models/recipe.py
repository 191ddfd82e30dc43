"""Recipe & MenuItem models.

Ingredient costs are a snapshot taken when the recipe is costed against the
inventory; ``beancounter.services.costing.recost_recipe`` refreshes them.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from beancounter.models.mixins import Record, utcnow


class RecipeIngredient(BaseModel):
    inventory_id: str
    name: str
    quantity: Decimal = Field(..., gt=0)
    unit: str
    cost: Decimal = Field(Decimal("0.00"), ge=0)


class NutritionalInfo(BaseModel):
    calories: int = Field(0, ge=0)
    protein: Decimal = Field(Decimal("0"), ge=0)
    carbs: Decimal = Field(Decimal("0"), ge=0)
    fat: Decimal = Field(Decimal("0"), ge=0)
    allergens: list[str] = Field(default_factory=list)


class Recipe(Record):
    id: str
    name: str
    description: str | None = None
    category: str
    ingredients: list[RecipeIngredient]
    preparation_time: int = Field(0, ge=0, description="Minutes")
    preparation_steps: list[str]
    serving_size: int = Field(1, ge=0)
    total_cost: Decimal = Decimal("0.00")
    cost_per_serving: Decimal = Decimal("0.00")
    nutritional_info: NutritionalInfo = Field(default_factory=NutritionalInfo)
    is_active: bool = True
    created_at: dt.datetime = Field(default_factory=utcnow)
    modified_at: dt.datetime = Field(default_factory=utcnow)

    def uses(self, inventory_id: str) -> bool:
        return any(i.inventory_id == inventory_id for i in self.ingredients)

    def __repr__(self) -> str:
        return f"<Recipe {self.name} cost/serving={self.cost_per_serving}>"


class MenuItem(Record):
    id: str
    name: str
    description: str | None = None
    category: str
    price: Decimal = Field(..., gt=0)
    recipe_id: str
    # POS product sold as this menu item, for sales and profit reporting.
    product_id: str | None = None
    image_url: str | None = None
    is_featured: bool = False
    is_seasonal: bool = False
    season_start: dt.date | None = None
    season_end: dt.date | None = None
    is_active: bool = True
    created_at: dt.datetime = Field(default_factory=utcnow)
    modified_at: dt.datetime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<MenuItem {self.name} {self.price}>"
