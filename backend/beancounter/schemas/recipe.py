"""Recipe & menu item schemas.

Create bodies are the costing drafts (``RecipeDraft``, ``MenuItemDraft``);
costs are always computed, never accepted from the client.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from beancounter.models import MenuItem, NutritionalInfo, Recipe, RecipeIngredient
from beancounter.services.costing import IngredientDraft, menu_item_costing


class RecipeUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    category: str | None = None
    ingredients: list[IngredientDraft] | None = None
    preparation_time: int | None = None
    preparation_steps: list[str] | None = None
    serving_size: int | None = None
    nutritional_info: NutritionalInfo | None = None
    is_active: bool | None = None


class RecipeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    category: str
    ingredients: list[RecipeIngredient]
    preparation_time: int
    preparation_steps: list[str]
    serving_size: int
    total_cost: Decimal
    cost_per_serving: Decimal
    nutritional_info: NutritionalInfo
    is_active: bool
    created_at: dt.datetime
    modified_at: dt.datetime


class RecipeListResponse(BaseModel):
    items: list[RecipeResponse]
    total: int


class MenuItemUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Decimal | None = None
    recipe_id: str | None = None
    product_id: str | None = None
    image_url: str | None = None
    is_featured: bool | None = None
    is_seasonal: bool | None = None
    season_start: dt.date | None = None
    season_end: dt.date | None = None
    is_active: bool | None = None


class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str | None
    category: str
    price: Decimal
    recipe_id: str
    recipe_name: str
    product_id: str | None
    image_url: str | None
    is_featured: bool
    is_seasonal: bool
    season_start: dt.date | None
    season_end: dt.date | None
    is_active: bool
    # Derived from the recipe's current cost per serving
    cost: Decimal
    profit: Decimal
    profit_margin: Decimal
    nutritional_info: NutritionalInfo
    created_at: dt.datetime
    modified_at: dt.datetime

    @classmethod
    def from_menu_item(cls, menu_item: MenuItem, recipe: Recipe) -> "MenuItemResponse":
        costing = menu_item_costing(menu_item, recipe)
        return cls(
            **menu_item.model_dump(),
            recipe_name=recipe.name,
            cost=costing.cost,
            profit=costing.profit,
            profit_margin=costing.profit_margin,
            nutritional_info=recipe.nutritional_info,
        )


class MenuItemListResponse(BaseModel):
    items: list[MenuItemResponse]
    total: int
