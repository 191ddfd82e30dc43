"""Recipe and menu item costing.

An ingredient costs ``quantity * cost_per_unit`` of the inventory item it is
drawn from. A recipe's ``total_cost`` is the sum of its ingredient costs and
``cost_per_serving`` divides that by the serving size; a recipe with zero
servings costs nothing per serving. A menu item sells one serving of a
recipe, so its profit is its price less the recipe's cost per serving.

Ingredient costs are snapshots. ``recost_recipe`` refreshes them after
inventory unit costs change.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field

from beancounter.core.errors import DomainInvariantError, FieldError, ValidationError
from beancounter.db.store import Store
from beancounter.models import InventoryItem, MenuItem, NutritionalInfo, Recipe, RecipeIngredient
from beancounter.models.mixins import new_id, utcnow

logger = logging.getLogger(__name__)

PER_SERVING = Decimal("0.0001")


class IngredientDraft(BaseModel):
    inventory_id: str = ""
    quantity: Decimal = Decimal("0")


class RecipeDraft(BaseModel):
    name: str = ""
    description: str | None = None
    category: str = ""
    ingredients: list[IngredientDraft] = Field(default_factory=list)
    preparation_time: int = 0
    preparation_steps: list[str] = Field(default_factory=list)
    serving_size: int = 1
    nutritional_info: NutritionalInfo = Field(default_factory=NutritionalInfo)
    is_active: bool = True


class MenuItemDraft(BaseModel):
    name: str = ""
    description: str | None = None
    category: str = ""
    price: Decimal = Decimal("0.00")
    recipe_id: str = ""
    product_id: str | None = None
    image_url: str | None = None
    is_featured: bool = False
    is_seasonal: bool = False
    season_start: dt.date | None = None
    season_end: dt.date | None = None
    is_active: bool = True


@dataclass(frozen=True)
class MenuItemCosting:
    cost: Decimal
    profit: Decimal
    profit_margin: Decimal


def ingredient_cost(quantity: Decimal, item: InventoryItem) -> Decimal:
    return quantity * item.cost_per_unit


def cost_per_serving(total_cost: Decimal, serving_size: int) -> Decimal:
    if serving_size <= 0:
        return Decimal("0.00")
    return (total_cost / serving_size).quantize(PER_SERVING, rounding=ROUND_HALF_UP)


def menu_item_costing(menu_item: MenuItem, recipe: Recipe) -> MenuItemCosting:
    cost = recipe.cost_per_serving
    profit = menu_item.price - cost
    margin = profit / menu_item.price if menu_item.price > 0 else Decimal("0")
    return MenuItemCosting(
        cost=cost,
        profit=profit,
        profit_margin=margin.quantize(PER_SERVING, rounding=ROUND_HALF_UP),
    )


# ── Recipes ──────────────────────────────────────────

def validate_recipe(store: Store, draft: RecipeDraft) -> list[FieldError]:
    errors: list[FieldError] = []
    if not draft.name.strip():
        errors.append(FieldError(field="name", message="Name is required"))
    if not draft.category.strip():
        errors.append(FieldError(field="category", message="Category is required"))
    if not draft.ingredients:
        errors.append(FieldError(field="ingredients", message="At least one ingredient is required"))
    for index, ingredient in enumerate(draft.ingredients):
        if ingredient.inventory_id not in store.inventory:
            errors.append(
                FieldError(field=f"ingredients.{index}.inventory_id", message="Inventory item not found")
            )
        if ingredient.quantity <= 0:
            errors.append(
                FieldError(field=f"ingredients.{index}.quantity", message="Quantity must be greater than zero")
            )
    if not any(step.strip() for step in draft.preparation_steps):
        errors.append(FieldError(field="preparation_steps", message="At least one preparation step is required"))
    if draft.serving_size < 0:
        errors.append(FieldError(field="serving_size", message="Serving size cannot be negative"))
    if draft.preparation_time < 0:
        errors.append(FieldError(field="preparation_time", message="Preparation time cannot be negative"))
    return errors


def build_recipe(
    store: Store,
    draft: RecipeDraft,
    recipe_id: str | None = None,
    created_at: dt.datetime | None = None,
) -> Recipe:
    """Validate a draft and cost it against current inventory prices."""
    errors = validate_recipe(store, draft)
    if errors:
        raise ValidationError(errors, message="Invalid recipe")

    ingredients = []
    for entry in draft.ingredients:
        item = store.inventory[entry.inventory_id]
        ingredients.append(
            RecipeIngredient(
                inventory_id=item.id,
                name=item.name,
                quantity=entry.quantity,
                unit=item.unit,
                cost=ingredient_cost(entry.quantity, item),
            )
        )
    total = sum((i.cost for i in ingredients), Decimal("0.00"))

    now = utcnow()
    return Recipe(
        id=recipe_id or new_id("recipe"),
        name=draft.name.strip(),
        description=draft.description,
        category=draft.category.strip(),
        ingredients=ingredients,
        preparation_time=draft.preparation_time,
        preparation_steps=[s.strip() for s in draft.preparation_steps if s.strip()],
        serving_size=draft.serving_size,
        total_cost=total,
        cost_per_serving=cost_per_serving(total, draft.serving_size),
        nutritional_info=draft.nutritional_info,
        is_active=draft.is_active,
        created_at=created_at or now,
        modified_at=now,
    )


def draft_from_recipe(recipe: Recipe) -> RecipeDraft:
    return RecipeDraft(
        ingredients=[IngredientDraft(inventory_id=i.inventory_id, quantity=i.quantity) for i in recipe.ingredients],
        **recipe.model_dump(
            include={
                "name", "description", "category", "preparation_time", "preparation_steps",
                "serving_size", "nutritional_info", "is_active",
            }
        ),
    )


def recost_recipe(store: Store, recipe: Recipe) -> Recipe:
    """Re-price a stored recipe from current inventory unit costs."""
    updated = build_recipe(store, draft_from_recipe(recipe), recipe_id=recipe.id, created_at=recipe.created_at)
    if updated.total_cost != recipe.total_cost:
        logger.info("Recipe %s re-costed: %s -> %s", recipe.id, recipe.total_cost, updated.total_cost)
    store.recipes[recipe.id] = updated
    return updated


def ensure_recipe_removable(store: Store, recipe: Recipe) -> None:
    """Recipes still sold as menu items cannot be deleted."""
    items = store.menu_items_for(recipe.id)
    if items:
        raise DomainInvariantError(
            f"Recipe {recipe.name} is used by {len(items)} menu item(s)",
            [FieldError(field="menu_items", message="Delete or re-point the menu items first")],
        )


def ensure_ingredient_removable(store: Store, item: InventoryItem) -> None:
    recipes = store.recipes_using(item.id)
    if recipes:
        raise DomainInvariantError(
            f"{item.name} is an ingredient of {len(recipes)} recipe(s)",
            [FieldError(field="recipes", message="Remove the ingredient from its recipes first")],
        )


# ── Menu items ───────────────────────────────────────

def validate_menu_item(store: Store, draft: MenuItemDraft) -> list[FieldError]:
    errors: list[FieldError] = []
    if not draft.name.strip():
        errors.append(FieldError(field="name", message="Name is required"))
    if not draft.recipe_id:
        errors.append(FieldError(field="recipe_id", message="Recipe is required"))
    elif draft.recipe_id not in store.recipes:
        errors.append(FieldError(field="recipe_id", message="Recipe not found"))
    if draft.price <= 0:
        errors.append(FieldError(field="price", message="Price must be greater than 0"))
    if not draft.category.strip():
        errors.append(FieldError(field="category", message="Category is required"))
    if draft.product_id and draft.product_id not in store.products:
        errors.append(FieldError(field="product_id", message="Product not found"))
    if draft.season_start and draft.season_end and draft.season_end < draft.season_start:
        errors.append(FieldError(field="season_end", message="Season end must be on or after season start"))
    return errors


def build_menu_item(
    store: Store,
    draft: MenuItemDraft,
    menu_item_id: str | None = None,
    created_at: dt.datetime | None = None,
) -> MenuItem:
    errors = validate_menu_item(store, draft)
    if errors:
        raise ValidationError(errors, message="Invalid menu item")

    now = utcnow()
    data = draft.model_dump()
    data["name"] = draft.name.strip()
    data["category"] = draft.category.strip()
    return MenuItem(id=menu_item_id or new_id("menu"), created_at=created_at or now, modified_at=now, **data)
