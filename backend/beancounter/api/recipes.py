"""Recipe and menu item endpoints with live costing."""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status

from beancounter.core.deps import get_store
from beancounter.db.store import Store
from beancounter.models import MenuItem, Recipe
from beancounter.schemas.recipe import (
    MenuItemListResponse,
    MenuItemResponse,
    MenuItemUpdate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from beancounter.services.costing import (
    MenuItemDraft,
    RecipeDraft,
    build_menu_item,
    build_recipe,
    draft_from_recipe,
    ensure_recipe_removable,
    recost_recipe,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])
menu_router = APIRouter(prefix="/menu-items", tags=["menu"])


def _get_recipe(store: Store, recipe_id: str) -> Recipe:
    recipe = store.recipes.get(recipe_id)
    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recipe not found",
        )
    return recipe


def _get_menu_item(store: Store, menu_item_id: str) -> MenuItem:
    menu_item = store.menu_items.get(menu_item_id)
    if not menu_item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Menu item not found",
        )
    return menu_item


def _menu_response(store: Store, menu_item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse.from_menu_item(menu_item, store.recipes[menu_item.recipe_id])


# ── Recipes ────────────────────────────────────────
@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    category: str | None = None,
    active: bool | None = None,
    search: str | None = None,
    ingredient: str | None = None,
    store: Store = Depends(get_store),
):
    """List recipes, optionally only those using one inventory item."""
    items = list(store.recipes.values())
    if category:
        items = [r for r in items if r.category.lower() == category.lower()]
    if active is not None:
        items = [r for r in items if r.is_active == active]
    if search:
        needle = search.lower()
        items = [r for r in items if needle in r.name.lower() or needle in (r.description or "").lower()]
    if ingredient:
        items = [r for r in items if r.uses(ingredient)]

    items.sort(key=lambda r: r.name)
    return RecipeListResponse(
        items=[RecipeResponse.model_validate(r) for r in items],
        total=len(items),
    )


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(recipe_id: str, store: Store = Depends(get_store)):
    return RecipeResponse.model_validate(_get_recipe(store, recipe_id))


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(body: RecipeDraft, store: Store = Depends(get_store)):
    """Create a recipe; ingredient costs come from current inventory prices."""
    recipe = build_recipe(store, body)
    store.recipes[recipe.id] = recipe
    logger.info("Created recipe %s (%s), cost per serving %s", recipe.id, recipe.name, recipe.cost_per_serving)
    return RecipeResponse.model_validate(recipe)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(recipe_id: str, body: RecipeUpdate, store: Store = Depends(get_store)):
    """Update a recipe; the whole recipe is re-costed."""
    recipe = _get_recipe(store, recipe_id)

    draft = RecipeDraft.model_validate(
        {**draft_from_recipe(recipe).model_dump(), **body.model_dump(exclude_unset=True)}
    )
    updated = build_recipe(store, draft, recipe_id=recipe.id, created_at=recipe.created_at)
    store.recipes[recipe.id] = updated

    return RecipeResponse.model_validate(updated)


@router.post("/{recipe_id}/recost", response_model=RecipeResponse)
async def recost(recipe_id: str, store: Store = Depends(get_store)):
    """Refresh ingredient costs from current inventory unit costs."""
    recipe = _get_recipe(store, recipe_id)
    return RecipeResponse.model_validate(recost_recipe(store, recipe))


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: str, store: Store = Depends(get_store)):
    """Delete a recipe; rejected while menu items still sell it."""
    recipe = _get_recipe(store, recipe_id)
    ensure_recipe_removable(store, recipe)
    del store.recipes[recipe.id]
    logger.info("Deleted recipe %s", recipe.id)


@router.get("/{recipe_id}/menu-items", response_model=MenuItemListResponse)
async def list_recipe_menu_items(recipe_id: str, store: Store = Depends(get_store)):
    recipe = _get_recipe(store, recipe_id)
    items = sorted(store.menu_items_for(recipe.id), key=lambda m: m.name)
    return MenuItemListResponse(
        items=[MenuItemResponse.from_menu_item(m, recipe) for m in items],
        total=len(items),
    )


# ── Menu items ─────────────────────────────────────
@menu_router.get("", response_model=MenuItemListResponse)
async def list_menu_items(
    category: str | None = None,
    active: bool | None = None,
    featured: bool | None = None,
    seasonal: bool | None = None,
    search: str | None = None,
    min_margin: Decimal | None = None,
    store: Store = Depends(get_store),
):
    """List menu items with their current cost and profit."""
    items = [_menu_response(store, m) for m in store.menu_items.values()]
    if category:
        items = [m for m in items if m.category.lower() == category.lower()]
    if active is not None:
        items = [m for m in items if m.is_active == active]
    if featured is not None:
        items = [m for m in items if m.is_featured == featured]
    if seasonal is not None:
        items = [m for m in items if m.is_seasonal == seasonal]
    if search:
        needle = search.lower()
        items = [m for m in items if needle in m.name.lower() or needle in (m.description or "").lower()]
    if min_margin is not None:
        items = [m for m in items if m.profit_margin >= min_margin]

    items.sort(key=lambda m: m.name)
    return MenuItemListResponse(items=items, total=len(items))


@menu_router.get("/{menu_item_id}", response_model=MenuItemResponse)
async def get_menu_item(menu_item_id: str, store: Store = Depends(get_store)):
    return _menu_response(store, _get_menu_item(store, menu_item_id))


@menu_router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(body: MenuItemDraft, store: Store = Depends(get_store)):
    menu_item = build_menu_item(store, body)
    store.menu_items[menu_item.id] = menu_item
    logger.info("Added menu item %s (%s) at %s", menu_item.id, menu_item.name, menu_item.price)
    return _menu_response(store, menu_item)


@menu_router.patch("/{menu_item_id}", response_model=MenuItemResponse)
async def update_menu_item(menu_item_id: str, body: MenuItemUpdate, store: Store = Depends(get_store)):
    menu_item = _get_menu_item(store, menu_item_id)

    draft = MenuItemDraft.model_validate(
        {**menu_item.model_dump(exclude={"id", "created_at", "modified_at"}), **body.model_dump(exclude_unset=True)}
    )
    updated = build_menu_item(store, draft, menu_item_id=menu_item.id, created_at=menu_item.created_at)
    store.menu_items[menu_item.id] = updated

    return _menu_response(store, updated)


@menu_router.delete("/{menu_item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(menu_item_id: str, store: Store = Depends(get_store)):
    menu_item = _get_menu_item(store, menu_item_id)
    del store.menu_items[menu_item.id]
