import logging
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pos_inventory.core.config import LOW_STOCK_RATIO, RECIPE_ERROR_FALLBACK
from pos_inventory.core.errors import LookupFailed, NotFound
from pos_inventory.store.base import InventoryItemRow, InventoryStore, RowNotFound, StoreError

log = logging.getLogger("pos_inventory.stock_status")


class StockStatus(str, Enum):
    NORMAL = "normal"
    LOW = "low"
    OUT = "out"


def is_out_of_stock(item: InventoryItemRow) -> bool:
    return item.stock_actual is not None and item.stock_actual <= 0


def is_below_minimum(item: InventoryItemRow) -> bool:
    """Inventory page warning: positive live stock under the item's minimum level."""
    return item.stock_actual is not None and 0 < item.stock_actual < item.min_stock_level


def classify_ingredients(ingredients: List[InventoryItemRow], low_ratio: Optional[Decimal] = None) -> StockStatus:
    """
    Sellability of a menu item from its ingredients: `out` if any ingredient is
    exhausted, `low` if any is at or below `low_ratio` of its initial quantity.
    Ingredients whose stock_actual was never set do not affect the status.
    """
    if low_ratio is None:
        low_ratio = LOW_STOCK_RATIO

    if any(is_out_of_stock(ing) for ing in ingredients):
        return StockStatus.OUT

    for ing in ingredients:
        if ing.stock_actual is not None and 0 < ing.stock_actual <= ing.quantity * low_ratio:
            return StockStatus.LOW

    return StockStatus.NORMAL


async def get_inventory_item(store: InventoryStore, inventory_item_id: str) -> InventoryItemRow:
    try:
        return await store.get_inventory_item(inventory_item_id)
    except RowNotFound as e:
        raise NotFound("Inventory item not found") from e
    except StoreError as e:
        raise LookupFailed(f"Error fetching inventory item: {e}") from e


async def menu_item_stock_status(
    store: InventoryStore, menu_item_id: str, recipe_error_fallback: Optional[bool] = None
) -> StockStatus:
    """
    Resolves the menu item's ingredients (recipe lines, else ingredient links) and classifies them.
    A failed recipe query is handled like the Stock Decrementer does, per RECIPE_ERROR_FALLBACK.
    """
    if recipe_error_fallback is None:
        recipe_error_fallback = RECIPE_ERROR_FALLBACK

    try:
        await store.get_menu_item(menu_item_id)
    except RowNotFound as e:
        raise NotFound("Menu item not found") from e
    except StoreError as e:
        raise LookupFailed(f"Error fetching product: {e}") from e

    ingredient_ids = []
    try:
        ingredient_ids = [line.inventory_item_id for line in await store.list_recipe_lines(menu_item_id)]
    except StoreError as e:
        if not recipe_error_fallback:
            raise LookupFailed(f"Error fetching recipe: {e}") from e
        log.warning(f"Recipe lookup for menu item {menu_item_id} failed, trying ingredient links: {e}")

    if not ingredient_ids:
        try:
            ingredient_ids = [link.inventory_item_id for link in await store.list_ingredient_links(menu_item_id)]
        except StoreError as e:
            raise LookupFailed(f"Error fetching ingredients: {e}") from e

    ingredients = []
    for inventory_item_id in ingredient_ids:
        try:
            ingredients.append(await store.get_inventory_item(inventory_item_id))
        except StoreError as e:
            log.warning(f"Ignoring unreadable ingredient {inventory_item_id} of {menu_item_id}: {e}")

    return classify_ingredients(ingredients)
