import pytest
from typing import Dict, Iterable, List, Optional
from unittest.mock import AsyncMock

from pos_inventory.store.base import (
    IngredientLinkRow,
    InventoryItemRow,
    InventoryStore,
    MenuItemRow,
    RecipeLineRow,
    RowNotFound,
    StoreError,
)


def make_store(
    product_type: Optional[str] = "individual",
    recipe: Optional[List[tuple]] = None,
    links: Optional[List[str]] = None,
    items: Optional[Dict[str, dict]] = None,
    fail_reads: Iterable[str] = (),
    fail_writes: Iterable[str] = (),
    menu_error: Optional[Exception] = None,
    recipe_error: Optional[Exception] = None,
    links_error: Optional[Exception] = None,
):
    """
    FACTORY: an AsyncMock InventoryStore over an in-memory dict of inventory rows.
    `recipe` is a list of (inventory_item_id, quantity); `items` maps ids to row fields.
    Writes land in `store.rows` so later reads observe them.
    """
    rows = {iid: InventoryItemRow(id=iid, **fields) for iid, fields in (items or {}).items()}
    fail_reads, fail_writes = set(fail_reads), set(fail_writes)

    async def get_menu_item(menu_item_id):
        if menu_error:
            raise menu_error
        return MenuItemRow(id=menu_item_id, product_type=product_type)

    async def list_recipe_lines(menu_item_id):
        if recipe_error:
            raise recipe_error
        return [RecipeLineRow(inventory_item_id=iid, quantity=qty) for iid, qty in (recipe or [])]

    async def list_ingredient_links(menu_item_id):
        if links_error:
            raise links_error
        return [IngredientLinkRow(inventory_item_id=iid) for iid in (links or [])]

    async def get_inventory_item(inventory_item_id):
        if inventory_item_id in fail_reads or inventory_item_id not in rows:
            raise RowNotFound(f"inventory item {inventory_item_id} not found")
        return rows[inventory_item_id]

    async def update_stock(inventory_item_id, stock_actual):
        if inventory_item_id in fail_writes:
            raise StoreError("write refused")
        rows[inventory_item_id] = rows[inventory_item_id].model_copy(update={"stock_actual": stock_actual})

    store = AsyncMock(spec=InventoryStore)
    store.get_menu_item.side_effect = get_menu_item
    store.list_recipe_lines.side_effect = list_recipe_lines
    store.list_ingredient_links.side_effect = list_ingredient_links
    store.get_inventory_item.side_effect = get_inventory_item
    store.update_stock.side_effect = update_stock
    store.rows = rows
    return store


@pytest.fixture
def store_factory():
    return make_store
