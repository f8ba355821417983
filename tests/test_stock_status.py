import pytest
from decimal import Decimal

from pos_inventory.core.errors import LookupFailed, NotFound
from pos_inventory.services.stock_status import (
    StockStatus,
    classify_ingredients,
    is_below_minimum,
    menu_item_stock_status,
)
from pos_inventory.store.base import InventoryItemRow, RowNotFound, StoreError


def row(stock_actual, quantity=10, min_stock_level=0):
    return InventoryItemRow(id="x", stock_actual=stock_actual, quantity=quantity, min_stock_level=min_stock_level)


@pytest.mark.parametrize("ingredients, expected", [
    ([], StockStatus.NORMAL),
    ([row(5), row(8)], StockStatus.NORMAL),
    ([row(5), row(0)], StockStatus.OUT),
    ([row(3), row(8)], StockStatus.LOW),  # 3 <= 10 * 0.3
    ([row(3.5), row(8)], StockStatus.NORMAL),
    ([row(1), row(0)], StockStatus.OUT),  # out wins over low
    ([row(None, quantity=0)], StockStatus.NORMAL),  # never-set stock is ignored
])
def test_classify_ingredients(ingredients, expected):
    assert classify_ingredients(ingredients, low_ratio=Decimal("0.3")) == expected


def test_is_below_minimum():
    assert is_below_minimum(row(2, min_stock_level=5))
    assert not is_below_minimum(row(0, min_stock_level=5))
    assert not is_below_minimum(row(None, min_stock_level=5))
    assert not is_below_minimum(row(5, min_stock_level=5))


@pytest.mark.asyncio
async def test_menu_item_status_uses_ingredient_links_without_recipe(store_factory):
    store = store_factory(
        recipe=[],
        links=["potatoes", "ghost"],
        items={"potatoes": {"stock_actual": 2, "quantity": 15}},
    )

    assert await menu_item_stock_status(store, "fries") == StockStatus.LOW


@pytest.mark.asyncio
async def test_menu_item_status_for_unknown_menu_item(store_factory):
    store = store_factory(menu_error=RowNotFound("missing"))

    with pytest.raises(NotFound):
        await menu_item_stock_status(store, "ghost")


@pytest.mark.asyncio
async def test_menu_item_status_falls_back_to_links_when_recipe_query_fails(store_factory):
    store = store_factory(
        recipe_error=StoreError("relation recipe_lines is locked"),
        links=["potatoes"],
        items={"potatoes": {"stock_actual": 0, "quantity": 15}},
    )

    assert await menu_item_stock_status(store, "fries", recipe_error_fallback=True) == StockStatus.OUT
    store.list_ingredient_links.assert_awaited_once_with("fries")


@pytest.mark.asyncio
async def test_menu_item_status_recipe_query_failure_without_fallback(store_factory):
    store = store_factory(recipe_error=StoreError("timeout"), links=["potatoes"])

    with pytest.raises(LookupFailed) as excinfo:
        await menu_item_stock_status(store, "fries", recipe_error_fallback=False)

    assert excinfo.value.message == "Error fetching recipe: timeout"
    store.list_ingredient_links.assert_not_awaited()
