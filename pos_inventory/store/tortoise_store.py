from decimal import Decimal
from typing import List
from uuid import UUID
from tortoise.exceptions import BaseORMException, DoesNotExist

from pos_inventory.models.inventory import IngredientLink, InventoryItem, RecipeLine
from pos_inventory.models.menu import MenuItem
from pos_inventory.store.base import (
    IngredientLinkRow,
    InventoryItemRow,
    InventoryStore,
    MenuItemRow,
    RecipeLineRow,
    RowNotFound,
    StoreError,
)


def _as_uuid(value: str, table: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError:
        raise RowNotFound(f"invalid id {value!r} for {table}")


class TortoiseInventoryStore(InventoryStore):
    """InventoryStore backed by the Tortoise ORM models. Each call is its own round trip."""

    async def get_menu_item(self, menu_item_id: str) -> MenuItemRow:
        pk = _as_uuid(menu_item_id, "menu_items")
        try:
            item = await MenuItem.get(id=pk)
        except DoesNotExist:
            raise RowNotFound(f"menu item {menu_item_id} not found")
        except BaseORMException as e:
            raise StoreError(str(e)) from e

        product_type = item.product_type.value if item.product_type else None
        return MenuItemRow(id=str(item.id), product_type=product_type)

    async def list_recipe_lines(self, menu_item_id: str) -> List[RecipeLineRow]:
        pk = _as_uuid(menu_item_id, "recipe_lines")
        try:
            rows = await RecipeLine.filter(menu_item_id=pk).values("inventory_item_id", "quantity")
        except BaseORMException as e:
            raise StoreError(str(e)) from e

        return [
            RecipeLineRow(inventory_item_id=str(row["inventory_item_id"]), quantity=row["quantity"])
            for row in rows
        ]

    async def list_ingredient_links(self, menu_item_id: str) -> List[IngredientLinkRow]:
        pk = _as_uuid(menu_item_id, "menu_item_ingredients")
        try:
            rows = await IngredientLink.filter(menu_item_id=pk).values("inventory_item_id")
        except BaseORMException as e:
            raise StoreError(str(e)) from e

        return [IngredientLinkRow(inventory_item_id=str(row["inventory_item_id"])) for row in rows]

    async def get_inventory_item(self, inventory_item_id: str) -> InventoryItemRow:
        pk = _as_uuid(inventory_item_id, "inventory_items")
        try:
            item = await InventoryItem.get(id=pk)
        except DoesNotExist:
            raise RowNotFound(f"inventory item {inventory_item_id} not found")
        except BaseORMException as e:
            raise StoreError(str(e)) from e

        return InventoryItemRow(
            id=str(item.id),
            quantity=item.quantity,
            stock_actual=item.stock_actual,
            min_stock_level=item.min_stock_level,
            cost_per_unit=item.cost_per_unit,
        )

    async def update_stock(self, inventory_item_id: str, stock_actual: Decimal) -> None:
        pk = _as_uuid(inventory_item_id, "inventory_items")
        try:
            updated = await InventoryItem.filter(id=pk).update(stock_actual=stock_actual)
        except BaseORMException as e:
            raise StoreError(str(e)) from e

        if not updated:
            raise RowNotFound(f"inventory item {inventory_item_id} not found")
