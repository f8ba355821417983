# pos_inventory/scripts/seed_data.py
import asyncio
import logging
from decimal import Decimal
from pos_inventory.core.db import init_db, close_db
from pos_inventory.models.menu import MenuItem, ProductType
from pos_inventory.models.inventory import InventoryItem, RecipeLine, IngredientLink

log = logging.getLogger("pos_inventory.seed")


async def seed():
    # Ingredients
    bun, _ = await InventoryItem.get_or_create(
        name="Pan de hamburguesa", defaults={"unit": "unidad", "quantity": Decimal("10"), "min_stock_level": Decimal("2"), "cost_per_unit": Decimal("4.50")}
    )
    patty, _ = await InventoryItem.get_or_create(
        name="Carne de res", defaults={"unit": "unidad", "quantity": Decimal("20"), "min_stock_level": Decimal("4"), "cost_per_unit": Decimal("18.00")}
    )
    potatoes, _ = await InventoryItem.get_or_create(
        name="Papas", defaults={"unit": "kg", "quantity": Decimal("15"), "min_stock_level": Decimal("3"), "cost_per_unit": Decimal("12.00")}
    )

    # If existing, reset live stock (idempotent)
    bun.stock_actual = Decimal("10")
    patty.stock_actual = Decimal("20")
    potatoes.stock_actual = None  # falls back to quantity
    await bun.save(); await patty.save(); await potatoes.save()

    # Menu item with an explicit recipe
    burger, _ = await MenuItem.get_or_create(
        name="Hamburguesa", defaults={"price": "120.00", "product_type": ProductType.INDIVIDUAL}
    )
    await RecipeLine.get_or_create(menu_item=burger, inventory_item=bun, defaults={"quantity": Decimal("1")})
    await RecipeLine.get_or_create(menu_item=burger, inventory_item=patty, defaults={"quantity": Decimal("2")})

    # Menu item with ingredient links only (fallback path)
    fries, _ = await MenuItem.get_or_create(
        name="Papas fritas", defaults={"price": "45.00", "product_type": ProductType.INDIVIDUAL}
    )
    await IngredientLink.get_or_create(menu_item=fries, inventory_item=potatoes)

    log.info(f"Menu items: burger={burger.id} fries={fries.id}")
    log.info(f"Inventory items: bun={bun.id} patty={patty.id} potatoes={potatoes.id}")
    log.info("Inventory seeded.")


async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    asyncio.run(main())
