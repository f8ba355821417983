"""
Stock Decrementer: applies the ingredient consumption of a sold menu item to inventory.

The bill of materials comes from the product's recipe lines; products without
recipe lines fall back to their plain ingredient links at one unit each. Every
ingredient is read, decremented (never below zero) and written back on its own,
so a failure on one ingredient is recorded as skipped and the rest still apply.
"""
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional, Union

from pos_inventory.core.config import RECIPE_ERROR_FALLBACK
from pos_inventory.core.errors import InvalidRequest, LookupFailed, NoConsumptionData
from pos_inventory.models.menu import ProductType
from pos_inventory.store.base import InventoryStore, StoreError

log = logging.getLogger("pos_inventory.stock_decrementer")

FALLBACK_UNITS_PER_ITEM = Decimal("1")
# inventory_items.stock_actual keeps 3 decimal places
STOCK_QUANTUM = Decimal("0.001")


class ConsumptionSource(str, Enum):
    RECIPE = "recipe"
    INGREDIENTS = "ingredients"


@dataclass(frozen=True)
class AppliedDecrement:
    inventory_item_id: str
    previous_stock: Decimal
    new_stock: Decimal
    reduction: Decimal


@dataclass(frozen=True)
class SkippedIngredient:
    inventory_item_id: str
    reason: str


IngredientOutcome = Union[AppliedDecrement, SkippedIngredient]


@dataclass
class ReductionOutcome:
    product_type: str
    source: ConsumptionSource
    outcomes: List[IngredientOutcome] = field(default_factory=list)

    @property
    def results(self) -> List[AppliedDecrement]:
        return [o for o in self.outcomes if isinstance(o, AppliedDecrement)]

    @property
    def skipped(self) -> List[SkippedIngredient]:
        return [o for o in self.outcomes if isinstance(o, SkippedIngredient)]


def compute_new_stock(current_stock: Decimal, reduction: Decimal) -> Decimal:
    """Stock after consuming `reduction`, floored at zero and rounded to the stored precision."""
    new_stock = max(Decimal("0"), current_stock - reduction)
    return new_stock.quantize(STOCK_QUANTUM, rounding=ROUND_HALF_UP)


async def decrement_ingredient(
    store: InventoryStore, inventory_item_id: str, reduction: Decimal
) -> IngredientOutcome:
    """Reads, decrements and writes back a single ingredient. Store failures become a skip."""
    try:
        item = await store.get_inventory_item(inventory_item_id)
    except StoreError as e:
        log.error(f"Error fetching inventory item {inventory_item_id}: {e}")
        return SkippedIngredient(inventory_item_id, f"Error fetching inventory item: {e}")

    current_stock = item.current_stock
    new_stock = compute_new_stock(current_stock, reduction)

    try:
        await store.update_stock(inventory_item_id, new_stock)
    except StoreError as e:
        log.error(f"Error updating inventory item {inventory_item_id}: {e}")
        return SkippedIngredient(inventory_item_id, f"Error updating inventory: {e}")

    if new_stock <= item.min_stock_level:
        log.warning(
            f"Low stock for inventory item {inventory_item_id}: {new_stock} (minimum {item.min_stock_level})"
        )

    return AppliedDecrement(
        inventory_item_id=inventory_item_id,
        previous_stock=current_stock,
        new_stock=new_stock,
        reduction=reduction,
    )


async def reduce_inventory(
    store: InventoryStore,
    product_id: str,
    quantity: Decimal,
    recipe_error_fallback: Optional[bool] = None,
) -> ReductionOutcome:
    """
    Decrements the stock of every ingredient consumed by `quantity` units of `product_id`.

    Raises InvalidRequest for a missing product id or a non-positive quantity,
    LookupFailed when the product or its ingredient links cannot be read, and
    NoConsumptionData when the product has neither recipe lines nor ingredient links.
    """
    if recipe_error_fallback is None:
        recipe_error_fallback = RECIPE_ERROR_FALLBACK

    if not product_id or quantity is None or isinstance(quantity, bool):
        raise InvalidRequest()
    try:
        # str() keeps floats at their shortest repr instead of the binary expansion
        quantity = Decimal(str(quantity))
    except InvalidOperation:
        raise InvalidRequest()
    if not quantity.is_finite() or quantity <= 0:
        raise InvalidRequest()

    try:
        product = await store.get_menu_item(product_id)
    except StoreError as e:
        raise LookupFailed(f"Error fetching product: {e}") from e
    product_type = product.product_type or ProductType.INDIVIDUAL.value

    recipe_lines = []
    try:
        recipe_lines = await store.list_recipe_lines(product_id)
    except StoreError as e:
        if not recipe_error_fallback:
            raise LookupFailed(f"Error fetching recipe: {e}") from e
        log.warning(f"Recipe lookup for product {product_id} failed, trying ingredient links: {e}")

    if recipe_lines:
        outcome = ReductionOutcome(product_type=product_type, source=ConsumptionSource.RECIPE)
        for line in recipe_lines:
            outcome.outcomes.append(
                await decrement_ingredient(store, line.inventory_item_id, line.quantity * quantity)
            )
    else:
        try:
            links = await store.list_ingredient_links(product_id)
        except StoreError as e:
            raise LookupFailed(f"Error fetching ingredients: {e}") from e

        if not links:
            raise NoConsumptionData()

        outcome = ReductionOutcome(product_type=product_type, source=ConsumptionSource.INGREDIENTS)
        for link in links:
            outcome.outcomes.append(
                await decrement_ingredient(store, link.inventory_item_id, FALLBACK_UNITS_PER_ITEM * quantity)
            )

    log.info(
        f"Inventory reduced for product {product_id} x{quantity} via {outcome.source.value}: "
        f"{len(outcome.results)} applied, {len(outcome.skipped)} skipped"
    )
    return outcome
