from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel


class StoreError(Exception):
    """A read or write against the row store failed."""


class RowNotFound(StoreError):
    """A single-row fetch matched no row."""


class MenuItemRow(BaseModel):
    id: str
    product_type: Optional[str] = None


class RecipeLineRow(BaseModel):
    inventory_item_id: str
    quantity: Decimal


class IngredientLinkRow(BaseModel):
    inventory_item_id: str


class InventoryItemRow(BaseModel):
    id: str
    quantity: Decimal = Decimal("0")
    stock_actual: Optional[Decimal] = None
    min_stock_level: Decimal = Decimal("0")
    cost_per_unit: Decimal = Decimal("0")

    @property
    def current_stock(self) -> Decimal:
        """Live stock; the legacy quantity only counts while stock_actual was never set."""
        return self.stock_actual if self.stock_actual is not None else self.quantity

    @property
    def inventory_value(self) -> Decimal:
        return self.cost_per_unit * self.current_stock


class InventoryStore(ABC):
    """
    Row-store client consumed by the inventory services.
    Implementations raise StoreError (RowNotFound for a missing row) on any failure.
    """

    @abstractmethod
    async def get_menu_item(self, menu_item_id: str) -> MenuItemRow:
        ...

    @abstractmethod
    async def list_recipe_lines(self, menu_item_id: str) -> List[RecipeLineRow]:
        ...

    @abstractmethod
    async def list_ingredient_links(self, menu_item_id: str) -> List[IngredientLinkRow]:
        ...

    @abstractmethod
    async def get_inventory_item(self, inventory_item_id: str) -> InventoryItemRow:
        ...

    @abstractmethod
    async def update_stock(self, inventory_item_id: str, stock_actual: Decimal) -> None:
        ...
