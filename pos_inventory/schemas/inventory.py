from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class ReduceInventoryRequest(BaseModel):
    """Schema for a sale to apply to inventory."""
    product_id: str = Field(..., min_length=1, description="ID of the menu item sold.")
    quantity: Decimal = Field(..., gt=0, description="Number of units sold.")


class DecrementResult(BaseModel):
    """Audit record of one applied ingredient decrement. `reduction` is only sent on the recipe path."""
    inventory_item_id: str
    previous_stock: float
    new_stock: float
    reduction: Optional[float] = None


class SkippedIngredientResponse(BaseModel):
    inventory_item_id: str
    reason: str


class ReduceInventoryResponse(BaseModel):
    """Recipe path carries `product_type`; the ingredient-link fallback carries `message` instead."""
    success: bool = True
    product_type: Optional[str] = None
    message: Optional[str] = None
    results: List[DecrementResult]
    skipped: List[SkippedIngredientResponse] = []


class InventoryItemResponse(BaseModel):
    """Schema for fetching an inventory item's stock."""
    id: str
    current_stock: float
    quantity: float
    stock_actual: Optional[float] = None
    min_stock_level: float
    cost_per_unit: float
    inventory_value: float
    is_out_of_stock: bool
    is_low_stock: bool


class MenuItemStockStatusResponse(BaseModel):
    menu_item_id: str
    stock_status: str
