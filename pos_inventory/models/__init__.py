# pos_inventory/models/__init__.py
from .inventory import InventoryItem, RecipeLine, IngredientLink
from .menu import MenuItem, ProductType

# Export all models
__all__ = [
    "InventoryItem",
    "IngredientLink",
    "MenuItem",
    "ProductType",
    "RecipeLine",
]
