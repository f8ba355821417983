from enum import Enum
from tortoise import fields, models
import uuid


class ProductType(str, Enum):
    INDIVIDUAL = "individual"
    COMBO = "combo"
    OTHER = "other"


class MenuItem(models.Model):
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    price = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    product_type = fields.CharEnumField(ProductType, max_length=32, null=True, default=ProductType.INDIVIDUAL)
    is_available = fields.BooleanField(default=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "menu_items"
        indexes = [
            ("is_available",),  # Filter sellable items
        ]
