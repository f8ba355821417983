from tortoise import fields, models
import uuid


class InventoryItem(models.Model):
    """An ingredient on hand. stock_actual is the live stock; quantity is the initial/legacy amount."""
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    name = fields.CharField(max_length=255)
    unit = fields.CharField(max_length=32, default="unidad")
    quantity = fields.DecimalField(max_digits=14, decimal_places=3, default=0)
    stock_actual = fields.DecimalField(max_digits=14, decimal_places=3, null=True)
    min_stock_level = fields.DecimalField(max_digits=14, decimal_places=3, default=0)
    cost_per_unit = fields.DecimalField(max_digits=12, decimal_places=2, default=0)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "inventory_items"


class RecipeLine(models.Model):
    """Units of an inventory item consumed per one menu item sold."""
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    menu_item = fields.ForeignKeyField("models.MenuItem", related_name="recipe_lines")
    inventory_item = fields.ForeignKeyField("models.InventoryItem", related_name="recipe_lines")
    quantity = fields.DecimalField(max_digits=14, decimal_places=3)

    class Meta:
        table = "recipe_lines"
        indexes = [
            ("menu_item_id",),  # Bill-of-materials lookup per sale
        ]


class IngredientLink(models.Model):
    """Legacy menu item -> ingredient link without a ratio (consumes 1 unit per item sold)."""
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    menu_item = fields.ForeignKeyField("models.MenuItem", related_name="ingredient_links")
    inventory_item = fields.ForeignKeyField("models.InventoryItem", related_name="ingredient_links")

    class Meta:
        table = "menu_item_ingredients"
        unique_together = (("menu_item", "inventory_item"),)
