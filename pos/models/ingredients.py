from django.db import models

from .fields import StockQuantityField


class Ingredient(models.Model):
    """An inventory unit whose stock is drawn down by sales."""

    name = models.CharField(max_length=255, unique=True, blank=False, null=False)
    unit = models.CharField(max_length=50, blank=True, null=True)
    current_stock = StockQuantityField()
    min_stock_level = StockQuantityField()
    last_ordered = models.DateField(blank=True, null=True)
    is_active = models.BooleanField(default=True, null=False)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.name or f"Ingredient {self.pk}"

    class Meta:
        db_table = "ingredients"
        ordering = ["name"]
