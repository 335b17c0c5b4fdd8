from django.db import models

from .fields import MoneyField


class MenuItem(models.Model):
    """A sellable catalog entry and its recipe.

    ``ingredients`` is the recipe itself: an ordered list of
    ``{ingredient_id, ingredient_name, quantity, unit}`` dictionaries where
    ``quantity`` is consumed per single unit sold.
    """

    name = models.CharField(max_length=255, blank=False, null=False)
    category = models.CharField(max_length=100, blank=True, null=True)
    price = MoneyField(blank=True, null=True)
    cost = MoneyField(blank=True, null=True)
    profit_margin = models.DecimalField(max_digits=7, decimal_places=2, blank=True, null=True)
    ingredients = models.JSONField(default=list, blank=True, null=True)
    is_active = models.BooleanField(default=True, null=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.name or f"Menu item {self.pk}"

    class Meta:
        db_table = "menu_items"
        ordering = ["name"]
