import uuid

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from .fields import MoneyField

SALE_TYPE_CHOICES = [
    ("dine_in", "Dine In"),
    ("takeaway", "Takeaway"),
    ("delivery", "Delivery"),
]


class Sale(models.Model):
    """Append-only record of one checkout and its effect on inventory."""

    sale_number = models.CharField(max_length=64, unique=True)
    sale_uuid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    sale_type = models.CharField(max_length=20, choices=SALE_TYPE_CHOICES, default="dine_in")
    items = models.JSONField(default=list, encoder=DjangoJSONEncoder)
    subtotal = MoneyField(max_digits=12, default=0)
    total_price = MoneyField(max_digits=12, default=0)
    total_cost = MoneyField(max_digits=12, default=0)
    gross_profit = MoneyField(max_digits=12, default=0)
    gp_percentage = models.DecimalField(max_digits=9, decimal_places=2, default=0)
    stock_deducted = models.BooleanField(default=False)
    deduction_log = models.JSONField(default=list, encoder=DjangoJSONEncoder)
    staff_email = models.CharField(max_length=254, blank=True, null=True)
    staff_name = models.CharField(max_length=255, blank=True, null=True)
    sale_date = models.DateTimeField()

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.sale_number

    class Meta:
        db_table = "sales"
        ordering = ["-sale_date"]
