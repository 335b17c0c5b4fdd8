from decimal import Decimal, InvalidOperation

from django.db import models


class MoneyField(models.DecimalField):
    """Two-place DecimalField that reads blank or malformed values as zero.

    Prices and costs on menu items are optional; a missing figure is priced
    at ``Decimal('0')`` rather than failing a sale.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("max_digits", 10)
        kwargs.setdefault("decimal_places", 2)
        super().__init__(*args, **kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return Decimal("0")
        try:
            return Decimal(str(value))
        except (TypeError, ValueError, InvalidOperation):
            return Decimal("0")

    def from_db_value(self, value, expression, connection):
        return self.to_python(value)


class StockQuantityField(models.DecimalField):
    """Three-place DecimalField for ingredient quantities.

    Unlike :class:`MoneyField` a NULL stays ``None`` so conditional updates
    can compare against the value actually stored.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("max_digits", 12)
        kwargs.setdefault("decimal_places", 3)
        kwargs.setdefault("null", True)
        kwargs.setdefault("blank", True)
        super().__init__(*args, **kwargs)
