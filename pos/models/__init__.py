from .fields import MoneyField, StockQuantityField
from .ingredients import Ingredient
from .menu import MenuItem
from .sales import SALE_TYPE_CHOICES, Sale

__all__ = [
    "MoneyField",
    "StockQuantityField",
    "Ingredient",
    "MenuItem",
    "Sale",
    "SALE_TYPE_CHOICES",
]
