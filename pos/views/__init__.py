from django.http import HttpResponse

from .api import (
    IngredientViewSet,
    LowStockReportView,
    MenuItemSaleView,
    MenuItemViewSet,
    MenuProfitabilityReportView,
    SaleTransactionView,
    SalesSummaryReportView,
    SaleViewSet,
)


def health_check(request):
    return HttpResponse("ok")


__all__ = [
    "IngredientViewSet",
    "LowStockReportView",
    "MenuItemSaleView",
    "MenuItemViewSet",
    "MenuProfitabilityReportView",
    "SaleTransactionView",
    "SalesSummaryReportView",
    "SaleViewSet",
    "health_check",
]
