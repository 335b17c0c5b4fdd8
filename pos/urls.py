"""API routes for the pos app."""

from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import (
    IngredientViewSet,
    LowStockReportView,
    MenuItemSaleView,
    MenuItemViewSet,
    MenuProfitabilityReportView,
    SaleTransactionView,
    SalesSummaryReportView,
    SaleViewSet,
)

router = DefaultRouter()
router.register(r"menu-items", MenuItemViewSet)
router.register(r"ingredients", IngredientViewSet)
router.register(r"sales", SaleViewSet)

urlpatterns = router.urls + [
    path("menu-item-sales/", MenuItemSaleView.as_view(), name="menu-item-sale"),
    path("sale-transactions/", SaleTransactionView.as_view(), name="sale-transaction"),
    path("reports/low-stock/", LowStockReportView.as_view(), name="report-low-stock"),
    path(
        "reports/menu-profitability/",
        MenuProfitabilityReportView.as_view(),
        name="report-menu-profitability",
    ),
    path("reports/sales-summary/", SalesSummaryReportView.as_view(), name="report-sales-summary"),
]
