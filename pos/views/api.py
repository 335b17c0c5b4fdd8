from django.utils.dateparse import parse_date
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Ingredient, MenuItem, Sale
from ..serializers import (
    IngredientSerializer,
    MenuItemSaleRequestSerializer,
    MenuItemSerializer,
    SaleSerializer,
)
from ..services import kpis
from ..services.deduction_service import process_menu_item_sale
from ..services.sale_service import process_sale_transaction


class MenuItemViewSet(viewsets.ModelViewSet):
    """API endpoint for CRUD operations on menu items.

    Query params:
        name: optional substring to filter menu item names.
        category: exact category match.
    """

    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        name = self.request.query_params.get("name")
        category = self.request.query_params.get("category")
        if name:
            queryset = queryset.filter(name__icontains=name)
        if category:
            queryset = queryset.filter(category=category)
        return queryset


class IngredientViewSet(viewsets.ModelViewSet):
    """Standard CRUD API for ingredients and their stock."""

    queryset = Ingredient.objects.all()
    serializer_class = IngredientSerializer
    permission_classes = [permissions.IsAuthenticated]


class SaleViewSet(viewsets.ReadOnlyModelViewSet):
    """Retrieve recorded sales. Sales are only created by checkout."""

    queryset = Sale.objects.all()
    serializer_class = SaleSerializer
    permission_classes = [permissions.IsAuthenticated]


class MenuItemSaleView(APIView):
    """Sell one menu item and deduct its recipe from inventory."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = MenuItemSaleRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = process_menu_item_sale(
            serializer.validated_data["menuItemId"],
            serializer.validated_data.get("quantity", 1),
        )
        return Response(result, status=status.HTTP_200_OK)


class SaleTransactionView(APIView):
    """Process a checkout; ``saleData`` may be wrapped or sent bare."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        sale_data = request.data.get("saleData", request.data)
        result = process_sale_transaction(sale_data)
        code = status.HTTP_201_CREATED if "sale" in result else status.HTTP_400_BAD_REQUEST
        return Response(result, status=code)


class LowStockReportView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        rows = kpis.low_stock_ingredients()
        return Response(IngredientSerializer(rows, many=True).data)


class MenuProfitabilityReportView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(kpis.menu_profitability())


class SalesSummaryReportView(APIView):
    """Sales totals, optionally limited by ``start``/``end`` (YYYY-MM-DD)."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        start = parse_date(request.query_params.get("start") or "")
        end = parse_date(request.query_params.get("end") or "")
        return Response(kpis.sales_summary(start=start, end=end))
