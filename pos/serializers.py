from rest_framework import serializers

from .models import Ingredient, MenuItem, Sale


class RecipeLineSerializer(serializers.Serializer):
    """One entry of a menu item's recipe."""

    ingredient_id = serializers.IntegerField(required=False, allow_null=True)
    ingredient_name = serializers.CharField(max_length=255)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3)
    unit = serializers.CharField(max_length=50)

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than 0.")
        return value

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        # Stored as JSON, so keep the per-serving quantity a plain number.
        values["quantity"] = float(values["quantity"])
        return values


class MenuItemSerializer(serializers.ModelSerializer):
    """Expose menu item pricing and its recipe."""

    ingredients = RecipeLineSerializer(many=True, required=False)

    class Meta:
        model = MenuItem
        fields = [
            "id",
            "name",
            "category",
            "price",
            "cost",
            "profit_margin",
            "ingredients",
            "is_active",
            "created_at",
            "updated_at",
        ]

    def create(self, validated_data):
        return MenuItem.objects.create(**validated_data)

    def update(self, instance, validated_data):
        for field, value in validated_data.items():
            setattr(instance, field, value)
        instance.save()
        return instance


class IngredientSerializer(serializers.ModelSerializer):
    """Show stock levels for an ingredient."""

    class Meta:
        model = Ingredient
        fields = [
            "id",
            "name",
            "unit",
            "current_stock",
            "min_stock_level",
            "last_ordered",
            "is_active",
        ]


class SaleSerializer(serializers.ModelSerializer):
    """Read-only view of a recorded sale."""

    class Meta:
        model = Sale
        fields = [
            "id",
            "sale_number",
            "sale_uuid",
            "sale_type",
            "items",
            "subtotal",
            "total_price",
            "total_cost",
            "gross_profit",
            "gp_percentage",
            "stock_deducted",
            "deduction_log",
            "staff_email",
            "staff_name",
            "sale_date",
        ]
        read_only_fields = fields


class MenuItemSaleRequestSerializer(serializers.Serializer):
    """Payload for selling a single menu item."""

    menuItemId = serializers.CharField()
    quantity = serializers.JSONField(required=False, default=1)
