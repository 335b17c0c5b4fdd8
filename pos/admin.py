from django.contrib import admin

from .models import Ingredient, MenuItem, Sale


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "cost", "is_active")
    search_fields = ("name",)


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    list_display = ("name", "current_stock", "min_stock_level", "unit", "last_ordered")
    search_fields = ("name",)


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ("sale_number", "sale_type", "subtotal", "gp_percentage", "stock_deducted", "sale_date")
    list_filter = ("sale_type", "stock_deducted")
    readonly_fields = [f.name for f in Sale._meta.fields]
