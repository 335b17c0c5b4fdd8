import uuid

import django.core.serializers.json
from django.db import migrations, models

import pos.models.fields


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Ingredient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, unique=True)),
                ("unit", models.CharField(blank=True, max_length=50, null=True)),
                (
                    "current_stock",
                    pos.models.fields.StockQuantityField(blank=True, decimal_places=3, max_digits=12, null=True),
                ),
                (
                    "min_stock_level",
                    pos.models.fields.StockQuantityField(blank=True, decimal_places=3, max_digits=12, null=True),
                ),
                ("last_ordered", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "ingredients",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(blank=True, max_length=100, null=True)),
                ("price", pos.models.fields.MoneyField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("cost", pos.models.fields.MoneyField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("profit_margin", models.DecimalField(blank=True, decimal_places=2, max_digits=7, null=True)),
                ("ingredients", models.JSONField(blank=True, default=list, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "menu_items",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Sale",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sale_number", models.CharField(max_length=64, unique=True)),
                ("sale_uuid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                (
                    "sale_type",
                    models.CharField(
                        choices=[("dine_in", "Dine In"), ("takeaway", "Takeaway"), ("delivery", "Delivery")],
                        default="dine_in",
                        max_length=20,
                    ),
                ),
                ("items", models.JSONField(default=list, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ("subtotal", pos.models.fields.MoneyField(decimal_places=2, default=0, max_digits=12)),
                ("total_price", pos.models.fields.MoneyField(decimal_places=2, default=0, max_digits=12)),
                ("total_cost", pos.models.fields.MoneyField(decimal_places=2, default=0, max_digits=12)),
                ("gross_profit", pos.models.fields.MoneyField(decimal_places=2, default=0, max_digits=12)),
                ("gp_percentage", models.DecimalField(decimal_places=2, default=0, max_digits=9)),
                ("stock_deducted", models.BooleanField(default=False)),
                (
                    "deduction_log",
                    models.JSONField(default=list, encoder=django.core.serializers.json.DjangoJSONEncoder),
                ),
                ("staff_email", models.CharField(blank=True, max_length=254, null=True)),
                ("staff_name", models.CharField(blank=True, max_length=255, null=True)),
                ("sale_date", models.DateTimeField()),
            ],
            options={
                "db_table": "sales",
                "ordering": ["-sale_date"],
            },
        ),
    ]
