from decimal import Decimal

import pytest
from django.urls import reverse

from pos.models import Ingredient, MenuItem, Sale

pytestmark = pytest.mark.django_db


@pytest.fixture
def chai(ingredient_factory, menu_item_factory, recipe_line):
    milk = ingredient_factory(name="milk", current_stock=Decimal("1.0"))
    return menu_item_factory(price=Decimal("3.00"), cost=Decimal("1.00"), ingredients=[recipe_line(milk, 0.2)])


def test_health_check(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.content == b"ok"


def test_api_requires_login(client, chai):
    resp = client.post(
        reverse("menu-item-sale"), {"menuItemId": chai.pk}, content_type="application/json"
    )
    assert resp.status_code in (401, 403)
    assert resp.json()["success"] is False


def test_menu_item_sale_endpoint(logged_in_client, chai):
    resp = logged_in_client.post(
        reverse("menu-item-sale"),
        {"menuItemId": chai.pk, "quantity": 3},
        content_type="application/json",
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["deductionLog"][0]["stock_after"] == 0.4
    assert Ingredient.objects.get(name="milk").current_stock == Decimal("0.4")


def test_menu_item_sale_endpoint_reports_shortfall(logged_in_client, chai):
    resp = logged_in_client.post(
        reverse("menu-item-sale"),
        {"menuItemId": chai.pk, "quantity": 10},
        content_type="application/json",
    )

    assert resp.status_code == 200
    assert resp.json()["errors"] == ['Insufficient stock for "milk". Required: 2 L, Available: 1 L']


def test_menu_item_sale_requires_menu_item_id(logged_in_client):
    resp = logged_in_client.post(reverse("menu-item-sale"), {}, content_type="application/json")
    assert resp.status_code == 400
    assert "menuItemId" in resp.json()["error"]


def test_sale_transaction_endpoint(logged_in_client, chai):
    resp = logged_in_client.post(
        reverse("sale-transaction"),
        {"saleData": {"items": [{"menu_item_id": chai.pk, "quantity": 2}], "staff_name": "Lee"}},
        content_type="application/json",
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["sale"]["stock_deducted"] is True
    assert Sale.objects.get().staff_name == "Lee"


def test_sale_transaction_endpoint_accepts_bare_payload(logged_in_client, chai):
    resp = logged_in_client.post(
        reverse("sale-transaction"),
        {"items": [{"menu_item_id": chai.pk, "quantity": 10}]},
        content_type="application/json",
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is False
    assert body["warnings"]
    assert Sale.objects.get().stock_deducted is False


def test_sale_transaction_endpoint_rejects_empty_sale(logged_in_client):
    resp = logged_in_client.post(
        reverse("sale-transaction"), {"saleData": {"items": []}}, content_type="application/json"
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Sale must contain at least one item"}
    assert not Sale.objects.exists()


def test_sales_are_read_only(logged_in_client):
    resp = logged_in_client.post("/api/sales/", {}, content_type="application/json")
    assert resp.status_code == 405


def test_create_menu_item_with_recipe(logged_in_client, ingredient_factory):
    milk = ingredient_factory(name="milk")
    resp = logged_in_client.post(
        "/api/menu-items/",
        {
            "name": "Flat White",
            "price": "3.20",
            "cost": "0.90",
            "ingredients": [
                {"ingredient_id": milk.pk, "ingredient_name": "milk", "quantity": "0.15", "unit": "L"}
            ],
        },
        content_type="application/json",
    )

    assert resp.status_code == 201, resp.content
    item = MenuItem.objects.get(name="Flat White")
    assert item.ingredients == [
        {"ingredient_id": milk.pk, "ingredient_name": "milk", "quantity": 0.15, "unit": "L"}
    ]


def test_recipe_quantity_must_be_positive(logged_in_client):
    resp = logged_in_client.post(
        "/api/menu-items/",
        {
            "name": "Air",
            "ingredients": [{"ingredient_name": "nothing", "quantity": 0, "unit": "g"}],
        },
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert not MenuItem.objects.filter(name="Air").exists()


def test_low_stock_report(logged_in_client, ingredient_factory):
    ingredient_factory(name="milk", current_stock=1, min_stock_level=2)
    ingredient_factory(name="tea", current_stock=10, min_stock_level=2)

    resp = logged_in_client.get(reverse("report-low-stock"))

    assert resp.status_code == 200
    assert [row["name"] for row in resp.json()] == ["milk"]


def test_menu_profitability_report(logged_in_client, chai):
    resp = logged_in_client.get(reverse("report-menu-profitability"))
    assert resp.status_code == 200
    assert resp.json()["items"][0]["margin"] == pytest.approx(66.67, abs=0.01)


def test_sales_summary_report(logged_in_client, chai):
    logged_in_client.post(
        reverse("sale-transaction"),
        {"items": [{"menu_item_id": chai.pk}]},
        content_type="application/json",
    )

    resp = logged_in_client.get(reverse("report-sales-summary"))

    assert resp.status_code == 200
    assert resp.json()["sale_count"] == 1
    assert resp.json()["revenue"] == 3.0
