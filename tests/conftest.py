import os
import sys

import django
import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "restaurant_ops.settings")
django.setup()

from pos.models import Ingredient, MenuItem  # noqa: E402
from pos.services.datastore import django_data_store  # noqa: E402


@pytest.fixture
def ingredient_factory():
    def create_ingredient(**kwargs):
        defaults = {
            "name": "Milk",
            "unit": "L",
            "current_stock": 10,
            "min_stock_level": 0,
            "is_active": True,
        }
        defaults.update(kwargs)
        return Ingredient.objects.create(**defaults)

    return create_ingredient


@pytest.fixture
def menu_item_factory():
    def create_menu_item(**kwargs):
        defaults = {
            "name": "Chai Latte",
            "category": "Drinks",
            "price": 3,
            "cost": 1,
            "ingredients": [],
            "is_active": True,
        }
        defaults.update(kwargs)
        return MenuItem.objects.create(**defaults)

    return create_menu_item


@pytest.fixture
def recipe_line():
    def build_line(ingredient, quantity, unit=None, name=None):
        return {
            "ingredient_id": ingredient.pk,
            "ingredient_name": name or ingredient.name,
            "quantity": quantity,
            "unit": unit or ingredient.unit,
        }

    return build_line


@pytest.fixture
def store(db):
    return django_data_store()


@pytest.fixture
def logged_in_client(client, db):
    """Log in a default user for API tests that require authentication."""

    from django.contrib.auth import get_user_model

    User = get_user_model()
    user, _ = User.objects.get_or_create(username="admin")
    client.force_login(user)
    yield client
    client.logout()
