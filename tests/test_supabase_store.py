import operator
from datetime import date
from decimal import Decimal

import pytest

from pos.services import kpis, supabase_store
from pos.services.deduction_service import process_menu_item_sale
from pos.services.sale_service import process_sale_transaction


class DummyResp:
    def __init__(self, data):
        self.data = data


class DummyQuery:
    """Minimal stand-in for a PostgREST request builder over in-memory rows."""

    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.action = None
        self.payload = None
        self.predicates = []

    def _log(self, *call):
        self.client.calls.append((self.name,) + call)
        return self

    def select(self, fields):
        self.action = "select"
        return self._log("select", fields)

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self._log("update", payload)

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self._log("insert", payload)

    def eq(self, field, value):
        self.predicates.append(lambda row: row.get(field) == value)
        return self._log("eq", field, value)

    def is_(self, field, value):
        assert value == "null"
        self.predicates.append(lambda row: row.get(field) is None)
        return self._log("is_", field, value)

    def _compare(self, name, op, field, value):
        self.predicates.append(lambda row: row.get(field) is not None and op(row[field], value))
        return self._log(name, field, value)

    def gte(self, field, value):
        return self._compare("gte", operator.ge, field, value)

    def gt(self, field, value):
        return self._compare("gt", operator.gt, field, value)

    def lte(self, field, value):
        return self._compare("lte", operator.le, field, value)

    def lt(self, field, value):
        return self._compare("lt", operator.lt, field, value)

    def execute(self):
        rows = self.client.tables.setdefault(self.name, [])
        if self.action == "insert":
            row = dict(self.payload, id=len(rows) + 1)
            rows.append(row)
            return DummyResp([row])
        matched = [row for row in rows if all(p(row) for p in self.predicates)]
        if self.action == "update":
            for row in matched:
                row.update(self.payload)
        return DummyResp([dict(row) for row in matched])


class DummyClient:
    def __init__(self, tables=None):
        self.tables = tables or {}
        self.calls = []

    def table(self, name):
        return DummyQuery(self, name)


@pytest.fixture
def client():
    return DummyClient(
        {
            "menu_items": [
                {
                    "id": 1,
                    "name": "Chai Latte",
                    "price": 3.5,
                    "cost": 1.0,
                    "ingredients": [
                        {"ingredient_id": 7, "ingredient_name": "milk", "quantity": 0.2, "unit": "L"}
                    ],
                }
            ],
            "ingredients": [
                {"id": 7, "name": "milk", "current_stock": 1.0, "last_ordered": "2026-02-01"}
            ],
            "sales": [],
        }
    )


def test_filter_builds_eq_query(client):
    collection = supabase_store.SupabaseCollection(client, "ingredients")

    rows = collection.filter({"id": 7})

    assert rows[0]["name"] == "milk"
    assert client.calls == [("ingredients", "select", "*"), ("ingredients", "eq", "id", 7)]


def test_filter_turns_lookup_suffixes_into_range_queries(client):
    client.tables["sales"] = [
        {"id": 1, "sale_date": "2026-04-30T23:59:00+00:00", "subtotal": 5.0, "total_cost": 1.0},
        {"id": 2, "sale_date": "2026-05-10T09:00:00+00:00", "subtotal": 8.0, "total_cost": 2.0},
        {"id": 3, "sale_date": "2026-06-01T00:00:00+00:00", "subtotal": 9.0, "total_cost": 3.0},
    ]
    store = supabase_store.supabase_data_store(client)

    summary = kpis.sales_summary(store, start=date(2026, 5, 1), end=date(2026, 5, 31))

    assert summary["sale_count"] == 1
    assert summary["revenue"] == 8.0
    assert ("sales", "gte", "sale_date", "2026-05-01T00:00:00+00:00") in client.calls
    assert ("sales", "lt", "sale_date", "2026-06-01T00:00:00+00:00") in client.calls


def test_update_sends_floats_and_checks_expected(client):
    collection = supabase_store.SupabaseCollection(client, "ingredients")

    assert collection.update(7, {"current_stock": Decimal("0.5")}, expected={"current_stock": 2.0}) is None
    updated = collection.update(7, {"current_stock": Decimal("0.5")}, expected={"current_stock": 1.0})

    assert updated["current_stock"] == 0.5
    assert ("ingredients", "update", {"current_stock": 0.5}) in client.calls


def test_update_expected_none_uses_is_null(client):
    client.tables["ingredients"][0]["current_stock"] = None
    collection = supabase_store.SupabaseCollection(client, "ingredients")

    updated = collection.update(7, {"current_stock": 3}, expected={"current_stock": None})

    assert updated["current_stock"] == 3
    assert ("ingredients", "is_", "current_stock", "null") in client.calls


def test_create_without_rows_raises():
    class EmptyInsertClient(DummyClient):
        def table(self, name):
            query = DummyQuery(self, name)
            query.execute = lambda: DummyResp([])
            return query

    collection = supabase_store.SupabaseCollection(EmptyInsertClient(), "sales")
    with pytest.raises(supabase_store.SupabaseException):
        collection.create({"sale_number": "SALE-1"})


def test_menu_item_sale_against_supabase(client, settings):
    settings.POS_SUPABASE_TABLES = {"menu_items": "menu_items", "ingredients": "ingredients", "sales": "sales"}
    store = supabase_store.supabase_data_store(client)

    result = process_menu_item_sale(1, 3, store=store)

    assert result["success"] is True
    assert result["deductionLog"][0]["stock_after"] == 0.4
    milk = client.tables["ingredients"][0]
    assert milk["current_stock"] == 0.4
    assert milk["last_ordered"] == "2026-02-01"


def test_sale_transaction_against_supabase(client):
    store = supabase_store.supabase_data_store(client)

    result = process_sale_transaction(
        {"items": [{"menu_item_id": 1, "quantity": 2}], "staff_name": "Ana"}, store=store
    )

    assert result["success"] is True
    sale = client.tables["sales"][0]
    assert sale["subtotal"] == 7.0
    assert sale["total_cost"] == 2.0
    assert sale["gp_percentage"] == pytest.approx(71.4285714)
    assert sale["stock_deducted"] is True
    assert isinstance(sale["sale_uuid"], str)
    assert sale["deduction_log"][0]["quantity_deducted"] == 0.4


def test_custom_table_names(client, settings):
    settings.POS_SUPABASE_TABLES = {"menu_items": "menu", "ingredients": "stock", "sales": "checkouts"}
    store = supabase_store.supabase_data_store(client)
    assert store.menu_items.table == "menu"
    assert store.ingredients.table == "stock"
    assert store.sales.table == "checkouts"


def test_client_not_configured(monkeypatch):
    monkeypatch.setattr(supabase_store, "_client", None)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)

    assert supabase_store.get_supabase_client() is None
    with pytest.raises(supabase_store.SupabaseException):
        supabase_store.supabase_data_store()


def test_client_is_cached(monkeypatch):
    monkeypatch.setattr(supabase_store, "_client", None)
    monkeypatch.setenv("SUPABASE_URL", "url")
    monkeypatch.setenv("SUPABASE_KEY", "key")
    created = []

    def fake_create(url, key):
        created.append((url, key))
        return DummyClient()

    monkeypatch.setattr(supabase_store, "create_client", fake_create)

    first = supabase_store.get_supabase_client()
    assert supabase_store.get_supabase_client() is first
    assert created == [("url", "key")]


def test_unconfigured_supabase_sale_returns_error(monkeypatch, settings):
    settings.POS_DATA_STORE = "supabase"
    monkeypatch.setattr(supabase_store, "_client", None)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)

    result = process_menu_item_sale(1, 1)

    assert result["success"] is False
    assert "not configured" in result["error"]
