from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .datastore import DataStore, Record, get_data_store
from .deduction_service import to_decimal
from .sale_service import gp_percentage

TOP_PERFORMER_COUNT = 5
LOW_MARGIN_THRESHOLD = 30


def low_stock_ingredients(store: Optional[DataStore] = None) -> List[Record]:
    """Ingredients at or below their minimum stock level, ordered by name.

    A missing stock figure or minimum level counts as zero.
    """
    store = store or get_data_store()
    flagged = [
        row
        for row in store.ingredients.filter({})
        if row.get("is_active", True)
        and to_decimal(row.get("current_stock")) <= to_decimal(row.get("min_stock_level"))
    ]
    return sorted(flagged, key=lambda row: (row.get("name") or "").lower())


def _margin(row: Record) -> Decimal:
    if row.get("profit_margin") not in (None, ""):
        return to_decimal(row["profit_margin"])
    price = to_decimal(row.get("price"))
    cost = to_decimal(row.get("cost"))
    return (price - cost) / price * 100


def menu_profitability(
    store: Optional[DataStore] = None,
    low_margin_threshold: float = LOW_MARGIN_THRESHOLD,
) -> Dict[str, Any]:
    """Rank priced and costed menu items by margin.

    Items missing a price or a cost are left out of the ranking but still
    count towards ``total_items``.
    """
    store = store or get_data_store()
    rows = store.menu_items.filter({})
    ranked = [
        {
            "id": row.get("id"),
            "name": row.get("name") or "Item",
            "category": row.get("category") or "Other",
            "price": float(to_decimal(row.get("price"))),
            "cost": float(to_decimal(row.get("cost"))),
            "margin": float(_margin(row)),
        }
        for row in rows
        if to_decimal(row.get("price")) and to_decimal(row.get("cost"))
    ]
    ranked.sort(key=lambda entry: entry["margin"], reverse=True)

    average = sum(entry["margin"] for entry in ranked) / len(ranked) if ranked else 0
    return {
        "items": ranked,
        "top_performers": ranked[:TOP_PERFORMER_COUNT],
        "low_margin": [e for e in ranked if e["margin"] < low_margin_threshold][:TOP_PERFORMER_COUNT],
        "average_margin": round(average, 1),
        "total_items": len(rows),
        "active_items": len(ranked),
    }


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=dt_timezone.utc)


def sales_summary(
    store: Optional[DataStore] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Dict[str, Any]:
    """Totals over sales whose ``sale_date`` falls within ``start``..``end``.

    Both bounds are whole UTC days and are applied by the store query.
    """
    store = store or get_data_store()
    criteria: Dict[str, Any] = {}
    if start:
        criteria["sale_date__gte"] = _day_start(start)
    if end:
        criteria["sale_date__lt"] = _day_start(end + timedelta(days=1))
    sales = store.sales.filter(criteria)

    revenue = sum((to_decimal(s.get("subtotal")) for s in sales), Decimal("0"))
    cost = sum((to_decimal(s.get("total_cost")) for s in sales), Decimal("0"))
    gross_profit = revenue - cost
    return {
        "sale_count": len(sales),
        "revenue": float(revenue),
        "total_cost": float(cost),
        "gross_profit": float(gross_profit),
        "gp_percentage": round(float(gp_percentage(revenue, gross_profit)), 1),
        "undeducted_sales": sum(1 for s in sales if not s.get("stock_deducted")),
    }
