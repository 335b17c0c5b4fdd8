"""Services for recording sales transactions."""

from __future__ import annotations

import logging
import random
import string
import time
import uuid
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from django.utils import timezone

from ..models import SALE_TYPE_CHOICES
from .datastore import DataStore, Record, first_or_none, get_data_store
from .deduction_service import DeductionError, parse_quantity, resolve_menu_item_sale, to_decimal

logger = logging.getLogger(__name__)

SALE_NUMBER_PREFIX = "SALE"
DEFAULT_SALE_TYPE = "dine_in"
SALE_TYPES = {value for value, _label in SALE_TYPE_CHOICES}
DEDUCTION_WARNING = "Some items had stock deduction errors. Check deduction_log."
UNKNOWN_ITEM_NAME = "Unknown Item"

_BASE36 = string.digits + string.ascii_uppercase


class SaleTransactionError(Exception):
    """Raised when a sale is rejected before anything is written."""


def generate_sale_number(now: Optional[float] = None) -> str:
    """Return a human-readable ``SALE-<epoch ms>-<7 base-36 chars>`` number.

    Collisions are unlikely but possible; ``sale_uuid`` is the unique key.
    """
    millis = int((time.time() if now is None else now) * 1000)
    suffix = "".join(random.choices(_BASE36, k=7))
    return f"{SALE_NUMBER_PREFIX}-{millis}-{suffix}"


def _validate_sale(sale_data: Mapping[str, Any]) -> Tuple[List[Tuple[Any, Any]], str]:
    items = sale_data.get("items") or []
    if not items:
        raise SaleTransactionError("Sale must contain at least one item")

    sale_type = sale_data.get("sale_type") or DEFAULT_SALE_TYPE
    if sale_type not in SALE_TYPES:
        raise SaleTransactionError(f"Unknown sale type {sale_type}")

    lines: List[Tuple[Any, Any]] = []
    for item in items:
        menu_item_id = item.get("menu_item_id")
        quantity = item.get("quantity")
        if quantity is None:
            quantity = 1
        try:
            parse_quantity(quantity)
        except DeductionError as exc:
            raise SaleTransactionError(f"Menu item {menu_item_id}: {exc}") from exc
        lines.append((menu_item_id, quantity))
    return lines, sale_type


def _line_snapshot(menu_item_id: Any, menu_item: Optional[Record], quantity: Any) -> Dict[str, Any]:
    """Freeze name, price and cost of a line as they are at sale time."""
    menu_item = menu_item or {}
    qty = to_decimal(quantity)
    unit_price = to_decimal(menu_item.get("price"))
    unit_cost = to_decimal(menu_item.get("cost"))
    return {
        "menu_item_id": menu_item_id,
        "menu_item_name": menu_item.get("name") or UNKNOWN_ITEM_NAME,
        "quantity": quantity,
        "unit_price": unit_price,
        "unit_cost": unit_cost,
        "total_price": unit_price * qty,
        "total_cost": unit_cost * qty,
    }


def gp_percentage(subtotal: Decimal, gross_profit: Decimal) -> Decimal:
    """Gross profit as a percentage of ``subtotal``; zero when nothing was charged."""
    if subtotal > 0:
        return gross_profit / subtotal * 100
    return Decimal("0")


def process_sale_transaction(
    sale_data: Optional[Mapping[str, Any]],
    store: Optional[DataStore] = None,
) -> Dict[str, Any]:
    """Deduct stock for every line of a sale and persist one Sale record.

    Each menu item is fetched once and used for both the stock deduction and
    the price/cost snapshot. Deduction failures on a line mark the sale
    ``stock_deducted: False`` and add ``warnings`` but do not stop the other
    lines or the Sale record.
    """
    try:
        lines, sale_type = _validate_sale(sale_data or {})
        store = store or get_data_store()

        sale_number = generate_sale_number()
        deduction_results: List[Dict[str, Any]] = []
        all_deduction_logs: List[Dict[str, Any]] = []
        processed_items: List[Dict[str, Any]] = []
        has_errors = False
        subtotal = Decimal("0")
        total_cost = Decimal("0")

        for menu_item_id, quantity in lines:
            menu_item = first_or_none(store.menu_items, menu_item_id)

            result = resolve_menu_item_sale(store, menu_item_id, menu_item, quantity)
            deduction_results.append(result)
            if result["success"]:
                all_deduction_logs.extend(result["deductionLog"])
            else:
                has_errors = True

            snapshot = _line_snapshot(menu_item_id, menu_item, quantity)
            subtotal += snapshot["total_price"]
            total_cost += snapshot["total_cost"]
            processed_items.append(
                {k: float(v) if isinstance(v, Decimal) else v for k, v in snapshot.items()}
            )

        gross_profit = subtotal - total_cost
        sale = store.sales.create(
            {
                "sale_number": sale_number,
                "sale_uuid": str(uuid.uuid4()),
                "sale_type": sale_type,
                "items": processed_items,
                "subtotal": subtotal,
                "total_price": subtotal,
                "total_cost": total_cost,
                "gross_profit": gross_profit,
                "gp_percentage": gp_percentage(subtotal, gross_profit),
                "stock_deducted": not has_errors,
                "deduction_log": all_deduction_logs,
                "staff_email": (sale_data or {}).get("staff_email"),
                "staff_name": (sale_data or {}).get("staff_name"),
                "sale_date": timezone.now().isoformat(),
            }
        )
        logger.info(
            "Recorded sale %s with %d line(s), stock_deducted=%s",
            sale_number,
            len(lines),
            not has_errors,
        )

        response: Dict[str, Any] = {
            "success": not has_errors,
            "sale": sale,
            "deductionResults": deduction_results,
        }
        if has_errors:
            response["warnings"] = DEDUCTION_WARNING
        return response
    except SaleTransactionError as exc:
        logger.warning("Sale rejected: %s", exc)
        return {"success": False, "error": str(exc)}
    except Exception as exc:
        logger.exception("Error processing sale transaction")
        return {"success": False, "error": str(exc)}


__all__ = [
    "DEDUCTION_WARNING",
    "SaleTransactionError",
    "generate_sale_number",
    "gp_percentage",
    "process_sale_transaction",
]
