"""Inventory deduction for menu item sales.

A sale of a menu item walks its recipe (the ``ingredients`` list stored on
the menu item) and draws each ingredient's ``current_stock`` down by
``quantity per serving * quantity sold``. Lines that cannot be deducted are
reported in ``errors`` while the remaining lines still go through; only a
missing menu item, an empty recipe or an invalid quantity stop the whole
call before any stock is touched.

Every stock write is conditional on the ``current_stock`` value that was
read, so two concurrent sales cannot both spend the same stock. When the
condition fails the ingredient is re-read and re-checked.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from .datastore import DataStore, Record, first_or_none, get_data_store

logger = logging.getLogger(__name__)

DEFAULT_STOCK_UPDATE_ATTEMPTS = 5
# Matches the three decimal places of Ingredient.current_stock.
STOCK_QUANTUM = Decimal("0.001")


class DeductionError(Exception):
    """Raised when a menu item cannot be sold at all."""


# ---------------------------------------------------------------------------
# Helper utilities
# ---------------------------------------------------------------------------


def _timestamp() -> str:
    return timezone.now().isoformat()


def to_decimal(value: Any) -> Decimal:
    """Return ``value`` as a :class:`Decimal`, treating ``None`` as zero.

    Floats go through ``str`` so ``0.2`` becomes ``Decimal('0.2')`` rather
    than its binary approximation.
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, bool):
        raise InvalidOperation(f"{value!r} is not a number")
    return Decimal(str(value))


def format_quantity(value: Decimal) -> str:
    """Render ``value`` without trailing zeros or exponent (``0.500`` -> ``0.5``)."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def quantize_stock(value: Decimal) -> Decimal:
    """Round ``value`` to the precision stock is stored at."""
    return value.quantize(STOCK_QUANTUM, rounding=ROUND_HALF_UP)


def _amount(value: Decimal, unit: Optional[str]) -> str:
    return f"{format_quantity(value)} {unit}" if unit else format_quantity(value)


def parse_quantity(quantity: Any) -> Decimal:
    """Validate a quantity sold and return it as a positive ``Decimal``."""
    message = f"Invalid quantity {quantity}. Quantity must be greater than 0."
    try:
        qty = to_decimal(quantity)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise DeductionError(message) from exc
    if not qty.is_finite() or qty <= 0:
        raise DeductionError(message)
    return qty


def _failure(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message, "timestamp": _timestamp()}


def _stock_update_attempts() -> int:
    attempts = getattr(settings, "POS_STOCK_UPDATE_ATTEMPTS", DEFAULT_STOCK_UPDATE_ATTEMPTS)
    return max(1, int(attempts))


# ---------------------------------------------------------------------------
# Per-line deduction
# ---------------------------------------------------------------------------


def _deduct_line(
    store: DataStore,
    line: Mapping[str, Any],
    quantity: Decimal,
    attempts: int,
) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Deduct one recipe line; return ``(log_entry, None)`` or ``(None, error)``."""
    ingredient_id = line.get("ingredient_id")
    name = line.get("ingredient_name")
    unit = line.get("unit")

    if not ingredient_id:
        return None, f'Ingredient "{name}" has no ingredient_id. Skipping deduction.'

    try:
        per_serving = Decimal(str(line.get("quantity")))
    except (InvalidOperation, ValueError):
        per_serving = Decimal("NaN")
    if not per_serving.is_finite():
        return None, f'Ingredient "{name}" has no valid recipe quantity. Skipping deduction.'

    required = quantize_stock(per_serving * quantity)

    for attempt in range(attempts):
        ingredient = first_or_none(store.ingredients, ingredient_id)
        if ingredient is None:
            return None, (
                f'Ingredient "{name}" (ID: {ingredient_id}) not found in inventory. '
                "Cannot deduct stock."
            )

        stock_read = ingredient.get("current_stock")
        current_stock = to_decimal(stock_read)
        if current_stock < required:
            return None, (
                f'Insufficient stock for "{name}". '
                f"Required: {_amount(required, unit)}, Available: {_amount(current_stock, unit)}"
            )

        new_stock = quantize_stock(current_stock - required)
        updated = store.ingredients.update(
            ingredient_id,
            {
                "current_stock": new_stock,
                "last_ordered": ingredient.get("last_ordered"),
            },
            expected={"current_stock": stock_read},
        )
        if updated is None:
            logger.warning(
                "Stock for ingredient %s changed during deduction (attempt %d/%d)",
                ingredient_id,
                attempt + 1,
                attempts,
            )
            continue

        return {
            "ingredient_id": ingredient_id,
            "ingredient_name": name,
            "quantity_deducted": float(required),
            "unit": unit,
            "stock_before": float(current_stock),
            "stock_after": float(new_stock),
        }, None

    return None, f'Stock for "{name}" changed during deduction. Please retry.'


def _deduct_recipe(
    store: DataStore,
    menu_item: Record,
    quantity: Decimal,
    quantity_sold: Any,
) -> Dict[str, Any]:
    recipe = menu_item.get("ingredients") or []
    if not recipe:
        raise DeductionError(
            f'Menu item "{menu_item.get("name")}" has no recipe/ingredients defined. '
            "Cannot process sale."
        )

    attempts = _stock_update_attempts()
    deduction_log: List[Dict[str, Any]] = []
    errors: List[str] = []
    for line in recipe:
        entry, error = _deduct_line(store, line, quantity, attempts)
        if error:
            logger.warning("Menu item %s: %s", menu_item.get("id"), error)
            errors.append(error)
            continue
        logger.info(
            "Deducted %s %s of ingredient %s for menu item %s",
            entry["quantity_deducted"],
            entry["unit"],
            entry["ingredient_id"],
            menu_item.get("id"),
        )
        deduction_log.append(entry)

    result: Dict[str, Any] = {
        "success": not errors,
        "menuItemName": menu_item.get("name"),
        "quantitySold": quantity_sold,
        "deductionLog": deduction_log,
        "timestamp": _timestamp(),
    }
    if errors:
        result["errors"] = errors
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_menu_item_sale(
    store: DataStore,
    menu_item_id: Any,
    menu_item: Optional[Record],
    quantity: Any = 1,
) -> Dict[str, Any]:
    """Deduct stock for an already fetched ``menu_item``.

    ``menu_item`` is ``None`` when the lookup of ``menu_item_id`` found
    nothing. Never raises; failures come back as ``success: False``.
    """
    if quantity is None:
        quantity = 1
    try:
        qty = parse_quantity(quantity)
        if menu_item is None:
            raise DeductionError(f"Menu item {menu_item_id} not found")
        return _deduct_recipe(store, menu_item, qty, quantity)
    except DeductionError as exc:
        logger.warning("Sale of menu item %s rejected: %s", menu_item_id, exc)
        return _failure(str(exc))
    except Exception as exc:
        logger.exception("Error deducting stock for menu item %s", menu_item_id)
        return _failure(str(exc))


def process_menu_item_sale(
    menu_item_id: Any,
    quantity: Any = 1,
    store: Optional[DataStore] = None,
) -> Dict[str, Any]:
    """Sell ``quantity`` of a menu item and deduct its recipe from inventory.

    Returns ``{success, menuItemName, quantitySold, deductionLog, errors?,
    timestamp}``, or ``{success: False, error, timestamp}`` when the sale
    could not be attempted.
    """
    try:
        store = store or get_data_store()
        menu_item = first_or_none(store.menu_items, menu_item_id)
    except Exception as exc:
        logger.exception("Error loading menu item %s", menu_item_id)
        return _failure(str(exc))
    return resolve_menu_item_sale(store, menu_item_id, menu_item, quantity)


__all__ = [
    "DeductionError",
    "format_quantity",
    "parse_quantity",
    "process_menu_item_sale",
    "quantize_stock",
    "resolve_menu_item_sale",
    "to_decimal",
]
