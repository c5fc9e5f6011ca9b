"""
Sales Service - product sales and their stock side effects

A sale is a point-in-time snapshot: each item carries productName and
prices as they were at checkout. Creating a sale decrements product stock,
deleting it puts the same quantities back. The sale write and the stock
writes are separate key-value operations; there is no compensation if the
process dies between them.
"""

from __future__ import annotations

from .products_service import adjust_stock
from .resource_service import SALES, find_record, delete_record, resolve_id, save_record
from ..validation import ValidationError, number_or_zero, require_list, to_number


def normalize_item(item: dict, index: int) -> dict:
    if not isinstance(item, dict):
        raise ValidationError(f"items[{index}] must be an object")

    quantity = to_number(item.get("quantity"), f"items[{index}].quantity", default=0)
    if quantity < 0:
        raise ValidationError(f"items[{index}].quantity must be >= 0")
    sale_price = to_number(item.get("salePrice"), f"items[{index}].salePrice", default=0)

    # profit is per unit; derive it from the purchase price when omitted
    if item.get("profit") is not None:
        profit = to_number(item["profit"], f"items[{index}].profit")
    elif item.get("purchasePrice") is not None:
        profit = sale_price - to_number(item["purchasePrice"], f"items[{index}].purchasePrice")
    else:
        profit = 0

    return {**item, "quantity": quantity, "salePrice": sale_price, "profit": profit}


def compute_totals(items: list[dict]) -> tuple[float, float]:
    total_price = sum(i["salePrice"] * i["quantity"] for i in items)
    total_profit = sum(i["profit"] * i["quantity"] for i in items)
    return total_price, total_profit


def build_sale(record_id: str, payload: dict) -> dict:
    raw_items = require_list(payload, "items")
    items = [normalize_item(item, index) for index, item in enumerate(raw_items)]
    total_price, total_profit = compute_totals(items)
    return {
        **payload,
        "id": record_id,
        "items": items,
        "totalPrice": total_price,
        "totalProfit": total_profit,
    }


def create_sale(payload: dict) -> dict:
    """Store the sale, then take each sold quantity out of stock."""
    sale = build_sale(resolve_id(payload), payload)
    save_record(SALES, sale)

    for item in sale["items"]:
        adjust_stock(item.get("productId"), -item["quantity"])

    return sale


def update_sale(sale_id: str, payload: dict) -> dict:
    """
    Overwrite a sale with recomputed totals.

    Stock is not touched: edits correct prices or quantities on the
    receipt after the fact.
    """
    sale = build_sale(sale_id, payload)
    return save_record(SALES, sale)


def delete_sale(sale_id: str) -> None:
    """Put every sold quantity back into stock, then drop the sale."""
    sale = find_record(SALES, sale_id)
    if sale is not None:
        for item in sale.get("items") or []:
            if isinstance(item, dict):
                adjust_stock(item.get("productId"), number_or_zero(item.get("quantity")))

    delete_record(SALES, sale_id)
