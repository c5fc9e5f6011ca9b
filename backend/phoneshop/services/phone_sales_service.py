"""Phone (handset) sales: profit bookkeeping and marking the sold unit in phone stock."""

from __future__ import annotations

from .resource_service import PHONE_SALES, PHONE_STOCKS, find_record, resolve_id, save_record
from ..validation import number_or_zero


def with_profit(phone_sale: dict) -> dict:
    sale_price = number_or_zero(phone_sale.get("salePrice"))
    purchase_price = number_or_zero(phone_sale.get("purchasePrice"))
    return {**phone_sale, "profit": sale_price - purchase_price}


def _mark_stock_sold(phone_stock_id) -> None:
    if phone_stock_id is None:
        return
    stock = find_record(PHONE_STOCKS, str(phone_stock_id))
    if stock is None:
        return
    stock["status"] = "sold"
    save_record(PHONE_STOCKS, stock)


def create_phone_sale(payload: dict) -> dict:
    phone_sale = with_profit({**payload, "id": resolve_id(payload)})
    save_record(PHONE_SALES, phone_sale)
    _mark_stock_sold(phone_sale.get("phoneStockId"))
    return phone_sale


def update_phone_sale(phone_sale_id: str, payload: dict) -> dict:
    phone_sale = with_profit({**payload, "id": phone_sale_id})
    save_record(PHONE_SALES, phone_sale)
    _mark_stock_sold(phone_sale.get("phoneStockId"))
    return phone_sale
