# backend/phoneshop/services/products_service.py
"""
Products Service

Products are plain key-value records; this module adds the operations
that only make sense for them: bulk import, search, low-stock listing and
the stock movements driven by sales.
"""
from __future__ import annotations

from .resource_service import PRODUCTS, create_record, find_record, list_records, save_record
from ..validation import ValidationError, number_or_zero, to_number


def bulk_create_products(products: list) -> list[dict]:
    """
    Create each product in turn.

    Not atomic: if item N fails, items 0..N-1 stay written and the error
    propagates to the caller.
    """
    created = []
    for index, product in enumerate(products):
        if not isinstance(product, dict):
            raise ValidationError(f"products[{index}] must be an object")
        created.append(create_record(PRODUCTS, product))
    return created


def search_products(query: str | None) -> list[dict]:
    """Case-insensitive substring match over name and barcode."""
    products = list_records(PRODUCTS)
    needle = (query or "").strip().lower()
    if not needle:
        return products

    matches = []
    for product in products:
        name = str(product.get("name") or "").lower()
        barcode = str(product.get("barcode") or "").lower()
        if needle in name or needle in barcode:
            matches.append(product)
    return matches


def is_low_stock(product: dict) -> bool:
    return number_or_zero(product.get("stock")) <= number_or_zero(product.get("minStock"))


def list_low_stock_products() -> list[dict]:
    return [p for p in list_records(PRODUCTS) if is_low_stock(p)]


def adjust_stock(product_id, delta) -> dict | None:
    """
    Add `delta` to a product's stock, never going below zero.

    Unknown products are skipped (returns None): sales keep a snapshot of
    the product name, so the product may have been deleted since.
    """
    product = find_record(PRODUCTS, product_id)
    if product is None:
        return None
    current = number_or_zero(product.get("stock"))
    product["stock"] = max(0, current + to_number(delta, "quantity", default=0))
    return save_record(PRODUCTS, product)
