# Overview: Pure aggregation functions over record lists already loaded from the store.

"""
Dashboard analytics

Everything here takes plain lists of dicts and returns plain dicts; no
function touches the store. Date filtering works on local calendar days:
a range [start, end] covers start 00:00 through end 23:59:59.999.

Customer identity is the phone number. A customer may exist only as a
name/phone pair on a sale, repair or phone sale, so the customer list is
rebuilt by merging those sources with the explicit customer records.
"""

from __future__ import annotations

from datetime import date, datetime, time

from .products_service import is_low_stock
from ..time_utils import parse_local_datetime
from ..validation import number_or_zero

REVENUE_REPAIR_STATUSES = ("completed", "delivered")
REPAIR_ITEM_PREFIX = "repair-"

END_OF_DAY = time(23, 59, 59, 999000)


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    return datetime.combine(start, time.min), datetime.combine(end, END_OF_DAY)


def is_date_in_range(value, start: date, end: date) -> bool:
    """Inclusive on both calendar days. Missing or unparseable dates are out."""
    dt = parse_local_datetime(value)
    if dt is None:
        return False
    lower, upper = day_bounds(start, end)
    return lower <= dt <= upper


def _sum(records, field: str):
    return sum(number_or_zero(r.get(field)) for r in records)


def _is_repair_sale(sale: dict) -> bool:
    for item in sale.get("items") or []:
        product_id = str((item or {}).get("productId") or "")
        if product_id.startswith(REPAIR_ITEM_PREFIX):
            return True
    return False


def product_sale_stats(sales: list[dict], start: date, end: date) -> dict:
    """Product sales in range; sales that bill a repair are counted under repairs."""
    filtered = [
        s for s in sales
        if not _is_repair_sale(s) and is_date_in_range(s.get("date"), start, end)
    ]
    return {
        "count": len(filtered),
        "revenue": _sum(filtered, "totalPrice"),
        "profit": _sum(filtered, "totalProfit"),
        "items": filtered,
    }


def repair_stats(repairs: list[dict], start: date, end: date) -> dict:
    """Only finished repairs earn revenue."""
    filtered = [
        r for r in repairs
        if r.get("status") in REVENUE_REPAIR_STATUSES
        and is_date_in_range(r.get("createdAt"), start, end)
    ]
    revenue = _sum(filtered, "repairCost")
    cost = _sum(filtered, "partsCost")
    return {
        "count": len(filtered),
        "revenue": revenue,
        "cost": cost,
        "profit": revenue - cost,
        "items": filtered,
    }


def phone_sale_stats(phone_sales: list[dict], start: date, end: date) -> dict:
    filtered = [ps for ps in phone_sales if is_date_in_range(ps.get("date"), start, end)]
    return {
        "count": len(filtered),
        "revenue": _sum(filtered, "salePrice"),
        "profit": _sum(filtered, "profit"),
        "cost": _sum(filtered, "purchasePrice"),
        "items": filtered,
    }


def cari_stats(customers: list[dict]) -> dict:
    total_debt = _sum(customers, "debt")
    total_credit = _sum(customers, "credit")
    return {
        "totalDebt": total_debt,
        "totalCredit": total_credit,
        "balance": total_debt - total_credit,
        "count": len(customers),
    }


def profit_loss(*rollups: dict) -> dict:
    total_revenue = sum(r["revenue"] for r in rollups)
    total_profit = sum(r["profit"] for r in rollups)
    return {
        "totalRevenue": total_revenue,
        "totalProfit": total_profit,
        "totalCost": total_revenue - total_profit,
        "margin": total_profit / total_revenue if total_revenue else 0,
    }


def dashboard(
    *,
    sales: list[dict],
    repairs: list[dict],
    phone_sales: list[dict],
    customers: list[dict],
    start: date,
    end: date,
) -> dict:
    product = product_sale_stats(sales, start, end)
    repair = repair_stats(repairs, start, end)
    phone = phone_sale_stats(phone_sales, start, end)
    return {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "productSales": product,
        "repairs": repair,
        "phoneSales": phone,
        "cari": cari_stats(customers),
        "profitLoss": profit_loss(product, repair, phone),
    }


def merge_customers(
    *,
    customers: list[dict],
    sales: list[dict],
    repairs: list[dict],
    phone_sales: list[dict],
) -> list[dict]:
    """
    One entry per phone number, in first-seen order: sales, repairs,
    phone sales, then explicit customer records. An explicit record whose
    phone was already seen only contributes its email and notes.
    """
    merged: dict[str, dict] = {}

    def _discover(phone, name, created_at):
        if not phone or phone in merged:
            return
        merged[phone] = {"id": phone, "name": name, "phone": phone, "createdAt": created_at}

    for sale in sales:
        info = sale.get("customerInfo")
        if info:
            _discover(info.get("phone"), info.get("name"), sale.get("date"))

    for repair in repairs:
        _discover(repair.get("customerPhone"), repair.get("customerName"), repair.get("createdAt"))

    for phone_sale in phone_sales:
        _discover(phone_sale.get("customerPhone"), phone_sale.get("customerName"), phone_sale.get("date"))

    for customer in customers:
        phone = customer.get("phone")
        if not phone:
            continue
        if phone not in merged:
            merged[phone] = dict(customer)
            continue
        existing = merged[phone]
        existing["email"] = customer.get("email") or existing.get("email")
        existing["notes"] = customer.get("notes") or existing.get("notes")

    return list(merged.values())


def customer_stats(
    phone: str,
    *,
    sales: list[dict],
    repairs: list[dict],
    phone_sales: list[dict],
) -> dict:
    """Lifetime totals for the customer identified by `phone`."""
    customer_sales = [s for s in sales if (s.get("customerInfo") or {}).get("phone") == phone]
    customer_repairs = [r for r in repairs if r.get("customerPhone") == phone]
    customer_phone_sales = [ps for ps in phone_sales if ps.get("customerPhone") == phone]

    total_revenue = (
        _sum(customer_sales, "totalPrice")
        + _sum(customer_repairs, "repairCost")
        + _sum(customer_phone_sales, "salePrice")
    )

    # (parsed, raw) pairs; purchase dates are reported as stored
    dated = [
        (parse_local_datetime(raw), raw) for raw in (
            [s.get("date") for s in customer_sales]
            + [r.get("createdAt") for r in customer_repairs]
            + [ps.get("date") for ps in customer_phone_sales]
        )
    ]
    dated = [(dt, raw) for dt, raw in dated if dt is not None]
    first = min(dated, key=lambda pair: pair[0]) if dated else None
    last = max(dated, key=lambda pair: pair[0]) if dated else None

    return {
        "totalRevenue": total_revenue,
        "totalTransactions": len(customer_sales) + len(customer_repairs) + len(customer_phone_sales),
        "firstPurchaseDate": first[1] if first else None,
        "lastPurchaseDate": last[1] if last else None,
        "sales": customer_sales,
        "repairs": customer_repairs,
        "phoneSales": customer_phone_sales,
    }


def customer_overview(
    *,
    customers: list[dict],
    sales: list[dict],
    repairs: list[dict],
    phone_sales: list[dict],
) -> list[dict]:
    """Merged customers, each with their lifetime totals (record lists omitted)."""
    overview = []
    for customer in merge_customers(customers=customers, sales=sales, repairs=repairs, phone_sales=phone_sales):
        stats = customer_stats(customer["phone"], sales=sales, repairs=repairs, phone_sales=phone_sales)
        overview.append({
            **customer,
            "totalRevenue": stats["totalRevenue"],
            "totalTransactions": stats["totalTransactions"],
            "firstPurchaseDate": stats["firstPurchaseDate"],
            "lastPurchaseDate": stats["lastPurchaseDate"],
        })
    return overview


def stock_valuation(products: list[dict]) -> dict:
    sale_value = sum(number_or_zero(p.get("stock")) * number_or_zero(p.get("salePrice")) for p in products)
    purchase_value = sum(number_or_zero(p.get("stock")) * number_or_zero(p.get("purchasePrice")) for p in products)
    low_stock = [p for p in products if is_low_stock(p)]
    return {
        "productCount": len(products),
        "totalSaleValue": sale_value,
        "totalPurchaseValue": purchase_value,
        "potentialProfit": sale_value - purchase_value,
        "lowStockCount": len(low_stock),
    }
