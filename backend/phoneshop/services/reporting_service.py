# Overview: Service-layer operations for reporting; period summaries and dashboard rollups.

from __future__ import annotations

from datetime import date, datetime, timedelta

from . import analytics_service
from .resource_service import CUSTOMERS, PHONE_SALES, PRODUCTS, REPAIRS, SALES, list_records
from ..time_utils import local_now, parse_calendar_date, parse_local_datetime
from ..validation import ValidationError, number_or_zero

PERIODS = ("daily", "weekly", "monthly", "all")
DEFAULT_PERIOD = "daily"


class ReportError(ValidationError):
    """Raised when report parameters cannot be used."""


def period_start(period: str, now: datetime | None = None) -> datetime | None:
    """
    Cutoff for a summary period, on the local calendar.

    daily   -> today 00:00
    weekly  -> exactly 7 days before now
    monthly -> first day of the current month 00:00
    other   -> None (no cutoff)
    """
    now = now or local_now()
    if period == "daily":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "weekly":
        return now - timedelta(days=7)
    if period == "monthly":
        return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return None


def summarize_sales(sales: list[dict], cutoff: datetime | None) -> dict:
    """Keep sales dated at or after `cutoff` and total them."""
    if cutoff is None:
        filtered = list(sales)
    else:
        filtered = []
        for sale in sales:
            sale_dt = parse_local_datetime(sale.get("date"))
            if sale_dt is not None and sale_dt >= cutoff:
                filtered.append(sale)

    return {
        "totalSales": len(filtered),
        "totalRevenue": sum(number_or_zero(s.get("totalPrice")) for s in filtered),
        "totalProfit": sum(number_or_zero(s.get("totalProfit")) for s in filtered),
        "sales": filtered,
    }


def sales_summary(period: str | None = None, now: datetime | None = None) -> dict:
    period = period or DEFAULT_PERIOD
    summary = summarize_sales(list_records(SALES), period_start(period, now))
    return {"period": period, **summary}


def _parse_day(value: str | None, field: str) -> date | None:
    try:
        return parse_calendar_date(value)
    except ValueError:
        raise ReportError(f"{field} must be a YYYY-MM-DD date")


def dashboard_report(start: str | None = None, end: str | None = None) -> dict:
    """
    Revenue/profit rollups for [start, end]; defaults to the current
    month up to and including today.
    """
    today = local_now().date()
    start_day = _parse_day(start, "start") or today.replace(day=1)
    end_day = _parse_day(end, "end") or today
    if start_day > end_day:
        raise ReportError("start must not be after end")

    return analytics_service.dashboard(
        sales=list_records(SALES),
        repairs=list_records(REPAIRS),
        phone_sales=list_records(PHONE_SALES),
        customers=list_records(CUSTOMERS),
        start=start_day,
        end=end_day,
    )


def customer_report() -> list[dict]:
    return analytics_service.customer_overview(
        customers=list_records(CUSTOMERS),
        sales=list_records(SALES),
        repairs=list_records(REPAIRS),
        phone_sales=list_records(PHONE_SALES),
    )


def stock_value_report() -> dict:
    return analytics_service.stock_valuation(list_records(PRODUCTS))
