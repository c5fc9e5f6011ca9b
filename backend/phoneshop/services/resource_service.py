# Overview: Service-layer operations for plain resources; every record is one key-value row.

"""
Resource Service - generic CRUD over the key-value store

Each resource type owns a key prefix; a record with id X is stored at
"<prefix>:X". There is no uniqueness check (a repeated id overwrites), no
existence check on plain update, and deleting an absent key is a no-op.
Specialized services (sales, repairs, customers, phone sales) build on
these helpers and add their own side effects.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from .kv_store import kv
from ..time_utils import epoch_millis
from ..validation import NotFoundError


@dataclass(frozen=True)
class ResourceType:
    name: str          # URL segment, e.g. "phone-sales"
    prefix: str        # key namespace, e.g. "phonesale"
    label: str         # human readable, used in error messages

    def key(self, record_id) -> str:
        return f"{self.prefix}:{record_id}"

    @property
    def scan_prefix(self) -> str:
        return f"{self.prefix}:"


CATEGORIES = ResourceType("categories", "category", "Category")
PRODUCTS = ResourceType("products", "product", "Product")
SALES = ResourceType("sales", "sale", "Sale")
REPAIRS = ResourceType("repairs", "repair", "Repair")
CUSTOMERS = ResourceType("customers", "customer", "Customer")
CUSTOMER_TRANSACTIONS = ResourceType("customer-transactions", "transaction", "Customer transaction")
PHONE_SALES = ResourceType("phone-sales", "phonesale", "Phone sale")
PHONE_STOCKS = ResourceType("phone-stocks", "phonestock", "Phone stock")
EXPENSES = ResourceType("expenses", "expense", "Expense")
CUSTOMER_REQUESTS = ResourceType("customer-requests", "request", "Customer request")

RESOURCE_TYPES = {
    r.name: r
    for r in (
        CATEGORIES, PRODUCTS, SALES, REPAIRS, CUSTOMERS, CUSTOMER_TRANSACTIONS,
        PHONE_SALES, PHONE_STOCKS, EXPENSES, CUSTOMER_REQUESTS,
    )
}


_id_lock = threading.Lock()
_last_id = 0


def new_record_id() -> str:
    """
    Timestamp-derived id: epoch milliseconds, bumped by one when two ids
    are requested within the same millisecond in this process.
    """
    global _last_id
    with _id_lock:
        candidate = epoch_millis()
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return str(candidate)


def resolve_id(payload: dict) -> str:
    record_id = payload.get("id")
    if record_id is None or str(record_id).strip() == "":
        return new_record_id()
    return str(record_id)


def list_records(resource: ResourceType) -> list[dict]:
    return kv.scan(resource.scan_prefix)


def find_record(resource: ResourceType, record_id: str) -> dict | None:
    return kv.get(resource.key(record_id))


def get_record(resource: ResourceType, record_id: str) -> dict:
    record = kv.get(resource.key(record_id))
    if record is None:
        raise NotFoundError(f"{resource.label} not found")
    return record


def save_record(resource: ResourceType, record: dict) -> dict:
    """Write a record that already carries its id."""
    kv.set(resource.key(record["id"]), record)
    return record


def create_record(resource: ResourceType, payload: dict) -> dict:
    record_id = resolve_id(payload)
    record = {**payload, "id": record_id}
    return save_record(resource, record)


def update_record(resource: ResourceType, record_id: str, payload: dict) -> dict:
    """Unconditional overwrite; the path id wins over any id in the body."""
    record = {**payload, "id": record_id}
    return save_record(resource, record)


def delete_record(resource: ResourceType, record_id: str) -> None:
    kv.delete(resource.key(record_id))
