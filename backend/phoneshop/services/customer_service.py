# Overview: Service-layer operations for the customer ledger (cari); debt/credit postings.

"""
Customer ledger invariants

- Customer.debt / Customer.credit change only through post_transaction.
- payment_received never takes debt below 0; payment_made never takes
  credit below 0.
- The customer write and the transaction write are two independent
  key-value operations, customer first.
"""

from __future__ import annotations

from .resource_service import (
    CUSTOMERS,
    CUSTOMER_TRANSACTIONS,
    get_record,
    list_records,
    new_record_id,
    save_record,
)
from ..time_utils import now_iso
from ..validation import ValidationError, number_or_zero, require_choice, to_number

TRANSACTION_TYPES = ("debt", "credit", "payment_received", "payment_made")


def apply_transaction(customer: dict, tx_type: str, amount) -> dict:
    """Return a copy of `customer` with the balance delta for `tx_type` applied."""
    debt = number_or_zero(customer.get("debt"))
    credit = number_or_zero(customer.get("credit"))

    if tx_type == "debt":
        debt = debt + amount
    elif tx_type == "credit":
        credit = credit + amount
    elif tx_type == "payment_received":
        debt = max(0, debt - amount)
    elif tx_type == "payment_made":
        credit = max(0, credit - amount)
    else:
        raise ValidationError(f"Unknown transaction type: {tx_type}")

    return {**customer, "debt": debt, "credit": credit}


def post_transaction(payload: dict) -> dict:
    """
    Apply a debt/credit/payment to a customer and record it.

    Raises NotFoundError if the customer does not exist.
    """
    customer_id = payload.get("customerId")
    if customer_id is None or str(customer_id).strip() == "":
        raise ValidationError("customerId is required")
    tx_type = require_choice(payload.get("type"), "type", TRANSACTION_TYPES)
    amount = to_number(payload.get("amount"), "amount")
    if amount < 0:
        raise ValidationError("amount must be >= 0")

    customer = get_record(CUSTOMERS, str(customer_id))
    save_record(CUSTOMERS, apply_transaction(customer, tx_type, amount))

    transaction = {
        "id": new_record_id(),
        "customerId": customer_id,
        "type": tx_type,
        "amount": amount,
        "description": payload.get("description", ""),
        "createdAt": now_iso(),
    }
    return save_record(CUSTOMER_TRANSACTIONS, transaction)


def list_transactions(customer_id: str | None = None) -> list[dict]:
    transactions = list_records(CUSTOMER_TRANSACTIONS)
    if customer_id:
        transactions = [t for t in transactions if str(t.get("customerId")) == customer_id]
    return transactions
