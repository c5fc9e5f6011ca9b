# Overview: Service-layer operations for repair jobs; keeps profit and delivery time consistent.

from __future__ import annotations

from .resource_service import REPAIRS, get_record, resolve_id, save_record
from ..time_utils import now_iso
from ..validation import number_or_zero, require_choice

REPAIR_STATUSES = ("in_progress", "completed", "delivered")


def with_profit(repair: dict) -> dict:
    """profit = repairCost - partsCost, recomputed on every write."""
    repair_cost = number_or_zero(repair.get("repairCost"))
    parts_cost = number_or_zero(repair.get("partsCost"))
    return {**repair, "profit": repair_cost - parts_cost}


def create_repair(payload: dict) -> dict:
    repair = with_profit({**payload, "id": resolve_id(payload)})
    return save_record(REPAIRS, repair)


def update_repair(repair_id: str, patch: dict) -> dict:
    """Merge fields into an existing repair. Raises NotFoundError if absent."""
    existing = get_record(REPAIRS, repair_id)
    repair = with_profit({**existing, **patch, "id": repair_id})
    return save_record(REPAIRS, repair)


def update_repair_status(repair_id: str, status) -> dict:
    """
    Move a repair to a new status. Delivery stamps deliveredAt with the
    current time; any other status keeps the previous deliveredAt.
    """
    require_choice(status, "status", REPAIR_STATUSES)
    repair = get_record(REPAIRS, repair_id)

    repair["status"] = status
    if status == "delivered":
        repair["deliveredAt"] = now_iso()

    return save_record(REPAIRS, repair)
