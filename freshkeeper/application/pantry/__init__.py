"""Pantry workflows."""

from freshkeeper.application.pantry.barcode import BarcodeLookupRequest, BarcodeLookupResult, run_barcode_lookup
from freshkeeper.application.pantry.inventory import (
    AddItemRequest,
    AddItemResult,
    ItemUpdateResult,
    PantryListing,
    PantryRow,
    run_add_item,
    run_delete_item,
    run_discounted_offers,
    run_expiry_alerts,
    run_list_pantry,
    run_mark_consumed,
    run_toggle_discount,
)

__all__ = [
    "BarcodeLookupRequest",
    "BarcodeLookupResult",
    "run_barcode_lookup",
    "AddItemRequest",
    "AddItemResult",
    "ItemUpdateResult",
    "PantryListing",
    "PantryRow",
    "run_add_item",
    "run_delete_item",
    "run_discounted_offers",
    "run_expiry_alerts",
    "run_list_pantry",
    "run_mark_consumed",
    "run_toggle_discount",
]
