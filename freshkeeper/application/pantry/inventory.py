"""Pantry inventory workflows: add, list, alerts, consume, remove, discount, offers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Literal

from freshkeeper.domain.label import ExpiryStatus
from freshkeeper.domain.pantry import NutritionFacts, PantryItem
from freshkeeper.label.expiry_status import classify_expiry, days_until
from freshkeeper.label.settings import ScanSettings
from freshkeeper.runtime.logging import get_logger
from freshkeeper.runtime.pantry_storage import add_item, delete_item, get_item, load_items, update_item
from freshkeeper.runtime.scan_settings import load_scan_settings

logger = get_logger(__name__)

AddItemStatus = Literal["saved", "invalid"]
UpdateStatus = Literal["updated", "not_found", "not_eligible"]


@dataclass(frozen=True)
class AddItemRequest:
    """Inputs for adding an item by hand (or from a barcode prefill)."""

    name: str
    expiry_date: date | None
    purchase_date: date | None = None
    barcode: str | None = None
    nutrition: NutritionFacts | None = None


@dataclass(frozen=True)
class AddItemResult:
    """Outcome of adding an item."""

    status: AddItemStatus
    item: PantryItem | None = None
    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PantryRow:
    """One pantry item with its derived expiry status."""

    item: PantryItem
    days_left: int
    status: ExpiryStatus


@dataclass(frozen=True)
class PantryListing:
    """Pantry rows for CLI/API display, soonest expiry first."""

    rows: list[PantryRow]


@dataclass(frozen=True)
class ItemUpdateResult:
    """Outcome of a single-item update."""

    status: UpdateStatus
    item: PantryItem | None = None
    error: str | None = None


def validate_new_item(request: AddItemRequest, today: date) -> dict[str, str]:
    """Return field -> message for every problem with a manual item."""
    errors: dict[str, str] = {}
    if not request.name.strip():
        errors["name"] = "Name is required"
    elif len(request.name.strip()) > 100:
        errors["name"] = "Name must be at most 100 characters"

    purchase_date = request.purchase_date or today
    if request.expiry_date is None:
        errors["expiry_date"] = "Expiry date is required"
    elif request.expiry_date <= purchase_date:
        errors["expiry_date"] = "Expiry date must be after purchase date"
    return errors


def run_add_item(request: AddItemRequest, today: date | None = None) -> AddItemResult:
    """Validate and store a manually entered item."""
    today = today or date.today()
    errors = validate_new_item(request, today)
    if errors:
        return AddItemResult(status="invalid", errors=errors)

    assert request.expiry_date is not None
    item = add_item(
        name=request.name.strip(),
        expiry_date=request.expiry_date,
        purchase_date=request.purchase_date or today,
        barcode=request.barcode,
        nutrition=request.nutrition,
    )
    return AddItemResult(status="saved", item=item)


def _row(item: PantryItem, today: date, settings: ScanSettings) -> PantryRow:
    return PantryRow(
        item=item,
        days_left=days_until(item.expiry_date, today),
        status=classify_expiry(item.expiry_date, today, settings.use_soon_days),
    )


def run_list_pantry(
    today: date | None = None,
    include_consumed: bool = False,
    settings: ScanSettings | None = None,
) -> PantryListing:
    """List pantry items with days left and status, soonest expiry first."""
    today = today or date.today()
    settings = settings or load_scan_settings()
    items = [item for item in load_items() if include_consumed or not item.consumed]
    items.sort(key=lambda item: (item.expiry_date, item.name.lower()))
    return PantryListing(rows=[_row(item, today, settings) for item in items])


def run_expiry_alerts(today: date | None = None, settings: ScanSettings | None = None) -> PantryListing:
    """Items that are expired or need using soon."""
    listing = run_list_pantry(today=today, settings=settings)
    return PantryListing(rows=[row for row in listing.rows if row.status != "safe"])


def run_mark_consumed(item_id: str) -> ItemUpdateResult:
    """Mark an item as consumed so it drops out of listings and alerts."""
    try:
        item = get_item(item_id)
    except KeyError:
        return ItemUpdateResult(status="not_found", error=f"No pantry item with id {item_id}")

    updated = update_item(replace(item, consumed=True))
    logger.info("Marked %s (%s) as consumed", updated.id, updated.name)
    return ItemUpdateResult(status="updated", item=updated)


def run_delete_item(item_id: str) -> ItemUpdateResult:
    """Remove an item from the pantry for good."""
    try:
        removed = delete_item(item_id)
    except KeyError:
        return ItemUpdateResult(status="not_found", error=f"No pantry item with id {item_id}")
    return ItemUpdateResult(status="updated", item=removed)


def run_toggle_discount(
    item_id: str,
    today: date | None = None,
    settings: ScanSettings | None = None,
) -> ItemUpdateResult:
    """
    Toggle the retailer markdown on a near-expiry item.

    Only items expiring today or within the discount window qualify; the
    discount flips between 0 and the configured percent.
    """
    today = today or date.today()
    settings = settings or load_scan_settings()
    try:
        item = get_item(item_id)
    except KeyError:
        return ItemUpdateResult(status="not_found", error=f"No pantry item with id {item_id}")

    days_left = days_until(item.expiry_date, today)
    if not 0 <= days_left <= settings.discount_window_days:
        return ItemUpdateResult(
            status="not_eligible",
            item=item,
            error=(
                f"Discounts apply only within {settings.discount_window_days} days of expiry "
                f"({days_left} days left)"
            ),
        )

    new_discount = 0 if item.discounted else settings.discount_percent
    updated = update_item(replace(item, discount=new_discount))
    logger.info("Discount for %s (%s) set to %d%%", updated.id, updated.name, new_discount)
    return ItemUpdateResult(status="updated", item=updated)


def run_discounted_offers(
    today: date | None = None,
    limit: int = 10,
    settings: ScanSettings | None = None,
) -> PantryListing:
    """
    Discounted items that have not expired yet, biggest discount first.

    Ties go to the sooner expiry. At most ``limit`` rows are returned.
    """
    today = today or date.today()
    settings = settings or load_scan_settings()
    offers = [item for item in load_items() if item.discounted and not item.consumed and item.expiry_date >= today]
    offers.sort(key=lambda item: (-item.discount, item.expiry_date, item.name.lower()))
    return PantryListing(rows=[_row(item, today, settings) for item in offers[:limit]])
