"""Pantry command handlers used by the unified CLI."""

import argparse
import sys
from datetime import date

from freshkeeper.application.pantry.inventory import PantryListing
from freshkeeper.label.expiry_status import status_label
from freshkeeper.runtime import get_logger

logger = get_logger(__name__)


def _parse_date_arg(value: str, label: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        print(f"Error: {label} must be YYYY-MM-DD, got {value!r}")
        sys.exit(1)


def _days_text(days_left: int) -> str:
    if days_left >= 0:
        return f"{days_left} days left"
    return f"Expired {abs(days_left)} days ago"


def print_listing(listing: PantryListing, empty_message: str) -> None:
    if not listing.rows:
        print(empty_message)
        return
    for row in listing.rows:
        item = row.item
        discount = f"  {item.discount}% OFF" if item.discounted else ""
        print(
            f"{item.id[:8]}  {item.expiry_date.isoformat()}  {status_label(row.status):<9}"
            f"{_days_text(row.days_left):<22}{item.name}{discount}"
        )


def cmd_add(args: argparse.Namespace) -> None:
    """Add an item by hand."""
    from freshkeeper.application.pantry.inventory import AddItemRequest, run_add_item

    expiry = _parse_date_arg(args.expiry, "expiry")
    purchase = _parse_date_arg(args.purchase_date, "--purchase-date") if args.purchase_date else None

    result = run_add_item(AddItemRequest(name=args.name, expiry_date=expiry, purchase_date=purchase, barcode=args.barcode))
    if result.status == "invalid":
        for field_name, message in result.errors.items():
            print(f"{field_name}: {message}")
        sys.exit(1)

    assert result.item is not None
    print(f"Added {result.item.name} (expires {result.item.expiry_date.isoformat()}) as {result.item.id}")


def cmd_list(args: argparse.Namespace) -> None:
    """List pantry items with their expiry status."""
    from freshkeeper.application.pantry.inventory import run_list_pantry

    print_listing(run_list_pantry(), "Pantry is empty.")


def cmd_alerts(args: argparse.Namespace) -> None:
    """Show expired and use-soon items."""
    from freshkeeper.application.pantry.inventory import run_expiry_alerts

    print_listing(run_expiry_alerts(), "Nothing expiring soon.")


def _resolve_item_id(prefix: str) -> str:
    """Accept a full id or the unique 8-character prefix shown by `fk list`."""
    from freshkeeper.runtime.pantry_storage import load_items

    matches = [item.id for item in load_items() if item.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        print(f"Error: id prefix {prefix!r} is ambiguous")
        sys.exit(1)
    return prefix


def cmd_consume(args: argparse.Namespace) -> None:
    """Mark an item as consumed."""
    from freshkeeper.application.pantry.inventory import run_mark_consumed

    result = run_mark_consumed(_resolve_item_id(args.item_id))
    if result.status != "updated" or result.item is None:
        print(f"Error: {result.error}")
        sys.exit(1)
    print(f"Marked {result.item.name} as consumed.")


def cmd_remove(args: argparse.Namespace) -> None:
    """Delete an item from the pantry."""
    from freshkeeper.application.pantry.inventory import run_delete_item

    result = run_delete_item(_resolve_item_id(args.item_id))
    if result.status != "updated" or result.item is None:
        print(f"Error: {result.error}")
        sys.exit(1)
    print(f"Removed {result.item.name}.")


def cmd_discount(args: argparse.Namespace) -> None:
    """Toggle the near-expiry discount on an item."""
    from freshkeeper.application.pantry.inventory import run_toggle_discount

    result = run_toggle_discount(_resolve_item_id(args.item_id))
    if result.status != "updated" or result.item is None:
        print(f"Error: {result.error}")
        sys.exit(1)
    if result.item.discounted:
        print(f"{result.item.discount}% discount applied to {result.item.name}.")
    else:
        print(f"Discount removed from {result.item.name}.")


def cmd_offers(args: argparse.Namespace) -> None:
    """Show discounted items that have not expired."""
    from freshkeeper.application.pantry.inventory import run_discounted_offers

    print_listing(run_discounted_offers(limit=args.limit), "No discounted offers.")


def cmd_barcode(args: argparse.Namespace) -> None:
    """Look up a barcode and show product, estimated expiry and nutrition."""
    from freshkeeper.application.pantry.barcode import BarcodeLookupRequest, run_barcode_lookup

    result = run_barcode_lookup(BarcodeLookupRequest(barcode=args.code, with_nutrition=not args.no_nutrition))
    if result.status == "invalid":
        print(f"Error: {result.error}")
        sys.exit(1)

    product = result.product
    assert product is not None and result.expiry_date is not None
    if not product.found:
        print("Product not in database; showing generic defaults.")
    print(f"Product: {product.name} ({product.brand})")
    print(f"Category: {product.category}")
    print(f"Estimated shelf life: {product.estimated_shelf_life_days} days (expires ~{result.expiry_date.isoformat()})")

    nutrition = result.nutrition
    if nutrition is None:
        return
    print(f"Health score: {nutrition.health_score} - {nutrition.feedback}")
    for label, value, unit in (
        ("Calories", nutrition.calories, "kcal"),
        ("Sugar", nutrition.sugar, "g"),
        ("Fat", nutrition.fat, "g"),
        ("Protein", nutrition.protein, "g"),
        ("Fiber", nutrition.fiber, "g"),
        ("Carbohydrates", nutrition.carbohydrates, "g"),
        ("Sodium", nutrition.sodium, "mg"),
    ):
        if value is not None:
            print(f"  {label}: {value:g} {unit} / 100g")
