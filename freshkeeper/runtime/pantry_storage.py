"""Storage and retrieval of pantry items.

Items live in a single JSON document:

    data/
    ├── pantry.json     - {"items": [...]}
    └── labels/         - uploaded label photos
        └── ocr_text/   - merged OCR text per scan
"""

import json
import uuid
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any

from freshkeeper.domain.pantry import NutritionFacts, PantryItem
from freshkeeper.runtime.logging import get_logger
from freshkeeper.runtime.paths import get_paths

logger = get_logger(__name__)


def _pantry_path(path: Path | None) -> Path:
    return path if path is not None else get_paths().pantry


def item_to_dict(item: PantryItem) -> dict[str, Any]:
    """Serialize a PantryItem into JSON-safe primitives."""
    return {
        "id": item.id,
        "name": item.name,
        "expiry_date": item.expiry_date.isoformat(),
        "purchase_date": item.purchase_date.isoformat(),
        "barcode": item.barcode,
        "consumed": item.consumed,
        "discount": item.discount,
        "nutrition": asdict(item.nutrition) if item.nutrition is not None else None,
        "created_at": item.created_at.isoformat(timespec="seconds"),
    }


def item_from_dict(data: dict[str, Any]) -> PantryItem:
    """Inverse of item_to_dict."""
    nutrition = data.get("nutrition")
    return PantryItem(
        id=data["id"],
        name=data["name"],
        expiry_date=date.fromisoformat(data["expiry_date"]),
        purchase_date=date.fromisoformat(data["purchase_date"]),
        barcode=data.get("barcode"),
        consumed=bool(data.get("consumed", False)),
        discount=int(data.get("discount", 0)),
        nutrition=NutritionFacts(**nutrition) if nutrition else None,
        created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else datetime.now(),
    )


def load_items(path: Path | None = None) -> list[PantryItem]:
    """Load all pantry items; a missing store means an empty pantry."""
    path = _pantry_path(path)
    if not path.exists():
        return []

    data = json.loads(path.read_text(encoding="utf-8"))
    return [item_from_dict(entry) for entry in data.get("items", [])]


def save_items(items: list[PantryItem], path: Path | None = None) -> Path:
    """Write the full item list, replacing the store atomically."""
    path = _pantry_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    payload = {"items": [item_to_dict(item) for item in items]}
    tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    tmp_path.replace(path)
    return path


def add_item(
    name: str,
    expiry_date: date,
    purchase_date: date | None = None,
    barcode: str | None = None,
    nutrition: NutritionFacts | None = None,
    path: Path | None = None,
) -> PantryItem:
    """Create and persist a new pantry item."""
    item = PantryItem(
        id=uuid.uuid4().hex,
        name=name,
        expiry_date=expiry_date,
        purchase_date=purchase_date or date.today(),
        barcode=barcode,
        nutrition=nutrition,
    )
    items = load_items(path)
    items.append(item)
    saved_path = save_items(items, path)
    logger.info("Saved pantry item %s (%s, expires %s) to %s", item.id, item.name, item.expiry_date, saved_path)
    return item


def get_item(item_id: str, path: Path | None = None) -> PantryItem:
    """Return one item by id; raises KeyError if absent."""
    for item in load_items(path):
        if item.id == item_id:
            return item
    raise KeyError(item_id)


def update_item(updated: PantryItem, path: Path | None = None) -> PantryItem:
    """Replace the stored item with the same id; raises KeyError if absent."""
    items = load_items(path)
    for index, item in enumerate(items):
        if item.id == updated.id:
            items[index] = updated
            save_items(items, path)
            logger.debug("Updated pantry item %s", updated.id)
            return updated
    raise KeyError(updated.id)


def delete_item(item_id: str, path: Path | None = None) -> PantryItem:
    """Remove one item by id and return it; raises KeyError if absent."""
    items = load_items(path)
    for index, item in enumerate(items):
        if item.id == item_id:
            del items[index]
            save_items(items, path)
            logger.info("Deleted pantry item %s (%s)", item.id, item.name)
            return item
    raise KeyError(item_id)
