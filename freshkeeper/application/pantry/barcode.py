"""Barcode lookup workflow: product, estimated expiry, nutrition."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Literal

from freshkeeper.domain.pantry import NutritionFacts, ProductInfo
from freshkeeper.label.barcode import estimated_expiry, lookup_barcode
from freshkeeper.runtime.nutrition_client import fetch_nutrition

BarcodeStatus = Literal["found", "unknown", "invalid"]


@dataclass(frozen=True)
class BarcodeLookupRequest:
    """Inputs for looking up a scanned barcode."""

    barcode: str
    today: date | None = None
    with_nutrition: bool = True
    fetch: Callable[[str], NutritionFacts | None] | None = None


@dataclass(frozen=True)
class BarcodeLookupResult:
    """Product prefill for the add-item form."""

    status: BarcodeStatus
    product: ProductInfo | None = None
    expiry_date: date | None = None
    nutrition: NutritionFacts | None = None
    error: str | None = None


def run_barcode_lookup(request: BarcodeLookupRequest) -> BarcodeLookupResult:
    """Resolve a barcode into a product with an estimated expiry date."""
    barcode = request.barcode.strip()
    if not barcode.isdigit():
        return BarcodeLookupResult(status="invalid", error=f"Not a numeric barcode: {request.barcode!r}")

    today = request.today or date.today()
    product = lookup_barcode(barcode)

    nutrition = None
    if request.with_nutrition:
        fetch = request.fetch or fetch_nutrition
        nutrition = fetch(barcode)

    return BarcodeLookupResult(
        status="found" if product.found else "unknown",
        product=product,
        expiry_date=estimated_expiry(product, today),
        nutrition=nutrition,
    )
