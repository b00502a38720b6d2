"""Barcode -> product lookup against the bundled product table."""

from datetime import date, timedelta

from freshkeeper.domain.pantry import ProductInfo

GENERIC_SHELF_LIFE_DAYS = 30

# EAN-13 -> (name, brand, category, suggested action, estimated shelf life in days)
KNOWN_PRODUCTS: dict[str, tuple[str, str, str, str, int]] = {
    "8901030804521": ("Organic Whole Wheat Bread", "Mother Dairy", "Bakery", "use-soon", 5),
    "8901030702024": ("Fresh Milk", "Amul", "Dairy", "use-soon", 7),
    "8902519005410": ("Basmati Rice", "India Gate", "Grains", "safe", 365),
    "8901030804538": ("Greek Yogurt", "Epigamia", "Dairy", "use-soon", 14),
    "8906010351013": ("Mixed Fruit Jam", "Kissan", "Spreads", "safe", 180),
}


def lookup_barcode(barcode: str) -> ProductInfo:
    """
    Resolve a scanned barcode to product metadata.

    Unknown barcodes get a generic record (found=False) so the caller can
    still prefill a form and let the user correct it.
    """
    barcode = barcode.strip()
    known = KNOWN_PRODUCTS.get(barcode)
    if known is not None:
        name, brand, category, action, shelf_life = known
        return ProductInfo(
            barcode=barcode,
            name=name,
            brand=brand,
            category=category,
            suggested_action=action,  # type: ignore[arg-type]
            estimated_shelf_life_days=shelf_life,
        )

    return ProductInfo(
        barcode=barcode,
        name=f"Product {barcode[-6:]}",
        brand="Unknown Brand",
        category="General",
        suggested_action="safe",
        estimated_shelf_life_days=GENERIC_SHELF_LIFE_DAYS,
        found=False,
    )


def estimated_expiry(product: ProductInfo, today: date) -> date:
    """Prefill expiry date: today plus the product's estimated shelf life."""
    return today + timedelta(days=product.estimated_shelf_life_days)
