"""Open Food Facts client with a per-process memo."""

import httpx

from freshkeeper.domain.pantry import NutritionFacts
from freshkeeper.label.nutrition import nutrition_from_product
from freshkeeper.runtime.logging import get_logger

logger = get_logger(__name__)

OPEN_FOOD_FACTS_URL = "https://world.openfoodfacts.org/api/v2/product"
NUTRITION_TIMEOUT_SECONDS = 10.0

_cache: dict[str, NutritionFacts] = {}


def clear_nutrition_cache() -> None:
    """Forget memoized lookups. Useful for testing."""
    _cache.clear()


def fetch_nutrition(barcode: str, client: httpx.Client | None = None) -> NutritionFacts | None:
    """
    Fetch nutrition facts for a barcode.

    Returns None when the product is unknown or the API cannot be reached;
    nutrition is optional enrichment and never blocks adding an item.
    Only successful lookups are memoized.
    """
    barcode = barcode.strip()
    if barcode in _cache:
        return _cache[barcode]

    url = f"{OPEN_FOOD_FACTS_URL}/{barcode}.json"
    owns_client = client is None
    http = client if client is not None else httpx.Client(timeout=NUTRITION_TIMEOUT_SECONDS)
    try:
        response = http.get(url)
    except httpx.RequestError as e:
        logger.warning("Nutrition lookup failed for %s: %s", barcode, e)
        return None
    finally:
        if owns_client:
            http.close()

    if response.status_code != 200:
        logger.warning("Nutrition lookup for %s returned %s", barcode, response.status_code)
        return None

    try:
        data = response.json()
    except ValueError:
        logger.warning("Nutrition lookup for %s returned invalid JSON", barcode)
        return None

    if data.get("status") != 1 or not data.get("product"):
        logger.info("No nutrition data for %s", barcode)
        return None

    facts = nutrition_from_product(data["product"])
    _cache[barcode] = facts
    return facts
