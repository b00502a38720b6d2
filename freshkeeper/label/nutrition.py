"""Nutrition facts and health score from an Open Food Facts product record."""

from typing import Any

from freshkeeper.domain.pantry import HealthScore, NutritionFacts

# Per-100g thresholds; sodium in mg
HIGH_RISK_SUGAR = 15
HIGH_RISK_SODIUM = 500
HIGH_RISK_FAT = 20
MODERATE_SUGAR = 10
MODERATE_SODIUM = 300
MODERATE_FAT = 15
GOOD_PROTEIN = 10
GOOD_FIBER = 5


def _nutriment(nutriments: dict[str, Any], key: str) -> float | None:
    """Read ``<key>_100g`` falling back to the unsuffixed key."""
    for name in (f"{key}_100g", key):
        value = nutriments.get(name)
        if value is None or value == "":
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return None


def score_nutrition(sugar: float, sodium_mg: float, fat: float, protein: float, fiber: float) -> tuple[HealthScore, str]:
    """Return (health score, one-line feedback) for per-100g values."""
    if sugar > HIGH_RISK_SUGAR or sodium_mg > HIGH_RISK_SODIUM or fat > HIGH_RISK_FAT:
        if sugar > HIGH_RISK_SUGAR:
            return "high-risk", "High sugar - consume moderately!"
        if sodium_mg > HIGH_RISK_SODIUM:
            return "high-risk", "High sodium - watch your salt intake!"
        return "high-risk", "High fat content - enjoy in moderation!"

    if sugar > MODERATE_SUGAR or sodium_mg > MODERATE_SODIUM or fat > MODERATE_FAT:
        return "moderate", "Moderate nutritional profile - balanced diet recommended."

    if protein > GOOD_PROTEIN and fiber > GOOD_FIBER:
        return "good", "Great source of protein and fiber!"
    return "good", "Balanced nutrition profile."


def nutrition_from_product(product: dict[str, Any]) -> NutritionFacts:
    """Build NutritionFacts from the ``product`` object of an Open Food Facts response."""
    nutriments = product.get("nutriments") or {}

    sugar = _nutriment(nutriments, "sugars")
    sodium_g = _nutriment(nutriments, "sodium")
    sodium_mg = sodium_g * 1000 if sodium_g is not None else None
    fat = _nutriment(nutriments, "fat")
    protein = _nutriment(nutriments, "proteins")
    fiber = _nutriment(nutriments, "fiber")

    health_score, feedback = score_nutrition(
        sugar=sugar or 0.0,
        sodium_mg=sodium_mg or 0.0,
        fat=fat or 0.0,
        protein=protein or 0.0,
        fiber=fiber or 0.0,
    )

    return NutritionFacts(
        health_score=health_score,
        feedback=feedback,
        calories=_nutriment(nutriments, "energy-kcal"),
        sugar=sugar,
        protein=protein,
        fat=fat,
        fiber=fiber,
        carbohydrates=_nutriment(nutriments, "carbohydrates"),
        sodium=sodium_mg,
    )
